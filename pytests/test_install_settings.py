from __future__ import annotations

import pytest
from pydantic import ValidationError

from install.settings import InstallSettings
from pytests.common import BASE_PROPERTIES


def test_defaults_applied_for_optional_properties() -> None:
    s = InstallSettings.from_properties(
        {
            "rootEntityStateCode": "SP",
            "rootEntityCityCode": "3550308",
            "rootPrincipal": "alice@example.com",
            "rootFirstName": "Alice",
            "rootLastName": "Doe",
        }
    )

    assert s.context_data_path == "/META-INF/data/"
    assert s.default_context_name == "DEFAULT"
    assert s.country_file == "countries.xml"
    assert s.root_entity_alias == "DEFAULT"
    assert s.state_file is None
    assert s.default_country is None
    assert s.initial_secret is None


def test_display_name_defaults_to_first_name() -> None:
    s = InstallSettings.from_properties(BASE_PROPERTIES)
    assert s.root_display_name == "Alice"

    s2 = InstallSettings.from_properties({**BASE_PROPERTIES, "rootDisplayName": "Al"})
    assert s2.root_display_name == "Al"


@pytest.mark.parametrize(
    "missing",
    [
        "rootPrincipal",
        "rootFirstName",
        "rootLastName",
        "rootEntityStateCode",
        "rootEntityCityCode",
    ],
)
def test_required_properties_fail_construction(missing: str) -> None:
    props = dict(BASE_PROPERTIES)
    del props[missing]

    with pytest.raises(ValidationError) as exc_info:
        InstallSettings.from_properties(props)
    assert missing in str(exc_info.value)


def test_blank_required_property_counts_as_missing() -> None:
    with pytest.raises(ValueError):
        InstallSettings.from_properties({**BASE_PROPERTIES, "rootPrincipal": "   "})


def test_prefixed_properties_are_stripped_and_others_ignored() -> None:
    props = {f"seed.{k}": v for k, v in BASE_PROPERTIES.items()}
    props["other.rootPrincipal"] = "bob@example.com"
    props["seed.contextDataPath"] = "/data"

    s = InstallSettings.from_properties(props, prefix="seed.")
    assert s.root_principal == "alice@example.com"
    # A trailing slash is added so file names can be appended.
    assert s.context_data_path == "/data/"


def test_numeric_property_values_are_accepted_as_strings() -> None:
    s = InstallSettings.from_properties({**BASE_PROPERTIES, "rootEntityCityCode": 3550308})
    assert s.root_entity_city_code == "3550308"
