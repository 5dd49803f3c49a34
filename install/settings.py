from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CONTEXT_NAME = "DEFAULT"
DEFAULT_CONTEXT_DATA_PATH = "/META-INF/data/"
DEFAULT_COUNTRY_FILE = "countries.xml"


class InstallSettings(BaseModel):
    """Installer properties, validated once at construction.

    Field aliases are the property names used in ``settings.py``, the
    environment (via ``config.properties_from_env``) and the CLI.

    ``state_file``, ``default_country`` and ``initial_secret`` may be left
    unset here; the installer then falls back to its ``InstallStrategy``.
    """

    context_data_path: str = Field(
        default=DEFAULT_CONTEXT_DATA_PATH, alias="contextDataPath"
    )
    default_context_name: str = Field(
        default=DEFAULT_CONTEXT_NAME, alias="defaultContextName", min_length=1
    )
    country_file: str = Field(default=DEFAULT_COUNTRY_FILE, alias="countryFile")
    state_file: Optional[str] = Field(default=None, alias="stateFile")
    default_country: Optional[str] = Field(default=None, alias="defaultCountry")

    root_entity_alias: str = Field(
        default=DEFAULT_CONTEXT_NAME, alias="rootEntityAlias", min_length=1
    )
    root_entity_state_code: str = Field(alias="rootEntityStateCode", min_length=1)
    root_entity_city_code: str = Field(alias="rootEntityCityCode", min_length=1)

    root_principal: str = Field(alias="rootPrincipal", min_length=1)
    root_first_name: str = Field(alias="rootFirstName", min_length=1)
    root_last_name: str = Field(alias="rootLastName", min_length=1)
    root_display_name: Optional[str] = Field(default=None, alias="rootDisplayName")

    initial_secret: Optional[str] = Field(default=None, alias="initialSecret")

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _display_name_defaults_to_first_name(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            data = dict(data)
            if not data.get("rootDisplayName") and not data.get("root_display_name"):
                data["rootDisplayName"] = data.get("rootFirstName") or data.get(
                    "root_first_name"
                )
        return data

    @field_validator("context_data_path")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        # Paths are concatenated with file names.
        return value if value.endswith("/") else value + "/"

    @classmethod
    def from_properties(
        cls, props: Mapping[str, Any], prefix: str = ""
    ) -> "InstallSettings":
        """Build settings from a flat property mapping.

        With ``prefix="seed."`` only keys like ``seed.rootPrincipal`` are read
        and the prefix is stripped. Empty values count as missing.
        """

        picked: dict[str, Any] = {}
        for key, value in props.items():
            if prefix:
                if not key.startswith(prefix):
                    continue
                key = key[len(prefix):]
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            picked[key] = value
        return cls.model_validate(picked)
