"""XML reference-data parsers.

Each parser returns *unsaved* ORM records bound to the given operator (and
parent record). Expected shapes::

    <countries><country code="BR" name="Brasil"/></countries>
    <states><state code="SP" name="São Paulo"/></states>
    <cities><city code="3550308" name="São Paulo" capital="true"/></cities>

Namespaces are tolerated; elements are matched by local name. Codes may be
given as a ``code`` attribute or a ``<code>`` child element, names likewise.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from models.cities import City
from models.countries import Country
from models.operators import Operator
from models.states import State

_TRUE = {"1", "true", "yes", "y"}


def _load_root(path: Path | str) -> ET.Element:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Resource not found: {path}")
    return ET.parse(path).getroot()


def _iter_elements(root: ET.Element, local_name: str):
    for el in root.iter():
        if isinstance(el.tag, str) and el.tag.rsplit("}", 1)[-1] == local_name:
            yield el


def _field(el: ET.Element, name: str) -> str | None:
    value = el.attrib.get(name)
    if value is None:
        value = el.findtext("{*}" + name)
        if value is None:
            value = el.findtext(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _required_code(el: ET.Element, kind: str, path: Path | str) -> str:
    code = _field(el, "code")
    if not code:
        raise ValueError(f"{kind} element without code in {path}")
    return code


def parse_countries(context: Operator, path: Path | str) -> list[Country]:
    root = _load_root(path)
    return [
        Country(
            operator=context,
            country_code=_required_code(el, "country", path).upper(),
            country_name=_field(el, "name"),
        )
        for el in _iter_elements(root, "country")
    ]


def parse_states(context: Operator, country: Country, path: Path | str) -> list[State]:
    root = _load_root(path)
    return [
        State(
            operator=context,
            country=country,
            state_code=_required_code(el, "state", path).upper(),
            state_name=_field(el, "name"),
        )
        for el in _iter_elements(root, "state")
    ]


def parse_cities(context: Operator, state: State, path: Path | str) -> list[City]:
    """Parse a per-state city file. City codes keep their original case."""

    root = _load_root(path)
    return [
        City(
            operator=context,
            state=state,
            city_code=_required_code(el, "city", path),
            city_name=_field(el, "name"),
            capital=(_field(el, "capital") or "").lower() in _TRUE,
        )
        for el in _iter_elements(root, "city")
    ]
