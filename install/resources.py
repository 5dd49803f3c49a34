from __future__ import annotations

from pathlib import Path

# Bundled data lives under install/bundled, mirroring a classpath root.
BUNDLED_RESOURCE_ROOT = Path(__file__).resolve().parent / "bundled"


class ResourceLoader:
    """Resolve classpath-style paths (``/META-INF/data/countries.xml``) to files."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root else BUNDLED_RESOURCE_ROOT

    def resolve(self, path: str) -> Path:
        return self.root / path.lstrip("/")

    def __repr__(self) -> str:
        return f"ResourceLoader(root={str(self.root)!r})"


def city_data_path(data_path: str, country_code: str, state_code: str) -> str:
    """Per-state city file: ``<dataPath><countryCode>/cities-<stateCode>.xml``."""

    return f"{data_path}{country_code}/cities-{state_code}.xml"
