"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DIST_NAME = "dicelang"
_FALLBACK = "0.0.0"


def _source_checkout_version(pyproject: Path) -> str | None:
    """``[project].version`` from a pyproject.toml, if the file declares one."""
    if not pyproject.is_file():
        return None
    project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version() -> str:
    """Installed distribution version, else the source tree's, else ``0.0.0``."""
    try:
        return _metadata_version(DIST_NAME)
    except PackageNotFoundError:
        pass
    # src/dicelang/_version.py -> repository root
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    return _source_checkout_version(pyproject) or _FALLBACK
