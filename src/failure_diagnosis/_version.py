"""Version of the installed failure-diagnosis distribution."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "failure-diagnosis"


def _resolve_version() -> str:
    """Read the version from installed metadata, else from a source checkout.

    Raises:
        RuntimeError: If neither source is available
    """
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        pass

    # src/failure_diagnosis/_version.py -> repository root
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject.is_file():
        raise RuntimeError(f"{DISTRIBUTION} is not installed and no pyproject.toml was found")

    with pyproject.open("rb") as f:
        return str(tomllib.load(f)["project"]["version"])


__version__ = _resolve_version()

__all__ = ["__version__"]
