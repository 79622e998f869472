"""YAML configuration loading.

A config file is optional. When one is not named explicitly, the working
directory is searched for ``failure-diagnosis.yaml`` (or ``.yml``).

Values may reference the environment as ``${NAME}`` or ``${NAME:-fallback}``.
References are resolved on the raw text before YAML parsing, and
``FAILURE_DIAGNOSIS_*`` variables still apply on top of file values that
are left unset.
"""

import os
import re
from pathlib import Path

import structlog
import yaml

from .schema import DiagnosisConfig

log = structlog.get_logger()

CONFIG_FILE_NAMES = ("failure-diagnosis.yaml", "failure-diagnosis.yml")

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")


def substitute_env_vars(text: str) -> str:
    """Resolve ``${NAME}`` and ``${NAME:-fallback}`` references in text.

    Raises:
        ValueError: If a variable without a fallback is not set
    """

    def resolve(match: re.Match[str]) -> str:
        name = match.group("name")
        value = os.environ.get(name)
        if value is not None:
            return value
        if match.group("fallback") is not None:
            return match.group("fallback")
        raise ValueError(f"Environment variable {name} not found")

    return _ENV_REFERENCE.sub(resolve, text)


def find_config_file(directory: Path | None = None) -> Path | None:
    """Return the first default-named config file in directory, if any."""
    base = directory if directory is not None else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> DiagnosisConfig:
    """Load and validate a YAML configuration file.

    An empty file yields the default configuration. Top-level sections the
    schema does not know are ignored.

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If a referenced variable is unset or the root is not a mapping
        ValidationError: If a value is out of range or of the wrong type
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    log.debug("loading_configuration", path=str(path))
    data = yaml.safe_load(substitute_env_vars(path.read_text(encoding="utf-8")))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}: {path}")

    return DiagnosisConfig(**{str(key): value for key, value in data.items()})
