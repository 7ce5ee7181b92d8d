from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from .errors import ConfigurationError

__all__ = ["ConfigurationError", "EnvConfig", "load_config", "load_env_file"]

DATABASE_PATH_KEY = "BEAR_SQLITE_PATH"
IMAGE_PATH_KEY = "BEAR_IMAGE_PATH"
DEFAULT_ENV_FILES = (Path(".env"), Path(".env.local"))


@dataclass(frozen=True)
class EnvConfig:
    '''Locations read from the environment or .env files'''

    database_path: Optional[Path] = None
    image_path: Optional[Path] = None

    def require_database_path(self) -> Path:
        if self.database_path is None:
            raise ConfigurationError(f"{DATABASE_PATH_KEY} environment variable not set")
        return self.database_path


def load_env_file(path: Path) -> Dict[str, str]:
    """Parse a .env file into a dict. A missing file yields an empty dict."""

    raw: Dict[str, str] = {}
    if not path.is_file():
        return raw

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        raw[key.strip()] = value.strip().strip('"').strip("'")
    return raw


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    return Path(value).expanduser()


def load_config(
    env_paths: Sequence[Path] = DEFAULT_ENV_FILES
    ,environ: Optional[Mapping[str, str]] = None
) -> EnvConfig:
    """Build an EnvConfig from the process environment and the given .env files.

    Values already present in the environment win; after that each file only
    fills in keys that no earlier file has set.
    """

    if environ is None:
        environ = os.environ

    merged: Dict[str, str] = {}
    for path in env_paths:
        for key, value in load_env_file(Path(path)).items():
            merged.setdefault(key, value)
    for key in (DATABASE_PATH_KEY, IMAGE_PATH_KEY):
        if key in environ:
            merged[key] = environ[key]

    return EnvConfig(
        database_path=_optional_path(merged.get(DATABASE_PATH_KEY))
        ,image_path=_optional_path(merged.get(IMAGE_PATH_KEY))
    )
