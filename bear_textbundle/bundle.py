from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Union

from .errors import FileSystemError
from .transform import ASSETS_DIR

logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".textbundle"
INFO_FILE = "info.json"
TEXT_FILE = "text.md"
DEFAULT_DISPLAY_NAME = "Bear Note"


def normalize_bundle_path(output_path: Union[str, Path]) -> Path:
    """Append the .textbundle suffix unless the path already carries it."""

    path = Path(output_path)
    if str(path).endswith(BUNDLE_SUFFIX):
        return path
    return Path(str(path) + BUNDLE_SUFFIX)


def build_info(title: str) -> Dict:
    return {
        "version": 2
        ,"type": "net.daringfireball.markdown"
        ,"transient": False
        ,"displayName": title or DEFAULT_DISPLAY_NAME
    }


def write_text_bundle(output_path: Union[str, Path], content: str, title: str) -> Path:
    """Write info.json, text.md and an assets folder, returning the bundle path.

    Existing files are overwritten in place; nothing from a previous export is removed.
    """

    bundle_path = normalize_bundle_path(output_path)
    try:
        (bundle_path / ASSETS_DIR).mkdir(parents=True, exist_ok=True)
        (bundle_path / INFO_FILE).write_text(json.dumps(build_info(title), indent=2), encoding="utf-8")
        (bundle_path / TEXT_FILE).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(bundle_path, str(exc)) from exc

    logger.debug("Wrote %s (%d chars)", bundle_path, len(content))
    return bundle_path
