from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Optional

from .config import EnvConfig

IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
HEADER_SEPARATOR = "---"
LOCAL_FILE_SCHEME = "file://"
ASSETS_DIR = "assets"


def strip_header(body: str) -> str:
    """Drop everything above the first ``---`` line, keeping the separator itself.

    Bodies without a separator are returned unchanged.
    """

    lines = body.split("\n")
    for idx, line in enumerate(lines):
        if line.strip() == HEADER_SEPARATOR:
            return "\n".join(lines[idx:])
    return body


def rewrite_images(content: str, image_path: Optional[Path]) -> str:
    """Point ``file://`` image references at the bundle's assets folder.

    Nothing is copied; without a configured image path the content is returned as is.
    """

    if not image_path:
        return content

    def replace(match: re.Match) -> str:
        alt_text, source = match.group(1), match.group(2)
        if not source.startswith(LOCAL_FILE_SCHEME):
            return match.group(0)
        filename = PurePosixPath(source).name
        return f"![{alt_text}]({ASSETS_DIR}/{filename})"

    return IMAGE_RE.sub(replace, content)


def transform_body(body: Optional[str], config: EnvConfig) -> str:
    return rewrite_images(strip_header(body or ""), config.image_path)
