from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .bundle import write_text_bundle
from .config import EnvConfig
from .link import extract_note_id
from .store import NoteRecord, NoteStore
from .transform import transform_body

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    record: NoteRecord
    bundle_path: Path


def write_record(record: NoteRecord, output_path: Union[str, Path], config: EnvConfig) -> Path:
    """Transform an already fetched note and write it as a bundle."""

    content = transform_body(record.body, config)
    return write_text_bundle(output_path, content, record.display_title)


def export_note(
    bear_link: str
    ,output_path: Union[str, Path]
    ,config: EnvConfig
    ,*
    ,store: Optional[NoteStore] = None
) -> ExportResult:
    """Resolve the link, fetch the note and write it out; any failure propagates."""

    if store is None:
        store = NoteStore(config)

    note_id = extract_note_id(bear_link)
    logger.info("Exporting note %s to %s", note_id, output_path)
    record = store.fetch(note_id)
    bundle_path = write_record(record, output_path, config)
    logger.info("Note %s exported to %s", note_id, bundle_path)

    return ExportResult(record=record, bundle_path=bundle_path)
