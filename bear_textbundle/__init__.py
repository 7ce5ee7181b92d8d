"""
Export a single Bear note into a TextBundle.

The note is addressed by its Bear link (``bear://...?id=...``) and read from
Bear's SQLite database in read-only mode. Watch mode polls the note's
modification date and re-exports the bundle whenever it changes.
"""
__all__ = [
    "bundle",
    "config",
    "errors",
    "exporter",
    "link",
    "store",
    "transform",
    "watcher",
]
