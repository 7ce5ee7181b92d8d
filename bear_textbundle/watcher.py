"""
Polling loop that keeps an exported bundle in sync with its Bear note.

The watcher is a small state machine driven by :meth:`ChangeWatcher.tick`.
:meth:`ChangeWatcher.run` drives the ticks on a fixed schedule and yields one
:class:`WatchEvent` per tick, so callers decide what to do about changes.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Optional, Protocol, Union

from .config import EnvConfig
from .errors import ExportError
from .exporter import write_record
from .store import NoteRecord, NoteStore

logger = logging.getLogger(__name__)

POLL_INTERVAL = 2.0  # seconds


class Clock(Protocol):
    def now(self) -> float: ...

    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class WatchState(Enum):
    IDLE = "idle"
    BASELINE = "baseline"
    POLLING = "polling"
    STOPPED = "stopped"


class TickOutcome(Enum):
    BASELINE = "baseline"
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class WatchEvent:
    outcome: TickOutcome
    record: Optional[NoteRecord] = None
    bundle_path: Optional[Path] = None
    error: Optional[Exception] = None
    # scheduled ticks dropped because this one ran past them
    skipped_ticks: int = 0

    @property
    def changed(self) -> bool:
        return self.outcome is TickOutcome.CHANGED


class ChangeWatcher:
    """Re-export a note whenever its modification date changes."""

    def __init__(
        self
        ,note_id: str
        ,output_path: Union[str, Path]
        ,config: EnvConfig
        ,*
        ,store: Optional[NoteStore] = None
        ,clock: Optional[Clock] = None
        ,interval: float = POLL_INTERVAL
    ) -> None:
        self.note_id = note_id
        self.output_path = output_path
        self.config = config
        self.store = store or NoteStore(config)
        self.clock = clock or SystemClock()
        self.interval = interval
        self.state = WatchState.IDLE
        self.last_marker: Any = None

    def start(self) -> None:
        if self.state is WatchState.IDLE:
            logger.info("Watching note %s for changes", self.note_id)
            self.state = WatchState.BASELINE

    def stop(self) -> None:
        if self.state is not WatchState.STOPPED:
            logger.info("Stopped watching note %s", self.note_id)
        self.state = WatchState.STOPPED

    def tick(self) -> WatchEvent:
        """Run one fetch-compare-maybe-write cycle.

        Failures are logged and reported as a FAILED event; the recorded
        marker and the state are left untouched so the next tick retries.
        """

        if self.state not in (WatchState.BASELINE, WatchState.POLLING):
            raise RuntimeError(f"Cannot tick a watcher in state {self.state.value}")

        try:
            record = self.store.fetch(self.note_id)
        except Exception as exc:
            logger.warning("Watch error for note %s: %s", self.note_id, exc, exc_info=not isinstance(exc, ExportError))
            return WatchEvent(TickOutcome.FAILED, error=exc)

        if self.state is WatchState.BASELINE:
            self.last_marker = record.modification_marker
            self.state = WatchState.POLLING
            return WatchEvent(TickOutcome.BASELINE, record=record)

        if record.modification_marker == self.last_marker:
            return WatchEvent(TickOutcome.UNCHANGED, record=record)

        logger.info("Note %s changed, updating export", self.note_id)
        try:
            bundle_path = write_record(record, self.output_path, self.config)
        except Exception as exc:
            logger.warning("Watch error for note %s: %s", self.note_id, exc, exc_info=not isinstance(exc, ExportError))
            return WatchEvent(TickOutcome.FAILED, record=record, error=exc)

        self.last_marker = record.modification_marker
        return WatchEvent(TickOutcome.CHANGED, record=record, bundle_path=bundle_path)

    def run(self) -> Iterator[WatchEvent]:
        """Tick every ``interval`` seconds until :meth:`stop` is called.

        Ticks follow a fixed schedule rather than the end of the previous
        tick. A tick that overruns one or more slots makes the watcher skip
        them instead of starting a second cycle.
        """

        self.start()
        next_tick = self.clock.now() + self.interval
        while self.state is not WatchState.STOPPED:
            delay = next_tick - self.clock.now()
            if delay > 0:
                self.clock.sleep(delay)
            if self.state is WatchState.STOPPED:
                break

            event = self.tick()

            next_tick += self.interval
            now = self.clock.now()
            skipped = 0
            while next_tick < now:
                next_tick += self.interval
                skipped += 1
            if skipped:
                logger.debug("Tick overran the interval; skipped %d tick(s)", skipped)
                event = replace(event, skipped_ticks=skipped)
            yield event
