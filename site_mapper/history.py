"""site_mapper.history: append-only журнал запусков (``<ISO-8601>,<count>`` на строку)."""

from __future__ import annotations

import fcntl
import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import IO, Iterator, List, Union

from site_mapper.crawler.models import RunRecord
from site_mapper.errors import WriteError
from site_mapper.logger import logger

__all__ = ("append_record", "read_history", "exclusive_lock")


@contextmanager
def exclusive_lock(fh: IO) -> Iterator[IO]:
    """Hold an advisory ``flock`` on *fh* for the duration of the block."""
    fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
    try:
        yield fh
    finally:
        fcntl.flock(fh.fileno(), fcntl.LOCK_UN)


def append_record(timestamp: datetime, count: int, path: Union[str, Path]) -> RunRecord:
    """Append one run record to the history store under an exclusive lock.

    Existing lines are never touched; the file is only ever opened for append.

    Raises:
        ValueError: *count* is negative.
        WriteError: the store could not be opened or written.
    """
    record = RunRecord(timestamp=timestamp, count=count)
    store = Path(path)
    try:
        store.parent.mkdir(parents=True, exist_ok=True)
        with store.open("a", encoding="utf-8") as fh, exclusive_lock(fh):
            fh.write(record.to_line())
            fh.flush()
            os.fsync(fh.fileno())
    except OSError as exc:
        logger.error("History append failed: %s", exc)
        raise WriteError(store, exc) from exc
    logger.info("History record appended: %s", record.to_line().strip())
    return record


def read_history(path: Union[str, Path]) -> List[RunRecord]:
    """Return the stored run records, oldest first. Missing store gives []."""
    store = Path(path)
    if not store.exists():
        return []
    records: List[RunRecord] = []
    for lineno, line in enumerate(store.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        try:
            records.append(RunRecord.from_line(line))
        except ValueError:
            logger.warning("Skipping malformed history line %d in %s", lineno, store)
    return records
