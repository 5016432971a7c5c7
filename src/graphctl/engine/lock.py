"""ReadWriteLock — many concurrent readers or one exclusive writer.

Writers are preferred: once a writer is waiting, new readers block until
it has run, so a steady stream of queries cannot starve mutations.
The lock is not re-entrant; internal helpers must never re-acquire it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Reader/writer mutual exclusion built on a single condition variable."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        logger.debug("read lock acquiring")
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        logger.debug("read lock acquired")
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()
            logger.debug("read lock released")

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        logger.debug("write lock acquiring")
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        logger.debug("write lock acquired")
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
            logger.debug("write lock released")

    @property
    def write_locked(self) -> bool:
        return self._writer

    @property
    def reader_count(self) -> int:
        return self._readers
