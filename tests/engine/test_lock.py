"""Tests for the reader/writer lock."""

from __future__ import annotations

import threading
import time

import pytest

from graphctl.engine.lock import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 2
        assert lock.reader_count == 0

    def test_write_is_exclusive_flag(self) -> None:
        lock = ReadWriteLock()
        with lock.write():
            assert lock.write_locked
        assert not lock.write_locked

    def test_released_on_exception(self) -> None:
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError), lock.write():
            raise RuntimeError("boom")
        assert not lock.write_locked
        with pytest.raises(RuntimeError), lock.read():
            raise RuntimeError("boom")
        assert lock.reader_count == 0

    def test_writer_waits_for_reader(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []
        reader_in = threading.Event()
        release_reader = threading.Event()

        def reader() -> None:
            with lock.read():
                reader_in.set()
                release_reader.wait(timeout=5)
                events.append("reader done")

        def writer() -> None:
            reader_in.wait(timeout=5)
            with lock.write():
                events.append("writer")

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for t in threads:
            t.start()
        reader_in.wait(timeout=5)
        time.sleep(0.05)
        assert events == []
        release_reader.set()
        for t in threads:
            t.join(timeout=5)
        assert events == ["reader done", "writer"]

    def test_writers_are_mutually_exclusive(self) -> None:
        lock = ReadWriteLock()
        counter = {"value": 0}

        def bump() -> None:
            for _ in range(500):
                with lock.write():
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert counter["value"] == 4000
