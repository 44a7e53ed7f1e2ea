"""Splitting a chunked workload across worker threads."""

from __future__ import annotations

import threading
from typing import Callable

WorkerFunction = Callable[[int, int], bool]


class Workload:
    """A job split into numbered chunks, processed by a worker function.

    The worker is called as ``worker(chunk, thread_no)`` and returns true when
    the chunk was processed. A false result interrupts the whole job.
    """

    def __init__(self, worker: WorkerFunction | None = None, chunks: int = 0) -> None:
        self._worker = worker
        self._chunks = chunks

    @property
    def chunks(self) -> int:
        return self._chunks

    def _finish_sequential(self) -> bool:
        return all(self._worker(chunk, 0) for chunk in range(self._chunks))

    def _finish_parallel(self, thread_count: int) -> bool:
        lock = threading.Lock()
        next_chunk = 0
        succeeded = True

        def take() -> int:
            nonlocal next_chunk
            with lock:
                chunk = next_chunk
                next_chunk += 1
            return chunk

        def run(thread_no: int) -> None:
            nonlocal succeeded
            chunk = take()
            while succeeded and chunk < self._chunks:
                if not self._worker(chunk, thread_no):
                    succeeded = False
                chunk = take()

        threads = [threading.Thread(target=run, args=(n,)) for n in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return succeeded

    def finish(self, thread_count: int) -> bool:
        """Run the job; return true if every chunk was processed."""
        if not self._chunks:
            return True
        if self._worker is None:
            raise ValueError("workload has chunks but no worker function")
        if thread_count == 1 or self._chunks == 1:
            return self._finish_sequential()
        if thread_count > 1:
            return self._finish_parallel(min(thread_count, self._chunks))
        return False