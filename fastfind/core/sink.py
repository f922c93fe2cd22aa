"""Batched output pipeline for matched paths.

Traversal workers enqueue matches; a single consumer task groups them
into batches and writes each batch to the output stream in one call,
on a worker thread, so slow console I/O never holds up the walk.

Lifecycle:
    sink.start_consumer()
    ... traversal enqueues ...
    await engine.run()               # every producer has finished
    sink.request_drain_and_stop()    # no more enqueues after this
    await sink.await_consumer_stopped()
"""

import asyncio
import sys
from typing import List, Optional, TextIO

from ..exceptions import SinkClosedError


# Marks the end of the stream inside the queue
_DRAIN = object()

DEFAULT_BATCH_SIZE = 100


class ResultSink:
    """Concurrent queue plus one batching consumer.

    Attributes:
        output: Text stream receiving one line per match
        batch_size: Lines per bulk write
        flush_interval: Seconds of inactivity before a partial batch is
                        written; None disables idle flushing
        lines_written: Total lines handed to the output stream
        batches_written: Number of bulk writes performed
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        flush_interval: Optional[float] = 0.5,
        max_pending: int = 0
    ):
        """Initialize the sink.

        Args:
            output: Output stream (defaults to sys.stdout at write time)
            batch_size: Lines per bulk write, must be positive
            flush_interval: Idle time before flushing a partial batch
            max_pending: Queue bound; 0 keeps the queue unbounded,
                         otherwise enqueue waits while the queue is full
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._output = output
        self.batch_size = batch_size
        self.flush_interval = flush_interval
        self.max_pending = max_pending
        self._queue: Optional[asyncio.Queue] = None
        self._consumer: Optional[asyncio.Task] = None
        self._drain_task: Optional[asyncio.Task] = None
        self._closed = False
        self.lines_written = 0
        self.batches_written = 0

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    @property
    def closed(self) -> bool:
        """True once drain has been requested."""
        return self._closed

    @property
    def pending(self) -> int:
        """Matches enqueued but not yet picked up by the consumer."""
        return self._queue.qsize() if self._queue is not None else 0

    def _ensure_queue(self) -> asyncio.Queue:
        # Created lazily so the queue binds to the running loop
        if self._queue is None:
            self._queue = asyncio.Queue(maxsize=self.max_pending)
        return self._queue

    async def enqueue(self, path: str) -> None:
        """Hand one matched path to the consumer.

        Raises:
            SinkClosedError: If drain was already requested
        """
        if self._closed:
            raise SinkClosedError(f"Cannot enqueue '{path}': sink is draining")
        await self._ensure_queue().put(path)

    def start_consumer(self) -> asyncio.Task:
        """Spawn the single consumer task.

        Must be called from inside a running event loop.

        Raises:
            RuntimeError: If a consumer was already started
        """
        if self._consumer is not None:
            raise RuntimeError("ResultSink consumer already started")
        self._ensure_queue()
        self._consumer = asyncio.create_task(self._consume())
        return self._consumer

    def request_drain_and_stop(self) -> None:
        """Signal that no more matches will be enqueued.

        Only call this after every producer has joined; anything enqueued
        before this call is still written.
        """
        if self._closed:
            return
        self._closed = True
        queue = self._ensure_queue()
        try:
            queue.put_nowait(_DRAIN)
        except asyncio.QueueFull:
            # Bounded queue is full; the marker goes in once the consumer makes room
            self._drain_task = asyncio.get_running_loop().create_task(queue.put(_DRAIN))

    async def await_consumer_stopped(self) -> None:
        """Wait until the consumer flushed everything and exited."""
        if self._consumer is None:
            return
        await self._consumer
        if self._drain_task is not None:
            await self._drain_task

    async def _consume(self) -> None:
        """Consumer loop: collect lines, write in bulk, stop on drain."""
        queue = self._queue
        batch: List[str] = []

        while True:
            try:
                if batch and self.flush_interval is not None:
                    item = await asyncio.wait_for(queue.get(), self.flush_interval)
                else:
                    item = await queue.get()
            except asyncio.TimeoutError:
                # Producers went quiet; do not sit on a partial batch
                await self._write_batch(batch)
                batch = []
                continue

            if item is _DRAIN:
                break

            batch.append(item)
            if len(batch) >= self.batch_size:
                await self._write_batch(batch)
                batch = []

        if batch:
            await self._write_batch(batch)

    async def _write_batch(self, batch: List[str]) -> None:
        if not batch:
            return
        text = "\n".join(batch) + "\n"
        output = self.output
        await asyncio.to_thread(_write_and_flush, output, text)
        self.lines_written += len(batch)
        self.batches_written += 1

    async def __aenter__(self):
        self.start_consumer()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.request_drain_and_stop()
        await self.await_consumer_stopped()

    def __repr__(self) -> str:
        return (
            f"ResultSink(batch_size={self.batch_size}, "
            f"lines_written={self.lines_written}, closed={self._closed})"
        )


class CollectingSink(ResultSink):
    """ResultSink that keeps matched paths in a list instead of writing text.

    Paths are stored exactly as enqueued, so names containing newlines or
    other line separators come back intact.

    Attributes:
        matches: Every matched path, in the order the consumer received them
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE, max_pending: int = 0):
        super().__init__(batch_size=batch_size, flush_interval=None, max_pending=max_pending)
        self.matches: List[str] = []

    async def _write_batch(self, batch: List[str]) -> None:
        if not batch:
            return
        self.matches.extend(batch)
        self.lines_written += len(batch)
        self.batches_written += 1


def _write_and_flush(output: TextIO, text: str) -> None:
    output.write(text)
    output.flush()
