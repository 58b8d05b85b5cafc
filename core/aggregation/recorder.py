#!/usr/bin/env python3
"""
Result Recorder - Fire-and-forget recording of completed matches.

The write runs on the recorder's own thread pool, detached from the request
that produced the match. Its only error channel is the log: a failed or
abandoned write never reaches the caller and is never retried inline.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Optional

from core.aggregation.shards import ShardRouter
from core.aggregation.store import ShardStore, ShardStoreError

logger = logging.getLogger(__name__)

DEFAULT_MAX_PENDING = 1000


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResultRecorder:
    """
    Records top-match outcomes into one shard per write.

    Args:
        store: Shard store providing atomic increments
        router: Router selecting the shard for each write
        executor: Executor running the writes (a small thread pool by default)
        max_workers: Pool size when no executor is given
        max_pending: Writes allowed to be queued or running at once; further
            records are dropped until the backlog drains
        clock: Wall-clock source for `lastUpdated`
    """

    def __init__(
        self,
        store: ShardStore,
        router: ShardRouter,
        executor: Optional[Executor] = None,
        max_workers: int = 4,
        max_pending: int = DEFAULT_MAX_PENDING,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.store = store
        self.router = router
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="result-recorder"
        )
        self._clock = clock
        self.max_pending = max_pending
        self._pending = 0
        self._pending_lock = threading.Lock()

    def record(self, candidate_id: str, questions_answered: int) -> Optional[Future]:
        """
        Schedule recording of one completed match and return immediately.

        Args:
            candidate_id: Top-matched candidate
            questions_answered: Number of answers the match was computed from

        Returns:
            Future of the detached write (it never raises), or None when the
            input is unusable, the backlog is full or the recorder is shut down
        """
        if not isinstance(candidate_id, str) or not candidate_id:
            logger.warning(f"Not recording match with invalid candidate_id={candidate_id!r}")
            return None
        if isinstance(questions_answered, bool) or not isinstance(questions_answered, int) or questions_answered < 1:
            logger.warning(f"Not recording match with invalid questions_answered={questions_answered!r}")
            return None

        with self._pending_lock:
            if self._pending >= self.max_pending:
                logger.warning(f"Result recorder backlog full ({self._pending} pending), dropping match record")
                return None
            self._pending += 1

        try:
            future = self._executor.submit(self._write, candidate_id, questions_answered)
        except RuntimeError as e:
            self._release()
            logger.warning(f"Result recorder unavailable, dropping match record: {e}")
            return None
        future.add_done_callback(lambda _: self._release())
        return future

    @property
    def pending(self) -> int:
        """Writes submitted and not yet finished or cancelled."""
        with self._pending_lock:
            return self._pending

    def _release(self) -> None:
        with self._pending_lock:
            self._pending -= 1

    def _write(self, candidate_id: str, questions_answered: int) -> None:
        shard_key = self.router.write_shard_for()
        try:
            self.store.increment(shard_key, candidate_id, questions_answered, self._clock())
            logger.debug(f"Recorded match for {candidate_id} in shard {shard_key}")
        except ShardStoreError as e:
            logger.warning(f"Failed to record match result: {e}")
        except Exception:
            logger.exception("Unexpected error recording match result")

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """Stop accepting writes.

        Args:
            wait: Block until running (and, unless cancelled, queued) writes finish
            cancel_pending: Abandon writes that have not started yet
        """
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)
