"""
Queue Worker
Polls the job queue and runs jobs until stopped
"""
import asyncio
from typing import Optional
from pyweave.defaults import DEFAULT_WORKER_SLEEP
from pyweave.logging import getLogger
from pyweave.queue.job_queue import JobQueue

logger = getLogger('pyweave.queue')


class Worker:
    """
    Queue worker loop

    Usage:
        worker = Worker(queue, sleep=3)
        await worker.run()                 # until stop() or max_jobs reached
        await worker.run(once=True)        # drain what is pending and return
    """

    def __init__(self, queue: JobQueue, sleep: float = DEFAULT_WORKER_SLEEP, max_jobs: int = 0, limit: int = 0):
        """
        Args:
            queue: Queue to process
            sleep: Seconds to wait when the queue is empty
            max_jobs: Stop after this many processed jobs (0 for no limit)
            limit: Jobs taken per pass (0 for all pending)
        """
        self.queue = queue
        self.sleep = sleep
        self.max_jobs = max_jobs
        self.limit = limit
        self.processed = 0
        self._stopped = False

    def stop(self):
        self._stopped = True

    async def run(self, once: bool = False) -> int:
        """
        Returns:
            Total number of jobs processed
        """
        logger.info(f"Queue worker started on {self.queue.queue_dir}")

        while not self._stopped:
            processed = await self.queue.process(self._batch_size())
            self.processed += processed

            if processed:
                status = self.queue.status()
                logger.info(
                    f"Processed {processed} job(s); {status['pending']} pending, {status['failed']} failed"
                )

            if once or self._reached_max():
                break

            if not self.queue.pending_files():
                await asyncio.sleep(self.sleep)

        logger.info(f"Queue worker stopped after {self.processed} job(s)")
        return self.processed

    def _batch_size(self) -> int:
        if not self.max_jobs:
            return self.limit
        remaining = self.max_jobs - self.processed
        return min(self.limit, remaining) if self.limit else remaining

    def _reached_max(self) -> bool:
        return bool(self.max_jobs) and self.processed >= self.max_jobs
