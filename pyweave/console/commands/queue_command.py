"""
Queue Manager Command
Worker and maintenance operations for the file-backed job queue
"""
from pyweave.console.command import Command
from pyweave.defaults import DEFAULT_WORKER_SLEEP
from pyweave.queue import Worker
from pyweave.support import Config


class QueueManagerCommand(Command):
    """Queue operations - all in one command"""

    name = "queue:manager"
    description = "Job queue operations"

    signature = [
        {"command": "queue:work", "args": "{--once} {--max-jobs=} {--sleep=}", "description": "Process queued jobs"},
        {"command": "queue:status", "description": "Show pending, processing and failed counts"},
        {"command": "queue:retry", "args": "{--limit=}", "description": "Move failed jobs back to the queue"},
        {"command": "queue:clear-failed", "description": "Delete failed jobs"},
    ]

    async def handle(self, action: str = None, **kwargs):
        handlers = {
            'work': self.handle_work,
            'status': self.handle_status,
            'retry': self.handle_retry,
            'clear-failed': self.handle_clear_failed,
        }

        handler = handlers.get(action)
        if not handler:
            self.error(f"Unknown action: {action}")
            return 1

        return await handler(**kwargs)

    async def handle_work(self, once: bool = False, max_jobs: int = 0, sleep: float = None, limit: int = 0, **kwargs):
        self.app.boot()
        worker = Worker(
            self.app.queue,
            sleep=sleep if sleep is not None else Config.get('queue.WORKER_SLEEP', DEFAULT_WORKER_SLEEP),
            max_jobs=int(max_jobs),
            limit=int(limit),
        )

        self.info(f"Worker listening on {self.app.queue.queue_dir}")
        try:
            processed = await worker.run(once=bool(once))
        finally:
            worker.stop()

        self.success(f"Processed {processed} job(s)")
        return 0

    async def handle_status(self, **kwargs):
        status = self.app.queue.status()
        self.table(['Queue', 'Pending', 'Processing', 'Failed'], [
            (status['queue_path'], status['pending'], status['processing'], status['failed'])
        ])
        return 0

    async def handle_retry(self, limit: int = 0, **kwargs):
        count = self.app.queue.retry_failed(int(limit))
        if count:
            self.success(f"Re-queued {count} failed job(s)")
        else:
            self.info("No failed jobs to retry")
        return 0

    async def handle_clear_failed(self, **kwargs):
        count = self.app.queue.clear_failed()
        self.success(f"Deleted {count} failed job(s)")
        return 0
