"""
Job Queue
File-backed priority queue processed by a separate worker
"""
import asyncio
import inspect
import json
import os
import time
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from pyweave.defaults import DEFAULT_JOB_PRIORITY, DEFAULT_JOBS_PACKAGE
from pyweave.exceptions import JobException
from pyweave.logging import getLogger
from pyweave.queue.job import Job
from pyweave.support import ClassLoader, Str

logger = getLogger('pyweave.queue')

# Deferred callbacks of the request being dispatched
_deferred: ContextVar[Optional[List[Tuple[Callable, tuple, dict]]]] = ContextVar('pyweave_deferred', default=None)

PRIORITY_WIDTH = 5
MAX_PRIORITY = 10 ** PRIORITY_WIDTH - 1


class JobQueue:
    """
    Durable job queue backed by one JSON file per job

    A job file is named <priority>_<job id>.json with the priority zero-padded,
    so sorting file names yields lower priorities first and, within a
    priority, creation order. Failed jobs move to failed/ with the error.

    Usage:
        queue = JobQueue(Storage.queue(), 'jobs')
        job_id = queue.push('SendEmailJob', {'to': 'user@example.com'}, priority=5)
        processed = await queue.process(limit=10)
        queue.status()  # {'pending': 0, 'processing': 0, 'failed': 0, ...}
    """

    def __init__(self, queue_dir: Union[str, Path], jobs_package: str = DEFAULT_JOBS_PACKAGE, app=None):
        self.queue_dir = Path(queue_dir)
        self.failed_dir = self.queue_dir / 'failed'
        self.jobs_package = jobs_package
        self.app = app
        self._background_tasks = set()

    # =========================================================================
    # Enqueue
    # =========================================================================

    def push(self, job_name: str, data: Any = None, priority: int = DEFAULT_JOB_PRIORITY) -> str:
        """
        Write a job record to the queue

        Args:
            job_name: Job class name in the jobs package
            data: JSON-serializable payload passed to handle()
            priority: Lower is processed first (0 to 99999)

        Returns:
            The job id

        Raises:
            JobException: If the priority is out of range or data is not serializable
        """
        if not isinstance(priority, int) or isinstance(priority, bool) or not 0 <= priority <= MAX_PRIORITY:
            raise JobException(f"Job priority must be an integer between 0 and {MAX_PRIORITY}, got {priority!r}")

        job_id = f"job_{time.time_ns():020d}_{uuid.uuid4().hex[:8]}"
        job = {
            'id': job_id,
            'class': job_name,
            'data': data if data is not None else {},
            'priority': priority,
            'created_at': time.time(),
            'status': 'pending',
        }

        try:
            payload = json.dumps(job, indent=2)
        except (TypeError, ValueError) as e:
            raise JobException(f"Job data for '{job_name}' is not JSON serializable: {e}") from e

        self._ensure_directories()
        self._write_atomic(self._job_path(job), payload)

        logger.info(f"Job queued: {job_name}", extra={'job_id': job_id, 'priority': priority})
        return job_id

    def _job_path(self, job: Dict, directory: Optional[Path] = None) -> Path:
        return (directory or self.queue_dir) / f"{int(job['priority']):0{PRIORITY_WIDTH}d}_{job['id']}.json"

    def _write_atomic(self, path: Path, payload: str):
        tmp_path = path.with_name(f".{path.name}.tmp")
        tmp_path.write_text(payload, encoding='utf-8')
        os.replace(tmp_path, path)

    def _ensure_directories(self):
        self.queue_dir.mkdir(parents=True, exist_ok=True)
        self.failed_dir.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # Processing
    # =========================================================================

    def pending_files(self) -> List[Path]:
        if not self.queue_dir.is_dir():
            return []
        return sorted(self.queue_dir.glob('*.json'))

    async def process(self, limit: int = 0) -> int:
        """
        Run pending jobs in queue order

        Each job file is claimed by renaming it before it runs, so two workers
        never run the same job.

        Args:
            limit: Maximum number of jobs to take (0 for all)

        Returns:
            Number of jobs that completed successfully
        """
        processed = 0
        attempted = 0

        for path in self.pending_files():
            if limit > 0 and attempted >= limit:
                break

            claimed = path.with_suffix('.processing')
            try:
                os.rename(path, claimed)
            except FileNotFoundError:
                # Another worker took it
                continue

            attempted += 1
            if await self._run_claimed(claimed):
                processed += 1

        return processed

    async def _run_claimed(self, claimed: Path) -> bool:
        job: Dict = {}
        try:
            job = json.loads(claimed.read_text(encoding='utf-8'))
            instance = self.resolve_job(job['class'])
            result = instance.handle(job.get('data'))
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._fail(claimed, job, e)
            return False

        claimed.unlink()
        logger.info(f"Job processed: {job['class']}", extra={'job_id': job.get('id')})
        return True

    def _fail(self, claimed: Path, job: Dict, error: Exception):
        if not job:
            job = {'id': claimed.stem.split('_', 1)[-1], 'class': None, 'priority': DEFAULT_JOB_PRIORITY, 'data': None}

        job['status'] = 'failed'
        job['error'] = str(error) or error.__class__.__name__
        job['failed_at'] = time.time()

        self._ensure_directories()
        self._write_atomic(self.failed_dir / claimed.with_suffix('.json').name, json.dumps(job, indent=2, default=str))
        claimed.unlink()

        logger.error(
            f"Job failed: {job.get('class')}: {job['error']}",
            extra={'job_id': job.get('id')},
            exc_info=(type(error), error, error.__traceback__)
        )

    def resolve_job(self, job_name: str) -> Job:
        """
        Instantiate a job class from the jobs package

        Looks in jobs/<snake_name>.py, then jobs/<name lowercased>.py.

        Raises:
            JobException: If the job class cannot be found
        """
        if not job_name or not str(job_name).isidentifier():
            raise JobException(f"Invalid job class name: {job_name!r}")

        for module_name in dict.fromkeys((Str.snake(job_name), job_name.lower())):
            module = ClassLoader.try_import(f"{self.jobs_package}.{module_name}")
            if module is None:
                continue
            job_class = getattr(module, job_name, None)
            if isinstance(job_class, type) and callable(getattr(job_class, 'handle', None)):
                return job_class(self.app)

        raise JobException(f"Job class not found: {job_name}")

    # =========================================================================
    # Inspection and maintenance
    # =========================================================================

    def status(self) -> Dict[str, Any]:
        return {
            'pending': len(self.pending_files()),
            'processing': len(list(self.queue_dir.glob('*.processing'))) if self.queue_dir.is_dir() else 0,
            'failed': len(self.failed_files()),
            'queue_path': str(self.queue_dir),
        }

    def failed_files(self) -> List[Path]:
        if not self.failed_dir.is_dir():
            return []
        return sorted(self.failed_dir.glob('*.json'))

    def clear_failed(self) -> int:
        """
        Returns:
            Number of failed jobs deleted
        """
        count = 0
        for path in self.failed_files():
            path.unlink()
            count += 1
        return count

    def retry_failed(self, limit: int = 0) -> int:
        """
        Move failed jobs back to the queue as pending

        Returns:
            Number of jobs re-queued
        """
        count = 0
        for path in self.failed_files():
            if limit > 0 and count >= limit:
                break

            job = json.loads(path.read_text(encoding='utf-8'))
            job['status'] = 'pending'
            job.pop('error', None)
            job.pop('failed_at', None)

            self._write_atomic(self._job_path(job), json.dumps(job, indent=2))
            path.unlink()
            count += 1

        if count:
            logger.info(f"Re-queued {count} failed jobs")
        return count

    # =========================================================================
    # Deferred work
    # =========================================================================

    def defer(self, callback: Callable, *args, **kwargs):
        """
        Run a callback after the current request's response is produced

        Example:
            Queue.defer(cache.warm, 'homepage')
        """
        callbacks = _deferred.get()
        if callbacks is None:
            callbacks = []
            _deferred.set(callbacks)
        callbacks.append((callback, args, kwargs))

    def take_deferred(self) -> List[Tuple[Callable, tuple, dict]]:
        callbacks = _deferred.get() or []
        _deferred.set(None)
        return callbacks

    def schedule_deferred(self) -> Optional[asyncio.Task]:
        """
        Start the deferred callbacks of this request as a background task

        Returns:
            The task, or None when nothing was deferred
        """
        callbacks = self.take_deferred()
        if not callbacks:
            return None

        task = asyncio.get_running_loop().create_task(self.run_deferred(callbacks))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def run_deferred(self, callbacks: List[Tuple[Callable, tuple, dict]]) -> int:
        """
        Returns:
            Number of callbacks that completed without raising
        """
        completed = 0
        for callback, args, kwargs in callbacks:
            try:
                result = callback(*args, **kwargs)
                if inspect.isawaitable(result):
                    await result
                completed += 1
            except Exception:
                logger.error(f"Deferred callback {callback!r} failed", exc_info=True)
        return completed
