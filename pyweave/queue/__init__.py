"""
Queue Package
File-backed job queue, job base class and worker
"""
from pyweave.queue.job import Job
from pyweave.queue.job_queue import JobQueue
from pyweave.queue.worker import Worker

__all__ = [
    'Job',
    'JobQueue',
    'Worker',
]
