"""
Job Base Class
"""
from abc import ABC, abstractmethod
from typing import Any


class Job(ABC):
    """
    Base class for queued jobs

    Jobs live in the application's jobs package and are looked up by class
    name when the worker processes the queue. handle() may be a coroutine.
    Raising marks the job as failed and moves it to the failed area.

    Example:
        # jobs/send_email_job.py
        class SendEmailJob(Job):
            def handle(self, data):
                mailer.send(data['to'], data['subject'], data['body'])

        Queue.push('SendEmailJob', {'to': 'user@example.com', ...})
    """

    def __init__(self, app=None):
        self.app = app

    @abstractmethod
    def handle(self, data: Any) -> Any:
        pass
