"""
Queue Facade
Provides static access to the job queue
"""
from pyweave.support.facades.facade import Facade


class Queue(Facade):
    """
    Queue Facade

    Example:
        Queue.push('SendEmailJob', {'to': 'user@example.com'}, priority=5)
        Queue.defer(cache.warm, 'homepage')
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'queue'
