"""
Queue Service Provider
"""
from pyweave.defaults import DEFAULT_JOBS_PACKAGE, DEFAULT_QUEUE_DIRECTORY
from pyweave.queue import JobQueue
from pyweave.service_provider import ServiceProvider
from pyweave.support import Config, Storage


class QueueServiceProvider(ServiceProvider):

    def register(self):
        self.app.singleton('queue', lambda app: JobQueue(
            Storage.resolve(Config.get('queue.DIRECTORY', DEFAULT_QUEUE_DIRECTORY)),
            Config.get('queue.JOBS', DEFAULT_JOBS_PACKAGE),
            app=app,
        ))
