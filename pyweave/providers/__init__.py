"""
Framework Service Providers
"""
from pyweave.providers.logging_service_provider import LoggingServiceProvider
from pyweave.providers.hook_service_provider import HookServiceProvider
from pyweave.providers.database_service_provider import DatabaseServiceProvider
from pyweave.providers.routing_service_provider import RoutingServiceProvider
from pyweave.providers.queue_service_provider import QueueServiceProvider
from pyweave.providers.http_service_provider import HttpServiceProvider

# Registration and boot order
DEFAULT_PROVIDERS = [
    LoggingServiceProvider,
    HookServiceProvider,
    DatabaseServiceProvider,
    RoutingServiceProvider,
    QueueServiceProvider,
    HttpServiceProvider,
]

__all__ = [
    'LoggingServiceProvider',
    'HookServiceProvider',
    'DatabaseServiceProvider',
    'RoutingServiceProvider',
    'QueueServiceProvider',
    'HttpServiceProvider',
    'DEFAULT_PROVIDERS',
]
