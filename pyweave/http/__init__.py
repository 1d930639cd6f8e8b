"""
HTTP Package
Dispatcher, controllers, views and response helpers
"""
from pyweave.http.dispatch_context import DispatchContext
from pyweave.http.request_helper import RequestHelper
from pyweave.http.response_helper import ResponseHelper
from pyweave.http.view import View, ViewNotFound
from pyweave.http.controller import Controller
from pyweave.http.dispatcher import Dispatcher

__all__ = [
    'DispatchContext',
    'RequestHelper',
    'ResponseHelper',
    'View',
    'ViewNotFound',
    'Controller',
    'Dispatcher',
]
