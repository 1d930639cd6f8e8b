"""
Log Hook
Logs the controller action each request is dispatched to
"""
from pyweave.hooks.base_hook import BaseHook
from pyweave.hooks.classes.client_ip import client_ip
from pyweave.logging import DEBUG, getLogger

logger = getLogger('pyweave.requests')


class LogHook(BaseHook):
    """Registered by default as the 'log' named hook at before_action_execute"""

    def handle(self, data):
        request = data['request']
        log_data = {
            'method': request.method,
            'path': request.path,
            'controller': data.get('controller', 'UNKNOWN'),
            'action': data.get('action', 'UNKNOWN'),
            'ip': client_ip(request),
            'user_agent': request.headers.get('user-agent', 'UNKNOWN'),
        }
        if logger.isEnabledFor(DEBUG) and data.get('params'):
            log_data['params'] = data.get('named_params') or list(data['params'])

        logger.info(
            f"{request.method} {request.path} | {log_data['controller']}@{log_data['action']} | IP: {log_data['ip']}",
            extra=log_data
        )
        return data
