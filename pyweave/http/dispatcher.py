"""
Dispatcher
Runs one request through route matching, hooks and the controller action
"""
import inspect
import traceback
from typing import Any, List, Optional
from sanic import Request
from sanic.response import HTTPResponse
from pyweave.defaults import DEFAULT_BASE_URL, DEFAULT_CONTROLLERS_PACKAGE
from pyweave.exceptions import ErrorHandler, FrameworkException, HandlerMissingException
from pyweave.http.dispatch_context import DispatchContext
from pyweave.http.request_helper import RequestHelper
from pyweave.http.response_helper import ResponseHelper
from pyweave.logging import getLogger
from pyweave.support import ClassLoader, Str

logger = getLogger('pyweave.http')


class Dispatcher:
    """
    Request pipeline behind the Sanic catch-all route

    Order: before_route_match, match, after_route_match,
    before_controller_load, after_controller_instantiate,
    before_action_execute, action, after_action_execute, framework_shutdown.
    Global hooks run before the matched route's named hooks at each point,
    and async hooks are awaited in turn.
    The halt signal is checked after every trigger; a halted request answers
    with the response passed to halt(), or what the action already produced,
    or an empty 204.

    No match answers 404 through on_404. Any exception answers 500 through
    on_error. Hooks override either page by halting with a response or by
    setting data['response'].
    """

    def __init__(
        self,
        app,
        base_url: str = DEFAULT_BASE_URL,
        controllers_package: str = DEFAULT_CONTROLLERS_PACKAGE,
        error_handler: Optional[ErrorHandler] = None
    ):
        self.app = app
        self.router = app.make('router')
        self.hooks = app.make('hooks')
        self.base_url = base_url
        self.controllers_package = controllers_package
        self.error_handler = error_handler or ErrorHandler(debug=getattr(app, 'debug', False))

    async def dispatch(self, request: Request) -> HTTPResponse:
        halt_state = self.hooks.begin_request()
        context = DispatchContext(
            method=RequestHelper.method(request),
            uri=RequestHelper.uri(request.path, self.base_url),
            request=request,
            halt_state=halt_state,
        )

        try:
            response = await self._run(context)
        except Exception as e:
            response = await self._handle_error(context, e)

        response = ResponseHelper.with_headers(response, context.response_headers)
        context.response = response
        await self._shutdown(context)
        return response

    async def _run(self, context: DispatchContext) -> HTTPResponse:
        await self.hooks.trigger_async('before_route_match', context.base_data())
        if context.halted:
            return self._halted(context)

        match = self.router.match(context.method, context.uri)
        if not match.found:
            return await self._not_found(context, match.method_not_allowed)

        route = match.route
        context.route = route
        context.controller = route.controller
        context.action = route.action
        context.params = list(match.params)
        context.named_params = dict(match.named_params)

        await self.hooks.trigger_async('after_route_match', context.base_data(
            route=route,
            handler=route.handler,
            controller=route.controller,
            action=route.action,
            params=list(context.params),
            named_params=dict(context.named_params),
        ), route=route)
        if context.halted:
            return self._halted(context)

        await self.hooks.trigger_async('before_controller_load', context.base_data(
            controller=route.controller,
            action=route.action,
            params=list(context.params),
        ))
        if context.halted:
            return self._halted(context)

        controller_class = self.resolve_controller(route.controller)
        instance = controller_class(self.app, context.request)
        context.controller_instance = instance

        await self.hooks.trigger_async('after_controller_instantiate', context.base_data(
            controller=route.controller,
            action=route.action,
            instance=instance,
            params=list(context.params),
        ))
        if context.halted:
            return self._halted(context)

        action = self.resolve_action(instance, route.controller, route.action)

        data = await self.hooks.trigger_async('before_action_execute', context.base_data(
            controller=route.controller,
            action=route.action,
            instance=instance,
            params=list(context.params),
            named_params=dict(context.named_params),
        ), route=route)
        if context.halted:
            return self._halted(context)

        context.params = self._params_from(data, context.params)

        result = action(*context.params)
        if inspect.isawaitable(result):
            result = await result
        context.response = result

        data = await self.hooks.trigger_async('after_action_execute', context.base_data(
            controller=route.controller,
            action=route.action,
            instance=instance,
            params=list(context.params),
            response=result,
        ), route=route)
        if isinstance(data, dict) and 'response' in data:
            result = data['response']
            context.response = result

        if context.halted:
            return self._halted(context, fallback=result)

        return ResponseHelper.to_response(result)

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve_controller(self, name: str) -> type:
        """
        Find a controller class in the controllers package

        'Blog' is looked up in controllers/blog.py; 'UserProfile' in
        controllers/user_profile.py, then controllers/userprofile.py.

        Raises:
            HandlerMissingException: If no module defines the class
        """
        if not name.isidentifier():
            raise HandlerMissingException(f"Invalid controller name: {name}")

        for module_name in dict.fromkeys((Str.snake(name), name.lower())):
            module = ClassLoader.try_import(f"{self.controllers_package}.{module_name}")
            if module is None:
                continue
            controller_class = getattr(module, name, None)
            if isinstance(controller_class, type):
                return controller_class

        raise HandlerMissingException(f"Controller not found: {name}")

    @staticmethod
    def resolve_action(instance: Any, controller: str, action: str):
        """
        Raises:
            HandlerMissingException: If the action is missing, private or not callable
        """
        if action.startswith('_'):
            raise HandlerMissingException(f"Action {action} of controller {controller} is not public")

        method = getattr(instance, action, None)
        if not callable(method):
            raise HandlerMissingException(f"Method {action} not found in controller {controller}")
        return method

    @staticmethod
    def _params_from(data: Any, default: List[str]) -> List[Any]:
        """Parameters for the action, as left by before_action_execute hooks"""
        if not isinstance(data, dict) or 'params' not in data:
            return list(default)
        params = data['params']
        if isinstance(params, dict):
            return list(params.values())
        if isinstance(params, (list, tuple)):
            return list(params)
        return list(default)

    # =========================================================================
    # Outcomes
    # =========================================================================

    def _halted(self, context: DispatchContext, fallback: Any = None) -> HTTPResponse:
        response = self.hooks.halted_response()
        if response is not None:
            return ResponseHelper.to_response(response)
        if fallback is not None:
            return ResponseHelper.to_response(fallback)
        return ResponseHelper.empty()

    async def _not_found(self, context: DispatchContext, method_not_allowed: bool) -> HTTPResponse:
        data = await self.hooks.trigger_async('on_404', context.base_data(method_not_allowed=method_not_allowed))

        custom = self.hooks.halted_response()
        if custom is None and isinstance(data, dict):
            custom = data.get('response')
        if custom is not None:
            return ResponseHelper.to_response(custom)

        return self.error_handler.not_found(context.method, context.uri)

    async def _handle_error(self, context: DispatchContext, error: Exception) -> HTTPResponse:
        trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        message = error.message if isinstance(error, FrameworkException) else str(error)

        # A response halted with before the error is not the error page
        context.halt_state.response = None

        data = None
        try:
            data = await self.hooks.trigger_async('on_error', context.base_data(
                exception=error,
                message=message,
                trace=trace,
            ), ignore_halt=True)
        except Exception:
            logger.error("on_error hook failed while handling an error", exc_info=True)

        custom = self.hooks.halted_response()
        if custom is None and isinstance(data, dict):
            custom = data.get('response')
        if custom is not None:
            return ResponseHelper.to_response(custom)

        return self.error_handler.server_error(error, context.method, context.uri, trace)

    async def _shutdown(self, context: DispatchContext):
        try:
            await self.hooks.trigger_async('framework_shutdown', context.base_data(response=context.response))
        except Exception:
            logger.error("framework_shutdown hook failed after the response was built", exc_info=True)

        if self.app.has('queue'):
            self.app.make('queue').schedule_deferred()
