"""
HTTP Service Provider
Views, the dispatcher and the Sanic routes that feed it
"""
from pyweave.defaults import DEFAULT_BASE_URL, DEFAULT_CONTROLLERS_PACKAGE, DEFAULT_VIEWS_DIRECTORY
from pyweave.exceptions import ErrorHandler
from pyweave.http import Dispatcher, View
from pyweave.service_provider import ServiceProvider
from pyweave.support import Config, Storage

# Methods accepted by the catch-all route; OPTIONS reaches ANY routes and preflight hooks
DISPATCH_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


class HttpServiceProvider(ServiceProvider):
    """HTTP layer service provider"""

    def register(self):
        self.app.singleton('error_handler', ErrorHandler(debug=self.app.debug))
        self.app.singleton('view', lambda app: View(
            Storage.base(Config.get('app.VIEWS', DEFAULT_VIEWS_DIRECTORY)),
            hooks=app.make('hooks'),
            reload=app.debug,
        ))
        self.app.singleton('dispatcher', lambda app: Dispatcher(
            app,
            base_url=Config.get('app.BASE_URL', DEFAULT_BASE_URL),
            controllers_package=Config.get('app.CONTROLLERS', DEFAULT_CONTROLLERS_PACKAGE),
            error_handler=app.make('error_handler'),
        ))

    def boot(self):
        self.register_with_sanic()

    def register_with_sanic(self):
        """
        Route every request to the dispatcher and stray exceptions to the error handler
        """
        sanic_app = self.app.sanic_app
        dispatcher = self.app.make('dispatcher')
        error_handler = self.app.make('error_handler')

        async def dispatch(request, path: str = ''):
            return await dispatcher.dispatch(request)

        sanic_app.add_route(dispatch, '/', methods=DISPATCH_METHODS, name='pyweave_root')
        sanic_app.add_route(dispatch, '/<path:path>', methods=DISPATCH_METHODS, name='pyweave_dispatch')

        @sanic_app.exception(Exception)
        async def handle_exception(request, exception):
            return await error_handler.handle_error(request, exception)
