"""
Route Facade
Provides static access to the Router instance
"""
from pyweave.support.facades.facade import Facade


class Route(Facade):
    """
    Route Facade

    Example:
        from pyweave.support.facades import Route

        Route.get('/blog/:id:', 'Blog@show')
        Route.post('/blog', 'Blog@store').hook('auth')

        Route.group({'prefix': '/admin', 'hooks': ['auth']}, lambda: [
            Route.get('/users', 'Admin@users'),
        ])
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'router'
