"""
Model Base Class
"""
from typing import Any, Optional


class Model:
    """
    Base class for data-access models

    Models are constructed lazily by LazyModelLoader, once per process, the
    first time they are requested. setup() runs once right after construction
    and is the place for one-time side effects (prepared statements, caches).

    Example:
        # models/user_model.py
        class UserModel(Model):
            def setup(self):
                self.table = 'users'

            def find(self, user_id):
                return self.connection.fetch_one(self.table, user_id)
    """

    def __init__(self, app=None):
        self.app = app

    def setup(self):
        pass

    @property
    def connection(self) -> Optional[Any]:
        """Connection produced by database.CONNECTION_FACTORY, if configured"""
        if self.app is not None and self.app.has('db'):
            return self.app.make('db')
        return None

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
