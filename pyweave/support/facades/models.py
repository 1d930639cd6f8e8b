"""
Models Facade
Provides static access to the LazyModelLoader instance
"""
from pyweave.support.facades.facade import Facade


class Models(Facade):
    """
    Models Facade

    Example:
        users = Models.get('user_model')
        users = Models.user_model  # same cached instance
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'models'
