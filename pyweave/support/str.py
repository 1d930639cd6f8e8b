"""
String Helper Functions
"""
import re


class Str:
    """String manipulation helpers used for controller, model and job name resolution"""

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Example:
            Str.snake('CacheDashboard')  # 'cache_dashboard'
            Str.snake('Cache Dashboard')  # 'cache_dashboard'
        """
        if not value:
            return value

        value = value.replace(' ', delimiter)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        value = value.lower()
        value = re.sub(f'{delimiter}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Example:
            Str.studly('user_model')  # 'UserModel'
        """
        if not value:
            return value

        value = value.replace('_', ' ').replace('-', ' ')
        return ''.join(word[:1].upper() + word[1:] for word in value.split())
