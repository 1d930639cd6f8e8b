"""
Framework Default Values
All hardcoded values should be defined here and accessed via Config.get()
This file contains sensible defaults that can be overridden in config/ modules or .env
"""

# ============================================================================
# APPLICATION DEFAULTS
# ============================================================================

DEFAULT_APP_NAME = 'PyWeave'
DEFAULT_APP_ENV = 'production'
DEFAULT_BASE_URL = '/'

# ============================================================================
# NETWORK DEFAULTS
# ============================================================================

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000

# ============================================================================
# ROUTING DEFAULTS
# ============================================================================

# HTTP methods accepted by route registration
ROUTE_METHODS = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'ANY')

# Form field that overrides POST into PUT/PATCH/DELETE
METHOD_OVERRIDE_FIELD = '_method'

DEFAULT_ROUTE_CACHE_FILE = 'cache/routes.json'  # relative to storage/

# ============================================================================
# HOOK DEFAULTS
# ============================================================================

DEFAULT_HOOK_PRIORITY = 10
DEFAULT_HOOK_POINT = 'before_action_execute'
DEFAULT_HOOKS_DIRECTORY = 'hooks'

# ============================================================================
# APPLICATION PACKAGES
# ============================================================================

DEFAULT_CONTROLLERS_PACKAGE = 'controllers'
DEFAULT_MODELS_PACKAGE = 'models'
DEFAULT_JOBS_PACKAGE = 'jobs'
DEFAULT_VIEWS_DIRECTORY = 'views'
DEFAULT_ROUTES_FILE = 'routes.py'

# ============================================================================
# QUEUE DEFAULTS
# ============================================================================

DEFAULT_QUEUE_DIRECTORY = 'queue'  # relative to storage/
DEFAULT_JOB_PRIORITY = 10
DEFAULT_WORKER_SLEEP = 3  # seconds between empty polls

# ============================================================================
# CORS / RATE LIMIT DEFAULTS (built-in hooks)
# ============================================================================

DEFAULT_CORS_MAX_AGE = 3600  # seconds (for CORS preflight cache)
DEFAULT_CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS']
DEFAULT_CORS_HEADERS = ['Content-Type', 'Authorization', 'X-Requested-With']

DEFAULT_RATE_LIMIT = 100  # requests
DEFAULT_RATE_LIMIT_WINDOW = 60  # seconds

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
DEFAULT_LOGGERS = {
    'application': {'name': 'application', 'filter_sensitive': True},
}
