"""
Lifecycle Events
The fixed set of events the framework triggers, in normal firing order
"""
from typing import Dict

LIFECYCLE_EVENTS: Dict[str, str] = {
    'framework_start': 'Triggered at the very start, after .env is loaded',
    'before_db_connection': 'Before database connection is initialized',
    'after_db_connection': 'After database connection is ready',
    'before_models_load': 'Before models package is scanned',
    'after_models_load': 'After all models are discovered',
    'before_router_init': 'Before routes are loaded',
    'after_routes_registered': 'After routes.py (or the route cache) is loaded',
    'before_route_match': 'Before route matching begins',
    'after_route_match': 'After route is matched (includes matched route data)',
    'before_controller_load': 'Before controller module is imported',
    'after_controller_instantiate': 'After controller object is created',
    'before_action_execute': 'Before controller method is called',
    'after_action_execute': 'After controller method completes',
    'before_view_render': 'Before view template is rendered',
    'after_view_render': 'After view is rendered',
    'on_404': 'When no route matches',
    'on_error': 'When exceptions occur',
    'framework_shutdown': 'At the end of request',
}

# Events fired once while the application boots
BOOT_EVENTS = (
    'framework_start',
    'before_db_connection',
    'after_db_connection',
    'before_models_load',
    'after_models_load',
    'before_router_init',
    'after_routes_registered',
)


def available_hooks() -> Dict[str, str]:
    """Event names mapped to a short description of when they fire"""
    return dict(LIFECYCLE_EVENTS)


def is_lifecycle_event(name: str) -> bool:
    return name in LIFECYCLE_EVENTS
