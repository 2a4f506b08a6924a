"""
Access policy and the decorators that apply it to routes
"""

from collections import namedtuple
from functools import wraps

from flask import current_app, request
from flask_login import current_user

from .errors import Forbidden, Unauthorized

# Actions an admin may take on accounts other than their own
ADMIN_ACTIONS = frozenset({
    'list_accounts',
    'create_account',
    'change_role',
    'delete_account',
    'edit_subscription',
    'view_stats',
    'view_subscription_stats',
    'view_activity',
})

Decision = namedtuple('Decision', 'allowed reason')


def authorize(caller, action, resource_tenant_id):
    """Decide whether caller may perform action on a tenant's resources"""
    if caller is None or not caller.is_authenticated:
        return Decision(False, 'unauthenticated')

    if resource_tenant_id and caller.tenant_id == resource_tenant_id:
        return Decision(True, 'owner')

    if caller.role == 'admin' and action in ADMIN_ACTIONS:
        return Decision(True, 'admin')

    return Decision(False, 'forbidden')


def enforce(decision):
    if decision.allowed:
        return
    if decision.reason == 'unauthenticated':
        raise Unauthorized('Unauthorized - Missing user ID')
    raise Forbidden('You do not have permission to access this resource')


def tenant_required(action='access'):
    """
    Decorator for routes that act on the caller's own documents
    Usage: @tenant_required('create')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            resource_tenant_id = (request.headers.get('x-user-id') or '').strip() or None
            if resource_tenant_id is None and current_user.is_authenticated:
                resource_tenant_id = current_user.tenant_id
            enforce(authorize(current_user, action, resource_tenant_id))
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(action):
    """
    Decorator for admin back-office routes; needs a verified bearer token
    Usage: @admin_required('list_accounts')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_token:
                raise Unauthorized('Unauthorized')

            decision = authorize(current_user, action, None)
            if not decision.allowed:
                current_app.logger.warning(
                    f"Admin action {action} denied for {current_user.tenant_id}"
                )
            enforce(decision)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
