from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

# Import all routes
from . import (
    users,
    stats,
    subscriptions,
    activity
)

__all__ = ['admin_bp']
