# app/utils/api_helpers.py
"""
Small helpers shared by the JSON route handlers
"""
from flask import request
from flask_login import current_user

from app.forms import FieldError, validate
from .errors import ValidationError


def read_json():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError([FieldError('__root__', 'Request body must be a JSON object')])
    return payload


def validated(kind, payload, partial=False):
    """Validated record for kind, or raise ValidationError with the field errors"""
    result = validate(kind, payload, partial=partial)
    if result.errors:
        raise ValidationError(result.errors)
    return result.record


def field_error(field, message):
    return ValidationError([FieldError(field, message)])


def current_tenant():
    return current_user.tenant_id


def query_limit(default=None, maximum=500):
    value = request.args.get('limit', type=int)
    if value is None or value <= 0:
        return default
    return min(value, maximum)
