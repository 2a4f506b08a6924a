# app/utils/errors.py
"""
API error types and their HTTP mapping
"""


class ApiError(Exception):
    """Base class for errors that are answered with a JSON body"""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, **payload):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.payload = payload

    def to_dict(self):
        body = {'error': self.message}
        body.update(self.payload)
        return body


class Unauthorized(ApiError):
    status_code = 401
    message = 'Unauthorized'


class Forbidden(ApiError):
    status_code = 403
    message = 'Forbidden'


class ValidationError(ApiError):
    status_code = 400
    message = 'Validation failed'

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = list(errors)

    def to_dict(self):
        body = super().to_dict()
        body['errors'] = [error.to_dict() for error in self.errors]
        return body


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class Conflict(ApiError):
    status_code = 409
    message = 'Conflict'


class UpstreamFailure(ApiError):
    """A payment, email or storage provider failed; details stay in the log"""
    status_code = 500
    message = 'Upstream service failed'

    def __init__(self, message=None, provider=None, detail=None):
        super().__init__(message)
        self.provider = provider
        self.detail = detail


class MissingTenant(ValueError):
    """Raised when a tenant-scoped operation is attempted without a tenant id"""
