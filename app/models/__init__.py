# app/models/__init__.py

from .user import Caller
from .document import Document

# Export all models
__all__ = [
    'Caller',
    'Document',
]
