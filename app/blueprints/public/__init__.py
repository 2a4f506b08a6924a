from flask import Blueprint

public_bp = Blueprint('public', __name__)

from . import invoice_links

__all__ = ['public_bp']
