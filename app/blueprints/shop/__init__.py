from flask import Blueprint

shop_bp = Blueprint('shop', __name__)

# Import all routes
from . import (
    customers,
    devices,
    job_cards,
    invoices,
    repairs,
    inventory,
    company,
    expenses,
    account
)

__all__ = ['shop_bp']
