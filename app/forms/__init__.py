# app/forms/__init__.py
"""
Entity schemas, looked up by kind.

    result = validate('customers', payload)
    if result.errors:
        ...
"""
from .base import FieldError, ValidationResult, SchemaForm
from .intake import CustomerForm, DeviceForm
from .job_card import JobCardForm
from .invoice import InvoiceForm, InvoiceLinkForm, InvoicePaymentForm
from .inventory import InventoryItemForm, StockAdjustmentForm
from .repair import RepairTicketForm
from .company import CompanyForm
from .expense import ExpenseForm, MonthlyBudgetForm
from .account import (
    AccountCreateForm, ActivityForm, PaymentOrderForm, PaymentVerifyForm,
    ProfileForm, RoleUpdateForm, SubscriptionUpdateForm
)

SCHEMAS = {
    'customers': CustomerForm,
    'devices': DeviceForm,
    'jobCards': JobCardForm,
    'invoices': InvoiceForm,
    'invoicePayments': InvoicePaymentForm,
    'invoiceLinks': InvoiceLinkForm,
    'inventory': InventoryItemForm,
    'stockAdjustments': StockAdjustmentForm,
    'repairs': RepairTicketForm,
    'company': CompanyForm,
    'expenses': ExpenseForm,
    'budgets': MonthlyBudgetForm,
    'profile': ProfileForm,
    'accountCreate': AccountCreateForm,
    'roleUpdate': RoleUpdateForm,
    'subscriptionUpdate': SubscriptionUpdateForm,
    'loginActivities': ActivityForm,
    'paymentOrder': PaymentOrderForm,
    'paymentVerify': PaymentVerifyForm,
}


def validate(kind, payload, partial=False):
    """Validate a raw payload for an entity kind.

    Returns a ValidationResult holding either the normalized record or the
    list of field errors. Only an unknown kind raises.
    """
    try:
        form_class = SCHEMAS[kind]
    except KeyError:
        raise LookupError(f'No schema registered for {kind!r}')
    return form_class.check(payload, partial=partial)


__all__ = ['validate', 'SCHEMAS', 'FieldError', 'ValidationResult', 'SchemaForm']
