# app/forms/expense.py
from wtforms import FloatField, StringField, FieldList
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional, URL

from app.utils.calculations import EXPENSE_SOURCES
from .base import SchemaForm, greater_than_zero, iso_date, month_key, strip_value

EXPENSE_CATEGORIES = (
    'Rent', 'Salary', 'Inventory', 'Electricity', 'Tea/Snacks',
    'Maintenance', 'Equipment', 'Marketing', 'Transport', 'Other',
)

PAYMENT_METHODS = ('cash', 'upi', 'card', 'bank_transfer')


class ExpenseForm(SchemaForm):
    amount = FloatField('Amount *', validators=[
        InputRequired(message='Amount is required'),
        greater_than_zero('Amount must be greater than zero')
    ])
    category = StringField('Category *', validators=[
        DataRequired(message='Please select a category'),
        AnyOf(EXPENSE_CATEGORIES, message='Invalid category')
    ])
    description = StringField('Description *', filters=[strip_value], validators=[
        DataRequired(message='Please add a description'),
        Length(max=200, message='Description is too long')
    ])
    source = StringField('Source *', validators=[
        DataRequired(message='Please select where the money came from'),
        AnyOf(EXPENSE_SOURCES, message='Invalid source')
    ])
    payment_method = StringField('Payment Method', name='paymentMethod', default='cash', validators=[
        Optional(),
        AnyOf(PAYMENT_METHODS, message='Invalid payment method')
    ])
    date = StringField('Date *', validators=[
        DataRequired(message='Please select a date'),
        iso_date()
    ])
    attachments = FieldList(StringField('Attachment', validators=[URL(message='Invalid attachment URL')]))

    def to_record(self, only=None):
        record = super().to_record(only=only)
        if record.get('date'):
            record['date'] = record['date'][:10]
        return record


class MonthlyBudgetForm(SchemaForm):
    month = StringField('Month *', validators=[month_key()])
    shop_drawer_budget = FloatField('Shop Drawer Budget', name='shopDrawerBudget', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Budget cannot be negative')
    ])
    personal_budget = FloatField('Personal Budget', name='personalBudget', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Budget cannot be negative')
    ])
    bank_budget = FloatField('Bank Budget', name='bankBudget', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Budget cannot be negative')
    ])

    def to_record(self, only=None):
        record = super().to_record(only=only)
        for field in ('shopDrawerBudget', 'personalBudget', 'bankBudget'):
            if field in record:
                record[field] = record[field] or 0.0
        return record
