# app/forms/invoice.py
from wtforms import FloatField, StringField, FieldList, FormField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional, URL

from .base import SchemaForm, at_least_one, greater_than_zero, iso_date, strip_value

TAX_TYPES = ('none', 'gst', 'vat')


class InvoiceItemForm(SchemaForm):
    description = StringField('Description *', filters=[strip_value], validators=[
        DataRequired(message='Description is required'),
        Length(max=200, message='Description is too long')
    ])
    quantity = FloatField('Quantity', default=1, validators=[
        Optional(),
        NumberRange(min=1, message='Quantity must be at least 1')
    ])
    rate = FloatField('Rate *', validators=[
        InputRequired(message='Rate is required'),
        NumberRange(min=0, message='Rate cannot be negative')
    ])


class InvoiceForm(SchemaForm):
    job_card_id = StringField('Job Card', name='jobCardId', validators=[
        DataRequired(message='Job card ID is required')
    ])
    customer_id = StringField('Customer', name='customerId', validators=[
        DataRequired(message='Customer ID is required')
    ])
    items = FieldList(FormField(InvoiceItemForm), validators=[
        at_least_one('At least one item is required')
    ])
    tax_type = StringField('Tax Type', name='taxType', default='none', validators=[
        Optional(),
        AnyOf(TAX_TYPES, message='Invalid tax type')
    ])
    tax_percent = FloatField('Tax %', name='taxPercent', default=0, validators=[
        Optional(),
        NumberRange(min=0, max=100, message='Tax percent must be between 0 and 100')
    ])
    amount_paid = FloatField('Amount Paid', name='amountPaid', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Amount paid cannot be negative')
    ])
    invoice_date = StringField('Invoice Date', name='invoiceDate', validators=[
        Optional(),
        iso_date()
    ])
    due_date = StringField('Due Date', name='dueDate', validators=[
        Optional(),
        iso_date()
    ])
    notes = StringField('Notes', default='', validators=[
        Optional(),
        Length(max=1000, message='Notes are too long')
    ])

    def to_record(self, only=None):
        record = super().to_record(only=only)
        for field in ('invoiceDate', 'dueDate'):
            if record.get(field):
                record[field] = record[field][:10]
        return record


class InvoicePaymentForm(SchemaForm):
    amount = FloatField('Amount *', validators=[
        InputRequired(message='Amount is required'),
        greater_than_zero('Amount must be greater than zero')
    ])


class InvoiceLinkForm(SchemaForm):
    pdf_url = StringField('PDF URL', name='pdfUrl', validators=[
        DataRequired(message='PDF URL is required'),
        URL(message='Invalid PDF URL')
    ])
