# app/forms/inventory.py
from wtforms import FloatField, IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from .base import SchemaForm, strip_value


class InventoryItemForm(SchemaForm):
    part_name = StringField('Part Name *', name='partName', filters=[strip_value], validators=[
        DataRequired(message='Part name is required'),
        Length(max=100, message='Part name is too long')
    ])
    category = StringField('Category *', filters=[strip_value], validators=[
        DataRequired(message='Category is required'),
        Length(max=50, message='Category is too long')
    ])
    quantity = IntegerField('Quantity *', validators=[
        InputRequired(message='Quantity is required'),
        NumberRange(min=0, message='Quantity cannot be negative')
    ])
    buying_price = FloatField('Buying Price *', name='buyingPrice', validators=[
        InputRequired(message='Buying price is required'),
        NumberRange(min=0, message='Buying price cannot be negative')
    ])
    selling_price = FloatField('Selling Price *', name='sellingPrice', validators=[
        InputRequired(message='Selling price is required'),
        NumberRange(min=0, message='Selling price cannot be negative')
    ])
    gst = FloatField('GST %', default=18, validators=[
        Optional(),
        NumberRange(min=0, max=100, message='GST must be between 0-100%%')
    ])
    supplier_name = StringField('Supplier Name', name='supplierName', default='', validators=[
        Optional(),
        Length(max=100, message='Supplier name is too long')
    ])
    supplier_phone = StringField('Supplier Phone', name='supplierPhone', default='', validators=[
        Optional(),
        Length(max=15, message='Invalid phone number')
    ])
    warranty = StringField('Warranty', default='', validators=[
        Optional(),
        Length(max=50, message='Warranty is too long')
    ])


class StockAdjustmentForm(SchemaForm):
    delta = IntegerField('Quantity Change *', validators=[
        InputRequired(message='Quantity change is required')
    ])
    reason = StringField('Reason', default='', validators=[
        Optional(),
        Length(max=200, message='Reason is too long')
    ])
