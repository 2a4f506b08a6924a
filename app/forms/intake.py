# app/forms/intake.py
from wtforms import StringField, FieldList, FormField
from wtforms.validators import AnyOf, DataRequired, Email, Length, Optional, Regexp, URL

from .base import SchemaForm, PHONE_PATTERN, none_if_blank, strip_value

DEVICE_TYPES = ('mobile', 'laptop', 'tablet', 'earbuds', 'smartwatch', 'others')


class CustomerForm(SchemaForm):
    name = StringField('Name *', filters=[strip_value], validators=[
        DataRequired(message='Name is required'),
        Length(max=100, message='Name is too long')
    ])
    phone = StringField('Phone *', filters=[strip_value], validators=[
        DataRequired(message='Phone number is required'),
        Length(min=10, message='Phone number must be at least 10 digits'),
        Length(max=15, message='Phone number is too long'),
        Regexp(PHONE_PATTERN, message='Invalid phone number format')
    ])
    alternate_phone = StringField('Alternate Phone', name='alternatePhone', default='',
                                  filters=[strip_value], validators=[
        Optional(),
        Length(max=15, message='Phone number is too long'),
        Regexp(PHONE_PATTERN, message='Invalid phone number format')
    ])
    address = StringField('Address', default='', validators=[
        Optional(),
        Length(max=500, message='Address is too long')
    ])
    email = StringField('Email', filters=[strip_value, none_if_blank], validators=[
        Optional(),
        Email(message='Invalid email address')
    ])


class ConditionImageForm(SchemaForm):
    url = StringField('Image URL', validators=[
        DataRequired(message='Image URL is required'),
        URL(message='Invalid image URL')
    ])
    public_id = StringField('Public ID', name='publicId', validators=[
        DataRequired(message='Image public ID is required')
    ])


class DeviceForm(SchemaForm):
    customer_id = StringField('Customer', name='customerId', validators=[
        DataRequired(message='Customer ID is required')
    ])
    device_type = StringField('Device Type *', name='deviceType', validators=[
        DataRequired(message='Device type is required'),
        AnyOf(DEVICE_TYPES, message='Invalid device type')
    ])
    brand = StringField('Brand *', filters=[strip_value], validators=[
        DataRequired(message='Brand is required'),
        Length(max=50, message='Brand is too long')
    ])
    model = StringField('Model *', filters=[strip_value], validators=[
        DataRequired(message='Model is required'),
        Length(max=100, message='Model is too long')
    ])
    imei = StringField('IMEI', default='', filters=[strip_value], validators=[
        Optional(),
        Length(max=20, message='IMEI is too long')
    ])
    condition = StringField('Condition', default='', validators=[
        Optional(),
        Length(max=200, message='Condition description is too long')
    ])
    accessories = StringField('Accessories', default='', validators=[
        Optional(),
        Length(max=500, message='Accessories description is too long')
    ])
    condition_images = FieldList(FormField(ConditionImageForm), name='conditionImages')
