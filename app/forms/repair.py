# app/forms/repair.py
from wtforms import FloatField, StringField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange, Optional, Regexp

from .base import SchemaForm, PHONE_PATTERN, strip_value
from .job_card import JOB_STATUSES

REPAIR_DEVICE_TYPES = ('mobile', 'laptop', 'tablet', 'other')


class RepairTicketForm(SchemaForm):
    customer_name = StringField('Customer Name *', name='customerName', filters=[strip_value], validators=[
        DataRequired(message='Customer name is required'),
        Length(max=100, message='Customer name is too long')
    ])
    phone_number = StringField('Phone Number *', name='phoneNumber', filters=[strip_value], validators=[
        DataRequired(message='Phone number is required'),
        Length(min=10, message='Phone number must be at least 10 digits'),
        Length(max=15, message='Phone number is too long'),
        Regexp(PHONE_PATTERN, message='Invalid phone number format')
    ])
    alternate_phone = StringField('Alternate Phone', name='alternatePhone', default='',
                                  filters=[strip_value], validators=[
        Optional(),
        Length(max=15, message='Phone number is too long')
    ])
    device_type = StringField('Device Type *', name='deviceType', validators=[
        DataRequired(message='Device type is required'),
        AnyOf(REPAIR_DEVICE_TYPES, message='Invalid device type')
    ])
    brand = StringField('Brand *', filters=[strip_value], validators=[
        DataRequired(message='Brand is required'),
        Length(max=50, message='Brand is too long')
    ])
    model = StringField('Model *', filters=[strip_value], validators=[
        DataRequired(message='Model is required'),
        Length(max=100, message='Model is too long')
    ])
    serial_number = StringField('Serial Number', name='serialNumber', default='', validators=[
        Optional(),
        Length(max=50, message='Serial number is too long')
    ])
    condition_notes = StringField('Condition Notes', name='conditionNotes', default='', validators=[
        Optional(),
        Length(max=500, message='Condition notes are too long')
    ])
    repair_reason = StringField('Repair Reason *', name='repairReason', filters=[strip_value], validators=[
        DataRequired(message='Repair reason is required'),
        Length(max=200, message='Repair reason is too long')
    ])
    problem_description = StringField('Problem Description *', name='problemDescription',
                                      filters=[strip_value], validators=[
        DataRequired(message='Problem description is required'),
        Length(min=10, message='Problem description must be at least 10 characters'),
        Length(max=1000, message='Problem description is too long')
    ])
    estimated_cost = FloatField('Estimated Cost *', name='estimatedCost', validators=[
        InputRequired(message='Estimated cost is required'),
        NumberRange(min=0, message='Estimated cost cannot be negative')
    ])
    status = StringField('Status', default='pending', validators=[
        Optional(),
        AnyOf(JOB_STATUSES, message='Invalid status')
    ])
