# app/forms/job_card.py
from wtforms import StringField, FieldList
from wtforms.validators import AnyOf, DataRequired, Length, Optional

from app.utils.calculations import coerce_amount
from .base import SchemaForm, iso_date, non_negative_number, strip_value

# Work moves left to right; a card never goes back to an earlier status
JOB_STATUSES = ('pending', 'in-progress', 'completed', 'paid')

COST_FIELDS = ('laborCost', 'partsCost', 'serviceCost')


def status_rank(status):
    return JOB_STATUSES.index(status) if status in JOB_STATUSES else -1


def is_forward_transition(current, new):
    """Same status or any later one; unknown stored statuses may move anywhere"""
    if current not in JOB_STATUSES:
        return True
    return status_rank(new) >= status_rank(current)


class JobCardForm(SchemaForm):
    customer_id = StringField('Customer', name='customerId', validators=[
        DataRequired(message='Customer ID is required')
    ])
    device_id = StringField('Device', name='deviceId', validators=[
        DataRequired(message='Device ID is required')
    ])
    problem_description = StringField('Problem Description *', name='problemDescription',
                                      filters=[strip_value], validators=[
        DataRequired(message='Problem description is required'),
        Length(min=10, message='Problem description must be at least 10 characters'),
        Length(max=1000, message='Problem description is too long')
    ])
    technician_diagnosis = StringField('Technician Diagnosis', name='technicianDiagnosis',
                                       default='', validators=[
        Optional(),
        Length(max=1000, message='Diagnosis is too long')
    ])
    required_parts = FieldList(StringField('Part', filters=[strip_value], validators=[
        Length(max=100, message='Part name is too long')
    ]), name='requiredParts')
    labor_cost = StringField('Labor Cost', name='laborCost', validators=[
        non_negative_number('Labor cost cannot be negative')
    ])
    parts_cost = StringField('Parts Cost', name='partsCost', validators=[
        non_negative_number('Parts cost cannot be negative')
    ])
    service_cost = StringField('Service Cost', name='serviceCost', validators=[
        non_negative_number('Service cost cannot be negative')
    ])
    advance_received = StringField('Advance Received', name='advanceReceived', validators=[
        non_negative_number('Advance cannot be negative')
    ])
    delivery_date = StringField('Delivery Date *', name='deliveryDate', validators=[
        DataRequired(message='Delivery date is required'),
        iso_date()
    ])
    status = StringField('Status', default='pending', validators=[
        Optional(),
        AnyOf(JOB_STATUSES, message='Invalid status')
    ])

    @classmethod
    def prepare(cls, payload):
        # Costs may come flat or nested the way they are stored
        estimate = payload.get('costEstimate')
        if isinstance(estimate, dict):
            for field in COST_FIELDS:
                if field not in payload and field in estimate:
                    payload[field] = estimate[field]

        parts = payload.get('requiredParts')
        if isinstance(parts, str):
            payload['requiredParts'] = [part.strip() for part in parts.split(',') if part.strip()]
        return payload

    def to_record(self, only=None):
        record = super().to_record(only=only)
        for field in COST_FIELDS + ('advanceReceived',):
            if field in record:
                record[field] = coerce_amount(record[field])
        if 'deliveryDate' in record and record['deliveryDate']:
            record['deliveryDate'] = record['deliveryDate'][:10]
        return record
