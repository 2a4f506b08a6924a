# app/forms/base.py
"""
Shared pieces of the entity schemas.

Request bodies arrive as JSON. They are flattened into the ``items-0-rate``
form-data layout WTForms reads, so nested sub-forms and lists validate the
same way posted HTML forms do.
"""
from collections import namedtuple
from datetime import datetime
import re

from werkzeug.datastructures import MultiDict
from wtforms import Form, FieldList, FormField
from wtforms.validators import ValidationError

# Fields the server owns; whatever the client sends for them is dropped
SERVER_FIELDS = ('_id', 'id', 'createdAt', 'updatedAt')

PHONE_PATTERN = r'^[\d+\-\s]+$'


class FieldError(namedtuple('FieldError', 'field message')):
    __slots__ = ()

    def to_dict(self):
        return {'field': self.field, 'message': self.message}


class ValidationResult(namedtuple('ValidationResult', 'record errors')):
    __slots__ = ()

    @property
    def is_valid(self):
        return not self.errors


def flatten_payload(payload, prefix=''):
    """Turn a JSON object into a MultiDict of form keys"""
    pairs = []
    for key, value in payload.items():
        pairs.extend(_flatten_value(f'{prefix}{key}', value))
    return MultiDict(pairs)


def _flatten_value(name, value):
    if value is None:
        return []
    if isinstance(value, dict):
        return list(flatten_payload(value, prefix=f'{name}-').items(multi=True))
    if isinstance(value, (list, tuple)):
        pairs = []
        for index, item in enumerate(value):
            pairs.extend(_flatten_value(f'{name}-{index}', item))
        return pairs
    if isinstance(value, bool):
        return [(name, 'true' if value else 'false')]
    return [(name, str(value))]


def collect_errors(form, prefix=''):
    """Walk a validated form and return FieldErrors with dotted paths"""
    errors = []
    for field in form:
        path = f'{prefix}{field.short_name}'
        if isinstance(field, FormField):
            errors.extend(collect_errors(field.form, f'{path}.'))
        elif isinstance(field, FieldList):
            for index, entry in enumerate(field.entries):
                entry_path = f'{path}.{index}'
                if isinstance(entry, FormField):
                    errors.extend(collect_errors(entry.form, f'{entry_path}.'))
                else:
                    errors.extend(FieldError(entry_path, message) for message in entry.errors)
            # List-level validators put plain strings next to the entry errors
            errors.extend(
                FieldError(path, message) for message in field.errors if isinstance(message, str)
            )
        else:
            errors.extend(FieldError(path, message) for message in field.errors)
    for message in getattr(form, 'form_errors', None) or []:
        errors.append(FieldError(prefix.rstrip('.') or '__root__', message))
    return errors


def field_value(field):
    if isinstance(field, FormField):
        return field.form.to_record()
    if isinstance(field, FieldList):
        return [field_value(entry) for entry in field.entries]
    return field.data


class SchemaForm(Form):
    """Base form for every entity kind"""

    @classmethod
    def prepare(cls, payload):
        """Hook to reshape the raw payload before it is flattened"""
        return payload

    @classmethod
    def check(cls, payload, partial=False):
        if not isinstance(payload, dict):
            return ValidationResult(None, [FieldError('__root__', 'Expected a JSON object')])

        payload = {key: value for key, value in payload.items() if key not in SERVER_FIELDS}
        payload = cls.prepare(payload)

        form = cls(formdata=flatten_payload(payload))
        form.validate()

        supplied = set(payload) if partial else None
        errors = [
            error for error in collect_errors(form)
            if supplied is None or error.field.split('.')[0] in supplied
        ]
        if errors:
            return ValidationResult(None, errors)
        return ValidationResult(form.to_record(only=supplied), [])

    def to_record(self, only=None):
        return {
            field.short_name: field_value(field)
            for field in self
            if only is None or field.short_name in only
        }


# Filters

def strip_value(value):
    return value.strip() if isinstance(value, str) else value


def none_if_blank(value):
    return value or None


# Validators

def iso_date(message='Invalid date, expected YYYY-MM-DD'):
    """YYYY-MM-DD, optionally followed by a time part ('2025-01-15T10:00:00Z')"""
    def _iso_date(form, field):
        if not field.data:
            return
        value = str(field.data)
        try:
            datetime.strptime(value[:10], '%Y-%m-%d')
        except ValueError:
            raise ValidationError(message)
        if len(value) > 10 and value[10] not in 'T ':
            raise ValidationError(message)
    return _iso_date


def month_key(message='Invalid month, expected YYYY-MM'):
    pattern = re.compile(r'^\d{4}-(0[1-9]|1[0-2])$')

    def _month_key(form, field):
        if not field.data or not pattern.match(field.data):
            raise ValidationError(message)
    return _month_key


def at_least_one(message='At least one entry is required'):
    def _at_least_one(form, field):
        if not field.entries:
            raise ValidationError(message)
    return _at_least_one


def non_negative_number(message='Value cannot be negative'):
    """For loosely typed amounts: only reject values that parse and are negative"""
    def _non_negative(form, field):
        if field.data in (None, ''):
            return
        try:
            amount = float(field.data)
        except (TypeError, ValueError):
            return
        if amount < 0:
            raise ValidationError(message)
    return _non_negative


def greater_than_zero(message='Value must be greater than zero'):
    def _positive(form, field):
        if field.data is not None and field.data <= 0:
            raise ValidationError(message)
    return _positive
