# app/forms/company.py
from wtforms import StringField, FieldList
from wtforms.validators import DataRequired, Email, Length, Optional, URL, ValidationError

from app.utils.terms import is_known_term
from .base import SchemaForm, none_if_blank, strip_value


class CompanyForm(SchemaForm):
    company_name = StringField('Company Name *', name='companyName', filters=[strip_value], validators=[
        DataRequired(message='Company name is required'),
        Length(max=100, message='Company name is too long')
    ])
    tagline = StringField('Tagline', default='', validators=[
        Optional(),
        Length(max=150, message='Tagline is too long')
    ])
    phone = StringField('Phone *', filters=[strip_value], validators=[
        DataRequired(message='Phone number is required'),
        Length(min=10, max=15, message='Invalid phone number')
    ])
    alternate_phone = StringField('Alternate Phone', name='alternatePhone', default='', validators=[
        Optional(),
        Length(max=15, message='Invalid phone number')
    ])
    email = StringField('Email', filters=[strip_value, none_if_blank], validators=[
        Optional(),
        Email(message='Invalid email address')
    ])
    address = StringField('Address', default='', validators=[
        Optional(),
        Length(max=250, message='Address is too long')
    ])
    city = StringField('City', default='', validators=[
        Optional(),
        Length(max=50, message='City name is too long')
    ])
    state = StringField('State', default='', validators=[
        Optional(),
        Length(max=50, message='State name is too long')
    ])
    pincode = StringField('Pincode', default='', validators=[
        Optional(),
        Length(max=10, message='Invalid pincode')
    ])
    gst_number = StringField('GST Number', name='gstNumber', default='', validators=[
        Optional(),
        Length(max=20, message='Invalid GST number')
    ])
    logo_url = StringField('Logo URL', name='logoUrl', filters=[none_if_blank], validators=[
        Optional(),
        URL(message='Invalid logo URL')
    ])
    logo_public_id = StringField('Logo Public ID', name='logoPublicId', filters=[none_if_blank])
    website = StringField('Website', filters=[none_if_blank], validators=[
        Optional(),
        URL(message='Invalid website URL')
    ])
    selected_terms = FieldList(StringField('Term'), name='selectedTerms')
    custom_terms = FieldList(StringField('Custom Term', filters=[strip_value], validators=[
        Length(max=200, message='Custom term is too long')
    ]), name='customTerms')
    terms_and_conditions = StringField('Terms and Conditions', name='termsAndConditions',
                                       default='', validators=[
        Optional(),
        Length(max=1000, message='Terms too long')
    ])

    def validate_selected_terms(self, field):
        unknown = [entry.data for entry in field.entries if not is_known_term(entry.data)]
        if unknown:
            raise ValidationError(f"Unknown terms: {', '.join(str(term) for term in unknown)}")
