# app/forms/account.py
"""
Forms for user accounts, subscriptions, login activity and billing requests
"""
from wtforms import BooleanField, FloatField, StringField, FormField
from wtforms.validators import AnyOf, DataRequired, Email, InputRequired, Length, Optional

from app.utils.plans import SUBSCRIPTION_PLANS, SUBSCRIPTION_STATUSES
from .base import SchemaForm, greater_than_zero, iso_date, none_if_blank, strip_value

ROLES = ('user', 'admin')
ACTIVITY_ACTIONS = ('login', 'logout')


class ProfileForm(SchemaForm):
    name = StringField('Full Name *', filters=[strip_value], validators=[
        DataRequired(message='Name is required'),
        Length(max=100, message='Name is too long')
    ])
    email = StringField('Email *', filters=[strip_value], validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email address')
    ])
    shop_name = StringField('Shop Name', name='shopName', default='', filters=[strip_value], validators=[
        Optional(),
        Length(max=100, message='Shop name is too long')
    ])
    phone = StringField('Phone', default='', filters=[strip_value], validators=[
        Optional(),
        Length(min=10, max=15, message='Phone number must be between 10 and 15 digits')
    ])


class AccountCreateForm(ProfileForm):
    role = StringField('System Role', default='user', validators=[
        Optional(),
        AnyOf(ROLES, message='Invalid role')
    ])


class RoleUpdateForm(SchemaForm):
    uid = StringField('User', validators=[DataRequired(message='User ID is required')])
    role = StringField('Role *', validators=[
        DataRequired(message='Role is required'),
        AnyOf(ROLES, message='Invalid role')
    ])


class SubscriptionForm(SchemaForm):
    plan_id = StringField('Plan', name='planId', filters=[none_if_blank], validators=[
        Optional(),
        AnyOf(tuple(SUBSCRIPTION_PLANS), message='Invalid plan')
    ])
    status = StringField('Status *', validators=[
        DataRequired(message='Subscription status is required'),
        AnyOf(SUBSCRIPTION_STATUSES, message='Invalid subscription status')
    ])
    start_date = StringField('Start Date', name='startDate', filters=[none_if_blank], validators=[
        Optional(),
        iso_date()
    ])
    end_date = StringField('End Date', name='endDate', filters=[none_if_blank], validators=[
        Optional(),
        iso_date()
    ])
    auto_renew = BooleanField('Auto Renew', name='autoRenew')
    payment_id = StringField('Payment', name='paymentId', filters=[none_if_blank])

    @classmethod
    def prepare(cls, payload):
        # Older clients send the plan as "plan"
        if 'planId' not in payload and 'plan' in payload:
            payload['planId'] = payload.pop('plan')
        return payload


class SubscriptionUpdateForm(SchemaForm):
    uid = StringField('User', validators=[DataRequired(message='Missing uid or subscription data')])
    subscription = FormField(SubscriptionForm)

    @classmethod
    def prepare(cls, payload):
        subscription = payload.get('subscription')
        if isinstance(subscription, dict):
            payload['subscription'] = SubscriptionForm.prepare(dict(subscription))
        return payload


class ActivityForm(SchemaForm):
    action = StringField('Action', default='login', validators=[
        Optional(),
        AnyOf(ACTIVITY_ACTIONS, message='Invalid action')
    ])
    user_name = StringField('User Name', name='userName', default='Unknown', validators=[
        Optional(),
        Length(max=100)
    ])
    user_email = StringField('User Email', name='userEmail', validators=[
        DataRequired(message='User email is required'),
        Email(message='Invalid email address')
    ])
    ip_address = StringField('IP Address', name='ipAddress', filters=[none_if_blank], validators=[
        Optional(),
        Length(max=45)
    ])
    user_agent = StringField('User Agent', name='userAgent', filters=[none_if_blank], validators=[
        Optional(),
        Length(max=500)
    ])


class PaymentOrderForm(SchemaForm):
    amount = FloatField('Amount *', validators=[
        InputRequired(message='Amount is required'),
        greater_than_zero('Amount must be greater than zero')
    ])
    plan_id = StringField('Plan', name='planId', filters=[none_if_blank], validators=[
        Optional(),
        AnyOf(tuple(SUBSCRIPTION_PLANS), message='Invalid plan')
    ])


class PaymentVerifyForm(SchemaForm):
    razorpay_order_id = StringField('Order', validators=[DataRequired(message='Order ID is required')])
    razorpay_payment_id = StringField('Payment', validators=[DataRequired(message='Payment ID is required')])
    razorpay_signature = StringField('Signature', validators=[DataRequired(message='Signature is required')])
    # Contact details used only when the tenant has no stored account
    email = StringField('Email', filters=[none_if_blank], validators=[
        Optional(),
        Email(message='Invalid email address')
    ])
    user_name = StringField('User Name', name='userName', filters=[none_if_blank])
