# app/utils/payments.py
"""
Razorpay adapter: order creation and payment signature checks.

Capturing the payment happens on Razorpay's side; this app only creates the
order and checks the signature the checkout hands back.
"""
import hashlib
import hmac
import time
from decimal import Decimal, ROUND_HALF_UP

import razorpay
from razorpay.errors import BadRequestError, GatewayError, ServerError
import requests
from flask import current_app

from .errors import UpstreamFailure


def sign_payment(order_id, payment_id, secret):
    """Hex HMAC-SHA256 of 'order_id|payment_id'"""
    body = f'{order_id}|{payment_id}'.encode('utf-8')
    return hmac.new(secret.encode('utf-8'), body, hashlib.sha256).hexdigest()


def verify_payment_signature(order_id, payment_id, signature, secret):
    if not secret or not isinstance(signature, str):
        return False
    expected = sign_payment(order_id, payment_id, secret)
    return hmac.compare_digest(expected, signature)


def to_minor_units(amount):
    """Rupees to paise"""
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class PaymentGateway:
    def __init__(self, key_id, key_secret, currency='INR'):
        self.key_id = key_id
        self.key_secret = key_secret
        self.currency = currency
        self.client = razorpay.Client(auth=(key_id, key_secret))

    def create_order(self, amount, plan_id=None):
        options = {
            'amount': to_minor_units(amount),
            'currency': self.currency,
            'receipt': f'receipt_{int(time.time() * 1000)}',
            'notes': {'planId': plan_id},
        }
        try:
            return self.client.order.create(data=options)
        except (BadRequestError, ServerError, GatewayError, requests.RequestException) as e:
            raise UpstreamFailure('Failed to create Razorpay order', provider='razorpay', detail=str(e))

    def verify(self, order_id, payment_id, signature):
        return verify_payment_signature(order_id, payment_id, signature, self.key_secret)


def init_razorpay(app):
    key_id = app.config.get('RAZORPAY_KEY_ID')
    key_secret = app.config.get('RAZORPAY_KEY_SECRET')
    if key_id and key_secret:
        app.extensions['razorpay'] = PaymentGateway(
            key_id, key_secret, currency=app.config.get('DEFAULT_CURRENCY', 'INR')
        )
    else:
        app.logger.warning("Razorpay keys missing; payment endpoints are disabled")
        app.extensions['razorpay'] = None


def get_payment_gateway():
    gateway = current_app.extensions.get('razorpay')
    if gateway is None:
        raise UpstreamFailure('Razorpay configuration error', provider='razorpay',
                              detail='RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET not set')
    return gateway
