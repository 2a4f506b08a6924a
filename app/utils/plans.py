# app/utils/plans.py
"""
Subscription plans and the features each one unlocks
"""
from datetime import timedelta

from .timezone_helper import parse_timestamp, utc_now, iso_timestamp

SUBSCRIPTION_PLANS = {
    'basic': {
        'id': 'basic',
        'name': 'Basic',
        'price': 400,
        'features': {
            'expenseTracker': False,
            'maxThemes': 5,
            'maxJobImages': 0,
        },
    },
    'pro': {
        'id': 'pro',
        'name': 'Pro',
        'price': 700,
        'features': {
            'expenseTracker': True,
            'maxThemes': 10,
            'maxJobImages': 2,
        },
    },
    'elite': {
        'id': 'elite',
        'name': 'Elite',
        'price': 999,
        'features': {
            'expenseTracker': True,
            'maxThemes': 20,
            'maxJobImages': 2,
        },
    },
}

PLAN_PRICES = {plan_id: plan['price'] for plan_id, plan in SUBSCRIPTION_PLANS.items()}

SUBSCRIPTION_STATUSES = ('active', 'trial', 'expired', 'cancelled')


def get_plan(plan_id):
    return SUBSCRIPTION_PLANS.get(plan_id)


def is_subscription_active(subscription, now=None):
    """Active or trial, and not past its end date"""
    if not subscription:
        return False
    if subscription.get('status') not in ('active', 'trial'):
        return False
    end = parse_timestamp(subscription.get('endDate'))
    if end is None:
        return True
    now = parse_timestamp(now or utc_now())
    return end >= now


def get_features(subscription):
    """Feature limits for a subscription; nothing is unlocked without one"""
    plan = get_plan((subscription or {}).get('planId'))
    if plan is None or not is_subscription_active(subscription):
        return {'expenseTracker': False, 'maxThemes': 0, 'maxJobImages': 0}
    return dict(plan['features'])


def new_subscription(plan_id, period_days, payment_id=None, start=None):
    """An active subscription starting now and running for period_days"""
    start = start or utc_now()
    subscription = {
        'planId': plan_id,
        'status': 'active',
        'startDate': iso_timestamp(start),
        'endDate': iso_timestamp(start + timedelta(days=period_days)),
        'autoRenew': False,
    }
    if payment_id:
        subscription['paymentId'] = payment_id
    return subscription
