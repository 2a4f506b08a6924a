from flask import current_app, jsonify, request

from app.utils.api_helpers import current_tenant, read_json, validated
from app.utils.errors import NotFound
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from app.utils.plans import SUBSCRIPTION_PLANS, get_features, get_plan, is_subscription_active
from app.utils.timezone_helper import iso_timestamp, utc_now
from . import shop_bp


def load_account(uid):
    try:
        return get_gateway().get(uid, 'users', uid)
    except NotFound:
        return None


@shop_bp.route('/profile', methods=['GET'])
@tenant_required('view')
def get_profile():
    return jsonify(get_gateway().get(current_tenant(), 'users', current_tenant()))


@shop_bp.route('/profile', methods=['PUT'])
@tenant_required('edit')
def save_profile():
    """Create or update the caller's account; role and subscription stay server-owned"""
    profile = validated('profile', read_json())
    account = load_account(current_tenant()) or {'role': 'user', 'loginCount': 0}

    account.update(profile)
    account['uid'] = current_tenant()
    account = get_gateway().put(current_tenant(), 'users', current_tenant(), account)
    return jsonify({'success': True, 'user': account})


@shop_bp.route('/subscription/plans', methods=['GET'])
def list_plans():
    return jsonify(list(SUBSCRIPTION_PLANS.values()))


@shop_bp.route('/subscription', methods=['GET'])
@tenant_required('view')
def get_subscription():
    account = load_account(current_tenant()) or {}
    subscription = account.get('subscription')
    plan = get_plan((subscription or {}).get('planId'))
    return jsonify({
        'subscription': subscription,
        'plan': plan,
        'isActive': is_subscription_active(subscription),
        'features': get_features(subscription),
    })


@shop_bp.route('/activity', methods=['POST'])
@tenant_required('create')
def log_activity():
    activity = validated('loginActivities', read_json())
    now = iso_timestamp(utc_now())
    activity.update({
        'userId': current_tenant(),
        'timestamp': now,
        'ipAddress': activity.get('ipAddress') or request.remote_addr,
        'userAgent': activity.get('userAgent') or request.headers.get('User-Agent'),
    })

    gateway = get_gateway()
    activity_id = gateway.create(current_tenant(), 'loginActivities', activity)

    account = load_account(current_tenant())
    if account is not None and activity['action'] == 'login':
        gateway.update(current_tenant(), 'users', current_tenant(), {
            'lastLogin': now,
            'loginCount': (account.get('loginCount') or 0) + 1,
        })
    current_app.logger.info(f"{activity['action']} recorded for {current_tenant()}")
    return jsonify({'success': True, 'activityId': activity_id}), 201
