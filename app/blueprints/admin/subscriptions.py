from flask import current_app, jsonify
from flask_login import current_user

from app.utils.api_helpers import read_json, validated
from app.utils.calculations import subscription_stats
from app.utils.gateway import get_gateway
from app.utils.permissions import admin_required
from . import admin_bp


@admin_bp.route('/subscriptions', methods=['GET'])
@admin_required('view_subscription_stats')
def get_subscription_stats():
    return jsonify(subscription_stats(get_gateway().list_all('users')))


@admin_bp.route('/subscriptions', methods=['PUT'])
@admin_required('edit_subscription')
def update_subscription():
    change = validated('subscriptionUpdate', read_json())
    uid = change['uid']
    subscription = {key: value for key, value in change['subscription'].items() if value is not None}

    get_gateway().update(uid, 'users', uid, {'subscription': subscription})
    current_app.logger.info(
        f"{current_user.tenant_id} set subscription of {uid} to "
        f"{subscription.get('planId')} ({subscription['status']})"
    )
    return jsonify({'success': True, 'message': 'Subscription updated'})
