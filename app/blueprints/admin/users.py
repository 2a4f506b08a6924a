from flask import current_app, jsonify, request
from flask_login import current_user

from app.utils.api_helpers import field_error, read_json, validated
from app.utils.errors import Conflict
from app.utils.gateway import get_gateway, new_document_id
from app.utils.permissions import admin_required
from . import admin_bp


def account_summary(account):
    return {
        'uid': account.get('uid') or account['id'],
        'email': account.get('email', ''),
        'name': account.get('name', ''),
        'role': account.get('role', 'user'),
        'shopName': account.get('shopName', ''),
        'phone': account.get('phone', ''),
        'createdAt': account.get('createdAt'),
        'lastLogin': account.get('lastLogin'),
        'loginCount': account.get('loginCount', 0),
        'subscription': account.get('subscription'),
    }


@admin_bp.route('/users', methods=['GET'])
@admin_required('list_accounts')
def list_users():
    accounts = get_gateway().list_all('users')
    return jsonify({'users': [account_summary(account) for account in accounts]})


@admin_bp.route('/users', methods=['PUT'])
@admin_required('change_role')
def change_role():
    change = validated('roleUpdate', read_json())
    uid = change['uid']
    get_gateway().update(uid, 'users', uid, {'role': change['role']})
    current_app.logger.info(f"{current_user.tenant_id} set role of {uid} to {change['role']}")
    return jsonify({'success': True, 'message': 'User role updated'})


@admin_bp.route('/users', methods=['DELETE'])
@admin_required('delete_account')
def delete_user():
    uid = request.args.get('uid')
    if not uid:
        raise field_error('uid', 'Missing uid')

    get_gateway().delete(uid, 'users', uid)
    current_app.logger.info(f"{current_user.tenant_id} deleted account {uid}")
    return jsonify({'success': True, 'message': 'User deleted'})


@admin_bp.route('/users/create', methods=['POST'])
@admin_required('create_account')
def create_user():
    """Create an account record; sign-in credentials live with the identity provider"""
    account = validated('accountCreate', read_json())

    gateway = get_gateway()
    email = account['email'].lower()
    if any((existing.get('email') or '').lower() == email for existing in gateway.list_all('users')):
        raise Conflict('Email already in use')

    uid = new_document_id()
    account.update({'uid': uid, 'loginCount': 0})
    gateway.put(uid, 'users', uid, account)
    current_app.logger.info(f"{current_user.tenant_id} created account {uid} ({email})")
    return jsonify({
        'success': True,
        'user': {
            'uid': uid,
            'email': account['email'],
            'name': account['name'],
            'role': account['role'],
        }
    }), 201
