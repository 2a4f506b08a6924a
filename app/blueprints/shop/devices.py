from flask import jsonify, request

from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from . import shop_bp


def ensure_customer(customer_id):
    """A device must belong to a customer of the same shop"""
    if not get_gateway().exists(current_tenant(), 'customers', customer_id):
        raise field_error('customerId', 'Customer not found')


@shop_bp.route('/devices', methods=['POST'])
@tenant_required('create')
def create_device():
    record = validated('devices', read_json())
    ensure_customer(record['customerId'])

    gateway = get_gateway()
    device_id = gateway.create(current_tenant(), 'devices', record)
    return jsonify({
        'success': True,
        'deviceId': device_id,
        'device': gateway.get(current_tenant(), 'devices', device_id)
    }), 201


@shop_bp.route('/devices', methods=['GET'])
@tenant_required('view')
def list_devices():
    devices = get_gateway().list(current_tenant(), 'devices')
    customer_id = request.args.get('customerId')
    if customer_id:
        devices = [device for device in devices if device.get('customerId') == customer_id]
    return jsonify(devices)


@shop_bp.route('/devices/<device_id>', methods=['GET'])
@tenant_required('view')
def get_device(device_id):
    return jsonify(get_gateway().get(current_tenant(), 'devices', device_id))


@shop_bp.route('/devices/<device_id>', methods=['PUT'])
@tenant_required('edit')
def update_device(device_id):
    changes = validated('devices', read_json(), partial=True)
    if 'customerId' in changes:
        ensure_customer(changes['customerId'])
    device = get_gateway().update(current_tenant(), 'devices', device_id, changes)
    return jsonify({'success': True, 'device': device})


@shop_bp.route('/devices/<device_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_device(device_id):
    get_gateway().delete(current_tenant(), 'devices', device_id)
    return jsonify({'success': True})
