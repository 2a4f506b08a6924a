from flask import jsonify, request

from app.forms.job_card import is_forward_transition
from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from . import shop_bp


@shop_bp.route('/repairs', methods=['POST'])
@tenant_required('create')
def create_repair():
    record = validated('repairs', read_json())
    record['status'] = 'pending'

    gateway = get_gateway()
    repair_id = gateway.create(current_tenant(), 'repairs', record)
    return jsonify({
        'success': True,
        'repairId': repair_id,
        'repair': gateway.get(current_tenant(), 'repairs', repair_id)
    }), 201


@shop_bp.route('/repairs', methods=['GET'])
@tenant_required('view')
def list_repairs():
    repairs = get_gateway().list(current_tenant(), 'repairs')
    status = request.args.get('status')
    if status:
        repairs = [repair for repair in repairs if repair.get('status') == status]
    return jsonify(repairs)


@shop_bp.route('/repairs/<repair_id>', methods=['GET'])
@tenant_required('view')
def get_repair(repair_id):
    return jsonify(get_gateway().get(current_tenant(), 'repairs', repair_id))


@shop_bp.route('/repairs/<repair_id>', methods=['PUT'])
@tenant_required('edit')
def update_repair(repair_id):
    gateway = get_gateway()
    existing = gateway.get(current_tenant(), 'repairs', repair_id)
    changes = validated('repairs', read_json(), partial=True)

    if 'status' in changes and not is_forward_transition(existing.get('status'), changes['status']):
        raise field_error(
            'status', f"Cannot move a repair from {existing.get('status')} back to {changes['status']}"
        )

    repair = gateway.update(current_tenant(), 'repairs', repair_id, changes)
    return jsonify({'success': True, 'repair': repair})


@shop_bp.route('/repairs/<repair_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_repair(repair_id):
    get_gateway().delete(current_tenant(), 'repairs', repair_id)
    return jsonify({'success': True})
