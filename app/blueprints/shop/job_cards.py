from flask import current_app, jsonify, request

from app.forms.job_card import COST_FIELDS, is_forward_transition
from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.calculations import build_cost_estimate
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from . import shop_bp


def load_references(customer_id, device_id):
    """Customer and device a job card points at; both must belong to the shop"""
    gateway = get_gateway()
    if not gateway.exists(current_tenant(), 'customers', customer_id):
        raise field_error('customerId', 'Customer not found')
    if not gateway.exists(current_tenant(), 'devices', device_id):
        raise field_error('deviceId', 'Device not found')

    customer = gateway.get(current_tenant(), 'customers', customer_id)
    device = gateway.get(current_tenant(), 'devices', device_id)
    if device.get('customerId') != customer_id:
        raise field_error('deviceId', 'Device does not belong to this customer')
    return customer, device


def denormalized_fields(customer, device):
    return {
        'customerName': customer.get('name', ''),
        'deviceInfo': {
            'type': device.get('deviceType', ''),
            'brand': device.get('brand', ''),
            'model': device.get('model', ''),
        },
    }


def check_advance(advance, estimate):
    if advance > estimate['total']:
        raise field_error('advanceReceived', 'Advance cannot exceed the total estimate')


@shop_bp.route('/jobcards', methods=['POST'])
@tenant_required('create')
def create_job_card():
    record = validated('jobCards', read_json())
    customer, device = load_references(record['customerId'], record['deviceId'])

    estimate = build_cost_estimate(*(record.pop(field) for field in COST_FIELDS))
    check_advance(record['advanceReceived'], estimate)

    record.update(denormalized_fields(customer, device))
    record['costEstimate'] = estimate
    # Every card starts at the beginning of the workflow
    record['status'] = 'pending'

    gateway = get_gateway()
    job_card_id = gateway.create(current_tenant(), 'jobCards', record)
    current_app.logger.info(
        f"Job card {job_card_id} created for {current_tenant()} (total {estimate['total']})"
    )
    return jsonify({
        'success': True,
        'jobCardId': job_card_id,
        'jobCard': gateway.get(current_tenant(), 'jobCards', job_card_id)
    }), 201


@shop_bp.route('/jobcards', methods=['GET'])
@tenant_required('view')
def list_job_cards():
    job_cards = get_gateway().list(current_tenant(), 'jobCards')
    status = request.args.get('status')
    if status:
        job_cards = [card for card in job_cards if card.get('status') == status]
    return jsonify(job_cards)


@shop_bp.route('/jobcards/<job_card_id>', methods=['GET'])
@tenant_required('view')
def get_job_card(job_card_id):
    return jsonify(get_gateway().get(current_tenant(), 'jobCards', job_card_id))


@shop_bp.route('/jobcards/<job_card_id>', methods=['PUT'])
@tenant_required('edit')
def update_job_card(job_card_id):
    gateway = get_gateway()
    existing = gateway.get(current_tenant(), 'jobCards', job_card_id)
    changes = validated('jobCards', read_json(), partial=True)

    if 'status' in changes and not is_forward_transition(existing.get('status'), changes['status']):
        raise field_error(
            'status', f"Cannot move a job card from {existing.get('status')} back to {changes['status']}"
        )

    if 'customerId' in changes or 'deviceId' in changes:
        customer, device = load_references(
            changes.get('customerId', existing.get('customerId')),
            changes.get('deviceId', existing.get('deviceId'))
        )
        changes.update(denormalized_fields(customer, device))

    current_costs = existing.get('costEstimate') or {}
    costs = {field: changes.pop(field, current_costs.get(field)) for field in COST_FIELDS}
    estimate = build_cost_estimate(costs['laborCost'], costs['partsCost'], costs['serviceCost'])
    advance = changes.get('advanceReceived', existing.get('advanceReceived', 0)) or 0
    check_advance(advance, estimate)
    changes['costEstimate'] = estimate

    job_card = gateway.update(current_tenant(), 'jobCards', job_card_id, changes)
    return jsonify({'success': True, 'jobCard': job_card})


@shop_bp.route('/jobcards/<job_card_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_job_card(job_card_id):
    get_gateway().delete(current_tenant(), 'jobCards', job_card_id)
    return jsonify({'success': True})
