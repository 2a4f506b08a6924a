from flask import current_app, jsonify

from app.utils.api_helpers import current_tenant, read_json, validated
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from . import shop_bp


@shop_bp.route('/customers', methods=['POST'])
@tenant_required('create')
def create_customer():
    record = validated('customers', read_json())
    gateway = get_gateway()
    customer_id = gateway.create(current_tenant(), 'customers', record)
    current_app.logger.info(f"Customer {customer_id} created for {current_tenant()}")
    return jsonify({
        'success': True,
        'customerId': customer_id,
        'customer': gateway.get(current_tenant(), 'customers', customer_id)
    }), 201


@shop_bp.route('/customers', methods=['GET'])
@tenant_required('view')
def list_customers():
    return jsonify(get_gateway().list(current_tenant(), 'customers'))


@shop_bp.route('/customers/<customer_id>', methods=['GET'])
@tenant_required('view')
def get_customer(customer_id):
    return jsonify(get_gateway().get(current_tenant(), 'customers', customer_id))


@shop_bp.route('/customers/<customer_id>', methods=['PUT'])
@tenant_required('edit')
def update_customer(customer_id):
    changes = validated('customers', read_json(), partial=True)
    customer = get_gateway().update(current_tenant(), 'customers', customer_id, changes)
    return jsonify({'success': True, 'customer': customer})


@shop_bp.route('/customers/<customer_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_customer(customer_id):
    get_gateway().delete(current_tenant(), 'customers', customer_id)
    current_app.logger.info(f"Customer {customer_id} deleted for {current_tenant()}")
    return jsonify({'success': True})
