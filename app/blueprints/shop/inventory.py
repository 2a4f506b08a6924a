from flask import current_app, jsonify, request

from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.calculations import stock_status
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from . import shop_bp


def with_stock_status(item):
    item['stockStatus'] = stock_status(item.get('quantity'))
    return item


@shop_bp.route('/inventory', methods=['POST'])
@tenant_required('create')
def create_inventory_item():
    record = validated('inventory', read_json())
    gateway = get_gateway()
    item_id = gateway.create(current_tenant(), 'inventory', record)
    return jsonify({
        'success': True,
        'itemId': item_id,
        'item': with_stock_status(gateway.get(current_tenant(), 'inventory', item_id))
    }), 201


@shop_bp.route('/inventory', methods=['GET'])
@tenant_required('view')
def list_inventory():
    items = [with_stock_status(item) for item in get_gateway().list(current_tenant(), 'inventory')]

    category = request.args.get('category')
    if category:
        items = [item for item in items if item.get('category') == category]
    status = request.args.get('stockStatus')
    if status:
        items = [item for item in items if item['stockStatus'] == status]
    return jsonify(items)


@shop_bp.route('/inventory/<item_id>', methods=['GET'])
@tenant_required('view')
def get_inventory_item(item_id):
    return jsonify(with_stock_status(get_gateway().get(current_tenant(), 'inventory', item_id)))


@shop_bp.route('/inventory/<item_id>', methods=['PUT'])
@tenant_required('edit')
def update_inventory_item(item_id):
    changes = validated('inventory', read_json(), partial=True)
    item = get_gateway().update(current_tenant(), 'inventory', item_id, changes)
    return jsonify({'success': True, 'item': with_stock_status(item)})


@shop_bp.route('/inventory/<item_id>/adjust', methods=['POST'])
@tenant_required('edit')
def adjust_stock(item_id):
    """Add or remove stock; quantity never drops below zero"""
    gateway = get_gateway()
    item = gateway.get(current_tenant(), 'inventory', item_id)
    adjustment = validated('stockAdjustments', read_json())

    new_quantity = int(item.get('quantity') or 0) + adjustment['delta']
    if new_quantity < 0:
        raise field_error('delta', f"Only {item.get('quantity', 0)} in stock")

    item = gateway.update(current_tenant(), 'inventory', item_id, {'quantity': new_quantity})
    current_app.logger.info(
        f"Stock for {item.get('partName')} adjusted by {adjustment['delta']} "
        f"({adjustment['reason'] or 'no reason given'})"
    )
    return jsonify({'success': True, 'item': with_stock_status(item)})


@shop_bp.route('/inventory/<item_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_inventory_item(item_id):
    get_gateway().delete(current_tenant(), 'inventory', item_id)
    return jsonify({'success': True})
