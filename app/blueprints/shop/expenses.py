from flask import jsonify, request

from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.calculations import budget_total, budget_utilisation, month_window, summarize_expenses
from app.utils.errors import Conflict, NotFound
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from app.utils.timezone_helper import get_shop_date, month_key, parse_month_key
from . import shop_bp


def selected_month():
    """(year, month) from ?month=YYYY-MM, defaulting to the current shop month"""
    value = request.args.get('month') or month_key(get_shop_date())
    try:
        return parse_month_key(value)
    except ValueError:
        raise field_error('month', 'Invalid month, expected YYYY-MM')


@shop_bp.route('/expenses', methods=['POST'])
@tenant_required('create')
def create_expense():
    record = validated('expenses', read_json())
    record['createdBy'] = current_tenant()

    gateway = get_gateway()
    expense_id = gateway.create(current_tenant(), 'expenses', record)
    return jsonify({
        'success': True,
        'expenseId': expense_id,
        'expense': gateway.get(current_tenant(), 'expenses', expense_id)
    }), 201


@shop_bp.route('/expenses', methods=['GET'])
@tenant_required('view')
def list_expenses():
    expenses = get_gateway().list(current_tenant(), 'expenses', order_field='date')

    start = request.args.get('start')
    end = request.args.get('end')
    category = request.args.get('category')
    source = request.args.get('source')
    if start:
        expenses = [expense for expense in expenses if expense.get('date', '') >= start]
    if end:
        expenses = [expense for expense in expenses if expense.get('date', '') <= end]
    if category:
        expenses = [expense for expense in expenses if expense.get('category') == category]
    if source:
        expenses = [expense for expense in expenses if expense.get('source') == source]
    return jsonify(expenses)


@shop_bp.route('/expenses/summary', methods=['GET'])
@tenant_required('view')
def expense_summary():
    year, month = selected_month()
    start, end = month_window(year, month)
    key = f'{year:04d}-{month:02d}'

    gateway = get_gateway()
    summary = summarize_expenses(gateway.list(current_tenant(), 'expenses'), start, end)
    try:
        budget = gateway.get(current_tenant(), 'budgets', key)
    except NotFound:
        budget = None

    summary['month'] = key
    summary['budget'] = budget_utilisation(budget, summary)
    return jsonify(summary)


@shop_bp.route('/expenses/<expense_id>', methods=['GET'])
@tenant_required('view')
def get_expense(expense_id):
    return jsonify(get_gateway().get(current_tenant(), 'expenses', expense_id))


@shop_bp.route('/expenses/<expense_id>', methods=['PUT'])
@tenant_required('edit')
def update_expense(expense_id):
    changes = validated('expenses', read_json(), partial=True)
    expense = get_gateway().update(current_tenant(), 'expenses', expense_id, changes)
    return jsonify({'success': True, 'expense': expense})


@shop_bp.route('/expenses/<expense_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_expense(expense_id):
    get_gateway().delete(current_tenant(), 'expenses', expense_id)
    return jsonify({'success': True})


@shop_bp.route('/budgets/<month>', methods=['GET'])
@tenant_required('view')
def get_budget(month):
    return jsonify(get_gateway().get(current_tenant(), 'budgets', month))


@shop_bp.route('/budgets/<month>', methods=['PUT'])
@tenant_required('edit')
def save_budget(month):
    payload = read_json()
    if payload.get('month') not in (None, month):
        raise Conflict('Budget month does not match the URL')
    payload['month'] = month

    record = validated('budgets', payload)
    record['totalBudget'] = budget_total(
        record['shopDrawerBudget'], record['personalBudget'], record['bankBudget']
    )
    record['createdBy'] = current_tenant()
    budget = get_gateway().put(current_tenant(), 'budgets', month, record)
    return jsonify({'success': True, 'budget': budget})
