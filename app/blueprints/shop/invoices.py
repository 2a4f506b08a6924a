import re
import uuid

from flask import current_app, jsonify, request

from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.calculations import calculate_invoice
from app.utils.errors import Conflict, NotFound
from app.utils.gateway import get_gateway
from app.utils.permissions import tenant_required
from app.utils.timezone_helper import add_days, get_shop_date
from . import shop_bp

INVOICE_NUMBER_ATTEMPTS = 5


def generate_invoice_number(existing_numbers):
    """Generate unique invoice number"""
    date_str = get_shop_date().strftime('%Y%m%d')
    for _ in range(INVOICE_NUMBER_ATTEMPTS):
        invoice_number = f'INV-{date_str}-{uuid.uuid4().hex[:8].upper()}'
        if invoice_number not in existing_numbers:
            return invoice_number
    raise Conflict('Could not allocate a unique invoice number')


def slugify(value):
    slug = re.sub(r'[^a-z0-9]+', '-', (value or '').lower()).strip('-')
    return slug or 'invoice'


def money_fields(invoice):
    return calculate_invoice(
        invoice.get('items'),
        tax_type=invoice.get('taxType', 'none'),
        tax_percent=invoice.get('taxPercent', 0),
        amount_paid=invoice.get('amountPaid', 0),
        subtotal=invoice.get('subtotal'),
    )


def check_references(job_card_id, customer_id):
    gateway = get_gateway()
    if not gateway.exists(current_tenant(), 'jobCards', job_card_id):
        raise field_error('jobCardId', 'Job card not found')
    if not gateway.exists(current_tenant(), 'customers', customer_id):
        raise field_error('customerId', 'Customer not found')


@shop_bp.route('/invoices', methods=['POST'])
@tenant_required('create')
def create_invoice():
    record = validated('invoices', read_json())
    check_references(record['jobCardId'], record['customerId'])

    gateway = get_gateway()
    existing_numbers = {
        invoice.get('invoiceNumber') for invoice in gateway.list(current_tenant(), 'invoices')
    }

    invoice_date = record.get('invoiceDate') or get_shop_date().isoformat()
    due_days = current_app.config.get('INVOICE_DUE_DAYS', 7)
    record.update(money_fields(record))
    record['invoiceNumber'] = generate_invoice_number(existing_numbers)
    record['invoiceDate'] = invoice_date
    record['dueDate'] = record.get('dueDate') or add_days(get_shop_date(), due_days).isoformat()

    invoice_id = gateway.create(current_tenant(), 'invoices', record)
    current_app.logger.info(
        f"Invoice {record['invoiceNumber']} created for {current_tenant()} (total {record['totalAmount']})"
    )
    return jsonify({
        'success': True,
        'invoiceId': invoice_id,
        'invoiceNumber': record['invoiceNumber'],
        'invoice': gateway.get(current_tenant(), 'invoices', invoice_id)
    }), 201


@shop_bp.route('/invoices', methods=['GET'])
@tenant_required('view')
def list_invoices():
    invoices = get_gateway().list(current_tenant(), 'invoices', order_field='invoiceDate')
    status = request.args.get('paymentStatus')
    if status:
        invoices = [invoice for invoice in invoices if invoice.get('paymentStatus') == status]
    return jsonify(invoices)


@shop_bp.route('/invoices/<invoice_id>', methods=['GET'])
@tenant_required('view')
def get_invoice(invoice_id):
    return jsonify(get_gateway().get(current_tenant(), 'invoices', invoice_id))


@shop_bp.route('/invoices/<invoice_id>', methods=['PUT'])
@tenant_required('edit')
def update_invoice(invoice_id):
    gateway = get_gateway()
    existing = gateway.get(current_tenant(), 'invoices', invoice_id)
    changes = validated('invoices', read_json(), partial=True)

    if 'jobCardId' in changes or 'customerId' in changes:
        check_references(
            changes.get('jobCardId', existing.get('jobCardId')),
            changes.get('customerId', existing.get('customerId'))
        )

    merged = dict(existing)
    merged.update(changes)
    changes.update(money_fields(merged))

    invoice = gateway.update(current_tenant(), 'invoices', invoice_id, changes)
    return jsonify({'success': True, 'invoice': invoice})


@shop_bp.route('/invoices/<invoice_id>/payments', methods=['POST'])
@tenant_required('edit')
def add_invoice_payment(invoice_id):
    """Record a payment against an invoice"""
    gateway = get_gateway()
    invoice = gateway.get(current_tenant(), 'invoices', invoice_id)
    payment = validated('invoicePayments', read_json())

    invoice['amountPaid'] = (invoice.get('amountPaid') or 0) + payment['amount']
    changes = money_fields(invoice)
    invoice = gateway.update(current_tenant(), 'invoices', invoice_id, changes)
    current_app.logger.info(
        f"Payment of {payment['amount']} recorded on invoice {invoice.get('invoiceNumber')}"
    )
    return jsonify({'success': True, 'invoice': invoice})


@shop_bp.route('/invoices/<invoice_id>/link', methods=['POST'])
@tenant_required('edit')
def create_invoice_link(invoice_id):
    """Store the uploaded PDF and return a public share link"""
    gateway = get_gateway()
    invoice = gateway.get(current_tenant(), 'invoices', invoice_id)
    link = validated('invoiceLinks', read_json())

    try:
        shop_name = gateway.get(current_tenant(), 'company', 'profile').get('companyName', '')
    except NotFound:
        shop_name = ''
    try:
        customer_name = gateway.get(current_tenant(), 'customers', invoice.get('customerId')).get('name', '')
    except NotFound:
        customer_name = ''

    link.update({
        'invoiceId': invoice_id,
        'invoiceNumber': invoice.get('invoiceNumber'),
        'shopName': shop_name,
        'customerName': customer_name,
    })
    link_id = gateway.create(current_tenant(), 'invoiceLinks', link)
    gateway.update(current_tenant(), 'invoices', invoice_id, {'shareLinkId': link_id})

    app_url = current_app.config.get('APP_URL', '').rstrip('/')
    share_url = f'{app_url}/invoice/{slugify(shop_name)}/{slugify(customer_name)}/{link_id}'
    return jsonify({'success': True, 'linkId': link_id, 'url': share_url}), 201


@shop_bp.route('/invoices/<invoice_id>', methods=['DELETE'])
@tenant_required('delete')
def delete_invoice(invoice_id):
    get_gateway().delete(current_tenant(), 'invoices', invoice_id)
    return jsonify({'success': True})
