from flask import current_app, jsonify

from app.utils.api_helpers import current_tenant, field_error, read_json, validated
from app.utils.background import spawn_best_effort
from app.utils.errors import NotFound
from app.utils.gateway import get_gateway
from app.utils.mailer import send_subscription_email
from app.utils.payments import get_payment_gateway
from app.utils.permissions import tenant_required
from app.utils.plans import PLAN_PRICES, get_plan, new_subscription
from . import billing_bp


@billing_bp.route('/razorpay/order', methods=['POST'])
@tenant_required('create')
def create_order():
    order_request = validated('paymentOrder', read_json())
    plan_id = order_request['planId']
    if plan_id and order_request['amount'] != PLAN_PRICES[plan_id]:
        raise field_error('amount', 'Amount does not match the plan price')

    payments = get_payment_gateway()
    order = payments.create_order(order_request['amount'], plan_id)

    # Verification reads the plan back from here, never from the client
    get_gateway().put(current_tenant(), 'paymentOrders', order['id'], {
        'orderId': order['id'],
        'tenantId': current_tenant(),
        'planId': plan_id,
        'amount': order_request['amount'],
        'currency': payments.currency,
        'status': 'created',
    })
    current_app.logger.info(f"Razorpay order {order['id']} created for {current_tenant()}")
    return jsonify(order)


def load_account(uid):
    try:
        return get_gateway().get(uid, 'users', uid)
    except NotFound:
        return None


def claim_order(uid, order_id, payment_id):
    """Mark a stored order paid; each order activates at most once"""
    gateway = get_gateway()
    try:
        order = gateway.get(uid, 'paymentOrders', order_id)
    except NotFound:
        current_app.logger.warning(f"Payment for unknown order {order_id} from {uid}")
        raise field_error('razorpay_order_id', 'Unknown order')

    if order.get('status') == 'paid':
        current_app.logger.warning(f"Order {order_id} already paid; rejected reuse by {uid}")
        raise field_error('razorpay_order_id', 'Order has already been paid')

    return gateway.update(uid, 'paymentOrders', order_id, {'status': 'paid', 'paymentId': payment_id})


def activate_subscription(uid, plan_id, payment_id):
    period = current_app.config.get('SUBSCRIPTION_PERIOD_DAYS', 30)
    subscription = new_subscription(plan_id, period, payment_id=payment_id)
    get_gateway().update(uid, 'users', uid, {'subscription': subscription})
    current_app.logger.info(f"Subscription {plan_id} activated for {uid}")
    return subscription


@billing_bp.route('/razorpay/verify', methods=['POST'])
@tenant_required('edit')
def verify_payment():
    payment = validated('paymentVerify', read_json())
    order_id = payment['razorpay_order_id']
    payment_id = payment['razorpay_payment_id']

    if not get_payment_gateway().verify(order_id, payment_id, payment['razorpay_signature']):
        current_app.logger.warning(f"Invalid Razorpay signature for order {order_id}")
        return jsonify({'success': False, 'error': 'Invalid signature'}), 400

    uid = current_tenant()
    order = claim_order(uid, order_id, payment_id)
    account = load_account(uid)
    plan = get_plan(order.get('planId'))

    subscription = None
    if plan and account is not None:
        subscription = activate_subscription(uid, order['planId'], payment_id)
    elif plan:
        current_app.logger.warning(f"Verified payment {payment_id} for unknown account {uid}")

    if account is not None:
        recipient, user_name = account.get('email'), account.get('name')
    else:
        recipient, user_name = payment['email'], payment['userName']
    if recipient and user_name and plan:
        spawn_best_effort(
            send_subscription_email, recipient, user_name, plan['name'],
            description='subscription email'
        )

    return jsonify({'success': True, 'subscription': subscription})
