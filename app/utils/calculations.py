# app/utils/calculations.py
"""
Derived-field calculations.

Totals, balances and statuses are always computed here from the stored
inputs; values the client sends for them are ignored.
"""
import math
from collections import Counter
from datetime import timedelta

from .plans import PLAN_PRICES, SUBSCRIPTION_STATUSES
from .terms import TERM_LABELS
from .timezone_helper import (
    get_month_bounds, month_key, parse_timestamp, shift_month, to_shop_time, utc_now
)

EXPENSE_SOURCES = ('shop_drawer', 'personal_wallet', 'bank_account')

BUDGET_FIELDS = {
    'shop_drawer': 'shopDrawerBudget',
    'personal_wallet': 'personalBudget',
    'bank_account': 'bankBudget',
}


def coerce_amount(value, default=0.0):
    """Numbers or numeric strings to float; anything else becomes default"""
    if value is None or isinstance(value, bool):
        return default
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(amount) or math.isinf(amount):
        return default
    return amount


def round_money(value):
    return round(value + 0.0, 2)


# Job cards

def build_cost_estimate(labor_cost=None, parts_cost=None, service_cost=None):
    labor = coerce_amount(labor_cost)
    parts = coerce_amount(parts_cost)
    service = coerce_amount(service_cost)
    return {
        'laborCost': labor,
        'partsCost': parts,
        'serviceCost': service,
        'total': round_money(labor + parts + service),
    }


# Invoices

def line_amount(quantity, rate):
    return round_money(coerce_amount(quantity) * coerce_amount(rate))


def payment_status(total_amount, amount_paid):
    if amount_paid <= 0:
        return 'pending'
    if amount_paid < total_amount:
        return 'partial'
    return 'paid'


def calculate_invoice(items, tax_type='none', tax_percent=0, amount_paid=0, subtotal=None):
    """Recompute every money field of an invoice from its line items"""
    priced_items = []
    for item in items or []:
        priced = dict(item)
        priced['amount'] = line_amount(item.get('quantity'), item.get('rate'))
        priced_items.append(priced)

    if priced_items:
        subtotal = round_money(sum(item['amount'] for item in priced_items))
    else:
        subtotal = coerce_amount(subtotal)

    if tax_type == 'none':
        tax_percent = 0.0
    else:
        tax_percent = coerce_amount(tax_percent)

    tax_amount = round_money(subtotal * tax_percent / 100)
    total_amount = round_money(subtotal + tax_amount)
    amount_paid = coerce_amount(amount_paid)

    return {
        'items': priced_items,
        'subtotal': subtotal,
        'taxType': tax_type,
        'taxPercent': tax_percent,
        'taxAmount': tax_amount,
        'totalAmount': total_amount,
        'amountPaid': amount_paid,
        'balanceDue': round_money(total_amount - amount_paid),
        'paymentStatus': payment_status(total_amount, amount_paid),
    }


# Inventory

def stock_status(quantity):
    quantity = coerce_amount(quantity)
    if quantity < 10:
        return 'low'
    if quantity < 20:
        return 'medium'
    return 'high'


# Expenses and budgets

def month_window(year, month):
    """ISO date strings for the first and last day of a month"""
    start, end = get_month_bounds(year, month)
    return start.isoformat(), end.isoformat()


def summarize_expenses(expenses, start, end):
    """Totals for expenses dated inside [start, end] (ISO strings)"""
    total = 0.0
    by_source = {source: 0.0 for source in EXPENSE_SOURCES}
    by_category = {}
    count = 0

    for expense in expenses:
        expense_date = expense.get('date') or ''
        if not (start <= expense_date <= end):
            continue
        amount = coerce_amount(expense.get('amount'))
        total += amount
        count += 1
        source = expense.get('source')
        if source in by_source:
            by_source[source] += amount
        category = expense.get('category') or 'Other'
        by_category[category] = by_category.get(category, 0.0) + amount

    return {
        'start': start,
        'end': end,
        'count': count,
        'total': round_money(total),
        'bySource': {source: round_money(amount) for source, amount in by_source.items()},
        'byCategory': {category: round_money(amount) for category, amount in by_category.items()},
    }


def budget_total(shop_drawer_budget=0, personal_budget=0, bank_budget=0):
    return round_money(
        coerce_amount(shop_drawer_budget) + coerce_amount(personal_budget) + coerce_amount(bank_budget)
    )


def budget_utilisation(budget, summary):
    """Spent against budget for each source; budget may be None"""
    budget = budget or {}
    sources = {}
    for source, field in BUDGET_FIELDS.items():
        allotted = coerce_amount(budget.get(field))
        spent = summary['bySource'].get(source, 0.0)
        sources[source] = {
            'budget': allotted,
            'spent': spent,
            'remaining': round_money(allotted - spent),
        }
    total_budget = coerce_amount(budget.get('totalBudget'))
    return {
        'sources': sources,
        'totalBudget': total_budget,
        'totalSpent': summary['total'],
        'remaining': round_money(total_budget - summary['total']),
    }


# Terms

def build_terms_text(selected_terms=None, custom_terms=None):
    terms = [TERM_LABELS[term_id] for term_id in selected_terms or [] if term_id in TERM_LABELS]
    terms.extend(term for term in custom_terms or [] if term)
    return '\n'.join(f'{index}. {term}' for index, term in enumerate(terms, start=1))


# Subscriptions and admin statistics

def subscription_stats(accounts):
    by_status = {status: 0 for status in SUBSCRIPTION_STATUSES}
    by_plan = {plan_id: 0 for plan_id in PLAN_PRICES}
    revenue_by_plan = {plan_id: 0 for plan_id in PLAN_PRICES}
    without_subscription = 0

    for account in accounts:
        subscription = account.get('subscription')
        if not subscription:
            without_subscription += 1
            continue
        status = subscription.get('status')
        plan_id = subscription.get('planId')
        if status in by_status:
            by_status[status] += 1
        if plan_id in by_plan:
            by_plan[plan_id] += 1
            if status == 'active':
                revenue_by_plan[plan_id] += PLAN_PRICES[plan_id]

    return {
        'total': len(accounts),
        'byStatus': by_status,
        'byPlan': by_plan,
        'withoutSubscription': without_subscription,
        'revenueByPlan': revenue_by_plan,
        'monthlyRevenue': sum(revenue_by_plan.values()),
    }


def _shop_month(value):
    """'YYYY-MM' of a stored timestamp in shop time, or None"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return month_key(to_shop_time(parsed))


def monthly_trend(accounts, activities, now=None, months=12):
    """New accounts and logins for each of the last `months` calendar months"""
    now = to_shop_time(parse_timestamp(now or utc_now()))
    signups = Counter(_shop_month(account.get('createdAt')) for account in accounts)
    logins = Counter(
        _shop_month(activity.get('timestamp'))
        for activity in activities
        if activity.get('action', 'login') == 'login'
    )

    trend = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -offset)
        key = f'{year:04d}-{month:02d}'
        start, _ = get_month_bounds(year, month)
        trend.append({
            'month': key,
            'label': start.strftime('%b %Y'),
            'newUsers': signups.get(key, 0),
            'logins': logins.get(key, 0),
        })
    return trend


def admin_dashboard_stats(accounts, activities, now=None):
    now_utc = parse_timestamp(now or utc_now())
    now_shop = to_shop_time(now_utc)
    this_month = month_key(now_shop)
    this_year = str(now_shop.year)
    active_since = now_utc - timedelta(days=30)

    def in_month(value):
        return _shop_month(value) == this_month

    def in_year(value):
        key = _shop_month(value)
        return key is not None and key.startswith(this_year)

    logins = [activity for activity in activities if activity.get('action', 'login') == 'login']

    active_users = 0
    roles = Counter()
    plans = Counter()
    active_subscriptions = 0
    expired_subscriptions = 0
    for account in accounts:
        roles[account.get('role') or 'user'] += 1
        last_login = parse_timestamp(account.get('lastLogin'))
        if last_login is not None and last_login >= active_since:
            active_users += 1
        subscription = account.get('subscription') or {}
        status = subscription.get('status')
        if status in ('active', 'trial'):
            active_subscriptions += 1
        elif status in ('expired', 'cancelled'):
            expired_subscriptions += 1
        if subscription.get('planId'):
            plans[subscription['planId']] += 1

    return {
        'totalUsers': len(accounts),
        'activeUsers': active_users,
        'newUsersThisMonth': sum(1 for account in accounts if in_month(account.get('createdAt'))),
        'newUsersThisYear': sum(1 for account in accounts if in_year(account.get('createdAt'))),
        'loginsThisMonth': sum(1 for activity in logins if in_month(activity.get('timestamp'))),
        'loginsThisYear': sum(1 for activity in logins if in_year(activity.get('timestamp'))),
        'activeSubscriptions': active_subscriptions,
        'expiredSubscriptions': expired_subscriptions,
        'roleDistribution': dict(roles),
        'planDistribution': dict(plans),
        'monthlyTrend': monthly_trend(accounts, activities, now=now_utc),
    }
