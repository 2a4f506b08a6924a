# tests/test_calculations.py
from datetime import datetime

import pytest

from app.utils.calculations import (
    budget_total, budget_utilisation, build_cost_estimate, build_terms_text, calculate_invoice,
    coerce_amount, month_window, monthly_trend, payment_status, stock_status,
    subscription_stats, summarize_expenses, admin_dashboard_stats
)
from app.utils.plans import get_features, is_subscription_active, new_subscription
from app.utils.timezone_helper import iso_timestamp, parse_timestamp, shift_month


def test_coerce_amount():
    assert coerce_amount('500') == 500.0
    assert coerce_amount('abc') == 0.0
    assert coerce_amount(None) == 0.0
    assert coerce_amount(True) == 0.0
    assert coerce_amount('nan') == 0.0
    assert coerce_amount(12) == 12.0


def test_cost_estimate_total_is_the_sum():
    estimate = build_cost_estimate('500', '1500', None)
    assert estimate == {'laborCost': 500.0, 'partsCost': 1500.0, 'serviceCost': 0.0, 'total': 2000.0}


def test_invoice_with_gst():
    invoice = calculate_invoice(
        [{'description': 'Screen', 'quantity': 1, 'rate': 12000},
         {'description': 'Labour', 'quantity': 2, 'rate': 1000}],
        tax_type='gst', tax_percent=18, amount_paid=5000,
    )
    assert [item['amount'] for item in invoice['items']] == [12000.0, 2000.0]
    assert invoice['subtotal'] == 14000.0
    assert invoice['taxAmount'] == 2520.0
    assert invoice['totalAmount'] == 16520.0
    assert invoice['balanceDue'] == 11520.0
    assert invoice['paymentStatus'] == 'partial'


def test_invoice_without_tax_ignores_percent():
    invoice = calculate_invoice([{'quantity': 3, 'rate': 99.99}], tax_type='none', tax_percent=18)
    assert invoice['taxPercent'] == 0.0
    assert invoice['taxAmount'] == 0.0
    assert invoice['totalAmount'] == pytest.approx(299.97)
    assert invoice['paymentStatus'] == 'pending'


def test_invoice_without_items_keeps_subtotal():
    invoice = calculate_invoice([], tax_type='vat', tax_percent=10, subtotal=200)
    assert invoice['subtotal'] == 200.0
    assert invoice['totalAmount'] == 220.0


@pytest.mark.parametrize('total, paid, expected', [
    (100, 0, 'pending'),
    (100, 40, 'partial'),
    (100, 100, 'paid'),
    (100, 150, 'paid'),
])
def test_payment_status(total, paid, expected):
    assert payment_status(total, paid) == expected


@pytest.mark.parametrize('quantity, expected', [(0, 'low'), (9, 'low'), (10, 'medium'), (19, 'medium'), (20, 'high')])
def test_stock_status(quantity, expected):
    assert stock_status(quantity) == expected


def test_month_window_handles_leap_years():
    assert month_window(2024, 2) == ('2024-02-01', '2024-02-29')
    assert month_window(2025, 12) == ('2025-12-01', '2025-12-31')


def test_shift_month_crosses_years():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2024, 11, 3) == (2025, 2)


def test_summarize_expenses_only_counts_the_window():
    expenses = [
        {'amount': 100, 'source': 'shop_drawer', 'category': 'Tea/Snacks', 'date': '2025-01-05'},
        {'amount': 250.5, 'source': 'bank_account', 'category': 'Rent', 'date': '2025-01-31'},
        {'amount': 75, 'source': 'shop_drawer', 'category': 'Tea/Snacks', 'date': '2025-02-01'},
    ]
    summary = summarize_expenses(expenses, '2025-01-01', '2025-01-31')
    assert summary['count'] == 2
    assert summary['total'] == 350.5
    assert summary['bySource'] == {'shop_drawer': 100.0, 'personal_wallet': 0.0, 'bank_account': 250.5}
    assert summary['byCategory'] == {'Tea/Snacks': 100.0, 'Rent': 250.5}


def test_budget_total_and_utilisation():
    assert budget_total(5000, '2000', None) == 7000.0

    budget = {'shopDrawerBudget': 5000, 'personalBudget': 2000, 'bankBudget': 0, 'totalBudget': 7000}
    summary = summarize_expenses(
        [{'amount': 1200, 'source': 'shop_drawer', 'date': '2025-01-10'}], '2025-01-01', '2025-01-31'
    )
    utilisation = budget_utilisation(budget, summary)
    assert utilisation['sources']['shop_drawer'] == {'budget': 5000.0, 'spent': 1200.0, 'remaining': 3800.0}
    assert utilisation['totalSpent'] == 1200.0
    assert utilisation['remaining'] == 5800.0


def test_budget_utilisation_without_budget():
    summary = summarize_expenses([], '2025-01-01', '2025-01-31')
    utilisation = budget_utilisation(None, summary)
    assert utilisation['totalBudget'] == 0.0
    assert utilisation['remaining'] == 0.0


def test_terms_text_numbers_selected_then_custom():
    text = build_terms_text(['warranty_7', 'unknown', 'no_refund'], ['Bring your charger', ''])
    assert text == (
        '1. 7 days service warranty on repairs\n'
        '2. No refund after service completion\n'
        '3. Bring your charger'
    )
    assert build_terms_text() == ''


def test_subscription_stats():
    accounts = [
        {'subscription': {'planId': 'pro', 'status': 'active'}},
        {'subscription': {'planId': 'basic', 'status': 'expired'}},
        {'subscription': {'planId': 'elite', 'status': 'active'}},
        {'subscription': {'planId': 'basic', 'status': 'trial'}},
        {},
    ]
    stats = subscription_stats(accounts)
    assert stats['total'] == 5
    assert stats['withoutSubscription'] == 1
    assert stats['byStatus'] == {'active': 2, 'trial': 1, 'expired': 1, 'cancelled': 0}
    assert stats['byPlan'] == {'basic': 2, 'pro': 1, 'elite': 1}
    assert stats['revenueByPlan'] == {'basic': 0, 'pro': 700, 'elite': 999}
    assert stats['monthlyRevenue'] == 1699


def test_monthly_trend_covers_twelve_months():
    now = datetime(2025, 3, 15, 6, 0)
    accounts = [{'createdAt': '2025-03-01T10:00:00.000Z'}, {'createdAt': '2024-04-20T10:00:00.000Z'}]
    activities = [
        {'action': 'login', 'timestamp': '2025-03-02T10:00:00.000Z'},
        {'action': 'logout', 'timestamp': '2025-03-02T11:00:00.000Z'},
        {'action': 'login', 'timestamp': '2025-02-10T10:00:00.000Z'},
    ]
    trend = monthly_trend(accounts, activities, now=now)
    assert len(trend) == 12
    assert trend[0]['month'] == '2024-04'
    assert trend[0]['label'] == 'Apr 2024'
    assert trend[0]['newUsers'] == 1
    assert trend[-1] == {'month': '2025-03', 'label': 'Mar 2025', 'newUsers': 1, 'logins': 1}
    assert trend[-2]['logins'] == 1


def test_months_are_counted_in_shop_time():
    # 20:00 UTC on Jan 31 is already Feb 1 in Asia/Kolkata
    now = datetime(2025, 2, 10)
    trend = monthly_trend([{'createdAt': '2025-01-31T20:00:00Z'}], [], now=now, months=2)
    assert [(entry['month'], entry['newUsers']) for entry in trend] == [('2025-01', 0), ('2025-02', 1)]


def test_admin_dashboard_stats():
    now = datetime(2025, 3, 15, 6, 0)
    accounts = [
        {'role': 'admin', 'createdAt': '2025-03-01T10:00:00Z', 'lastLogin': '2025-03-10T10:00:00Z',
         'subscription': {'planId': 'pro', 'status': 'active'}},
        {'role': 'user', 'createdAt': '2025-01-01T10:00:00Z', 'lastLogin': '2024-12-01T10:00:00Z',
         'subscription': {'planId': 'basic', 'status': 'cancelled'}},
        {'createdAt': '2024-06-01T10:00:00Z'},
    ]
    activities = [
        {'action': 'login', 'timestamp': '2025-03-10T10:00:00Z'},
        {'action': 'login', 'timestamp': '2025-01-10T10:00:00Z'},
    ]
    stats = admin_dashboard_stats(accounts, activities, now=now)
    assert stats['totalUsers'] == 3
    assert stats['activeUsers'] == 1
    assert stats['newUsersThisMonth'] == 1
    assert stats['newUsersThisYear'] == 2
    assert stats['loginsThisMonth'] == 1
    assert stats['loginsThisYear'] == 2
    assert stats['activeSubscriptions'] == 1
    assert stats['expiredSubscriptions'] == 1
    assert stats['roleDistribution'] == {'admin': 1, 'user': 2}
    assert stats['planDistribution'] == {'pro': 1, 'basic': 1}
    assert len(stats['monthlyTrend']) == 12


def test_subscription_activity_window():
    now = datetime(2025, 3, 1)
    subscription = new_subscription('pro', 30, payment_id='pay_1', start=now)
    assert subscription['status'] == 'active'
    assert subscription['startDate'] == '2025-03-01T00:00:00.000Z'
    assert subscription['endDate'] == '2025-03-31T00:00:00.000Z'
    assert subscription['paymentId'] == 'pay_1'

    assert is_subscription_active(subscription, now=datetime(2025, 3, 20))
    assert not is_subscription_active(subscription, now=datetime(2025, 4, 2))
    assert not is_subscription_active(dict(subscription, status='cancelled'), now=now)
    assert not is_subscription_active(None)


def test_features_follow_the_plan():
    subscription = new_subscription('elite', 30)
    assert get_features(subscription) == {'expenseTracker': True, 'maxThemes': 20, 'maxJobImages': 2}
    assert get_features(None) == {'expenseTracker': False, 'maxThemes': 0, 'maxJobImages': 0}


def test_timestamps_round_trip_as_utc():
    stamp = iso_timestamp(datetime(2025, 1, 2, 3, 4, 5))
    assert stamp == '2025-01-02T03:04:05.000Z'
    assert parse_timestamp(stamp).utcoffset().total_seconds() == 0
    assert parse_timestamp('garbage') is None
