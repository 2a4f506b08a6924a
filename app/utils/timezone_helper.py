# app/utils/timezone_helper.py
"""
Shop timezone helper functions

All calendar-month windows (expense summaries, admin trends) are computed in
the shop timezone configured as SHOP_TIMEZONE.
"""
import calendar
from datetime import date, datetime, timedelta

import pytz
from flask import current_app, has_app_context

DEFAULT_TIMEZONE = 'Asia/Kolkata'


def get_shop_timezone():
    """Configured shop timezone, falling back to the default outside an app"""
    name = DEFAULT_TIMEZONE
    if has_app_context():
        name = current_app.config.get('SHOP_TIMEZONE', DEFAULT_TIMEZONE)
    return pytz.timezone(name)


def utc_now():
    """Current UTC time as a naive datetime, the way it is stored"""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def get_shop_time():
    """Get current time in the shop timezone"""
    return datetime.now(get_shop_timezone())


def get_shop_date():
    """Get current date in the shop timezone"""
    return get_shop_time().date()


def to_shop_time(utc_dt):
    """Convert a UTC datetime (naive or aware) to shop time"""
    if utc_dt is None:
        return None

    if utc_dt.tzinfo is None:
        # Assume UTC if no timezone info
        utc_dt = pytz.utc.localize(utc_dt)

    return utc_dt.astimezone(get_shop_timezone())


def parse_timestamp(value):
    """Parse a stored timestamp (datetime or ISO string) into aware UTC"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return pytz.utc.localize(parsed)
    return parsed.astimezone(pytz.utc)


def iso_timestamp(dt):
    """Serialize a stored (naive UTC) datetime as an ISO-8601 string"""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(pytz.utc).replace(tzinfo=None)
    return dt.isoformat(timespec='milliseconds') + 'Z'


def month_key(date_obj):
    return date_obj.strftime('%Y-%m')


def parse_month_key(value):
    """'2025-01' -> (2025, 1); raises ValueError for anything else"""
    parsed = datetime.strptime(value, '%Y-%m')
    return parsed.year, parsed.month


def shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def get_month_bounds(year, month):
    """First and last calendar day of a month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def add_days(date_obj, days):
    return date_obj + timedelta(days=days)
