# app/utils/mailer.py
"""
Outgoing email through the configured SMTP relay
"""
import smtplib
import ssl
from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import formataddr, format_datetime, make_msgid

from flask import current_app
from markupsafe import escape

from .errors import UpstreamFailure


def smtp_ready(config):
    return bool(config.get('SMTP_USER') and config.get('SMTP_PASSWORD'))


def send_email(recipient, subject, body, html=None):
    """Send one message; False when the relay is not configured"""
    config = current_app.config
    if not recipient:
        return False
    if not smtp_ready(config):
        current_app.logger.warning("SMTP_PASSWORD not set. Skipping email notification.")
        return False

    sender = config['SMTP_USER']
    message = EmailMessage()
    message['Subject'] = subject
    message['From'] = formataddr((config.get('MAIL_SENDER_NAME') or 'RepairDesk', sender))
    message['To'] = recipient
    message['Date'] = format_datetime(datetime.now(timezone.utc))
    message['Message-ID'] = make_msgid(domain=sender.split('@')[-1])
    message.set_content(body)
    if html:
        message.add_alternative(html, subtype='html')

    try:
        with smtplib.SMTP(config['SMTP_HOST'], config['SMTP_PORT'], timeout=10) as smtp:
            smtp.ehlo()
            smtp.starttls(context=ssl.create_default_context())
            smtp.ehlo()
            smtp.login(sender, config['SMTP_PASSWORD'])
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as e:
        raise UpstreamFailure('Failed to send email', provider='smtp', detail=str(e))

    current_app.logger.info(f"Email '{subject}' sent to {recipient}")
    return True


def send_subscription_email(recipient, user_name, plan_name):
    """Confirmation sent after a verified subscription payment"""
    sender_name = current_app.config.get('MAIL_SENDER_NAME') or 'RepairDesk'
    dashboard_url = f"{current_app.config.get('APP_URL', '').rstrip('/')}/dashboard"
    today = datetime.now(timezone.utc).strftime('%d %b %Y')

    subject = f'Subscription Confirmed - {sender_name}'
    body = (
        f'Dear {user_name},\n\n'
        f'Thank you for subscribing to our {plan_name} plan! '
        f'Your payment has been successfully processed via Razorpay.\n\n'
        f'Plan: {plan_name}\n'
        f'Status: Active\n'
        f'Date: {today}\n\n'
        f'You can now access all the features of your plan: {dashboard_url}\n\n'
        f'{sender_name}'
    )
    html = (
        f'<p>Dear <strong>{escape(user_name)}</strong>,</p>'
        f'<p>Thank you for subscribing to our <strong>{escape(plan_name)}</strong> plan! '
        f'Your payment has been successfully processed via Razorpay.</p>'
        f'<p><strong>Plan:</strong> {escape(plan_name)}<br><strong>Status:</strong> Active<br>'
        f'<strong>Date:</strong> {today}</p>'
        f'<p><a href="{escape(dashboard_url)}">Go to Dashboard</a></p>'
    )
    return send_email(recipient, subject, body, html=html)
