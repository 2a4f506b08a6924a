# app/utils/tokens.py
"""
Signed bearer tokens for admin calls (HS256 JWT)
"""
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app


def issue_token(uid, role='admin', secret=None, ttl=None):
    secret = secret or current_app.config['SECRET_KEY']
    ttl = ttl or current_app.config.get('ADMIN_TOKEN_TTL', timedelta(hours=12))
    now = datetime.now(timezone.utc)
    payload = {
        'sub': uid,
        'role': role,
        'iat': now,
        'exp': now + ttl,
    }
    return jwt.encode(payload, secret, algorithm='HS256')


def verify_token(token, secret=None):
    """Return the uid a token was issued to, or None if it does not verify"""
    secret = secret or current_app.config['SECRET_KEY']
    try:
        payload = jwt.decode(token, secret, algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        current_app.logger.info("Rejected expired bearer token")
        return None
    except jwt.InvalidTokenError as e:
        current_app.logger.warning(f"Rejected invalid bearer token: {str(e)}")
        return None
    return payload.get('sub') or None


def bearer_token(header_value):
    """Extract the token from an 'Authorization: Bearer <token>' header"""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
