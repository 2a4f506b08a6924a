import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'your-secret-key-here'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///repairdesk.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DEBUG = False
    TESTING = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Shop settings
    SHOP_TIMEZONE = os.environ.get('SHOP_TIMEZONE', 'Asia/Kolkata')
    DEFAULT_CURRENCY = os.environ.get('DEFAULT_CURRENCY', 'INR')
    DEFAULT_GST_RATE = 18
    INVOICE_DUE_DAYS = 7
    SUBSCRIPTION_PERIOD_DAYS = 30
    APP_URL = os.environ.get('APP_URL', 'http://localhost:5000')

    # Admin bearer tokens
    ADMIN_TOKEN_TTL = timedelta(hours=int(os.environ.get('ADMIN_TOKEN_TTL_HOURS', 12)))

    # Razorpay
    RAZORPAY_KEY_ID = os.environ.get('RAZORPAY_KEY_ID')
    RAZORPAY_KEY_SECRET = os.environ.get('RAZORPAY_KEY_SECRET')

    # SMTP relay
    SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.environ.get('SMTP_PORT', 587))
    SMTP_USER = os.environ.get('SMTP_USER', '').strip()
    SMTP_PASSWORD = (os.environ.get('SMTP_PASSWORD') or '').replace(' ', '')
    MAIL_SENDER_NAME = os.environ.get('MAIL_SENDER_NAME', 'RepairDesk')

    # Run best-effort jobs on the request thread instead of a daemon thread
    BACKGROUND_TASKS_INLINE = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    RAZORPAY_KEY_ID = 'rzp_test_key'
    RAZORPAY_KEY_SECRET = 'rzp_test_secret'
    SMTP_PASSWORD = ''
    BACKGROUND_TASKS_INLINE = True


class ProductionConfig(Config):
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config():
    """Pick the config class from FLASK_ENV (defaults to development)"""
    env = os.environ.get('FLASK_ENV', 'development').lower()
    return config_by_name.get(env, DevelopmentConfig)


def print_config_summary():
    config = get_config()
    print(f"Environment:   {config.__name__}")
    print(f"Database:      {config.SQLALCHEMY_DATABASE_URI}")
    print(f"Timezone:      {config.SHOP_TIMEZONE}")
    print(f"Razorpay:      {'configured' if config.RAZORPAY_KEY_ID else 'not configured'}")
    print(f"SMTP relay:    {'configured' if config.SMTP_PASSWORD else 'disabled'}")
