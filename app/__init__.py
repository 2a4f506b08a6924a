from flask import Flask, jsonify
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from werkzeug.exceptions import HTTPException

from config import get_config

# Initialize extensions (but don't bind to app yet)
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()


def configure_logging(app):
    level = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    app.logger.setLevel(level)


def register_error_handlers(app):
    from .utils.errors import ApiError, UpstreamFailure

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if isinstance(error, UpstreamFailure):
            app.logger.error(f"{error.provider or 'upstream'} failure: {error.detail}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        app.logger.exception(f"Unhandled error: {str(error)}")
        return jsonify({'error': 'Internal server error'}), 500


def register_caller_loader():
    from .models import Caller
    from .utils.errors import NotFound
    from .utils.gateway import get_gateway
    from .utils.tokens import bearer_token, verify_token

    def load_account(uid):
        try:
            return get_gateway().get(uid, 'users', uid)
        except NotFound:
            return None

    @login_manager.request_loader
    def load_caller(request):
        token = bearer_token(request.headers.get('Authorization'))
        if token:
            uid = verify_token(token)
            if uid is None:
                return None
            account = load_account(uid)
            if account is None:
                return None
            return Caller.from_account(uid, account, via='token')

        uid = (request.headers.get('x-user-id') or '').strip()
        if not uid:
            return None
        return Caller.from_account(uid, load_account(uid), via='header')


def create_app(config_class=None):
    if config_class is None:
        config_class = get_config()

    # Create the app instance
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = False
    configure_logging(app)

    # Init extensions WITH the app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Import models (inside function to avoid circular imports)
    from .models import Document
    from .utils.gateway import DocumentGateway
    from .utils.payments import init_razorpay

    app.extensions['documents'] = DocumentGateway(db)
    init_razorpay(app)
    register_caller_loader()

    # Register blueprints
    from .blueprints.shop import shop_bp
    from .blueprints.admin import admin_bp
    from .blueprints.billing import billing_bp
    from .blueprints.public import public_bp

    app.register_blueprint(shop_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(billing_bp, url_prefix='/api')
    app.register_blueprint(public_bp)

    register_error_handlers(app)

    from .cli import register_commands
    register_commands(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    with app.app_context():
        db.create_all()

    return app
