# coding: utf8
from logging import DEBUG

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import default_exceptions

from .errors.handler import api_error_handler
from .extensions import bcrypt, db, jwt, make_celery, redis_client, socketio
from .third_parties.email import Mailer
from .third_parties.razorpay_gateway import RazorpayGateway
from .third_parties.sms import SmsClient


def create_app(config_app):
    app = Flask(__name__)
    app.config.from_object(config_app)

    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_SCHEME", "*")}})

    __check_settings(app)
    __init_app(app)
    __init_clients(app)
    __config_logging(app)
    __register_blueprint(app)
    __config_error_handlers(app)

    @app.route("/health")
    def health():
        return jsonify(status="ok")

    if app.config.get("CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    return app


def __check_settings(app):
    missing = [key for key in app.config.get("REQUIRED_SETTINGS", ()) if not app.config.get(key)]
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")


def __config_logging(app):
    app.logger.setLevel(DEBUG)
    app.logger.info("Start flask...")


def __register_blueprint(app):
    from cafe.api import bp as api_bp

    app.register_blueprint(api_bp)


def __init_app(app):
    db.init_app(app)
    redis_client.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)
    # handlers must be on socketio before init_app so every server gets them
    from cafe import socket_events  # noqa: F401

    socketio.init_app(
        app,
        async_mode=app.config.get("SOCKETIO_ASYNC_MODE"),
        message_queue=app.config.get("SOCKETIO_MESSAGE_QUEUE"),
        cors_allowed_origins=app.config.get("CORS_SCHEME", "*"),
    )

    celery = make_celery(app)
    app.extensions["celery"] = celery

    app.logger.info("Initial app...")


def __init_clients(app):
    timeout = app.config["EXTERNAL_TIMEOUT"]
    app.extensions["payment_gateway"] = RazorpayGateway(
        app.config["RAZORPAY_KEY_ID"],
        app.config["RAZORPAY_KEY_SECRET"],
        timeout=timeout,
    )
    app.extensions["mailer"] = Mailer(
        app.config["EMAIL_HOST"],
        app.config["EMAIL_PORT"],
        app.config["EMAIL_HOST_USER"],
        app.config["EMAIL_HOST_PASSWORD"],
        from_name=app.config["EMAIL_FROM_NAME"],
        encryption=app.config["EMAIL_ENCRYPTION"],
        timeout=timeout,
    )
    app.extensions["sms_client"] = SmsClient(
        app.config["SMS_API_URL"],
        app.config["SMS_API_KEY"],
        sender_id=app.config["SMS_SENDER_ID"],
        timeout=timeout,
    )


def __config_error_handlers(app):
    for exp in default_exceptions:
        app.register_error_handler(exp, api_error_handler)
    app.register_error_handler(Exception, api_error_handler)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "The token has expired", "code": 401}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return jsonify({"error": "Invalid token", "code": 401}), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return jsonify({"error": "Missing Authorization Header", "code": 401}), 401
