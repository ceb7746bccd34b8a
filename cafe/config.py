# coding: utf8
import os
from datetime import timedelta


class Config(object):
    SECRET_KEY = os.environ.get("SECRET_KEY") or "<your secret key>"
    SITE_URL = os.environ.get("SITE_URL") or "https://www.klubnikacafe.com"

    REDIS_URL = os.environ.get("REDIS_URL") or "redis://localhost:6379/0"

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "SQLALCHEMY_DATABASE_URI"
    ) or "{engine}://{user}:{password}@{host}:{port}/{db}".format(
        engine=os.environ.get("SQLALCHEMY_ENGINE") or "mysql+pymysql",
        user=os.environ.get("SQLALCHEMY_USER") or "root",
        password=os.environ.get("SQLALCHEMY_PASSWORD") or "",
        host=os.environ.get("SQLALCHEMY_HOST") or "127.0.0.1",
        port=int(os.environ.get("SQLALCHEMY_PORT", 3306)),
        db=os.environ.get("SQLALCHEMY_DATABASE") or "cafe",
    )

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 10,
        "pool_recycle": 900,
        "pool_pre_ping": True,
    }

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_ADMIN_TOKEN_EXPIRES = timedelta(hours=1)

    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")

    RAZORPAY_KEY_ID = os.environ.get("RAZORPAY_KEY_ID")
    RAZORPAY_KEY_SECRET = os.environ.get("RAZORPAY_KEY_SECRET")

    EMAIL_HOST = os.environ.get("EMAIL_HOST") or "smtp.gmail.com"
    EMAIL_PORT = int(os.environ.get("EMAIL_PORT") or 587)
    EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER")
    EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD")
    EMAIL_FROM_NAME = os.environ.get("EMAIL_FROM_NAME") or "Klubnika Cafe"
    EMAIL_ENCRYPTION = (os.environ.get("EMAIL_ENCRYPTION") or "tls").lower()

    SMS_API_URL = os.environ.get("SMS_API_URL") or "https://www.fast2sms.com/dev/bulkV2"
    SMS_API_KEY = os.environ.get("SMS_API_KEY")
    SMS_SENDER_ID = os.environ.get("SMS_SENDER_ID") or "KLBNKA"

    # seconds, applied to gateway, SMTP and SMS calls
    EXTERNAL_TIMEOUT = int(os.environ.get("EXTERNAL_TIMEOUT") or 10)

    CELERY_BROKER_URL = (
        os.environ.get("CELERY_BROKER_URL") or "redis://localhost:6379/0"
    )
    CELERY_RESULT_BACKEND = (
        os.environ.get("CELERY_RESULT_BACKEND") or "redis://localhost:6379/0"
    )
    CELERY_TASK_ALWAYS_EAGER = False
    CELERY_WORKER_CONCURRENCY = int(os.environ.get("CELERY_WORKER_CONCURRENCY") or 4)

    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE") or "gevent"
    SOCKETIO_MESSAGE_QUEUE = os.environ.get("SOCKETIO_MESSAGE_QUEUE") or REDIS_URL

    CORS_SCHEME = os.environ.get("CORS_SCHEME") or "*"

    CREATE_TABLES = False

    PROPAGATE_EXCEPTIONS = True
    ERROR_INCLUDE_MESSAGE = False

    REQUIRED_SETTINGS = (
        "JWT_SECRET_KEY",
        "ADMIN_USERNAME",
        "ADMIN_PASSWORD",
        "RAZORPAY_KEY_ID",
        "RAZORPAY_KEY_SECRET",
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}

    JWT_SECRET_KEY = "test-jwt-secret"
    ADMIN_USERNAME = "cafe_admin"
    ADMIN_PASSWORD = "admin-password"
    RAZORPAY_KEY_ID = "rzp_test_key"
    RAZORPAY_KEY_SECRET = "rzp_test_secret"

    CELERY_BROKER_URL = "memory://"
    CELERY_RESULT_BACKEND = "cache+memory://"
    CELERY_TASK_ALWAYS_EAGER = True

    BCRYPT_LOG_ROUNDS = 4

    SOCKETIO_ASYNC_MODE = "threading"
    SOCKETIO_MESSAGE_QUEUE = None

    CREATE_TABLES = True


class DevelopmentConfig(Config):
    DEBUG = True
    CREATE_TABLES = True


class ProductionConfig(Config):
    DEBUG = False
    TESTING = False


configs = {
    "develop": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
