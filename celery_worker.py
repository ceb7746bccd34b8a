# celery -A celery_worker.celery worker --loglevel=info
import os

from dotenv import load_dotenv

load_dotenv()

from cafe import create_app  # noqa
from cafe.config import configs  # noqa
import cafe.tasks.notification_tasks  # noqa: F401

config_name = os.getenv("FLASK_CONFIG", "develop")
flask_app = create_app(configs[config_name])
celery = flask_app.extensions["celery"]
