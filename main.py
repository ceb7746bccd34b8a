# coding: utf8
from gevent import monkey

monkey.patch_all()

import os

from dotenv import load_dotenv

dotenv_path = os.path.join(os.path.dirname(__file__), ".env")
load_dotenv(dotenv_path=dotenv_path, override=True)

from cafe import create_app  # noqa
from cafe.config import configs as config  # noqa
from cafe.extensions import socketio  # noqa

config_name = os.environ.get("FLASK_CONFIG") or "develop"
config_app = config[config_name]
application = create_app(config_app)


@application.route("/", methods=["GET"])
def index():
    return {"message": "Klubnika Cafe API"}


if __name__ == "__main__":
    socketio.run(
        application,
        host=os.environ.get("HOST") or "0.0.0.0",
        port=int(os.environ.get("PORT") or 5000),
    )
