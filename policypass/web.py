"""HTTP front end: POST a settings object, get a batch of passwords back as JSON."""

import logging

from flask import Flask, jsonify, request

from .config import DEFAULTS, config_to_password_config
from .errors import EntropySourceError, InvalidConfiguration
from .generator import generate_passwords

logger = logging.getLogger(__name__)

# bounds on what a single request may ask for
MAX_COUNT = 1000
MAX_LENGTH = 1024


def create_app(source=None) -> Flask:
    app = Flask(__name__)

    @app.route("/")
    def home():
        return jsonify({"message": "policypass API is running"})

    @app.route("/generate", methods=["POST"])
    def generate_route():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "request body must be a JSON object"}), 400
        settings = {k: v for k, v in data.items() if k in DEFAULTS}
        try:
            config = config_to_password_config(DEFAULTS, **settings)
        except InvalidConfiguration as e:
            return jsonify({"error": str(e)}), 400
        if config.count > MAX_COUNT:
            return jsonify({"error": f"count must be <= {MAX_COUNT}"}), 400
        if config.length.maximum > MAX_LENGTH:
            return jsonify({"error": f"length must be <= {MAX_LENGTH}"}), 400
        try:
            passwords = generate_passwords(config, source=source)
        except EntropySourceError:
            logger.exception("secure random source failed")
            return jsonify({"error": "secure random source unavailable"}), 503
        return jsonify({"passwords": passwords})

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
