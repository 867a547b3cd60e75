from flask import Flask, request, jsonify
from flask_cors import CORS
import logging

import auth_service
from config import Config
from errors import AuthenticationError, TaskMasterError
from models import db

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


def get_payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def get_field(data, name):
    value = data.get(name)
    if value is None or not isinstance(value, str):
        return None
    return value


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    db.init_app(app)
    with app.app_context():
        db.create_all()

    register_handlers(app)
    register_routes(app)
    return app


def register_handlers(app):
    @app.before_request
    def log_request():
        # Bodies carry passwords, so only the method and path are logged
        logger.info(f"{request.method} {request.path}")

    @app.errorhandler(TaskMasterError)
    def handle_taskmaster_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"message": "Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f"Server error: {e}")
        return jsonify({"message": "Internal server error"}), 500


def register_routes(app):
    @app.route('/api/auth/register', methods=['POST'])
    def register():
        data = get_payload()
        user = auth_service.register(
            get_field(data, 'username'),
            get_field(data, 'email'),
            get_field(data, 'password'),
        )
        return jsonify(user.to_public()), 201

    @app.route('/api/auth/login', methods=['POST'])
    def login():
        data = get_payload()
        token, user = auth_service.login(get_field(data, 'email'), get_field(data, 'password'))
        return jsonify({"token": token, "user": user.to_public()}), 200

    @app.route('/api/auth/me', methods=['GET'])
    def me():
        header = request.headers.get('Authorization', '')
        if not header.startswith('Bearer '):
            raise AuthenticationError("Missing token")
        user = auth_service.verify_token(header.split(' ', 1)[1])
        return jsonify(user.to_public()), 200


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=True)
