from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.services.polls.errors import PollServiceError


def register_error_handlers(app):
    @app.errorhandler(PollServiceError)
    def poll_service_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception("Database error while handling request")
        return jsonify({"error": "Internal server error", "kind": "persistence"}), 500

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found", "kind": "not-found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed", "kind": "method-not-allowed"}), 405
