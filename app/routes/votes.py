from flask import jsonify, request

from app.extensions import db
from app.services.network import client_ip
from app.services.polls import record_vote, selection_from_payload, vote_status


def register_vote_routes(app):
    @app.route("/api/polls/<poll_id>/vote", methods=["POST"])
    def submit_vote(poll_id):
        selection = selection_from_payload(request.get_json(silent=True))
        recorded = record_vote(
            db.session,
            poll_id,
            selection,
            voter_ip=client_ip(request),
        )
        return jsonify({"success": True, "recorded": recorded}), 201

    @app.route("/api/polls/<poll_id>/vote-status")
    def poll_vote_status(poll_id):
        return jsonify(vote_status(db.session, poll_id, client_ip(request)))
