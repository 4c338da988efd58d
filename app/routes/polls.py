from flask import jsonify, request

from app.extensions import db
from app.services.network import client_ip
from app.services.polls import (
    create_poll,
    get_poll,
    poll_feed,
    visible_poll_results,
)


def register_poll_routes(app):
    @app.route("/api/polls", methods=["POST"])
    def create_poll_endpoint():
        payload = request.get_json(silent=True)
        poll = create_poll(db.session, payload)
        return jsonify({"poll": poll.to_dict()}), 201

    @app.route("/api/polls/feed")
    def polls_feed():
        feed = poll_feed(
            db.session,
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return jsonify(feed)

    @app.route("/api/polls/<poll_id>")
    def poll_detail(poll_id):
        poll = get_poll(db.session, poll_id)
        return jsonify(poll.to_dict())

    @app.route("/api/polls/<poll_id>/results")
    def poll_results(poll_id):
        results = visible_poll_results(db.session, poll_id, client_ip(request))
        return jsonify(results)
