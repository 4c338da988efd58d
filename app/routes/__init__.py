from app.routes.errors import register_error_handlers
from app.routes.polls import register_poll_routes
from app.routes.votes import register_vote_routes


def register_routes(app):
    register_error_handlers(app)
    register_poll_routes(app)
    register_vote_routes(app)
