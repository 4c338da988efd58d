from app.services.polls.creation import (
    ImageChoice,
    ImagePoll,
    TextPoll,
    create_poll,
    get_poll,
    validate_poll_definition,
)
from app.services.polls.feed import poll_feed
from app.services.polls.results import (
    count_votes_by_option,
    get_poll_results,
    tally_poll_results,
    visible_poll_results,
)
from app.services.polls.voting import (
    record_vote,
    selection_from_payload,
    vote_status,
)

__all__ = [
    "ImageChoice",
    "ImagePoll",
    "TextPoll",
    "count_votes_by_option",
    "create_poll",
    "get_poll",
    "get_poll_results",
    "poll_feed",
    "record_vote",
    "selection_from_payload",
    "tally_poll_results",
    "validate_poll_definition",
    "visible_poll_results",
    "vote_status",
]
