"""Vote submission checks and recording.

A submission selects one option index (single-select polls) or a set of
indices (multi-select polls). Every check runs before the first row is
added; all rows of a submission are committed in one transaction and share
a ``submission_id`` and ``voted_at``.
"""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.models import Vote
from app.models.poll import generate_id, utcnow
from app.services.network import UNKNOWN_IP
from app.services.polls.creation import get_poll
from app.services.polls.errors import (
    AlreadyVotedError,
    InvalidSelectionError,
    OutOfRangeError,
    PersistenceError,
)


def selection_from_payload(payload):
    if not isinstance(payload, dict):
        raise InvalidSelectionError("Request body must be a JSON object.")

    for key in ("option_indices", "option_index", "optionIndex"):
        if payload.get(key) is not None:
            return payload[key]
    raise InvalidSelectionError("Valid option index(es) required.")


def normalize_selection(selection):
    if isinstance(selection, (list, tuple)):
        indices = list(selection)
    else:
        indices = [selection]

    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError("Option indices must be whole numbers.")
    return indices


def check_selection(poll, indices):
    if not indices:
        raise InvalidSelectionError("Select at least one option.")

    option_count = poll.option_count
    for index in indices:
        if index < 0 or index >= option_count:
            raise OutOfRangeError(
                f"Option index {index} is out of range for a poll with "
                f"{option_count} options."
            )

    if not poll.allow_multiple_selections and len(indices) != 1:
        raise InvalidSelectionError("This poll only allows single selection.")

    if len(set(indices)) != len(indices):
        raise InvalidSelectionError("Duplicate selections not allowed.")

    if poll.max_selections is not None and len(indices) > poll.max_selections:
        raise InvalidSelectionError(
            f"Maximum {poll.max_selections} selections allowed."
        )


def previous_selections(session, poll_id, voter_ip):
    rows = (
        session.query(Vote.option_index)
        .filter(Vote.poll_id == poll_id, Vote.voter_ip == voter_ip)
        .order_by(Vote.option_index)
        .all()
    )
    return [row.option_index for row in rows]


def _check_previous_votes(session, poll, indices, voter_ip):
    previous = previous_selections(session, poll.id, voter_ip)
    if not previous:
        return

    if not poll.allow_multiple_selections:
        current_app.logger.warning(
            "Rejected repeat vote on poll %s from %s", poll.id, voter_ip
        )
        raise AlreadyVotedError("You have already voted on this poll.")

    if set(previous) & set(indices):
        current_app.logger.warning(
            "Rejected repeat selection on poll %s from %s", poll.id, voter_ip
        )
        raise AlreadyVotedError(
            "You have already voted for one or more of these options."
        )

    if poll.max_selections is not None and len(previous) + len(indices) > poll.max_selections:
        raise InvalidSelectionError(
            "Adding these selections would exceed the maximum of "
            f"{poll.max_selections} selections."
        )


def record_vote(session, poll_id, selection, voter_ip=UNKNOWN_IP, one_vote_per_ip=None):
    """Validate a submission against its poll and store one row per index.

    Returns the number of rows written. Nothing is written when any check
    fails or the commit does.
    """
    poll = get_poll(session, poll_id)
    indices = normalize_selection(selection)
    check_selection(poll, indices)

    if one_vote_per_ip is None:
        one_vote_per_ip = current_app.config.get("POLLS_ONE_VOTE_PER_IP", True)
    if one_vote_per_ip and voter_ip != UNKNOWN_IP:
        _check_previous_votes(session, poll, indices, voter_ip)

    submission_id = generate_id()
    voted_at = utcnow()
    rows = [
        Vote(
            poll_id=poll.id,
            option_index=index,
            voter_ip=voter_ip,
            submission_id=submission_id,
            voted_at=voted_at,
        )
        for index in indices
    ]

    try:
        session.add_all(rows)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.exception("Could not record vote on poll %s", poll.id)
        raise PersistenceError() from exc

    current_app.logger.info(
        "Recorded submission %s on poll %s (%d rows)", submission_id, poll.id, len(rows)
    )
    return len(rows)


def vote_status(session, poll_id, voter_ip):
    poll = get_poll(session, poll_id)
    voted_options = []
    if voter_ip != UNKNOWN_IP:
        voted_options = previous_selections(session, poll.id, voter_ip)
    return {
        "hasVoted": bool(voted_options),
        "votedOptions": voted_options,
        "allowMultiple": poll.allow_multiple_selections,
    }
