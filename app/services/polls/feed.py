from flask import current_app
from sqlalchemy import func

from app.models import Poll, Vote
from app.models.poll import HIDE_RESULTS_NONE
from app.services.polls.results import tally_poll_results


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def _counts_for_polls(session, poll_ids):
    if not poll_ids:
        return {}

    rows = (
        session.query(Vote.poll_id, Vote.option_index, func.count(Vote.id))
        .filter(Vote.poll_id.in_(poll_ids))
        .group_by(Vote.poll_id, Vote.option_index)
        .all()
    )
    counts = {}
    for poll_id, option_index, count in rows:
        counts.setdefault(poll_id, {})[option_index] = count
    return counts


def poll_feed(session, page=None, limit=None):
    """Newest polls first, each with its vote counts when results are public."""
    config = current_app.config
    default_limit = config.get("POLLS_FEED_PAGE_SIZE", 10)
    max_limit = config.get("POLLS_FEED_MAX_PAGE_SIZE", 50)

    page = _positive_int(page, 1)
    limit = min(_positive_int(limit, default_limit), max_limit)
    offset = (page - 1) * limit

    polls = (
        session.query(Poll)
        .order_by(Poll.created_at.desc(), Poll.id)
        .offset(offset)
        .limit(limit)
        .all()
    )
    total = session.query(func.count(Poll.id)).scalar() or 0
    counts = _counts_for_polls(session, [poll.id for poll in polls])

    items = []
    for poll in polls:
        item = {
            "id": poll.id,
            "question": poll.question,
            "poll_type": poll.poll_type,
            "options": poll.option_labels(),
            "created_at": poll.created_at.isoformat() if poll.created_at else None,
            "vote_counts": None,
            "totalVotes": None,
        }
        if poll.hide_results == HIDE_RESULTS_NONE:
            tally = tally_poll_results(poll, counts.get(poll.id, {}))
            item["vote_counts"] = [row["votes"] for row in tally["results"]]
            item["totalVotes"] = tally["totalVotes"]
        items.append(item)

    return {
        "polls": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "hasMore": offset + limit < total,
        },
    }
