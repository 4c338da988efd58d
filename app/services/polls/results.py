from sqlalchemy import func

from app.models import Vote
from app.models.poll import HIDE_RESULTS_ENTIRELY, HIDE_RESULTS_UNTIL_VOTE
from app.services.network import UNKNOWN_IP
from app.services.polls.creation import get_poll
from app.services.polls.errors import ResultsHiddenError

PERCENTAGE_PRECISION = 2


def count_votes_by_option(session, poll_id):
    rows = (
        session.query(Vote.option_index, func.count(Vote.id))
        .filter(Vote.poll_id == poll_id)
        .group_by(Vote.option_index)
        .all()
    )
    return {option_index: count for option_index, count in rows}


def tally_poll_results(poll, counts_by_index):
    """Pair per-index vote counts with the poll's options.

    Counts for indices outside the poll's option range are left out of the
    results and of ``totalVotes``, and reported as ``excludedVotes``. A
    multi-select submission contributes one vote per selected option, so
    ``totalVotes`` counts selections rather than submissions.
    """
    labels = poll.option_labels()
    option_counts = {index: 0 for index in range(len(labels))}
    excluded_votes = 0

    for index, count in counts_by_index.items():
        if index in option_counts:
            option_counts[index] += int(count)
        else:
            excluded_votes += int(count)

    total_votes = sum(option_counts.values())

    results = []
    for index, label in enumerate(labels):
        count = option_counts[index]
        percentage = (
            round(count / total_votes * 100, PERCENTAGE_PRECISION)
            if total_votes > 0
            else 0.0
        )
        row = {"option": label, "votes": count, "percentage": percentage}
        if poll.is_image_poll:
            row["image_url"] = poll.image_options[index].image_url
        results.append(row)

    return {
        "poll": poll.to_dict(),
        "results": results,
        "totalVotes": total_votes,
        "excludedVotes": excluded_votes,
    }


def get_poll_results(session, poll_id):
    poll = get_poll(session, poll_id)
    return tally_poll_results(poll, count_votes_by_option(session, poll.id))


def visible_poll_results(session, poll_id, voter_ip):
    """Results as served to the public, honoring the poll's hide_results mode."""
    poll = get_poll(session, poll_id)

    if poll.hide_results == HIDE_RESULTS_ENTIRELY:
        raise ResultsHiddenError("Results are hidden for this poll.")

    if poll.hide_results == HIDE_RESULTS_UNTIL_VOTE:
        # Unidentified clients share one address, so their votes prove nothing.
        has_voted = voter_ip != UNKNOWN_IP and (
            session.query(Vote.id)
            .filter(Vote.poll_id == poll.id, Vote.voter_ip == voter_ip)
            .first()
        )
        if not has_voted:
            raise ResultsHiddenError("You must vote before seeing results.")

    return tally_poll_results(poll, count_votes_by_option(session, poll.id))
