from app.models import Poll, Vote


def create(client, payload):
    response = client.post("/api/polls", json=payload)
    assert response.status_code == 201
    return response.get_json()["poll"]


def vote(client, poll_id, payload, voter_ip="203.0.113.1"):
    return client.post(
        f"/api/polls/{poll_id}/vote",
        json=payload,
        headers={"X-Forwarded-For": voter_ip},
    )


def test_create_vote_and_read_results(client):
    poll = create(client, {"question": "Color?", "options": ["Red", "Blue"]})

    response = vote(client, poll["id"], {"option_index": 1})
    assert response.status_code == 201
    assert response.get_json() == {"success": True, "recorded": 1}

    results = client.get(f"/api/polls/{poll['id']}/results").get_json()
    assert results["results"] == [
        {"option": "Red", "votes": 0, "percentage": 0},
        {"option": "Blue", "votes": 1, "percentage": 100},
    ]
    assert results["totalVotes"] == 1


def test_create_poll_returns_generated_id(client, db_session):
    poll = create(
        client,
        {
            "question": "Lunch?",
            "options": ["Soup", "Salad", "Pasta"],
            "allowMultipleSelections": True,
            "maxSelections": 2,
        },
    )

    assert poll["id"]
    assert poll["poll_type"] == "text"
    assert poll["options"] == ["Soup", "Salad", "Pasta"]
    assert poll["allow_multiple_selections"] is True
    assert poll["max_selections"] == 2
    assert db_session.get(Poll, poll["id"]) is not None


def test_create_poll_validation_error(client, db_session):
    response = client.post("/api/polls", json={"question": "Color?", "options": ["Red"]})

    assert response.status_code == 400
    assert response.get_json()["kind"] == "insufficient-options"
    assert db_session.query(Poll).count() == 0


def test_create_poll_rejects_non_json_body(client):
    response = client.post("/api/polls", data="question=Color", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["kind"] == "invalid-payload"


def test_get_poll_and_unknown_poll(client):
    poll = create(
        client,
        {
            "question": "Best view?",
            "imageOptions": [
                {"imageUrl": "https://img.example/a.png", "caption": "Lake"},
                {"imageUrl": "https://img.example/b.png"},
            ],
        },
    )

    response = client.get(f"/api/polls/{poll['id']}")
    assert response.status_code == 200
    data = response.get_json()
    assert data["poll_type"] == "image"
    assert [option["caption"] for option in data["image_options"]] == ["Lake", None]

    missing = client.get("/api/polls/no-such-poll")
    assert missing.status_code == 404
    assert missing.get_json()["kind"] == "not-found"


def test_multi_select_submission_rules(client, db_session):
    poll = create(
        client,
        {
            "question": "Toppings?",
            "options": ["Cheese", "Ham", "Olives"],
            "allow_multiple_selections": True,
            "max_selections": 2,
        },
    )

    rejected = vote(client, poll["id"], {"option_indices": [0, 1, 2]})
    assert rejected.status_code == 400
    assert rejected.get_json()["kind"] == "invalid-selection"
    assert db_session.query(Vote).count() == 0

    accepted = vote(client, poll["id"], {"option_indices": [0, 1]})
    assert accepted.status_code == 201
    assert accepted.get_json()["recorded"] == 2
    assert db_session.query(Vote).count() == 2


def test_vote_errors(client, db_session):
    poll = create(client, {"question": "Color?", "options": ["Red", "Blue"]})

    out_of_range = vote(client, poll["id"], {"option_index": 5})
    assert out_of_range.status_code == 400
    assert out_of_range.get_json()["kind"] == "out-of-range"

    too_many = vote(client, poll["id"], {"optionIndex": [0, 1]})
    assert too_many.status_code == 400
    assert too_many.get_json()["kind"] == "invalid-selection"

    missing = vote(client, "no-such-poll", {"option_index": 0})
    assert missing.status_code == 404

    empty = vote(client, poll["id"], {})
    assert empty.status_code == 400

    assert db_session.query(Vote).count() == 0


def test_repeat_vote_from_same_address_is_a_conflict(client):
    poll = create(client, {"question": "Color?", "options": ["Red", "Blue"]})

    assert vote(client, poll["id"], {"option_index": 0}).status_code == 201

    repeat = vote(client, poll["id"], {"option_index": 1})
    assert repeat.status_code == 409
    assert repeat.get_json()["kind"] == "already-voted"

    other = vote(client, poll["id"], {"option_index": 1}, voter_ip="203.0.113.2")
    assert other.status_code == 201


def test_vote_status(client):
    poll = create(client, {"question": "Color?", "options": ["Red", "Blue"]})
    headers = {"X-Forwarded-For": "203.0.113.1"}

    before = client.get(f"/api/polls/{poll['id']}/vote-status", headers=headers)
    vote(client, poll["id"], {"option_index": 1})
    after = client.get(f"/api/polls/{poll['id']}/vote-status", headers=headers)

    assert before.get_json() == {
        "hasVoted": False,
        "votedOptions": [],
        "allowMultiple": False,
    }
    assert after.get_json()["votedOptions"] == [1]
    assert client.get("/api/polls/no-such-poll/vote-status").status_code == 404


def test_hidden_results(client):
    poll = create(
        client,
        {"question": "Color?", "options": ["Red", "Blue"], "hide_results": "until_vote"},
    )
    headers = {"X-Forwarded-For": "203.0.113.1"}

    hidden = client.get(f"/api/polls/{poll['id']}/results", headers=headers)
    assert hidden.status_code == 403
    assert hidden.get_json()["kind"] == "results-hidden"

    vote(client, poll["id"], {"option_index": 0})
    shown = client.get(f"/api/polls/{poll['id']}/results", headers=headers)
    assert shown.status_code == 200
    assert shown.get_json()["totalVotes"] == 1


def test_feed_endpoint(client):
    create(client, {"question": "First?", "options": ["A", "B"]})
    create(client, {"question": "Second?", "options": ["A", "B"]})

    response = client.get("/api/polls/feed?page=1&limit=1")

    assert response.status_code == 200
    data = response.get_json()
    assert len(data["polls"]) == 1
    assert data["pagination"] == {"page": 1, "limit": 1, "total": 2, "hasMore": True}
