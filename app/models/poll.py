import json
import uuid
from datetime import datetime, timezone

from flask import current_app

from app.extensions import db

POLL_TYPE_TEXT = "text"
POLL_TYPE_IMAGE = "image"

HIDE_RESULTS_NONE = "none"
HIDE_RESULTS_UNTIL_VOTE = "until_vote"
HIDE_RESULTS_ENTIRELY = "entirely"
HIDE_RESULTS_MODES = (HIDE_RESULTS_NONE, HIDE_RESULTS_UNTIL_VOTE, HIDE_RESULTS_ENTIRELY)


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class Poll(db.Model):
    __tablename__ = "polls"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    question = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    poll_type = db.Column(db.String(10), nullable=False, default=POLL_TYPE_TEXT)
    options = db.Column(db.JSON, nullable=False, default=list)
    allow_multiple_selections = db.Column(db.Boolean, nullable=False, default=False)
    max_selections = db.Column(db.Integer, nullable=True)
    hide_results = db.Column(
        db.String(20),
        nullable=False,
        default=HIDE_RESULTS_NONE,
        server_default=HIDE_RESULTS_NONE,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    image_options = db.relationship(
        "ImageOption",
        backref="poll",
        lazy=True,
        order_by="ImageOption.order_index",
        cascade="all, delete-orphan",
    )
    votes = db.relationship("Vote", backref="poll", lazy=True)

    @property
    def is_image_poll(self):
        return self.poll_type == POLL_TYPE_IMAGE

    @property
    def text_options(self):
        # Older rows stored the label list as a serialized JSON string.
        raw = self.options
        if raw is None:
            return []
        if isinstance(raw, str):
            try:
                raw = json.loads(raw) if raw.strip() else []
            except ValueError:
                current_app.logger.warning(
                    "Poll %s has unreadable stored options", self.id
                )
                return []
        if not isinstance(raw, list):
            current_app.logger.warning(
                "Poll %s has stored options that are not a list", self.id
            )
            return []
        return [str(label) for label in raw]

    @property
    def option_count(self):
        if self.is_image_poll:
            return len(self.image_options)
        return len(self.text_options)

    def option_labels(self):
        """Display label for every option, in index order."""
        if self.is_image_poll:
            return [option.label for option in self.image_options]
        return self.text_options

    def to_dict(self):
        return {
            "id": self.id,
            "question": self.question,
            "description": self.description,
            "poll_type": self.poll_type,
            "options": [] if self.is_image_poll else self.text_options,
            "image_options": [option.to_dict() for option in self.image_options]
            if self.is_image_poll
            else [],
            "allow_multiple_selections": self.allow_multiple_selections,
            "max_selections": self.max_selections,
            "hide_results": self.hide_results,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
