"""Poll definition validation and persistence.

A creation payload is checked completely before anything touches the
session, so a rejected poll never leaves rows behind. Validation yields a
``TextPoll`` or an ``ImagePoll``; exactly one option representation exists
per definition.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.models import ImageOption, Poll
from app.models.poll import (
    HIDE_RESULTS_MODES,
    HIDE_RESULTS_NONE,
    POLL_TYPE_IMAGE,
    POLL_TYPE_TEXT,
)
from app.services.polls.errors import NotFoundError, PersistenceError, ValidationError

MIN_OPTIONS = 2


@dataclass(frozen=True)
class ImageChoice:
    image_url: str
    caption: Optional[str] = None


@dataclass(frozen=True)
class _PollSettings:
    question: str
    description: Optional[str]
    allow_multiple_selections: bool
    max_selections: Optional[int]
    hide_results: str


@dataclass(frozen=True)
class TextPoll(_PollSettings):
    options: Tuple[str, ...]

    poll_type = POLL_TYPE_TEXT


@dataclass(frozen=True)
class ImagePoll(_PollSettings):
    options: Tuple[ImageChoice, ...]

    poll_type = POLL_TYPE_IMAGE


def _field(payload, *names, default=None):
    for name in names:
        if name in payload and payload[name] is not None:
            return payload[name]
    return default


def _clean_question(payload, max_length):
    question = _field(payload, "question", default="")
    if not isinstance(question, str):
        raise ValidationError("Question must be text.", "invalid-payload")
    question = question.strip()
    if not question:
        raise ValidationError("Question is required.", "missing-question")
    if len(question) > max_length:
        raise ValidationError(
            f"Question cannot exceed {max_length} characters.", "question-too-long"
        )
    return question


def _clean_description(payload, max_length):
    description = _field(payload, "description")
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Description must be text.", "invalid-payload")
    description = description.strip() or None
    if description and len(description) > max_length:
        raise ValidationError(
            f"Description cannot exceed {max_length} characters.",
            "description-too-long",
        )
    return description


def _clean_text_options(raw_options, max_length):
    if not isinstance(raw_options, list):
        raise ValidationError("Options must be a list.", "invalid-payload")

    options = []
    for entry in raw_options:
        if not isinstance(entry, str):
            raise ValidationError("Every option must be text.", "invalid-payload")
        label = entry.strip()
        if not label:
            continue
        if len(label) > max_length:
            raise ValidationError(
                f"Options cannot exceed {max_length} characters.", "option-too-long"
            )
        options.append(label)
    return options


def _clean_image_options(raw_options, max_caption_length, max_image_url_length):
    if not isinstance(raw_options, list):
        raise ValidationError("Image options must be a list.", "invalid-payload")

    options = []
    for entry in raw_options:
        if not isinstance(entry, dict):
            raise ValidationError(
                "Every image option must be an object.", "invalid-payload"
            )
        image_url = _field(entry, "image_url", "imageUrl", default="")
        if not isinstance(image_url, str) or not image_url.strip():
            raise ValidationError(
                "Every image option needs an image.", "missing-image-reference"
            )
        image_url = image_url.strip()
        if len(image_url) > max_image_url_length:
            raise ValidationError(
                f"Images cannot exceed {max_image_url_length} characters.",
                "image-reference-too-long",
            )
        caption = _field(entry, "caption")
        if caption is not None:
            if not isinstance(caption, str):
                raise ValidationError("Captions must be text.", "invalid-payload")
            caption = caption.strip() or None
        if caption and len(caption) > max_caption_length:
            raise ValidationError(
                f"Captions cannot exceed {max_caption_length} characters.",
                "option-too-long",
            )
        options.append(ImageChoice(image_url=image_url, caption=caption))
    return options


def _resolve_options(payload, max_option_length, max_image_url_length):
    poll_type = _field(payload, "poll_type", "pollType")
    if poll_type is not None and poll_type not in (POLL_TYPE_TEXT, POLL_TYPE_IMAGE):
        raise ValidationError("Poll type must be 'text' or 'image'.", "invalid-payload")

    raw_text = _field(payload, "options", default=[])
    raw_images = _field(payload, "image_options", "imageOptions", default=[])

    if poll_type == POLL_TYPE_IMAGE:
        return POLL_TYPE_IMAGE, _clean_image_options(
            raw_images, max_option_length, max_image_url_length
        )
    if poll_type == POLL_TYPE_TEXT:
        return POLL_TYPE_TEXT, _clean_text_options(raw_text, max_option_length)

    text_options = _clean_text_options(raw_text, max_option_length)
    image_options = _clean_image_options(
        raw_images, max_option_length, max_image_url_length
    )
    if text_options and image_options:
        raise ValidationError(
            "A poll takes either text options or image options, not both.",
            "ambiguous-options",
        )
    if image_options:
        return POLL_TYPE_IMAGE, image_options
    return POLL_TYPE_TEXT, text_options


def _clean_max_selections(payload, allow_multiple, option_count):
    if not allow_multiple:
        return None

    max_selections = _field(payload, "max_selections", "maxSelections")
    if max_selections is None:
        return None
    if (
        isinstance(max_selections, bool)
        or not isinstance(max_selections, int)
        or max_selections < 1
        or max_selections > option_count
    ):
        raise ValidationError(
            f"Max selections must be a whole number between 1 and {option_count}.",
            "invalid-max-selections",
        )
    return max_selections


def validate_poll_definition(payload, config=None):
    """Check a creation payload and normalize it into a poll definition.

    ``config`` defaults to the active application's configuration and
    supplies the length and count limits.
    """
    if config is None:
        config = current_app.config
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.", "invalid-payload")

    max_options = config.get("POLLS_MAX_OPTIONS", 10)
    max_option_length = config.get("POLLS_MAX_OPTION_LENGTH", 100)

    question = _clean_question(payload, config.get("POLLS_MAX_QUESTION_LENGTH", 500))
    description = _clean_description(
        payload, config.get("POLLS_MAX_DESCRIPTION_LENGTH", 2000)
    )

    hide_results = _field(payload, "hide_results", "hideResults", default=HIDE_RESULTS_NONE)
    if hide_results not in HIDE_RESULTS_MODES:
        raise ValidationError(
            "Hide results must be one of: " + ", ".join(HIDE_RESULTS_MODES) + ".",
            "invalid-hide-results",
        )

    allow_multiple = _field(
        payload, "allow_multiple_selections", "allowMultipleSelections", default=False
    )
    if not isinstance(allow_multiple, bool):
        raise ValidationError(
            "Allow multiple selections must be true or false.", "invalid-payload"
        )

    poll_type, options = _resolve_options(
        payload,
        max_option_length,
        config.get("POLLS_MAX_IMAGE_URL_LENGTH", 65535),
    )
    if len(options) < MIN_OPTIONS:
        raise ValidationError(
            f"At least {MIN_OPTIONS} options are required.", "insufficient-options"
        )
    if len(options) > max_options:
        raise ValidationError(
            f"A poll can have at most {max_options} options.", "too-many-options"
        )

    max_selections = _clean_max_selections(payload, allow_multiple, len(options))

    definition_type = ImagePoll if poll_type == POLL_TYPE_IMAGE else TextPoll
    return definition_type(
        question=question,
        description=description,
        allow_multiple_selections=allow_multiple,
        max_selections=max_selections,
        hide_results=hide_results,
        options=tuple(options),
    )


def create_poll(session, payload):
    definition = validate_poll_definition(payload)

    poll = Poll(
        question=definition.question,
        description=definition.description,
        poll_type=definition.poll_type,
        options=list(definition.options) if isinstance(definition, TextPoll) else [],
        allow_multiple_selections=definition.allow_multiple_selections,
        max_selections=definition.max_selections,
        hide_results=definition.hide_results,
    )
    if isinstance(definition, ImagePoll):
        poll.image_options = [
            ImageOption(
                image_url=choice.image_url,
                caption=choice.caption,
                order_index=index,
            )
            for index, choice in enumerate(definition.options)
        ]

    try:
        session.add(poll)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        current_app.logger.exception("Could not create poll")
        raise PersistenceError() from exc

    current_app.logger.info(
        "Created %s poll %s with %d options",
        poll.poll_type,
        poll.id,
        len(definition.options),
    )
    return poll


def get_poll(session, poll_id):
    poll = session.get(Poll, poll_id)
    if poll is None:
        raise NotFoundError()
    return poll
