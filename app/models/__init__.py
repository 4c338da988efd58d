from app.models.image_option import ImageOption
from app.models.poll import Poll
from app.models.vote import Vote

__all__ = [
    "Poll",
    "ImageOption",
    "Vote",
]
