# Pulse Models
# Feedback records and query filters passed between the service layers

from dataclasses import dataclass
from typing import Optional

from .config import KEYWORD_MAX_LENGTH, SENTIMENTS
from .exceptions import ValidationError


@dataclass(frozen=True)
class FeedbackRecord:
    """A single piece of submitted feedback, as stored"""

    id: Optional[int]
    text: str
    source: str
    sentiment: str
    created_at: str

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'source': self.source,
            'sentiment': self.sentiment,
            'createdAt': self.created_at
        }


@dataclass
class QueryFilter:
    """Structured filter narrowing a feedback listing.

    Blank values are dropped, keywords are capped at KEYWORD_MAX_LENGTH
    and an unknown sentiment is rejected.
    """

    sentiment: Optional[str] = None
    keyword: Optional[str] = None

    def __post_init__(self):
        if self.sentiment is not None:
            sentiment = str(self.sentiment).strip().lower()
            if not sentiment:
                sentiment = None
            elif sentiment not in SENTIMENTS:
                raise ValidationError(f"Unknown sentiment '{self.sentiment}'")
            self.sentiment = sentiment

        if self.keyword is not None:
            keyword = str(self.keyword).strip()[:KEYWORD_MAX_LENGTH]
            self.keyword = keyword or None

    @property
    def is_empty(self):
        return self.sentiment is None and self.keyword is None

    def to_dict(self):
        return {'sentiment': self.sentiment, 'keyword': self.keyword}
