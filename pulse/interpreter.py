# Pulse Query Interpreter
# Turns a free-text question into a sentiment/keyword filter
#
# This is rule matching, not NLP. Both rule tables are checked in order
# and the first hit wins.

import re

from .config import KEYWORD_MAX_LENGTH
from .exceptions import ValidationError
from .helpers import truncate
from .models import QueryFilter

SENTIMENT_RULES = [
    ('positive', ('positive', 'good', 'great', 'excellent')),
    ('negative', ('negative', 'bad', 'issue', 'problem', 'bug')),
    ('neutral', ('neutral',))
]

KEYWORD_RULES = [
    re.compile(r'\babout\s+(\S+)'),
    re.compile(r'\bwith\s+(\S+)')
]


def detect_sentiment(query):
    """Return the sentiment of the first rule with a matching term, or None"""
    for sentiment, terms in SENTIMENT_RULES:
        if any(term in query for term in terms):
            return sentiment
    return None


def extract_keyword(query):
    """Return the word following 'about' or 'with', or None"""
    for pattern in KEYWORD_RULES:
        match = pattern.search(query)
        if match:
            return truncate(match.group(1), KEYWORD_MAX_LENGTH)
    return None


def interpret(query):
    """Map a question like 'negative feedback about bugs' to a QueryFilter.

    Matching is case-insensitive. When no sentiment term is found and no
    'about'/'with' phrase is present, the whole question becomes the
    keyword so the search still narrows to something.

    Args:
        query: The user's free-text question

    Returns:
        QueryFilter with sentiment and/or keyword set
    """
    if not isinstance(query, str) or not query.strip():
        raise ValidationError('Missing query')

    normalized = query.strip().lower()

    sentiment = detect_sentiment(normalized)
    keyword = extract_keyword(normalized)

    if keyword is None and sentiment is None:
        # QueryFilter caps the length
        keyword = normalized

    return QueryFilter(sentiment=sentiment, keyword=keyword)
