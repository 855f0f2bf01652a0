"""
Shared fixtures for the Pulse test suite.
"""

import pytest

from pulse.classifier import Classifier
from pulse.exceptions import ClassificationError
from pulse.store import FeedbackStore


class StubClassifier(Classifier):
    """Classifier returning canned model output instead of calling out"""

    def __init__(self, results=None, error=None):
        self.results = results if results is not None else [{'label': 'POSITIVE', 'score': 0.98}]
        self.error = error
        self.calls = []

    def rank(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.results


@pytest.fixture
def store(tmp_path):
    """A FeedbackStore on a fresh SQLite file with the schema in place"""
    store = FeedbackStore(f"sqlite:///{tmp_path / 'pulse.db'}")
    store.create_schema()
    return store


@pytest.fixture
def bare_store(tmp_path):
    """A FeedbackStore whose schema was never created"""
    return FeedbackStore(f"sqlite:///{tmp_path / 'empty.db'}")


@pytest.fixture
def classifier():
    return StubClassifier()


@pytest.fixture
def failing_classifier():
    return StubClassifier(error=ClassificationError('model unavailable'))


@pytest.fixture
def seeded_store(store):
    """Store with a small, time-ordered mix of feedback"""
    rows = [
        ('Love the new dashboard', 'email', 'positive', '2026-01-01T09:00:00+00:00'),
        ('Login page has a bug', 'support', 'negative', '2026-01-02T09:00:00+00:00'),
        ('It is fine I guess', 'survey', 'neutral', '2026-01-03T09:00:00+00:00'),
        ('Another BUG in checkout', 'support', 'negative', '2026-01-04T09:00:00+00:00'),
        ('Great support team', 'twitter', 'positive', '2026-01-05T09:00:00+00:00'),
    ]
    for text, source, sentiment, created_at in rows:
        store.insert(text, source, sentiment, created_at)
    return store


@pytest.fixture
def make_classifier():
    """Factory for stub classifiers with custom model output"""
    return StubClassifier
