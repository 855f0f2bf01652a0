"""
Tests for the ingestion pipeline: validate, classify, persist.
"""

from datetime import datetime, timedelta, timezone

import pytest

from pulse.exceptions import ClassificationError, StorageError, ValidationError
from pulse.pipeline import IngestionPipeline


class TestIngestionPipeline:

    @pytest.fixture
    def pipeline(self, classifier, store):
        return IngestionPipeline(classifier, store)

    def test_ingest_stores_record(self, pipeline, store):
        record = pipeline.ingest('The new release is fantastic', 'email')

        assert record.id is not None
        assert record.text == 'The new release is fantastic'
        assert record.source == 'email'
        assert record.sentiment == 'positive'
        assert store.count() == 1

    def test_round_trip_through_list_recent(self, pipeline, store):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)

        record = pipeline.ingest('Checkout is slow', 'web')
        stored = store.list_recent(20)[0]

        assert stored.id == record.id
        assert stored.text == 'Checkout is slow'
        assert stored.source == 'web'
        assert stored.sentiment == record.sentiment
        assert datetime.fromisoformat(stored.created_at) >= before

    def test_source_defaults_to_unknown(self, pipeline):
        assert pipeline.ingest('hello').source == 'unknown'
        assert pipeline.ingest('hello', '   ').source == 'unknown'

    @pytest.mark.parametrize('text', [None, '', '   ', '\n\t', 42, ['text'], {'text': 'x'}])
    def test_invalid_text_is_rejected_without_side_effects(self, pipeline, classifier, store, text):
        with pytest.raises(ValidationError):
            pipeline.ingest(text, 'web')

        assert classifier.calls == []
        assert store.count() == 0

    def test_non_string_source_is_rejected(self, pipeline, store):
        with pytest.raises(ValidationError):
            pipeline.ingest('hello', 123)
        assert store.count() == 0

    def test_classification_failure_writes_nothing(self, failing_classifier, store):
        pipeline = IngestionPipeline(failing_classifier, store)

        with pytest.raises(ClassificationError):
            pipeline.ingest('hello', 'web')

        assert store.count() == 0

    def test_storage_failure_propagates(self, classifier, bare_store):
        pipeline = IngestionPipeline(classifier, bare_store)

        with pytest.raises(StorageError):
            pipeline.ingest('hello', 'web')

    def test_low_confidence_stored_as_neutral(self, make_classifier, store):
        pipeline = IngestionPipeline(make_classifier([{'label': 'POSITIVE', 'score': 0.51}]), store)

        assert pipeline.ingest('it works').sentiment == 'neutral'
        assert store.count_by_sentiment()['neutral'] == 1

    def test_uses_injected_clock(self, classifier, store):
        pipeline = IngestionPipeline(classifier, store, clock=lambda: '2026-05-05T05:05:05+00:00')

        record = pipeline.ingest('hello')

        assert record.created_at == '2026-05-05T05:05:05+00:00'
        assert store.list_recent(1)[0].created_at == '2026-05-05T05:05:05+00:00'

    def test_source_is_stored_as_sent(self, pipeline, store):
        record = pipeline.ingest('hello', ' web ')

        assert record.source == ' web '
        assert store.list_recent(1)[0].source == ' web '
