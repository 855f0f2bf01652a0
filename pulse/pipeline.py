# Pulse Ingestion Pipeline
# validate -> classify -> persist

import logging

from .config import DEFAULT_SOURCE
from .exceptions import PulseError, ValidationError
from .helpers import utc_now_iso
from .models import FeedbackRecord

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Takes raw feedback through classification into the store.

    Nothing is written unless the text is valid and the classifier
    answered. Failures are not retried.
    """

    def __init__(self, classifier, store, clock=utc_now_iso):
        self.classifier = classifier
        self.store = store
        self.clock = clock

    def ingest(self, text, source=None):
        """Classify and store one piece of feedback.

        Args:
            text: The feedback text (required, non-blank)
            source: Where it came from; defaults to 'unknown'

        Returns:
            The stored FeedbackRecord, including its new id

        Raises:
            ValidationError, ClassificationError, StorageError
        """
        if not isinstance(text, str) or not text.strip():
            raise ValidationError('Missing or empty text field')

        if source is not None and not isinstance(source, str):
            raise ValidationError('Source must be a string')
        if source is None or not source.strip():
            source = DEFAULT_SOURCE

        try:
            sentiment = self.classifier.classify(text)
            created_at = self.clock()
            record_id = self.store.insert(text, source, sentiment, created_at)
        except PulseError as e:
            logger.warning(f"Feedback from '{source}' not stored: {type(e).__name__}")
            raise

        logger.info(f"Stored feedback {record_id} from '{source}' as {sentiment}")

        return FeedbackRecord(
            id=record_id,
            text=text,
            source=source,
            sentiment=sentiment,
            created_at=created_at
        )
