# Pulse Shared Module
# Feedback ingestion, storage and querying used by the Pulse service

from .config import (
    DATABASE_URL,
    SENTIMENTS,
    RECENT_LIMIT,
    FILTERED_LIMIT
)

from .exceptions import (
    PulseError,
    ValidationError,
    MalformedQueryError,
    ClassificationError,
    StorageError
)

from .helpers import (
    configure_logging,
    error_response,
    utc_now_iso
)

from .models import FeedbackRecord, QueryFilter

from .classifier import (
    Classifier,
    WorkersAIClassifier,
    ClaudeClassifier,
    build_classifier,
    normalize_sentiment
)

from .store import FeedbackStore

from .pipeline import IngestionPipeline

from .interpreter import interpret

from .retrieval import (
    recent,
    retrieve,
    aggregate
)
