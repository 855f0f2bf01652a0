"""Error taxonomy for the Pulse feedback service."""


class PulseError(Exception):
    """Base exception for Pulse.

    ``status_code`` is the HTTP status the error maps to and
    ``public_message`` is what the client gets to see.
    """

    status_code = 500
    public_message = 'Internal server error'


class ValidationError(PulseError):
    """Raised when request input is missing or malformed."""

    status_code = 400

    @property
    def public_message(self):
        return str(self) or 'Invalid input'


class MalformedQueryError(PulseError):
    """Raised when a request body cannot be parsed."""

    status_code = 400

    @property
    def public_message(self):
        return str(self) or 'Invalid JSON'


class ClassificationError(PulseError):
    """Raised when the sentiment classifier is unavailable or errors."""

    public_message = 'Sentiment classification failed'


class StorageError(PulseError):
    """Raised when the feedback store is unreachable or has no schema."""

    public_message = 'Storage unavailable'
