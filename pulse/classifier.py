# Pulse Classifier
# Sentiment classification via an external model

import json
import logging
import math

import httpx
from anthropic import Anthropic, AnthropicError

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    CLASSIFIER_BACKEND,
    CLOUDFLARE_ACCOUNT_ID,
    CLOUDFLARE_API_TOKEN,
    CONFIDENCE_THRESHOLD,
    SENTIMENT_MODEL
)
from .exceptions import ClassificationError, ValidationError
from .helpers import strip_markdown_json

logger = logging.getLogger(__name__)

WORKERS_AI_URL = 'https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}'

CLAUDE_PROMPT = """You are a sentiment classifier for customer feedback.
Classify the feedback as POSITIVE or NEGATIVE and give your confidence.
Reply with JSON only, in the form {"label": "POSITIVE", "score": 0.93}.
The score is a number between 0 and 1."""


def _score(result):
    try:
        score = float(result.get('score'))
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(score) or not 0.0 <= score <= 1.0:
        return 0.0
    return score


def normalize_sentiment(results, threshold=CONFIDENCE_THRESHOLD):
    """Collapse the model's ranked labels into positive/neutral/negative.

    The underlying model only knows POSITIVE and NEGATIVE, so anything
    it is not confident about is reported as neutral.

    Args:
        results: List of {'label': str, 'score': float} dicts
        threshold: Minimum top score for a non-neutral answer

    Returns:
        'positive', 'neutral' or 'negative'
    """
    candidates = [r for r in results or [] if isinstance(r, dict)]
    if not candidates:
        return 'neutral'

    top = max(candidates, key=_score)
    label = top.get('label')
    if not label or _score(top) < threshold:
        return 'neutral'

    return 'positive' if str(label).upper() == 'POSITIVE' else 'negative'


class Classifier:
    """Base sentiment classifier.

    Subclasses implement rank(), returning the model's raw
    [{'label', 'score'}] output and raising ClassificationError when the
    model cannot be reached.
    """

    threshold = CONFIDENCE_THRESHOLD

    def rank(self, text):
        raise NotImplementedError

    def classify(self, text):
        if not isinstance(text, str) or not text.strip():
            raise ValidationError('Cannot classify empty text')
        return normalize_sentiment(self.rank(text), self.threshold)


class WorkersAIClassifier(Classifier):
    """Cloudflare Workers AI text classification (distilbert-sst-2 by default)"""

    def __init__(self, account_id=None, api_token=None, model=None, http_client=None):
        self.account_id = account_id or CLOUDFLARE_ACCOUNT_ID
        self.api_token = api_token or CLOUDFLARE_API_TOKEN
        self.model = model or SENTIMENT_MODEL
        self.http_client = http_client or httpx.Client(timeout=30.0, follow_redirects=True)

    def _get_headers(self):
        return {
            'Authorization': f'Bearer {self.api_token}',
            'Content-Type': 'application/json'
        }

    def rank(self, text):
        if not self.account_id or not self.api_token:
            raise ClassificationError('Workers AI credentials not configured')

        url = WORKERS_AI_URL.format(account_id=self.account_id, model=self.model)

        try:
            response = self.http_client.post(url, headers=self._get_headers(), json={'text': text})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Workers AI request failed: {e}")
            raise ClassificationError(f"Workers AI request failed: {e}") from e
        except ValueError as e:
            raise ClassificationError(f"Workers AI returned invalid JSON: {e}") from e

        if not isinstance(payload, dict) or payload.get('success') is False:
            errors = payload.get('errors') if isinstance(payload, dict) else payload
            raise ClassificationError(f"Workers AI returned an error: {errors}")

        result = payload.get('result')
        if not isinstance(result, list):
            raise ClassificationError(f"Unexpected Workers AI result: {result!r}")
        return result


class ClaudeClassifier(Classifier):
    """Sentiment via Claude, asked to answer in the same shape as the SST-2 model"""

    def __init__(self, api_key=None, model=None, client=None):
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_MODEL
        self._injected = client is not None
        self.client = client or Anthropic(
            api_key=self.api_key,
            http_client=httpx.Client(timeout=60.0, follow_redirects=True)
        )

    def rank(self, text):
        if not self.api_key and not self._injected:
            raise ClassificationError('Anthropic API key not configured')

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=100,
                temperature=0,
                system=CLAUDE_PROMPT,
                messages=[
                    {'role': 'user', 'content': f'Feedback:\n\n{text}'}
                ]
            )
            content = strip_markdown_json(response.content[0].text)
            result = json.loads(content)
        except AnthropicError as e:
            logger.error(f"Claude request failed: {e}")
            raise ClassificationError(f"Claude request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise ClassificationError(f"Claude returned invalid JSON: {e}") from e
        except (IndexError, AttributeError) as e:
            raise ClassificationError(f"Claude returned an empty response: {e}") from e

        if isinstance(result, dict):
            return [result]
        if isinstance(result, list):
            return result
        raise ClassificationError(f"Unexpected Claude result: {result!r}")


CLASSIFIERS = {
    'workers-ai': WorkersAIClassifier,
    'anthropic': ClaudeClassifier
}


def build_classifier(backend=None):
    """Create the classifier named by CLASSIFIER_BACKEND"""
    backend = backend or CLASSIFIER_BACKEND
    if backend not in CLASSIFIERS:
        raise ValueError(f"Unknown classifier backend '{backend}'")
    return CLASSIFIERS[backend]()
