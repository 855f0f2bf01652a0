# Pulse Feedback
# Feedback ingestion, sentiment and querying service
#
# Clients POST free-text feedback; it is classified as positive, neutral
# or negative and stored. The read routes list recent or filtered
# feedback, and /api/insights turns a plain-English question into a
# filter the dashboard can apply.

import sys
import os
import logging

# Add parent directory to path for pulse imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify, render_template

from pulse import (
    FeedbackStore,
    IngestionPipeline,
    MalformedQueryError,
    QueryFilter,
    ValidationError,
    build_classifier,
    configure_logging,
    error_response,
    interpret,
    recent,
    retrieve,
    aggregate,
    SENTIMENTS
)

logger = logging.getLogger(__name__)


def _error(e):
    body, status = error_response(e)
    return jsonify(body), status


def create_app(store=None, classifier=None):
    """Build the Flask app.

    Args:
        store: FeedbackStore to use; defaults to one on DATABASE_URL
            with the schema created
        classifier: Sentiment classifier; defaults to CLASSIFIER_BACKEND

    Returns:
        Configured Flask app
    """
    configure_logging()
    app = Flask(__name__)

    if store is None:
        store = FeedbackStore()
        store.create_schema()
    if classifier is None:
        classifier = build_classifier()

    pipeline = IngestionPipeline(classifier, store)

    @app.route('/feedback', methods=['POST'])
    def submit_feedback():
        """Store a piece of feedback.

        Accepts:
            - text: The feedback itself (required)
            - source: Where it came from (optional, defaults to 'unknown')

        Returns:
            - success: True once classified and stored
        """
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise MalformedQueryError('Invalid JSON')

            pipeline.ingest(data.get('text'), data.get('source'))

            return jsonify({'success': True})

        except Exception as e:
            return _error(e)

    @app.route('/feedback', methods=['GET'])
    def list_feedback():
        """The 20 most recent pieces of feedback"""
        try:
            records = recent(store)
            return jsonify({'feedback': [r.to_dict() for r in records]})
        except Exception as e:
            return _error(e)

    @app.route('/api/feedback', methods=['GET'])
    def filter_feedback():
        """Feedback filtered by sentiment and/or keyword.

        Accepts (query string):
            - sentiment: positive, neutral or negative
            - keyword: Case-insensitive text to look for

        Returns:
            - feedback: Up to 50 matching records, newest first
        """
        try:
            query_filter = QueryFilter(
                sentiment=request.args.get('sentiment'),
                keyword=request.args.get('keyword')
            )
            records = retrieve(store, query_filter)
            return jsonify({'feedback': [r.to_dict() for r in records]})
        except Exception as e:
            return _error(e)

    @app.route('/api/insights', methods=['GET'])
    def insights():
        """Translate a question into filters, e.g. 'negative feedback about bugs'"""
        try:
            query = request.args.get('q')
            if not query or not query.strip():
                raise ValidationError("Missing query parameter 'q'")

            query_filter = interpret(query)
            return jsonify({'filters': query_filter.to_dict()})
        except Exception as e:
            return _error(e)

    @app.route('/dashboard', methods=['GET'])
    def dashboard():
        """Sentiment overview with filter and question controls"""
        try:
            counts = aggregate(store)
            return render_template(
                'dashboard.html',
                counts=counts,
                total=sum(counts.values()),
                sentiments=SENTIMENTS,
                feedback=recent(store)
            )
        except Exception as e:
            logger.exception(f"Dashboard failed: {e}")
            return 'Error loading dashboard', 500, {'Content-Type': 'text/plain; charset=utf-8'}

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': 'Pulse Feedback',
            'version': '1.0'
        })

    return app


if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
