# Pulse Retrieval
# Read-side views over the feedback store

from .config import FILTERED_LIMIT, RECENT_LIMIT


def recent(store):
    """The latest feedback, newest first"""
    return store.list_recent(RECENT_LIMIT)


def retrieve(store, query_filter=None, limit=FILTERED_LIMIT):
    """Feedback matching a QueryFilter, capped at FILTERED_LIMIT rows"""
    limit = max(0, min(limit, FILTERED_LIMIT))
    if query_filter is None or query_filter.is_empty:
        return store.list_filtered(limit=limit)
    return store.list_filtered(
        sentiment=query_filter.sentiment,
        keyword=query_filter.keyword,
        limit=limit
    )


def aggregate(store):
    """Feedback counts for every sentiment"""
    return store.count_by_sentiment()
