# Pulse Feedback Store
# All database read/write operations

import logging

from sqlalchemy import Column, Index, Integer, String, Text, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL, SENTIMENTS
from .exceptions import StorageError
from .models import FeedbackRecord

logger = logging.getLogger(__name__)

Base = declarative_base()


class Feedback(Base):
    __tablename__ = 'feedback'

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    source = Column(String)
    sentiment = Column(String)
    created_at = Column(String, nullable=False)  # ISO-8601, set by the pipeline

    def to_record(self):
        return FeedbackRecord(
            id=self.id,
            text=self.text,
            source=self.source,
            sentiment=self.sentiment,
            created_at=self.created_at
        )


# Recent-first listings read the table in this order
Index('idx_feedback_created_at', Feedback.__table__.c.created_at.desc())


class FeedbackStore:
    """Append-only feedback table behind a SQLAlchemy engine.

    Any database failure surfaces as StorageError. The schema is not
    created implicitly; call create_schema() at startup.
    """

    def __init__(self, database_url=None, engine=None):
        if engine is None:
            engine = create_engine(database_url or DATABASE_URL, pool_pre_ping=True)
        self.engine = engine
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def create_schema(self):
        """Create the feedback table and index (won't recreate existing tables)"""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Error creating feedback schema: {e}")
            raise StorageError(f"Could not create schema: {e}") from e

    # ===================
    # WRITE OPERATIONS
    # ===================

    def insert(self, text, source, sentiment, created_at):
        """Append a feedback row and return its new id."""
        try:
            with self.Session() as session:
                row = Feedback(text=text, source=source, sentiment=sentiment, created_at=created_at)
                session.add(row)
                session.commit()
                return row.id
        except SQLAlchemyError as e:
            logger.error(f"Error inserting feedback: {e}")
            raise StorageError(f"Insert failed: {e}") from e

    # ===================
    # READ OPERATIONS
    # ===================

    def list_recent(self, limit):
        """Most recent feedback first."""
        return self.list_filtered(limit=limit)

    def list_filtered(self, sentiment=None, keyword=None, limit=50):
        """Feedback matching an exact sentiment and/or a text substring.

        The keyword match is case-insensitive. With neither filter set
        this is the same as list_recent().
        """
        query = select(Feedback)
        if sentiment:
            query = query.where(Feedback.sentiment == sentiment)
        if keyword:
            query = query.where(Feedback.text.icontains(keyword, autoescape=True))
        query = query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).limit(limit)

        try:
            with self.Session() as session:
                return [row.to_record() for row in session.scalars(query)]
        except SQLAlchemyError as e:
            logger.error(f"Error listing feedback: {e}")
            raise StorageError(f"Query failed: {e}") from e

    def count_by_sentiment(self):
        """Row counts per sentiment, with every sentiment present."""
        query = select(Feedback.sentiment, func.count(Feedback.id)).group_by(Feedback.sentiment)

        try:
            with self.Session() as session:
                rows = session.execute(query).all()
        except SQLAlchemyError as e:
            logger.error(f"Error counting feedback: {e}")
            raise StorageError(f"Count failed: {e}") from e

        counts = {sentiment: 0 for sentiment in SENTIMENTS}
        for sentiment, count in rows:
            if sentiment in counts:
                counts[sentiment] = count
        return counts

    def count(self):
        try:
            with self.Session() as session:
                return session.scalar(select(func.count(Feedback.id)))
        except SQLAlchemyError as e:
            logger.error(f"Error counting feedback: {e}")
            raise StorageError(f"Count failed: {e}") from e
