"""
SQLAlchemy models for the Absorbey database.
"""

import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship

from app.db.database import Base


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class ProjectRecord(Base):
    """A learning project built from one YouTube video."""
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    video_id = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    thumbnail = Column(String(512), nullable=True)
    youtube_url = Column(String(512), nullable=False)
    summary = Column(Text, nullable=False)
    quiz_cards = Column(JSON, nullable=False, default=list)
    flashcard_notes = Column(JSON, nullable=False, default=dict)  # card index (as str) -> note
    study_progress = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    quiz_attempts = relationship(
        "QuizAttemptRecord",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="QuizAttemptRecord.created_at",
    )

    def __repr__(self):
        return f"<ProjectRecord(id='{self.id}', title='{self.title}')>"


class QuizAttemptRecord(Base):
    """A finished pass through a project's quiz."""
    __tablename__ = "quiz_attempts"

    id = Column(String(36), primary_key=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    percentage = Column(Integer, nullable=False)
    answers = Column(JSON, nullable=False, default=list)
    time_spent = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    project = relationship("ProjectRecord", back_populates="quiz_attempts")

    def __repr__(self):
        return f"<QuizAttemptRecord(id='{self.id}', project_id='{self.project_id}', score={self.score})>"
