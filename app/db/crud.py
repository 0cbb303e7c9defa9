"""
CRUD operations for the Absorbey database.

Every query is scoped to the owning user's ID.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models import ProjectRecord, QuizAttemptRecord, utcnow
from app.models.schemas import Project, QuizAttempt, QuizAttemptCreate, QuizCard, StudyProgress
from app.utils.helpers import get_timestamp, round_half_up
from app.utils.logger import logging

# Fields a client may overwrite through update_project
UPDATABLE_FIELDS = {"title", "thumbnail", "summary", "quiz_cards", "flashcard_notes", "study_progress"}


def _iso(value) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ") if value else get_timestamp()


def attempt_to_schema(record: QuizAttemptRecord) -> QuizAttempt:
    return QuizAttempt(
        id=record.id,
        date=_iso(record.created_at),
        score=record.score,
        total_questions=record.total_questions,
        percentage=record.percentage,
        answers=record.answers or [],
        time_spent=record.time_spent,
    )


def project_to_schema(record: ProjectRecord) -> Project:
    """Convert a database row into the API model."""
    return Project(
        id=record.id,
        user_id=record.user_id,
        title=record.title,
        thumbnail=record.thumbnail,
        video_id=record.video_id,
        youtube_url=record.youtube_url,
        summary=record.summary,
        quiz_cards=[QuizCard.model_validate(card) for card in record.quiz_cards or []],
        quiz_attempts=[attempt_to_schema(attempt) for attempt in record.quiz_attempts],
        flashcard_notes=record.flashcard_notes or {},
        study_progress=StudyProgress.model_validate(record.study_progress or {}),
        created_at=_iso(record.created_at),
        updated_at=_iso(record.updated_at),
    )


def list_projects(db: Session, user_id: str) -> List[ProjectRecord]:
    """Get a user's projects, newest first."""
    return (
        db.query(ProjectRecord)
        .filter(ProjectRecord.user_id == user_id)
        .order_by(ProjectRecord.created_at.desc())
        .all()
    )


def get_project(db: Session, project_id: str, user_id: str) -> Optional[ProjectRecord]:
    """Get a project by ID."""
    return (
        db.query(ProjectRecord)
        .filter(ProjectRecord.id == project_id, ProjectRecord.user_id == user_id)
        .first()
    )


def create_project(
    db: Session,
    user_id: str,
    video_id: str,
    youtube_url: str,
    title: str,
    thumbnail: Optional[str],
    summary: str,
    quiz_cards: List[QuizCard],
    project_id: Optional[str] = None,
) -> ProjectRecord:
    """Create a new project with fresh study progress."""
    record = ProjectRecord(
        id=project_id or uuid.uuid4().hex,
        user_id=user_id,
        video_id=video_id,
        youtube_url=youtube_url,
        title=title,
        thumbnail=thumbnail,
        summary=summary,
        quiz_cards=[card.model_dump(by_alias=True) for card in quiz_cards],
        flashcard_notes={},
        study_progress=StudyProgress().model_dump(by_alias=True),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logging.info(f"Created project {record.id} for video {video_id}")
    return record


def update_project(db: Session, project_id: str, user_id: str, updates: Dict[str, Any]) -> Optional[ProjectRecord]:
    """
    Merge updates into a project and bump its updated_at.

    Unknown fields are ignored.
    """
    record = get_project(db, project_id, user_id)
    if not record:
        return None

    for key, value in updates.items():
        if key in UPDATABLE_FIELDS:
            setattr(record, key, value)
        else:
            logging.debug(f"Ignoring non-updatable project field: {key}")

    record.updated_at = utcnow()
    db.commit()
    db.refresh(record)
    return record


def delete_project(db: Session, project_id: str, user_id: str) -> bool:
    """Delete a project and its quiz attempts."""
    record = get_project(db, project_id, user_id)
    if not record:
        return False

    db.delete(record)
    db.commit()
    logging.info(f"Deleted project {project_id}")
    return True


def save_quiz_attempt(
    db: Session, project_id: str, user_id: str, attempt: QuizAttemptCreate
) -> Optional[ProjectRecord]:
    """
    Record a quiz attempt and refresh the project's study progress.

    quizzes_completed becomes the number of attempts and average_score the
    rounded mean of their percentages.
    """
    record = get_project(db, project_id, user_id)
    if not record:
        return None

    percentage = round_half_up(attempt.score / attempt.total_questions * 100)
    attempt_record = QuizAttemptRecord(
        id=uuid.uuid4().hex,
        project_id=record.id,
        score=attempt.score,
        total_questions=attempt.total_questions,
        percentage=percentage,
        answers=attempt.answers,
        time_spent=attempt.time_spent,
    )
    record.quiz_attempts.append(attempt_record)

    percentages = [a.percentage for a in record.quiz_attempts]
    progress = dict(record.study_progress or {})
    progress.update({
        "quizzesCompleted": len(percentages),
        "averageScore": round_half_up(sum(percentages) / len(percentages)),
        "lastStudied": get_timestamp(),
    })
    return update_project(db, project_id, user_id, {"study_progress": progress})


def save_flashcard_note(
    db: Session, project_id: str, user_id: str, card_index: int, note: str
) -> Optional[ProjectRecord]:
    """Store the user's note for a summary card."""
    record = get_project(db, project_id, user_id)
    if not record:
        return None

    notes = dict(record.flashcard_notes or {})
    notes[str(card_index)] = note
    return update_project(db, project_id, user_id, {"flashcard_notes": notes})


def mark_summary_card_viewed(
    db: Session, project_id: str, user_id: str, card_index: int
) -> Optional[ProjectRecord]:
    """Add a summary card to the viewed list; viewing twice changes nothing."""
    record = get_project(db, project_id, user_id)
    if not record:
        return None

    progress = dict(record.study_progress or {})
    viewed = list(progress.get("summaryCardsViewed", []))
    if card_index in viewed:
        return record

    viewed.append(card_index)
    progress.update({"summaryCardsViewed": viewed, "lastStudied": get_timestamp()})
    return update_project(db, project_id, user_id, {"study_progress": progress})
