"""
Main entry point for the Absorbey learning pipeline.
"""

import argparse
import json
import uuid
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from app.config import config
from app.core.quiz_generator import QuizGenerator, number_cards
from app.core.study import get_summary_cards, get_summary_points
from app.core.summarizer import VideoSummarizer
from app.core.youtube_metadata import VideoMetadataFetcher
from app.db import crud
from app.db.database import DBSession
from app.models.schemas import Project
from app.utils.error_handling import InvalidYouTubeURLError, log_diagnostic_info
from app.utils.helpers import extract_video_id
from app.utils.logger import logging


def build_project(
    url: str,
    user_id: str = config.ANONYMOUS_USER_ID,
    metadata_fetcher: Optional[VideoMetadataFetcher] = None,
    summarizer: Optional[VideoSummarizer] = None,
    quiz_generator: Optional[QuizGenerator] = None,
) -> Project:
    """
    Run the YouTube link -> metadata -> summary -> quiz pipeline.

    Args:
        url: YouTube video URL
        user_id: Owner of the resulting project
        metadata_fetcher: Metadata fetcher (created if omitted)
        summarizer: Summarizer (created if omitted)
        quiz_generator: Quiz generator (created if omitted)

    Returns:
        An unsaved Project

    Raises:
        InvalidYouTubeURLError: If the URL holds no video ID
    """
    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidYouTubeURLError(url)

    metadata_fetcher = metadata_fetcher or VideoMetadataFetcher()
    summarizer = summarizer or VideoSummarizer()
    quiz_generator = quiz_generator or QuizGenerator()

    metadata = metadata_fetcher.get_metadata_with_fallback(video_id)

    logging.info(f"Generating content with transcript for video: {video_id}")
    summary_result = summarizer.summarize_with_fallback(metadata.title, metadata.description, video_id)
    quiz_cards = quiz_generator.generate_with_fallback(metadata.title, summary_result.summary)
    log_diagnostic_info({
        "video_id": video_id,
        "title": metadata.title,
        "transcript_available": summary_result.transcript_available,
        "summary_chars": len(summary_result.summary),
        "quiz_cards": len(quiz_cards),
    })

    return Project(
        id=uuid.uuid4().hex,
        user_id=user_id,
        title=metadata.title,
        thumbnail=metadata.thumbnail,
        video_id=video_id,
        youtube_url=url,
        summary=summary_result.summary,
        quiz_cards=number_cards(quiz_cards),
    )


def create_project(db: DBSession, url: str, user_id: str = config.ANONYMOUS_USER_ID, **components) -> Project:
    """Build a project for a YouTube URL and store it at the top of the user's list."""
    project = build_project(url, user_id, **components)
    record = crud.create_project(
        db,
        user_id=user_id,
        video_id=project.video_id,
        youtube_url=project.youtube_url,
        title=project.title,
        thumbnail=project.thumbnail,
        summary=project.summary,
        quiz_cards=project.quiz_cards,
        project_id=project.id,
    )
    return crud.project_to_schema(record)


def save_project(project: Project, output_file: Optional[str] = None) -> Path:
    """Save a project to a JSON file."""
    if output_file is None:
        output_dir = Path(config.SUMMARIES_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / f"{project.video_id}_project.json"
    else:
        output_file = Path(output_file)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(project.model_dump(by_alias=True), f, indent=2, ensure_ascii=False)

    logging.info(f"Project saved to: {output_file}")
    return output_file


def main():
    """Main function to run the pipeline from the command line."""
    parser = argparse.ArgumentParser(description="Absorbey: learn from a YouTube video")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--output", help="Output file path for the project JSON")

    args = parser.parse_args()

    load_dotenv()

    project = build_project(args.url)
    save_project(project, args.output)

    print("\n" + "=" * 80)
    print(f"Summary of '{project.title}'")
    print("=" * 80)
    for card in get_summary_cards(get_summary_points(project.summary)):
        for point in card["points"]:
            print(f"- {point}")
    print("=" * 80)
    print(f"Quiz: {len(project.quiz_cards)} questions")
    for card in project.quiz_cards:
        print(f"\n{card.id}. {card.question}")
        for index, option in enumerate(card.options):
            print(f"   {chr(65 + index)}. {option}")


if __name__ == "__main__":
    main()
