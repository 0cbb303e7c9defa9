"""
Main Streamlit application for Absorbey.
"""

import os
import time
from typing import Any, Dict, Optional

import requests
import streamlit as st
from dotenv import load_dotenv

from app.config import config
from app.core.study import QuizSession
from app.frontend.api_client import ApiClient
from app.frontend.components import (
    header, sidebar, welcome_screen, loading_spinner, display_error,
    display_success, project_header, study_progress, summary_carousel,
    quiz_view,
)
from app.models.schemas import QuizCard


load_dotenv()


def init_session_state():
    """Initialize session state variables."""
    if "api_url" not in st.session_state:
        st.session_state.api_url = os.getenv("API_URL", config.PUBLIC_URL)

    if "user" not in st.session_state:
        st.session_state.user = None

    if "api_client" not in st.session_state or st.session_state.api_client.base_url != st.session_state.api_url:
        token = st.session_state.user["idToken"] if st.session_state.user else None
        st.session_state.api_client = ApiClient(st.session_state.api_url, id_token=token)

    if "selected_project" not in st.session_state:
        st.session_state.selected_project = None

    if "quiz_mode" not in st.session_state:
        st.session_state.quiz_mode = False

    if "viewed_cards" not in st.session_state:
        st.session_state.viewed_cards = set()


def select_project(project_id: Optional[str]):
    st.session_state.selected_project = project_id
    st.session_state.quiz_mode = False
    st.session_state.quiz_session = None
    st.session_state.summary_card = 0
    st.session_state.viewed_cards = set()


def sign_in():
    client = st.session_state.api_client
    try:
        st.session_state.user = client.sign_in_anonymously()
        select_project(None)
    except (requests.RequestException, KeyError) as e:
        display_error(f"Sign in failed: {e}")


def sign_out():
    st.session_state.api_client.sign_out()
    st.session_state.user = None
    select_project(None)


def load_projects():
    try:
        return st.session_state.api_client.list_projects()
    except requests.RequestException as e:
        display_error(f"Could not load projects. Is the API server running? ({e})")
        return []


def home_view():
    """Display the welcome screen and create a project from the submitted link."""
    url = welcome_screen()
    if not url:
        return

    client = st.session_state.api_client
    try:
        with loading_spinner("Reading the transcript and writing your summary and quiz..."):
            project = client.create_project(url)
    except ValueError as e:
        display_error(str(e))
        return
    except requests.HTTPError as e:
        display_error(f"Error creating project: {_error_message(e)}")
        return
    except requests.RequestException as e:
        display_error(f"Error creating project: {e}")
        return

    display_success("Project created!")
    select_project(project["id"])
    st.rerun()


def _error_message(error: requests.HTTPError) -> str:
    try:
        body = error.response.json()
    except ValueError:
        return str(error)
    return body.get("error") or body.get("detail") or str(error)


def project_view(project: Dict[str, Any]):
    """Display a project's summary cards, notes, progress and quiz."""
    client = st.session_state.api_client
    project_id = project["id"]

    def delete():
        client.delete_project(project_id)
        select_project(None)
        st.rerun()

    def mark_viewed(card_index: int):
        # One request per card per visit
        if card_index in st.session_state.viewed_cards:
            return
        st.session_state.viewed_cards.add(card_index)
        if card_index not in project["studyProgress"]["summaryCardsViewed"]:
            client.mark_summary_card_viewed(project_id, card_index)

    def save_note(card_index: int, note: str):
        client.save_flashcard_note(project_id, card_index, note)
        display_success("Note saved")

    def finish_quiz(session: QuizSession):
        client.save_quiz_attempt(
            project_id,
            score=session.score,
            total_questions=len(session.results),
            answers=session.answers(),
            time_spent=int(time.time() - st.session_state.get("quiz_started", time.time())),
        )

    def go_home():
        select_project(None)
        st.rerun()

    def close_quiz():
        st.session_state.quiz_mode = False
        st.session_state.quiz_session = None
        st.rerun()

    project_header(project, on_back=go_home, on_delete=delete)

    if st.session_state.quiz_mode:
        if not st.session_state.get("quiz_session"):
            cards = [QuizCard.model_validate(card) for card in project.get("quizCards", [])]
            st.session_state.quiz_session = QuizSession(cards)
            st.session_state.quiz_started = time.time()
        quiz_view(st.session_state.quiz_session, on_finish=finish_quiz, on_close=close_quiz)
        return

    study_progress(project)

    st.markdown("## 📚 Summary")
    summary_cards = client.get_summary_cards(project_id)
    summary_carousel(summary_cards["cards"], project.get("flashcardNotes", {}), mark_viewed, save_note)

    with st.expander("Full summary"):
        st.markdown(project["summary"])

    if project.get("quizCards"):
        if st.button("🧠 Test Your Knowledge", type="primary", use_container_width=True):
            st.session_state.quiz_mode = True
            st.rerun()


def main():
    """Main application entry point."""
    header()
    init_session_state()

    projects = load_projects()
    sidebar(
        projects,
        st.session_state.selected_project,
        st.session_state.user,
        on_select=select_project,
        on_sign_in=sign_in,
        on_sign_out=sign_out,
    )

    project_id = st.session_state.selected_project
    if project_id is None:
        home_view()
        return

    project = st.session_state.api_client.get_project(project_id)
    if project is None:
        display_error("Project not found")
        select_project(None)
        return

    project_view(project)


if __name__ == "__main__":
    main()
