"""
Reusable UI components for the Streamlit app.
"""

import streamlit as st
from typing import Dict, Any, List, Optional, Callable

from app.core.study import QuizSession


def header():
    """Configure the page and display the application header."""
    st.set_page_config(
        page_title="Absorbey",
        page_icon="🧠",
        layout="wide",
        initial_sidebar_state="expanded",
    )


def sidebar(
    projects: List[Dict[str, Any]],
    selected_id: Optional[str],
    user: Optional[Dict[str, Any]],
    on_select: Callable[[Optional[str]], None],
    on_sign_in: Callable[[], None],
    on_sign_out: Callable[[], None],
):
    """
    Display the sidebar with account controls and the project list.

    Args:
        projects: Projects, newest first
        selected_id: ID of the open project
        user: Signed-in Firebase user or None
        on_select: Called with a project ID, or None for a new project
        on_sign_in: Called when the user asks to sign in
        on_sign_out: Called when the user signs out
    """
    with st.sidebar:
        st.title("🧠 Absorbey")

        if user:
            st.caption(f"Signed in as {user.get('email') or 'guest'}")
            if st.button("Sign out", use_container_width=True):
                on_sign_out()
        else:
            if st.button("Continue as guest", use_container_width=True):
                on_sign_in()

        if st.button("➕ New project", type="primary", use_container_width=True):
            on_select(None)

        st.divider()
        st.markdown("### Your projects")

        if not projects:
            st.caption("No projects yet. Paste a YouTube link to get started.")

        for project in projects:
            label = project["title"] or "Untitled Project"
            if project["id"] == selected_id:
                label = f"▶ {label}"
            if st.button(label, key=f"project_{project['id']}", use_container_width=True):
                on_select(project["id"])

        st.divider()
        api_url = st.text_input("API URL", value=st.session_state.get("api_url", "http://localhost:3001"))
        st.session_state.api_url = api_url


def welcome_screen() -> Optional[str]:
    """
    Display the welcome screen with the YouTube URL input.

    Returns:
        The submitted YouTube URL or None
    """
    st.title("Learn anything from YouTube")
    st.markdown("""
    Paste a YouTube link and Absorbey will read the transcript, write a detailed
    study summary, and build a quiz to test what you learned.
    """)

    with st.form(key="youtube_form"):
        url = st.text_input(
            "YouTube URL",
            placeholder="https://www.youtube.com/watch?v=VIDEO_ID",
        )
        submit = st.form_submit_button("Create project")

    if submit and url:
        return url.strip()
    return None


def loading_spinner(message: str = "Processing..."):
    """
    Display a loading spinner with a message.

    Args:
        message: Message to display with the spinner
    """
    return st.spinner(message)


def display_error(message: str):
    st.error(message)


def display_success(message: str):
    st.success(message)


def project_header(project: Dict[str, Any], on_back: Callable[[], None], on_delete: Callable[[], None]):
    """Display navigation, thumbnail, title and the YouTube link for a project."""
    col1, col2 = st.columns([6, 1])
    with col1:
        if st.button("🏠 Back to Home"):
            on_back()
    with col2:
        with st.popover("🗑 Delete"):
            st.write("Are you sure you want to delete this project?")
            if st.button("Delete project", type="primary"):
                on_delete()

    if project.get("thumbnail"):
        st.image(project["thumbnail"], use_container_width=True)
    st.title(project.get("title") or "Untitled Project")
    st.markdown(f"[Watch on YouTube →]({project['url']})")


def study_progress(project: Dict[str, Any]):
    """Display quiz and flashcard statistics."""
    progress = project.get("studyProgress") or {}
    col1, col2, col3 = st.columns(3)
    col1.metric("Quizzes completed", progress.get("quizzesCompleted", 0))
    col2.metric("Average score", f"{progress.get('averageScore', 0)}%")
    col3.metric("Cards viewed", len(progress.get("summaryCardsViewed", [])))


def summary_carousel(
    cards: List[Dict[str, Any]],
    notes: Dict[str, str],
    on_view: Callable[[int], None],
    on_save_note: Callable[[int, str], None],
):
    """
    Display the summary as a carousel of flashcards with per-card notes.

    Args:
        cards: Summary cards, each holding up to two points
        notes: Saved notes keyed by card index
        on_view: Called with the index of the card being shown
        on_save_note: Called with a card index and note text
    """
    if not cards:
        st.info("Summary not available.")
        return

    index = min(st.session_state.get("summary_card", 0), len(cards) - 1)
    card = cards[index]
    on_view(index)

    with st.container(border=True):
        for offset, point in enumerate(card["points"]):
            st.markdown(f"**{index * 2 + offset + 1}.** {point}")

    if len(cards) > 1:
        col1, col2, col3 = st.columns([1, 4, 1])
        with col1:
            if st.button("Previous", disabled=index == 0):
                st.session_state.summary_card = max(0, index - 1)
                st.rerun()
        with col2:
            st.progress((index + 1) / len(cards), text=f"Card {index + 1} of {len(cards)}")
        with col3:
            if st.button("Next", disabled=index == len(cards) - 1):
                st.session_state.summary_card = min(len(cards) - 1, index + 1)
                st.rerun()

    with st.expander("📝 My notes for this card"):
        note = st.text_area("Note", value=notes.get(str(index), ""), key=f"note_{index}", label_visibility="collapsed")
        if st.button("Save note", key=f"save_note_{index}"):
            on_save_note(index, note)


def quiz_view(session: QuizSession, on_finish: Callable[[QuizSession], None], on_close: Callable[[], None]):
    """
    Display the interactive quiz for a session.

    Args:
        session: Quiz state kept in st.session_state
        on_finish: Called once when the last question is passed
        on_close: Called when the user leaves quiz mode
    """
    if not session.cards:
        st.info("No quiz questions available for this project.")
        return

    if session.finished:
        quiz_results(session, on_close)
        return

    st.markdown(f"**Question {session.current_question + 1} of {session.total_questions}**")
    st.progress(session.progress / 100, text=f"{session.progress}% Complete")

    card = session.current_card
    st.subheader(card.question)

    for idx, option in enumerate(card.options):
        label = f"{chr(65 + idx)}. {option}"
        if session.selected_answer is not None:
            if idx == card.correct_answer:
                label = f"✅ {label}"
            elif idx == session.selected_answer:
                label = f"❌ {label}"
        if st.button(label, key=f"answer_{session.current_question}_{idx}",
                     disabled=session.selected_answer is not None, use_container_width=True):
            session.answer(idx)
            st.rerun()

    if session.selected_answer is not None:
        if card.explanation:
            st.info(card.explanation)
        label = "See Results" if session.is_last_question else "Next Question"
        if st.button(label, type="primary"):
            session.next_question()
            if session.finished:
                on_finish(session)
            st.rerun()

    if st.button("Exit quiz"):
        on_close()


def quiz_results(session: QuizSession, on_close: Callable[[], None]):
    """Display the score and per-question breakdown."""
    st.markdown(f"## {session.percentage}%")
    st.markdown(f"You got {session.score} out of {len(session.results)} correct")

    for row in session.breakdown():
        if row["correct"]:
            st.success(row["question"])
        else:
            st.error(f"{row['question']}\n\nCorrect answer: {row['correct_option']}")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Retry Quiz"):
            session.restart()
            st.rerun()
    with col2:
        if st.button("Back to Summary"):
            session.restart()
            on_close()
