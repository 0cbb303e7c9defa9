"""
Core functionality for Absorbey.

This package contains modules for fetching YouTube metadata and transcripts,
generating summaries and quizzes with the LLM, and the study helpers that
turn summaries into flashcards.
"""
