"""
errors.py – Error taxonomy
==========================
Every gateway converts vendor exceptions into one of these so the Streamlit
shell can catch a single base class at each call site.

  ExtractionError     source document yields too little text
  GenerationError     AI call failed, returned nothing, or returned junk
  PersistenceError    create / read / delete / increment against the store failed
  QuizValidationError user input incomplete (no state transition happens)
  AccessDeniedError   identity outside the allowed email domain
  SessionStateError   illegal quiz-session transition
"""

from __future__ import annotations


class QuizMakerError(Exception):
    """Base class; ``str(exc)`` is the human-readable message shown in the UI."""


class ExtractionError(QuizMakerError):
    pass


class GenerationError(QuizMakerError):
    pass


class PersistenceError(QuizMakerError):
    pass


class QuizValidationError(QuizMakerError):
    pass


class IncompleteSubmissionError(QuizValidationError):
    def __init__(self, answered: int, total: int) -> None:
        self.answered = answered
        self.total = total
        super().__init__(
            f"Please answer every question before submitting ({answered}/{total} answered)."
        )


class AccessDeniedError(QuizMakerError):
    pass


class SessionStateError(QuizMakerError):
    pass


class PreviewModeError(SessionStateError):
    pass
