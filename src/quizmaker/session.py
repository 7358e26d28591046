"""
session.py — Quiz-taking session (one per quiz view)
====================================================
Tracks the respondent's selections, accepts a submission, scores it and
supports retrying.  Opened in preview mode it is read-only and reveals the
correct answers.

State machine
-------------
  ANSWERING ──submit()──▶ SUBMITTED ──retry()──▶ ANSWERING
  PREVIEW   (terminal for the lifetime of the view; no selections, no submit)

  select(i, option)   ANSWERING only; overwrites position i.  Ignored otherwise.
  submit(record)      rejected (IncompleteSubmissionError) unless every position
                      has a selection.  On acceptance: score is computed,
                      record(quiz_id) is called to bump the response counter,
                      then the state becomes SUBMITTED.  If record() raises,
                      the state and score are left untouched and the error
                      propagates.
  retry()             SUBMITTED → ANSWERING; clears selections and score.

Scoring
-------
  score = number of positions whose selection equals that item's answer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Mapping, Sequence

from quizmaker.errors import IncompleteSubmissionError, PreviewModeError, SessionStateError
from quizmaker.models import Quiz, QuizItem

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANSWERING = "answering"
    SUBMITTED = "submitted"
    PREVIEW   = "preview"


class OptionMark(str, Enum):
    """How an option should be rendered."""
    PLAIN    = "plain"     # answering, not chosen
    SELECTED = "selected"  # answering, chosen
    CORRECT  = "correct"   # submitted or preview: the designated answer
    WRONG    = "wrong"     # submitted: chosen but not the answer
    FADED    = "faded"     # submitted: neither chosen nor correct


def score_answers(items: Sequence[QuizItem], answers: Mapping[int, str]) -> int:
    """Count positions where the selection equals the item's answer."""
    return sum(1 for i, item in enumerate(items) if answers.get(i) == item.answer)


class QuizSession:
    """
    Per-view quiz session.

    Usage::

        session = QuizSession(quiz)
        session.select(0, "A")
        session.submit(store.increment_response_count)
        session.score      # → 1
        session.retry()
    """

    def __init__(self, quiz: Quiz, preview: bool = False) -> None:
        self.quiz = quiz
        self.state = SessionState.PREVIEW if preview else SessionState.ANSWERING
        self._answers: dict[int, str] = {}
        self.score = 0

    # ── Read-only views ──────────────────────────────────────────────────────

    @property
    def answers(self) -> dict[int, str]:
        return dict(self._answers)

    @property
    def total(self) -> int:
        return len(self.quiz.items)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def is_complete(self) -> bool:
        return all(i in self._answers for i in range(self.total))

    @property
    def is_preview(self) -> bool:
        return self.state is SessionState.PREVIEW

    @property
    def is_submitted(self) -> bool:
        return self.state is SessionState.SUBMITTED

    @property
    def is_perfect(self) -> bool:
        return self.is_submitted and self.score == self.total

    def selection(self, index: int) -> str | None:
        return self._answers.get(index)

    # ── Transitions ──────────────────────────────────────────────────────────

    def select(self, index: int, option: str) -> bool:
        """Record *option* for question *index*. Returns False when ignored."""
        if self.state is not SessionState.ANSWERING:
            return False
        if not 0 <= index < self.total:
            raise IndexError(f"question index {index} out of range 0..{self.total - 1}")
        self._answers[index] = option
        return True

    def submit(self, record_response: Callable[[str], None]) -> int:
        """Score the selections, record the response, and return the score."""
        if self.state is SessionState.PREVIEW:
            raise PreviewModeError("Preview mode does not accept submissions.")
        if self.state is SessionState.SUBMITTED:
            raise SessionStateError("This attempt has already been submitted. Retry to answer again.")
        if not self.is_complete:
            raise IncompleteSubmissionError(self.answered_count, self.total)

        score = score_answers(self.quiz.items, self._answers)
        record_response(self.quiz.id)

        self.score = score
        self.state = SessionState.SUBMITTED
        logger.info("Quiz %s submitted: %d/%d", self.quiz.id, score, self.total)
        return score

    def retry(self) -> None:
        if self.state is not SessionState.SUBMITTED:
            raise SessionStateError("Only a submitted attempt can be retried.")
        self._answers.clear()
        self.score = 0
        self.state = SessionState.ANSWERING

    # ── Rendering helpers ────────────────────────────────────────────────────

    def option_marks(self, index: int) -> list[tuple[str, OptionMark]]:
        """Pair every option of question *index* with how it should be shown."""
        item = self.quiz.items[index]
        chosen = self._answers.get(index)
        marks: list[tuple[str, OptionMark]] = []
        for option in item.options:
            if self.state is SessionState.PREVIEW:
                mark = OptionMark.CORRECT if option == item.answer else OptionMark.PLAIN
            elif self.state is SessionState.ANSWERING:
                mark = OptionMark.SELECTED if option == chosen else OptionMark.PLAIN
            elif option == item.answer:
                mark = OptionMark.CORRECT
            elif option == chosen:
                mark = OptionMark.WRONG
            else:
                mark = OptionMark.FADED
            marks.append((option, mark))
        return marks
