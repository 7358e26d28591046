"""
authoring.py — Create-view workflow
===================================
Holds everything the administrator enters and produces on the create view,
and moves it through the authoring states:

    IDLE ──start()──▶ EXTRACTING ──▶ GENERATING ──▶ READY ──export_script()──▶ DONE
      ▲                   │              │            │
      └──── reset() ◀──── ERROR ◀────────┴────────────┘ (confirm() failure)

  • start() needs a title and an uploaded PDF; otherwise it raises
    QuizValidationError and the state does not change.
  • Extraction / generation / persistence failures move to ERROR with a
    human-readable message; reset() is the only way out.
  • confirm() persists the reviewed items once and remembers the share link.

The extractor, generator and store are passed in as callables so this module
has no Streamlit, SDK or database dependency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from quizmaker.apps_script import build_apps_script
from quizmaker.errors import QuizMakerError, QuizValidationError
from quizmaker.models import QuizDraft, QuizItem
from quizmaker.pdf_text import require_text
from quizmaker.router import quiz_link

logger = logging.getLogger(__name__)

QUESTION_COUNT_CHOICES = tuple(range(1, 11))
DEFAULT_QUESTION_COUNT = 5


class AuthoringStatus(str, Enum):
    IDLE       = "idle"
    EXTRACTING = "extracting"
    GENERATING = "generating"
    READY      = "ready"
    DONE       = "done"
    ERROR      = "error"


Extractor = Callable[[bytes], str]
Generator = Callable[[str, int], list[QuizItem]]
QuizCreator = Callable[[QuizDraft], str]


def default_title(file_name: str) -> str:
    return f'Quiz from "{file_name}"'


def default_description(file_name: str) -> str:
    return f'This quiz was generated automatically by AI from the PDF "{file_name}".'


@dataclass
class QuizAuthoring:
    """Mutable create-view state; one instance lives in the Streamlit session."""
    status:         AuthoringStatus = AuthoringStatus.IDLE
    error:          Optional[str] = None
    title:          str = ""
    description:    str = ""
    creator:        str = ""
    question_count: int = DEFAULT_QUESTION_COUNT
    file_name:      Optional[str] = None
    file_bytes:     Optional[bytes] = None
    items:          list[QuizItem] = field(default_factory=list)
    script:         str = ""
    quiz_id:        Optional[str] = None
    shareable_url:  Optional[str] = None

    # ── Inputs ────────────────────────────────────────────────────────────────

    @property
    def can_start(self) -> bool:
        return bool(self.file_bytes) and bool(self.title.strip())

    @property
    def is_busy(self) -> bool:
        return self.status in (AuthoringStatus.EXTRACTING, AuthoringStatus.GENERATING)

    def select_file(self, name: str, data: bytes) -> None:
        """Store the upload; blank title / description get file-based defaults."""
        self.file_name = name
        self.file_bytes = data
        if not self.title.strip():
            self.title = default_title(name)
        if not self.description.strip():
            self.description = default_description(name)

    def clear_file(self) -> None:
        self.file_name = None
        self.file_bytes = None

    def set_question_count(self, count: int) -> None:
        if count not in QUESTION_COUNT_CHOICES:
            raise QuizValidationError(
                f"Question count must be between {QUESTION_COUNT_CHOICES[0]} "
                f"and {QUESTION_COUNT_CHOICES[-1]}."
            )
        self.question_count = count

    # ── Transitions ──────────────────────────────────────────────────────────

    def _fail(self, message: str) -> None:
        self.error = message
        self.status = AuthoringStatus.ERROR

    def start(
        self,
        extract: Extractor,
        generate: Generator,
        on_status: Callable[[AuthoringStatus], None] | None = None,
    ) -> bool:
        """Extract text and generate questions. Returns True when READY."""
        if not self.can_start:
            raise QuizValidationError("A quiz title and a PDF file are required.")

        def _enter(status: AuthoringStatus) -> None:
            self.status = status
            if on_status is not None:
                on_status(status)

        self.error = None
        self.items = []
        self.script = ""
        self.quiz_id = None
        self.shareable_url = None

        try:
            _enter(AuthoringStatus.EXTRACTING)
            text = require_text(extract(self.file_bytes))
            _enter(AuthoringStatus.GENERATING)
            self.items = list(generate(text, self.question_count))
        except QuizMakerError as exc:
            logger.warning("Quiz generation for %r failed: %s", self.file_name, exc)
            self._fail(f"Error: {exc}")
            return False
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected failure while generating a quiz from %r", self.file_name)
            self._fail("Error: An unexpected error occurred. Please try again with another file.")
            return False

        _enter(AuthoringStatus.READY)
        return True

    def confirm(self, create_quiz: QuizCreator, base_url: str) -> str:
        """Persist the reviewed quiz (once) and return its shareable URL."""
        if self.status not in (AuthoringStatus.READY, AuthoringStatus.DONE) or not self.items:
            raise QuizValidationError("There is no generated quiz to confirm.")
        if self.shareable_url:
            return self.shareable_url

        draft = QuizDraft(
            title=self.title.strip(),
            description=self.description.strip(),
            creator=self.creator.strip(),
            items=self.items,
        )
        try:
            self.quiz_id = create_quiz(draft)
        except QuizMakerError as exc:
            self._fail(f"An error occurred while confirming the quiz: {exc}")
            raise
        self.shareable_url = quiz_link(base_url, self.quiz_id)
        return self.shareable_url

    def export_script(self, folder_url: Optional[str] = None) -> str:
        """Build the Google Apps Script for the current items."""
        if self.status not in (AuthoringStatus.READY, AuthoringStatus.DONE) or not self.items:
            raise QuizValidationError("Generate a quiz before exporting a script.")
        self.script = build_apps_script(
            self.items, self.title, self.description, (folder_url or "").strip() or None
        )
        self.status = AuthoringStatus.DONE
        return self.script

    def reset(self) -> None:
        """Back to an empty IDLE form."""
        fresh = QuizAuthoring()
        for name in self.__dataclass_fields__:
            setattr(self, name, getattr(fresh, name))
