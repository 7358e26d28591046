"""
Data models for QuizMaker.

Records that cross a trust boundary (LLM output, database rows) are pydantic
models so malformed data is rejected at construction time.  Serialised field
names follow the stored record shape (``createdAt``, ``responseCount`` …);
Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ─── Enumerations ────────────────────────────────────────────────────────────

class FeedbackType(str, Enum):
    """Category of a user-submitted report."""
    FEATURE_REQUEST = "feature_request"
    BUG             = "bug"

    @property
    def label(self) -> str:
        return {"feature_request": "Feature request", "bug": "Bug"}[self.value]


FEEDBACK_STATUS_NEW = "new"


# ─── Quiz content ────────────────────────────────────────────────────────────

class QuizItem(BaseModel):
    """One multiple-choice question.  ``answer`` must be one of ``options``."""
    model_config = ConfigDict(frozen=True)

    question: str = Field(min_length=1)
    options:  list[str] = Field(min_length=2, description="Choices shown to the respondent")
    answer:   str = Field(description="Exact copy of the correct option")

    @field_validator("question", "answer")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("options")
    @classmethod
    def _clean_options(cls, value: list[str]) -> list[str]:
        cleaned = [o.strip() for o in value]
        if any(not o for o in cleaned):
            raise ValueError("options must not be blank")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("options must be distinct")
        return cleaned

    @model_validator(mode="after")
    def _answer_in_options(self) -> "QuizItem":
        if self.answer not in self.options:
            raise ValueError(f"answer {self.answer!r} is not one of the options")
        return self

    @property
    def answer_index(self) -> int:
        return self.options.index(self.answer)


class QuizDraft(BaseModel):
    """Everything needed to persist a quiz except the store-assigned fields."""
    title:       str = Field(min_length=1)
    description: str = ""
    creator:     str = ""
    items:       list[QuizItem] = Field(min_length=1)


class Quiz(BaseModel):
    """A persisted quiz.  Only ``response_count`` changes after creation."""
    model_config = ConfigDict(populate_by_name=True)

    id:             str
    title:          str
    description:    str = ""
    creator:        str = ""
    created_at:     str = Field(alias="createdAt")
    items:          list[QuizItem] = Field(min_length=1)
    response_count: int = Field(default=0, ge=0, alias="responseCount")

    def to_record(self) -> dict:
        """Stored / exported shape with camelCase keys."""
        return self.model_dump(by_alias=True)


# ─── Feedback ────────────────────────────────────────────────────────────────

class FeedbackReport(BaseModel):
    """Append-only bug / feature-request note."""
    model_config = ConfigDict(populate_by_name=True)

    id:             str = ""
    reporter_name:  str = Field(default="", alias="reporterName")
    reporter_email: str = Field(default="", alias="reporterEmail")
    type:           FeedbackType = FeedbackType.FEATURE_REQUEST
    content:        str
    created_at:     str = Field(default="", alias="createdAt")
    status:         str = FEEDBACK_STATUS_NEW

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value
