"""
Tests for data models: QuizItem validation, Quiz / QuizDraft, FeedbackReport.
"""
import pytest
from pydantic import ValidationError

from factories import make_item, make_quiz

from quizmaker.models import (
    FEEDBACK_STATUS_NEW,
    FeedbackReport,
    FeedbackType,
    Quiz,
    QuizDraft,
)


# ─── QuizItem ─────────────────────────────────────────────────────────────────

class TestQuizItem:
    def test_basic_construction(self):
        item = make_item()
        assert item.answer == "Blue"
        assert item.answer_index == 0

    def test_two_options_allowed(self):
        item = make_item(question="Q1", options=["A", "B"], answer="A")
        assert item.options == ["A", "B"]

    def test_answer_must_be_an_option(self):
        with pytest.raises(ValidationError):
            make_item(options=["A", "B"], answer="C")

    def test_single_option_rejected(self):
        with pytest.raises(ValidationError):
            make_item(options=["A"], answer="A")

    def test_duplicate_options_rejected(self):
        with pytest.raises(ValidationError):
            make_item(options=["A", "A", "B"], answer="A")

    def test_blank_question_rejected(self):
        with pytest.raises(ValidationError):
            make_item(question="   ")

    def test_blank_option_rejected(self):
        with pytest.raises(ValidationError):
            make_item(options=["A", " "], answer="A")

    def test_whitespace_is_stripped(self):
        item = make_item(question="  Q?  ", options=[" A ", "B"], answer="A ")
        assert item.question == "Q?"
        assert item.options == ["A", "B"]
        assert item.answer == "A"

    def test_frozen(self):
        item = make_item()
        with pytest.raises(ValidationError):
            item.answer = "Green"


# ─── Quiz / QuizDraft ─────────────────────────────────────────────────────────

class TestQuiz:
    def test_record_uses_camel_case(self):
        record = make_quiz(response_count=3).to_record()
        assert record["createdAt"] == "2024-05-01T09:30:00.000Z"
        assert record["responseCount"] == 3
        assert "created_at" not in record

    def test_parse_from_record(self):
        record = make_quiz().to_record()
        assert Quiz.model_validate(record) == make_quiz()

    def test_negative_response_count_rejected(self):
        with pytest.raises(ValidationError):
            make_quiz(response_count=-1)

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError):
            QuizDraft(title="T", items=[])

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            QuizDraft(title="", items=[make_item()])


# ─── FeedbackReport ───────────────────────────────────────────────────────────

class TestFeedbackReport:
    def test_defaults(self):
        report = FeedbackReport(content="Please add dark mode")
        assert report.type is FeedbackType.FEATURE_REQUEST
        assert report.status == FEEDBACK_STATUS_NEW

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError):
            FeedbackReport(content="   ")

    def test_type_from_value(self):
        report = FeedbackReport.model_validate({"content": "Crash", "type": "bug"})
        assert report.type is FeedbackType.BUG

    @pytest.mark.parametrize("kind,label", [
        (FeedbackType.FEATURE_REQUEST, "Feature request"),
        (FeedbackType.BUG,             "Bug"),
    ])
    def test_labels(self, kind, label):
        assert kind.label == label
