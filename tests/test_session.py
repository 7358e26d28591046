"""
Tests for session.py — quiz-taking state machine, scoring, retry and the
preview mode.  The response counter is replaced by a recording stub.
"""
import pytest

from factories import make_item, make_quiz

from quizmaker.errors import (
    IncompleteSubmissionError,
    PersistenceError,
    PreviewModeError,
    SessionStateError,
)
from quizmaker.session import OptionMark, QuizSession, SessionState, score_answers


class _Recorder:
    """Stands in for QuizStore.increment_response_count."""

    def __init__(self, fail: bool = False):
        self.calls: list[str] = []
        self.fail = fail

    def __call__(self, quiz_id: str) -> None:
        if self.fail:
            raise PersistenceError("Could not record your response.")
        self.calls.append(quiz_id)


@pytest.fixture
def two_item_quiz():
    return make_quiz(items=[
        make_item(question="Q1", options=["A", "B"], answer="A"),
        make_item(question="Q2", options=["C", "D"], answer="D"),
    ])


@pytest.fixture
def recorder():
    return _Recorder()


class TestScoring:
    def test_score_answers_counts_matches(self, two_item_quiz):
        assert score_answers(two_item_quiz.items, {0: "A", 1: "C"}) == 1

    def test_missing_answers_score_zero(self, two_item_quiz):
        assert score_answers(two_item_quiz.items, {}) == 0


class TestAnswering:
    def test_starts_answering(self, two_item_quiz):
        s = QuizSession(two_item_quiz)
        assert s.state is SessionState.ANSWERING
        assert s.answered_count == 0
        assert s.total == 2

    def test_select_overwrites(self, two_item_quiz):
        s = QuizSession(two_item_quiz)
        s.select(0, "B")
        s.select(0, "A")
        assert s.selection(0) == "A"
        assert s.answered_count == 1

    def test_select_out_of_range(self, two_item_quiz):
        with pytest.raises(IndexError):
            QuizSession(two_item_quiz).select(5, "A")

    def test_answers_is_a_copy(self, two_item_quiz):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.answers[1] = "C"
        assert s.selection(1) is None

    def test_option_marks_while_answering(self, two_item_quiz):
        s = QuizSession(two_item_quiz)
        s.select(0, "B")
        assert s.option_marks(0) == [("A", OptionMark.PLAIN), ("B", OptionMark.SELECTED)]


class TestSubmit:
    def test_incomplete_submission_rejected(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        with pytest.raises(IncompleteSubmissionError) as exc_info:
            s.submit(recorder)
        assert exc_info.value.answered == 1
        assert exc_info.value.total == 2
        assert s.state is SessionState.ANSWERING
        assert recorder.calls == []

    def test_partial_score(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "C")
        assert s.submit(recorder) == 1
        assert s.state is SessionState.SUBMITTED
        assert s.score == 1
        assert not s.is_perfect
        assert recorder.calls == [two_item_quiz.id]

    def test_perfect_score(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "D")
        s.submit(recorder)
        assert s.is_perfect

    def test_selection_ignored_after_submit(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "D")
        s.submit(recorder)
        assert s.select(0, "B") is False
        assert s.selection(0) == "A"

    def test_double_submit_rejected(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "D")
        s.submit(recorder)
        with pytest.raises(SessionStateError):
            s.submit(recorder)
        assert len(recorder.calls) == 1

    def test_failed_increment_leaves_state_untouched(self, two_item_quiz):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "D")
        with pytest.raises(PersistenceError):
            s.submit(_Recorder(fail=True))
        assert s.state is SessionState.ANSWERING
        assert s.score == 0
        assert s.answers == {0: "A", 1: "D"}

    def test_option_marks_after_submit(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "B")
        s.select(1, "D")
        s.submit(recorder)
        assert s.option_marks(0) == [("A", OptionMark.CORRECT), ("B", OptionMark.WRONG)]
        assert s.option_marks(1) == [("C", OptionMark.FADED), ("D", OptionMark.CORRECT)]


class TestSingleQuestion:
    @pytest.fixture
    def one_item_quiz(self):
        return make_quiz(items=[make_item(question="Q1", options=["A", "B"], answer="A")])

    @pytest.mark.parametrize("choice,expected", [("A", 1), ("B", 0)])
    def test_score(self, one_item_quiz, recorder, choice, expected):
        s = QuizSession(one_item_quiz)
        s.select(0, choice)
        assert s.submit(recorder) == expected
        assert s.is_submitted

    def test_all_wrong_scores_zero(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "B")
        s.select(1, "C")
        assert s.submit(recorder) == 0


class TestRetry:
    def test_retry_clears_answers(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        s.select(0, "A")
        s.select(1, "D")
        s.submit(recorder)
        s.retry()
        assert s.state is SessionState.ANSWERING
        assert s.answers == {}
        assert s.score == 0

    def test_retry_then_resubmit_counts_again(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz)
        for _ in range(2):
            s.select(0, "A")
            s.select(1, "D")
            s.submit(recorder)
            s.retry()
        assert recorder.calls == [two_item_quiz.id, two_item_quiz.id]

    def test_retry_requires_submitted(self, two_item_quiz):
        with pytest.raises(SessionStateError):
            QuizSession(two_item_quiz).retry()


class TestPreview:
    def test_preview_state(self, two_item_quiz):
        s = QuizSession(two_item_quiz, preview=True)
        assert s.is_preview
        assert s.state is SessionState.PREVIEW

    def test_preview_ignores_selection(self, two_item_quiz):
        s = QuizSession(two_item_quiz, preview=True)
        assert s.select(0, "A") is False
        assert s.answered_count == 0

    def test_preview_rejects_submit(self, two_item_quiz, recorder):
        s = QuizSession(two_item_quiz, preview=True)
        with pytest.raises(PreviewModeError):
            s.submit(recorder)
        assert recorder.calls == []

    def test_preview_marks_answers(self, two_item_quiz):
        s = QuizSession(two_item_quiz, preview=True)
        assert s.option_marks(1) == [("C", OptionMark.PLAIN), ("D", OptionMark.CORRECT)]
