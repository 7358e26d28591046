"""
Tests for mock_generator.py — the offline cloze-question generator.
"""
import pytest

from factories import SOURCE_TEXT

from quizmaker.errors import GenerationError
from quizmaker.mock_generator import BLANK, OPTIONS_PER_QUESTION, generate_mock_quiz


class TestMockGenerator:
    def test_returns_requested_count(self):
        assert len(generate_mock_quiz(SOURCE_TEXT, 4)) == 4

    def test_capped_by_available_sentences(self):
        assert len(generate_mock_quiz(SOURCE_TEXT, 50)) == 7

    def test_deterministic(self):
        assert generate_mock_quiz(SOURCE_TEXT, 3) == generate_mock_quiz(SOURCE_TEXT, 3)

    def test_items_are_cloze_questions(self):
        for item in generate_mock_quiz(SOURCE_TEXT, 5):
            assert item.question.startswith("Fill in the blank:")
            assert BLANK in item.question
            assert item.answer in SOURCE_TEXT

    def test_options_contain_answer(self):
        for item in generate_mock_quiz(SOURCE_TEXT, 5):
            assert len(item.options) == OPTIONS_PER_QUESTION
            assert item.answer in item.options

    @pytest.mark.parametrize("text", ["", "Short words only here. Tiny bits now."])
    def test_unusable_text_raises(self, text):
        with pytest.raises(GenerationError):
            generate_mock_quiz(text, 3)
