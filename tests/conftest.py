"""
Shared pytest fixtures for the QuizMaker test suite.
All fixtures use mock mode — no Azure or Gemini credentials required.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

# Force mock mode — never call an AI provider during tests
os.environ["FORCE_MOCK_MODE"] = "true"
os.environ.setdefault("AZURE_OPENAI_ENDPOINT", "<placeholder>")
os.environ.setdefault("AZURE_OPENAI_API_KEY",  "<placeholder>")


import pytest

from factories import SOURCE_TEXT, make_identity, make_quiz

from quizmaker.database import QuizStore


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def store(tmp_path):
    s = QuizStore(tmp_path / "quizmaker_test.db")
    s.init_db()
    return s


@pytest.fixture
def source_text():
    return SOURCE_TEXT


@pytest.fixture
def quiz():
    return make_quiz()


@pytest.fixture
def identity():
    return make_identity()
