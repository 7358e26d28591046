"""
quizmaker — PDF-to-Quiz Authoring & Quiz-Taking Tool
=====================================================
Package containing the gateways, state machines, configuration and
persistence utilities behind the Streamlit app.

Module map
----------
  models.py          Pydantic records: QuizItem, Quiz, QuizDraft, FeedbackReport.
  config.py          Settings loaded from .env; provider-tier detection.
  log.py             Rich-backed logging setup.
  errors.py          Error taxonomy shared by every gateway.
  database.py        SQLite persistence gateway (quizzes + feedback tables).

  pdf_text.py        PDF → plain text (pypdf).
  generator.py       AI generation gateway (Azure OpenAI / Gemini / mock).
  mock_generator.py  Rule-based cloze generator (no credentials needed).
  apps_script.py     Google Apps Script exporter (pure string templating).

  auth.py            Identity + email-domain allowlist.
  router.py          URL hash → view variant.
  session.py         Quiz-taking state machine + scoring.
  authoring.py       Create-view state machine (upload → generate → confirm).
  dashboard.py       Admin dashboard ordering / permission helpers.

Request flow
------------
  streamlit_app.py
    → auth.check_access            (terminal access-denied view on DENIED)
    → router.parse_route           (one variant per rerun)
    ┌── create     → authoring.QuizAuthoring → pdf_text → generator → database
    ├── dashboard  → dashboard helpers       → database
    ├── quiz       → session.QuizSession     → database.increment_response_count
    └── feedback   → database.create_feedback / list_feedback
"""
__version__ = "0.1.0"
