"""
generator.py — AI Quiz Generation Gateway
=========================================
Turns extracted document text into an ordered list of ``QuizItem``.

QuizGenerator
    Sends the text to an LLM with a fixed response schema and validates the
    reply into QuizItem objects.

    Three-tier execution strategy (chooses the highest available tier):
      1. Azure OpenAI     — when AZURE_OPENAI_ENDPOINT + KEY are set.
                            JSON-mode chat completion, object with an "items" array.
      2. Google Gemini    — when GEMINI_API_KEY is set.
                            response_mime_type=application/json + response_schema.
      3. Mock generator   — FORCE_MOCK_MODE=true or nothing configured.

    The output contract is identical across tiers.  The number of returned
    items is *intended* to equal the requested count but is not enforced.

Failure modes (all raise, none retry)
-------------------------------------
  ExtractionError  — source text shorter than MIN_SOURCE_CHARS
  GenerationError  — provider error, empty reply, unparsable JSON,
                     or no item survived validation
"""

from __future__ import annotations

import json
import logging
import textwrap
from typing import Any, Optional, TypedDict

from openai import AzureOpenAI, OpenAIError
from pydantic import ValidationError

from quizmaker.config import Settings, get_settings
from quizmaker.errors import GenerationError
from quizmaker.mock_generator import generate_mock_quiz
from quizmaker.models import QuizItem
from quizmaker.pdf_text import require_text

logger = logging.getLogger(__name__)

# Only the first part of long documents is sent to the model.
MAX_SOURCE_CHARS = 20_000


# ─── Response schema ─────────────────────────────────────────────────────────

class QuizItemSchema(TypedDict):
    question: str
    options:  list[str]
    answer:   str


_ITEM_SCHEMA_STR = json.dumps(
    {
        "question": "string — the question text",
        "options":  ["string", "string", "string", "string"],
        "answer":   "string — must be exactly one of the options",
    },
    indent=2,
)

_SYSTEM_PROMPT = textwrap.dedent("""
    You are an education specialist and an expert quiz writer.
    You write multiple-choice questions that test understanding of the key
    concepts in a source document.

    Rules:
    - Every question has exactly 4 options.
    - "answer" must be character-for-character identical to one of the options.
    - Base every question ONLY on the provided text.
    - Avoid "All of the above" / "None of the above".
""").strip()


def build_prompt(text: str, count: int, bare_array: bool = False) -> str:
    """
    User prompt: instructions + the (truncated) source text.

    JSON mode (Azure OpenAI) only accepts an object at the top level, so the
    items are wrapped in ``{"items": [...]}``.  Gemini constrains the reply
    with ``response_schema=list[...]`` and is asked for a bare array.
    """
    shape = (
        "Return a JSON array where each element"
        if bare_array
        else "Return a JSON object of the form {\"items\": [ ... ]} where each element"
    )
    return (
        f"Generate {count} multiple-choice questions from the text below.\n"
        f"{shape} matches this schema exactly:\n"
        f"{_ITEM_SCHEMA_STR}\n\n"
        "--- TEXT ---\n"
        f"{text[:MAX_SOURCE_CHARS]}\n"
        "---"
    )


# ─── Parsing ─────────────────────────────────────────────────────────────────

def _item_list(data: Any) -> list:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("items", "questions", "quiz"):
            if isinstance(data.get(key), list):
                return data[key]
    raise GenerationError("The AI could not produce a valid quiz format.")


def parse_quiz_items(raw: Optional[str]) -> list[QuizItem]:
    """
    Validate a raw model reply into QuizItems.

    Accepts a bare JSON array or an object holding the array under
    "items" / "questions" / "quiz".  Items that fail validation (e.g. the
    answer is not one of the options) are dropped with a warning.
    """
    text = (raw or "").strip()
    if not text:
        raise GenerationError(
            "The AI returned an empty response. Try a different document or length."
        )
    if text.startswith("```"):
        text = text.strip("`")
        text = text[text.find("\n") + 1:] if "\n" in text else text
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Model reply is not JSON: %s", exc)
        raise GenerationError("The AI response could not be read as a quiz.") from exc

    items: list[QuizItem] = []
    for position, entry in enumerate(_item_list(data)):
        try:
            items.append(QuizItem.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Dropping generated item %d: %s", position, exc.errors()[0]["msg"])

    if not items:
        raise GenerationError("The AI could not produce a valid quiz format.")
    return items


# ─── Gateway ─────────────────────────────────────────────────────────────────

class QuizGenerator:
    """
    Generates QuizItems from document text using the highest available tier.

    Usage::

        generator = QuizGenerator()
        items     = generator.generate(pdf_text, count=5)

    ``openai_client`` / ``gemini_model`` can be injected (tests pass fakes).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        openai_client: Any = None,
        gemini_model: Any = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._openai_client = openai_client
        self._gemini_model = gemini_model

        if self._settings.app.force_mock_mode:
            self._openai_client = None
            self._gemini_model = None
            return

        # ── Tier 1 — Azure OpenAI ───────────────────────────────────────────
        cfg = self._settings.openai
        if self._openai_client is None and self._gemini_model is None and cfg.is_configured:
            self._openai_client = AzureOpenAI(
                azure_endpoint=cfg.endpoint,
                api_key=cfg.api_key,
                api_version=cfg.api_version,
            )

        # ── Tier 2 — Google Gemini ──────────────────────────────────────────
        if (
            self._openai_client is None
            and self._gemini_model is None
            and self._settings.gemini.is_configured
        ):
            import google.generativeai as genai

            genai.configure(api_key=self._settings.gemini.api_key)
            self._gemini_model = genai.GenerativeModel(
                self._settings.gemini.model,
                system_instruction=_SYSTEM_PROMPT,
            )

    @property
    def tier(self) -> str:
        if self._openai_client is not None:
            return "azure_openai"
        if self._gemini_model is not None:
            return "gemini"
        return "mock"

    # ── Tier 1 implementation ─────────────────────────────────────────────────

    def _call_via_openai(self, prompt: str) -> str:
        try:
            response = self._openai_client.chat.completions.create(
                model=self._settings.openai.deployment,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user",   "content": prompt},
                ],
                temperature=self._settings.app.temperature,
            )
        except OpenAIError as exc:
            logger.exception("Azure OpenAI call failed")
            raise GenerationError("An error occurred while the AI was generating the quiz.") from exc
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    # ── Tier 2 implementation ─────────────────────────────────────────────────

    def _call_via_gemini(self, prompt: str) -> str:
        import google.generativeai as genai

        try:
            response = self._gemini_model.generate_content(
                prompt,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=list[QuizItemSchema],
                    temperature=self._settings.app.temperature,
                ),
            )
            return response.text or ""
        except Exception as exc:  # noqa: BLE001
            logger.exception("Gemini call failed")
            raise GenerationError("An error occurred while the AI was generating the quiz.") from exc

    # ── Public interface ──────────────────────────────────────────────────────

    def generate(self, text: str, count: int) -> list[QuizItem]:
        """
        Generate roughly *count* questions from *text*.

        Raises:
            ExtractionError – text too short to generate from.
            GenerationError – provider failure or unusable reply.
        """
        if count < 1:
            raise GenerationError("The number of questions must be at least 1.")
        require_text(text)

        tier = self.tier
        logger.info("Generating %d question(s) via %s", count, tier)
        if tier == "mock":
            items = generate_mock_quiz(text, count)
        elif tier == "azure_openai":
            items = parse_quiz_items(self._call_via_openai(build_prompt(text, count)))
        else:
            items = parse_quiz_items(
                self._call_via_gemini(build_prompt(text, count, bare_array=True))
            )

        if len(items) != count:
            logger.info("Requested %d question(s), received %d", count, len(items))
        return items
