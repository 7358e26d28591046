"""
mock_generator.py — Rule-based quiz generator (no credentials needed)
=====================================================================
Used when FORCE_MOCK_MODE=true or when neither Azure OpenAI nor Gemini is
configured, so the whole upload → review → confirm → take flow can be
demonstrated and tested offline.

Algorithm
---------
  1. Split the source text into sentences.
  2. Keep sentences of 6–60 words that contain at least one "keyword"
     (alphabetic token of ≥ 5 characters, not a stop word).
  3. For each kept sentence, blank out its longest keyword → question stem.
  4. Distractors are other keywords from the document, preferring ones of
     similar length; options are shuffled.

A ``random.Random`` seeded from the text hash makes output deterministic for
a given document and question count.
"""

from __future__ import annotations

import hashlib
import random
import re

from quizmaker.errors import GenerationError
from quizmaker.models import QuizItem

OPTIONS_PER_QUESTION = 4
BLANK = "_____"

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?。！？])\s+")
_WORD           = re.compile(r"[A-Za-z][A-Za-z\-]{4,}")

_STOP_WORDS = {
    "about", "above", "after", "again", "against", "among", "because", "before",
    "being", "below", "between", "could", "during", "every", "first", "other",
    "should", "since", "their", "there", "these", "those", "through", "under",
    "until", "where", "which", "while", "would", "shall", "might", "whose",
}


def _keywords(sentence: str) -> list[str]:
    return [w for w in _WORD.findall(sentence) if w.lower() not in _STOP_WORDS]


def _candidate_sentences(text: str) -> list[str]:
    sentences = [" ".join(s.split()) for s in _SENTENCE_SPLIT.split(text)]
    return [
        s for s in sentences
        if 6 <= len(s.split()) <= 60 and _keywords(s)
    ]


def generate_mock_quiz(text: str, count: int) -> list[QuizItem]:
    """Return up to *count* fill-in-the-blank questions built from *text*."""
    seed = int(hashlib.sha256(f"{count}:{text}".encode("utf-8")).hexdigest()[:16], 16)
    rng = random.Random(seed)

    sentences = _candidate_sentences(text)
    vocabulary = sorted({w.lower(): w for s in sentences for w in _keywords(s)}.values())
    if not sentences or len(vocabulary) < 2:
        raise GenerationError(
            "The document does not contain enough distinct sentences to build a quiz."
        )

    picked = rng.sample(sentences, min(count, len(sentences)))
    items: list[QuizItem] = []
    for sentence in picked:
        answer = max(_keywords(sentence), key=len)
        pool = [w for w in vocabulary if w.lower() != answer.lower()]
        pool.sort(key=lambda w: (abs(len(w) - len(answer)), w))
        distractors = pool[: OPTIONS_PER_QUESTION - 1]

        options = [answer, *distractors]
        rng.shuffle(options)
        stem = re.sub(rf"\b{re.escape(answer)}\b", BLANK, sentence, count=1)
        items.append(QuizItem(
            question=f"Fill in the blank: {stem}",
            options=options,
            answer=answer,
        ))
    return items
