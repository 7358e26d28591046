"""Admin dashboard helpers: ordering, ownership checks, display formatting."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from quizmaker.auth import Identity
from quizmaker.models import FeedbackReport, Quiz


def sorted_for_dashboard(quizzes: Iterable[Quiz]) -> list[Quiz]:
    """Newest first. ISO-8601 UTC strings sort chronologically as text."""
    return sorted(quizzes, key=lambda q: q.created_at, reverse=True)


def can_manage(quiz: Quiz, identity: Optional[Identity]) -> bool:
    """Only the creator sees the preview link and the delete action."""
    return identity is not None and bool(quiz.creator) and quiz.creator == identity.display_name


def format_timestamp(iso: str) -> str:
    """``2024-05-01T09:30:00.000Z`` → ``2024-05-01 09:30``; ``N/A`` when empty."""
    if not iso:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return iso
    return parsed.strftime("%Y-%m-%d %H:%M")


def dashboard_rows(quizzes: Iterable[Quiz], identity: Optional[Identity]) -> list[dict]:
    """Table rows in display order, numbered from 1."""
    return [
        {
            "No.":       n,
            "Title":     quiz.title,
            "Creator":   quiz.creator or "—",
            "Created":   format_timestamp(quiz.created_at),
            "Questions": len(quiz.items),
            "Responses": quiz.response_count,
            "Mine":      can_manage(quiz, identity),
            "id":        quiz.id,
        }
        for n, quiz in enumerate(sorted_for_dashboard(quizzes), start=1)
    ]


def feedback_rows(reports: Iterable[FeedbackReport]) -> list[dict]:
    return [
        {
            "Reported": format_timestamp(r.created_at),
            "Reporter": r.reporter_name or r.reporter_email,
            "Type":     r.type.label,
            "Content":  r.content,
        }
        for r in reports
    ]
