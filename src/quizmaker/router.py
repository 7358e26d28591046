"""
router.py — URL hash → view variant
===================================
Route surface (hash form)::

    #/                          create view (default)
    #/admin                     admin dashboard
    #/quiz/<id>                 take quiz
    #/quiz/<id>?preview=true    read-only preview with answers marked
    #/feedback                  feedback form
    #/feedback/list             feedback list
    anything else               not found

Streamlit never sees the browser's fragment, so the app carries the same
string in query parameters: ``?view=/quiz/<id>&preview=true``.
``hash_from_query_params`` / ``query_params_for`` convert between the two;
``parse_route`` only ever deals with the hash form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union
from urllib.parse import parse_qs, urlencode


# ─── Variants ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateRoute:
    pass


@dataclass(frozen=True)
class DashboardRoute:
    pass


@dataclass(frozen=True)
class QuizRoute:
    quiz_id:    str
    is_preview: bool = False


@dataclass(frozen=True)
class FeedbackFormRoute:
    pass


@dataclass(frozen=True)
class FeedbackListRoute:
    pass


@dataclass(frozen=True)
class NotFoundRoute:
    path: str = ""


Route = Union[
    CreateRoute, DashboardRoute, QuizRoute,
    FeedbackFormRoute, FeedbackListRoute, NotFoundRoute,
]

CREATE_HASH        = "#/"
DASHBOARD_HASH     = "#/admin"
FEEDBACK_HASH      = "#/feedback"
FEEDBACK_LIST_HASH = "#/feedback/list"

_STATIC_ROUTES: dict[str, Route] = {
    "":               CreateRoute(),
    "/":              CreateRoute(),
    "/admin":         DashboardRoute(),
    "/feedback":      FeedbackFormRoute(),
    "/feedback/list": FeedbackListRoute(),
}


# ─── Parsing ─────────────────────────────────────────────────────────────────

def parse_route(url_hash: str) -> Route:
    """Decode a URL hash such as ``#/quiz/abc?preview=true`` into a Route."""
    fragment = url_hash[1:] if url_hash.startswith("#") else url_hash
    path, _, query = fragment.partition("?")

    if path in _STATIC_ROUTES:
        return _STATIC_ROUTES[path]

    if path.startswith("/quiz/"):
        quiz_id = path[len("/quiz/"):]
        if quiz_id and "/" not in quiz_id:
            preview = parse_qs(query).get("preview", [""])[0]
            return QuizRoute(quiz_id=quiz_id, is_preview=preview == "true")

    return NotFoundRoute(path=path)


def resolve_view(route: Route, quizzes: Mapping[str, object]) -> Route:
    """A quiz route whose id is not in the loaded set becomes NotFoundRoute."""
    if isinstance(route, QuizRoute) and route.quiz_id not in quizzes:
        return NotFoundRoute(path=f"/quiz/{route.quiz_id}")
    return route


# ─── Hash ⇄ query parameters ─────────────────────────────────────────────────

def hash_from_query_params(params: Mapping[str, str]) -> str:
    """``{"view": "/quiz/x", "preview": "true"}`` → ``"#/quiz/x?preview=true"``."""
    view = params.get("view") or "/"
    if not view.startswith("/"):
        view = "/" + view
    preview = params.get("preview")
    return f"#{view}?preview={preview}" if preview else f"#{view}"


def query_params_for(url_hash: str) -> dict[str, str]:
    """Inverse of ``hash_from_query_params``."""
    fragment = url_hash[1:] if url_hash.startswith("#") else url_hash
    path, _, query = fragment.partition("?")
    params = {"view": path or "/"}
    preview = parse_qs(query).get("preview")
    if preview:
        params["preview"] = preview[0]
    return params


def quiz_hash(quiz_id: str, preview: bool = False) -> str:
    return f"#/quiz/{quiz_id}?preview=true" if preview else f"#/quiz/{quiz_id}"


def quiz_link(base_url: str, quiz_id: str, preview: bool = False) -> str:
    """Absolute shareable URL for a quiz."""
    query = urlencode(query_params_for(quiz_hash(quiz_id, preview)), safe="/")
    return f"{base_url.rstrip('/')}/?{query}"
