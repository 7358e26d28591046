"""
auth.py – Identity & email-domain allowlist
===========================================
The identity provider is vendor-specific (Streamlit OIDC login or the local
dev sign-in form); this module only models *who* is signed in and decides
whether they may use the app.  The current identity is passed explicitly to
every view that needs it.

Decision table
--------------
  provider still loading           → LOADING     (render nothing)
  no identity                      → SIGNED_OUT  (render sign-in)
  email not ending in @<domain>    → DENIED      (terminal access-denied view)
  otherwise                        → GRANTED
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from quizmaker.errors import AccessDeniedError

logger = logging.getLogger(__name__)


class AccessDecision(str, Enum):
    LOADING    = "loading"
    SIGNED_OUT = "signed_out"
    DENIED     = "denied"
    GRANTED    = "granted"


@dataclass(frozen=True)
class Identity:
    """An authenticated user as reported by the identity provider."""
    name:  str
    email: str

    @property
    def display_name(self) -> str:
        return self.name or self.email.split("@")[0]


@dataclass(frozen=True)
class AuthState:
    user:    Optional[Identity] = None
    loading: bool = False


def is_allowed(identity: Identity, domain: str) -> bool:
    """True iff the identity's email ends with ``@<domain>`` (case-insensitive)."""
    suffix = "@" + domain.lstrip("@").lower()
    return identity.email.strip().lower().endswith(suffix)


def check_access(state: AuthState, domain: str) -> AccessDecision:
    if state.loading:
        return AccessDecision.LOADING
    if state.user is None:
        return AccessDecision.SIGNED_OUT
    if not is_allowed(state.user, domain):
        logger.warning("Access denied for %s (allowed domain: %s)", state.user.email, domain)
        return AccessDecision.DENIED
    return AccessDecision.GRANTED


def require_access(state: AuthState, domain: str) -> Identity:
    """Return the granted identity or raise ``AccessDeniedError``."""
    decision = check_access(state, domain)
    if decision is not AccessDecision.GRANTED:
        raise AccessDeniedError(
            f"You need an @{domain.lstrip('@')} account to use this application."
        )
    return state.user


def identity_from_user_info(user_info: Mapping[str, Any]) -> Optional[Identity]:
    """
    Build an Identity from an OIDC user-info mapping (e.g. ``st.user``).

    Returns None when the mapping reports a signed-out user or has no email.
    """
    if not user_info.get("is_logged_in", True):
        return None
    email = str(user_info.get("email") or "").strip()
    if not email:
        return None
    return Identity(name=str(user_info.get("name") or "").strip(), email=email)
