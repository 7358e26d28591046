# streamlit_app.py – QuizMaker
# PDF → AI-generated multiple-choice quiz, shareable quiz links, feedback inbox

import sys
from pathlib import Path

# make src/ importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

import html as _html
import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from quizmaker.auth import (
    AccessDecision,
    AuthState,
    Identity,
    check_access,
    identity_from_user_info,
)
from quizmaker.authoring import (
    QUESTION_COUNT_CHOICES,
    AuthoringStatus,
    QuizAuthoring,
)
from quizmaker.config import get_settings
from quizmaker.dashboard import can_manage, dashboard_rows, feedback_rows
from quizmaker.database import QuizStore
from quizmaker.errors import (
    IncompleteSubmissionError,
    QuizMakerError,
    QuizValidationError,
)
from quizmaker.generator import QuizGenerator
from quizmaker.log import configure_logging
from quizmaker.models import FeedbackReport, FeedbackType, Quiz
from quizmaker.pdf_text import extract_text
from quizmaker.router import (
    CREATE_HASH,
    DASHBOARD_HASH,
    FEEDBACK_HASH,
    FEEDBACK_LIST_HASH,
    CreateRoute,
    DashboardRoute,
    FeedbackFormRoute,
    FeedbackListRoute,
    QuizRoute,
    hash_from_query_params,
    parse_route,
    query_params_for,
    quiz_link,
    resolve_view,
)
from quizmaker.session import OptionMark, QuizSession, SessionState

# Color constants
BG_DARK      = "#F5F7F6"
BG_CARD      = "#FFFFFF"
GREEN        = "#00A870"
GREEN_LITE   = "#E6F7F0"
ORANGE       = "#F08C00"
RED          = "#D13438"
RED_LITE     = "#FDECEC"
TEXT_PRIMARY = "#1B1B1B"
TEXT_MUTED   = "#616161"
BORDER       = "#E1DFDD"

# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="QuizMaker – PDF to Quiz",
    page_icon="📝",
    layout="centered",
)

settings = get_settings()
configure_logging(settings.app.log_level)
logger = logging.getLogger("quizmaker.app")

st.markdown(f"""
<style>
  [data-testid="stAppViewContainer"] {{ background: {BG_DARK}; }}
  [data-testid="stSidebarNav"]       {{ display: none; }}
  h1, h2, h3, h4                     {{ color: {TEXT_PRIMARY} !important; }}
  .qm-card {{
    background:{BG_CARD};border:1px solid {BORDER};border-radius:10px;
    padding:14px 18px;margin-bottom:10px;
  }}
  .qm-opt {{
    border:1px solid {BORDER};border-radius:8px;padding:8px 12px;margin:4px 0;
    background:{BG_CARD};color:{TEXT_PRIMARY};
  }}
  .qm-opt-correct  {{ background:{GREEN_LITE};border-color:{GREEN};color:{GREEN};font-weight:600; }}
  .qm-opt-wrong    {{ background:{RED_LITE};border-color:{RED};text-decoration:line-through; }}
  .qm-opt-selected {{ background:{GREEN_LITE};border-color:{GREEN}; }}
  .qm-opt-faded    {{ opacity:0.6; }}
  .qm-badge {{
    background:{ORANGE}22;color:{ORANGE};border:1px solid {ORANGE}55;border-radius:12px;
    padding:2px 10px;font-size:0.8rem;font-weight:700;
  }}
</style>
""", unsafe_allow_html=True)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _card(label: str, value: str, color: str = GREEN) -> str:
    return f"""
    <div style="background:{BG_CARD};border-left:4px solid {color};border-radius:4px;
                padding:10px 16px;margin-bottom:8px;border:1px solid {BORDER};">
      <div style="color:{TEXT_MUTED};font-size:0.7rem;font-weight:600;text-transform:uppercase;
                  letter-spacing:.06em;margin-bottom:3px;">{label}</div>
      <div style="color:{TEXT_PRIMARY};font-size:1rem;font-weight:700;">{value}</div>
    </div>"""


def _option_html(option: str, mark: OptionMark) -> str:
    icon = "✅ " if mark is OptionMark.CORRECT else ""
    return f'<div class="qm-opt qm-opt-{mark.value}">{icon}{_html.escape(option)}</div>'


def _navigate(url_hash: str) -> None:
    st.query_params.from_dict(query_params_for(url_hash))
    st.rerun()


def _nav_button(label: str, url_hash: str, key: str) -> None:
    if st.button(label, key=key):
        _navigate(url_hash)


def _footer() -> None:
    st.markdown(
        f"<p style='text-align:center;color:{TEXT_MUTED};font-size:0.8rem;margin-top:32px;'>"
        "QuizMaker</p>",
        unsafe_allow_html=True,
    )


# ─── Shared resources ─────────────────────────────────────────────────────────

@st.cache_resource
def _get_store() -> QuizStore:
    store = QuizStore(settings.store.db_path)
    store.init_db()
    return store


@st.cache_resource
def _get_generator() -> QuizGenerator:
    return QuizGenerator(settings)


try:
    store = _get_store()
except QuizMakerError as _e:
    st.error(str(_e))
    st.stop()


# ─── Login gate ──────────────────────────────────────────────────────────────

def _auth_state() -> AuthState:
    if settings.auth.mode == "oidc":
        if not st.user.is_logged_in:
            return AuthState(user=None)
        return AuthState(user=identity_from_user_info(st.user.to_dict()))
    return AuthState(user=st.session_state.get("identity"))


def _sign_out() -> None:
    for k in list(st.session_state.keys()):
        del st.session_state[k]
    if settings.auth.mode == "oidc":
        st.logout()
    st.rerun()


def _show_login() -> None:
    st.markdown(f"""
    <div style="text-align:center;margin:60px 0 24px;">
      <span style="font-size:3rem;">📝</span>
      <h2 style="margin-top:8px;">QuizMaker</h2>
      <p style="color:{TEXT_MUTED};">Sign in with your @{settings.auth.allowed_domain} account.</p>
    </div>
    """, unsafe_allow_html=True)

    if settings.auth.mode == "oidc":
        if st.button("🔓  Sign in", use_container_width=True, type="primary"):
            st.login()
        return

    with st.form("login_form", clear_on_submit=False):
        name = st.text_input("Name", placeholder="Taro Yamada")
        email = st.text_input("Email", placeholder=f"taro.yamada@{settings.auth.allowed_domain}")
        submitted = st.form_submit_button("🔓  Sign in", use_container_width=True)
    if submitted:
        if not email.strip():
            st.error("Please enter your email address.")
        else:
            st.session_state["identity"] = Identity(name=name.strip(), email=email.strip())
            st.rerun()


def _show_access_denied(identity: Identity) -> None:
    st.markdown(f"""
    <div class="qm-card" style="text-align:center;margin-top:60px;">
      <h2 style="color:{RED} !important;">Access denied</h2>
      <p style="color:{TEXT_MUTED};">
        You are signed in as <b>{_html.escape(identity.email)}</b>.<br/>
        This application requires an <code>@{settings.auth.allowed_domain}</code> account.
      </p>
    </div>
    """, unsafe_allow_html=True)
    if st.button("Sign out and use another account", use_container_width=True):
        _sign_out()


auth_state = _auth_state()
decision = check_access(auth_state, settings.auth.allowed_domain)
if decision is AccessDecision.LOADING:
    st.stop()
if decision is AccessDecision.SIGNED_OUT:
    _show_login()
    st.stop()
if decision is AccessDecision.DENIED:
    _show_access_denied(auth_state.user)
    st.stop()

identity: Identity = auth_state.user


# ─── Loaded quiz set (init on first run, replaced on every fetch) ────────────

def _load_quizzes() -> None:
    with st.spinner("Loading quizzes…"):
        try:
            st.session_state["quizzes"] = {q.id: q for q in store.list_quizzes()}
        except QuizMakerError as e:
            st.session_state["quizzes"] = {}
            st.error(str(e))


if "quizzes" not in st.session_state:
    _load_quizzes()

quizzes: dict[str, Quiz] = st.session_state["quizzes"]


# ─── Sidebar ─────────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("### 📝 QuizMaker")
    st.markdown(f"Signed in as **{_html.escape(identity.display_name)}**")
    st.caption(identity.email)
    if st.button("Sign Out", use_container_width=True):
        _sign_out()
    st.markdown("---")
    for _svc, _badge in settings.status_summary().items():
        st.caption(f"{_badge} · {_svc}")


# ═════════════════════════════════════════════════════════════════════════════
# VIEW – Create (#/)
# ═════════════════════════════════════════════════════════════════════════════

def _authoring() -> QuizAuthoring:
    if "authoring" not in st.session_state:
        st.session_state["authoring"] = QuizAuthoring(creator=identity.display_name)
        st.session_state["create_creator"] = identity.display_name
    return st.session_state["authoring"]


def _on_file_change() -> None:
    authoring = st.session_state["authoring"]
    upload = st.session_state.get("create_file")
    if upload is None:
        authoring.clear_file()
        return
    authoring.title = st.session_state.get("create_title", "")
    authoring.description = st.session_state.get("create_description", "")
    authoring.select_file(upload.name, upload.getvalue())
    st.session_state["create_title"] = authoring.title
    st.session_state["create_description"] = authoring.description


def _reset_authoring() -> None:
    authoring = st.session_state["authoring"]
    authoring.reset()
    authoring.creator = identity.display_name
    for k in ("create_title", "create_description", "create_file", "create_count"):
        st.session_state.pop(k, None)
    st.session_state["create_creator"] = identity.display_name


@st.dialog("Confirm quiz")
def _confirm_dialog(authoring: QuizAuthoring) -> None:
    st.write(
        f"Register **{_html.escape(authoring.title)}** ({len(authoring.items)} questions) "
        "and create a shareable link?"
    )
    c1, c2 = st.columns(2)
    if c1.button("Confirm", type="primary", use_container_width=True):
        try:
            with st.spinner("Saving quiz…"):
                authoring.confirm(store.create_quiz, settings.app.base_url)
            quiz = store.get_quiz(authoring.quiz_id)
            if quiz is not None:
                st.session_state["quizzes"][quiz.id] = quiz
            st.toast("The quiz was confirmed and added to the dashboard.", icon="✅")
        except QuizMakerError as e:
            logger.warning("Quiz confirmation failed: %s", e)
        st.rerun()
    if c2.button("Cancel", use_container_width=True):
        st.rerun()


@st.dialog("Export to Google Forms")
def _folder_dialog(authoring: QuizAuthoring) -> None:
    folder_url = st.text_input(
        "Google Drive folder URL (optional)",
        placeholder="https://drive.google.com/drive/folders/…",
        help="Leave blank to create the form in the root of My Drive.",
    )
    if st.button("Generate script", type="primary", use_container_width=True):
        authoring.export_script(folder_url)
        st.rerun()


def _render_items_preview(authoring: QuizAuthoring) -> None:
    for i, item in enumerate(authoring.items):
        marks = "".join(
            _option_html(o, OptionMark.CORRECT if o == item.answer else OptionMark.PLAIN)
            for o in item.options
        )
        st.markdown(
            f'<div class="qm-card"><b>{i + 1}. {_html.escape(item.question)}</b>{marks}</div>',
            unsafe_allow_html=True,
        )


def render_create() -> None:
    authoring = _authoring()

    st.markdown("## 📝 QuizMaker")
    st.caption("Upload a PDF and the AI generates a multiple-choice quiz from its content.")
    _c1, _c2 = st.columns([3, 1])
    with _c2:
        _nav_button("Admin menu →", DASHBOARD_HASH, key="nav_admin_from_create")

    if authoring.status is AuthoringStatus.IDLE:
        title = st.text_input(
            "Quiz title *", key="create_title",
            placeholder='e.g. "Compliance training" comprehension check',
        )
        description = st.text_area(
            "Description", key="create_description", height=90,
            placeholder="e.g. This quiz checks understanding of last week's compliance training.",
        )
        creator = st.text_input("Creator name", key="create_creator", placeholder="e.g. Taro Yamada")
        count = st.selectbox(
            "Number of questions", QUESTION_COUNT_CHOICES,
            index=QUESTION_COUNT_CHOICES.index(authoring.question_count), key="create_count",
        )
        st.file_uploader(
            "Source PDF *", type=["pdf"], key="create_file", on_change=_on_file_change,
        )

        authoring.title = title
        authoring.description = description
        authoring.creator = creator
        authoring.set_question_count(count)

        if st.button(
            "▶️  Generate quiz", type="primary", use_container_width=True,
            disabled=not authoring.can_start or authoring.is_busy,
        ):
            generator = _get_generator()
            with st.status("Extracting text from the PDF…", expanded=False) as status_box:
                def _on_status(status: AuthoringStatus) -> None:
                    if status is AuthoringStatus.GENERATING:
                        status_box.update(
                            label=f"The AI is writing {authoring.question_count} question(s)…"
                        )
                try:
                    ok = authoring.start(extract_text, generator.generate, on_status=_on_status)
                except QuizValidationError as e:
                    st.warning(str(e))
                    return
                status_box.update(
                    label="Quiz generated" if ok else "Generation failed",
                    state="complete" if ok else "error",
                )
            st.rerun()

    elif authoring.status is AuthoringStatus.ERROR:
        st.error(authoring.error or "An unexpected error occurred.")
        if st.button("Try again", use_container_width=True):
            _reset_authoring()
            st.rerun()

    elif authoring.is_busy:
        # a rerun interrupted start() before it reached READY or ERROR
        st.warning("The previous generation was interrupted before it finished.")
        if st.button("Start over", use_container_width=True, key="reset_interrupted"):
            _reset_authoring()
            st.rerun()

    elif authoring.status in (AuthoringStatus.READY, AuthoringStatus.DONE):
        is_done = authoring.status is AuthoringStatus.DONE
        st.markdown(f"### {'Generated questions and answers' if is_done else 'Preview (admin only)'}")
        _render_items_preview(authoring)

        st.markdown("---")
        output = st.radio(
            "Output format",
            ["Shareable quiz URL", "Google Apps Script (Google Forms)"],
            index=1 if is_done else 0,
            horizontal=True,
        )
        if output == "Shareable quiz URL":
            if authoring.shareable_url:
                st.success("Quiz confirmed. Share this link with respondents:")
                st.code(authoring.shareable_url, language=None)
            elif st.button("✅  Confirm quiz & create URL", type="primary", use_container_width=True):
                _confirm_dialog(authoring)
        else:
            if authoring.script:
                st.code(authoring.script, language="javascript")
                st.download_button(
                    "⬇️ Download script",
                    data=authoring.script,
                    file_name="create_quiz_form.gs",
                    mime="text/plain",
                    use_container_width=True,
                )
            elif st.button("📜  Generate Apps Script", type="primary", use_container_width=True):
                _folder_dialog(authoring)

        if st.button("↺  Start over", use_container_width=True):
            _reset_authoring()
            st.rerun()


# ═════════════════════════════════════════════════════════════════════════════
# VIEW – Admin dashboard (#/admin)
# ═════════════════════════════════════════════════════════════════════════════

@st.dialog("Delete quiz")
def _delete_dialog(quiz: Quiz) -> None:
    st.write(f"Really delete **{_html.escape(quiz.title)}**? This cannot be undone.")
    c1, c2 = st.columns(2)
    if c1.button("Delete", type="primary", use_container_width=True):
        try:
            store.delete_quiz(quiz.id)
        except QuizMakerError as e:
            st.error(str(e))
            return
        st.session_state["quizzes"].pop(quiz.id, None)
        st.rerun()
    if c2.button("Cancel", use_container_width=True):
        st.rerun()


def render_dashboard() -> None:
    st.markdown("## 🗂️ Admin menu")
    c1, c2, c3 = st.columns(3)
    with c1:
        _nav_button("← Back to create", CREATE_HASH, key="nav_create_from_admin")
    with c2:
        _nav_button("Feedback / bug report", FEEDBACK_HASH, key="nav_feedback_from_admin")
    with c3:
        if st.button("⟳ Refresh", key="refresh_quizzes"):
            _load_quizzes()
            st.rerun()

    rows = dashboard_rows(quizzes.values(), identity)
    k1, k2, k3 = st.columns(3)
    with k1:
        st.markdown(_card("Quizzes", str(len(rows))), unsafe_allow_html=True)
    with k2:
        st.markdown(_card("Responses", str(sum(r["Responses"] for r in rows)), ORANGE), unsafe_allow_html=True)
    with k3:
        st.markdown(_card("Created by you", str(sum(r["Mine"] for r in rows)), TEXT_MUTED), unsafe_allow_html=True)

    if not rows:
        st.info("No quizzes have been created yet.", icon="📭")
        return

    df = pd.DataFrame(rows)
    df["Link"] = [quiz_link(settings.app.base_url, qid) for qid in df["id"]]
    st.dataframe(
        df.drop(columns=["id", "Mine"]),
        use_container_width=True,
        hide_index=True,
        column_config={
            "No.":       st.column_config.NumberColumn("No.", width="small"),
            "Title":     st.column_config.TextColumn("Title", width="large"),
            "Link":      st.column_config.LinkColumn("Quiz URL", display_text="Open quiz"),
            "Creator":   st.column_config.TextColumn("Creator", width="medium"),
            "Created":   st.column_config.TextColumn("Created", width="medium"),
            "Questions": st.column_config.NumberColumn("Qs", width="small"),
            "Responses": st.column_config.NumberColumn("Responses", width="small"),
        },
    )

    st.markdown("#### Your quizzes")
    mine = [r for r in rows if r["Mine"]]
    if not mine:
        st.caption("Quizzes you create appear here with preview and delete actions.")
    for r in mine:
        quiz = quizzes[r["id"]]
        a, b, c = st.columns([5, 2, 1])
        a.markdown(f"**{_html.escape(quiz.title)}**  \n{r['Created']} · {r['Responses']} response(s)")
        b.link_button("👁 Preview", quiz_link(settings.app.base_url, quiz.id, preview=True))
        if c.button("🗑", key=f"delete_{quiz.id}", help="Delete this quiz", disabled=not can_manage(quiz, identity)):
            _delete_dialog(quiz)

    bar_fig = go.Figure(go.Bar(
        x=[r["Responses"] for r in rows],
        y=[r["Title"] for r in rows],
        orientation="h",
        marker_color=GREEN,
    ))
    bar_fig.update_layout(
        title="Responses per quiz", height=max(220, 40 * len(rows)),
        margin=dict(l=10, r=10, t=40, b=10), yaxis=dict(autorange="reversed"),
    )
    st.plotly_chart(bar_fig, use_container_width=True)


# ═════════════════════════════════════════════════════════════════════════════
# VIEW – Take quiz (#/quiz/<id>[?preview=true])
# ═════════════════════════════════════════════════════════════════════════════

def _quiz_session(quiz: Quiz, preview: bool) -> QuizSession:
    key = f"quiz_session::{quiz.id}::{preview}"
    if key not in st.session_state:
        st.session_state[key] = QuizSession(quiz, preview=preview)
        st.session_state[key + "::attempt"] = 0
    return st.session_state[key]


def _on_pick(session: QuizSession, index: int, widget_key: str) -> None:
    choice = st.session_state.get(widget_key)
    if choice is not None:
        session.select(index, choice)


def render_quiz(route: QuizRoute) -> None:
    quiz = quizzes[route.quiz_id]
    session = _quiz_session(quiz, route.is_preview)
    attempt_key = f"quiz_session::{quiz.id}::{route.is_preview}::attempt"

    badge = '<br/><span class="qm-badge">Preview mode (admin)</span>' if session.is_preview else ""
    st.markdown(f"""
    <div class="qm-card" style="border-top:4px solid {GREEN};">
      <h2 style="margin:0;">{_html.escape(quiz.title)}</h2>
      <p style="color:{TEXT_MUTED};margin:4px 0 0;">{_html.escape(quiz.description)}</p>
      {badge}
    </div>
    """, unsafe_allow_html=True)

    if session.is_submitted:
        msg = ("Excellent, every answer is correct!" if session.is_perfect
               else "Well done. Why not try again?")
        st.markdown(f"""
        <div class="qm-card" style="text-align:center;">
          <h3 style="color:{GREEN} !important;margin:0;">Your result</h3>
          <div style="font-size:2.4rem;font-weight:800;margin:6px 0;">
            <span style="color:{GREEN};">{session.score}</span> / {session.total}
          </div>
          <div style="color:{TEXT_MUTED};">{msg}</div>
        </div>
        """, unsafe_allow_html=True)

    attempt = st.session_state[attempt_key]
    for i, item in enumerate(quiz.items):
        st.markdown(f"**Q{i + 1}.** {_html.escape(item.question)}")
        if session.state is SessionState.ANSWERING:
            widget_key = f"pick::{quiz.id}::{attempt}::{i}"
            st.radio(
                f"q{i + 1}",
                item.options,
                index=None,
                key=widget_key,
                label_visibility="collapsed",
                on_change=_on_pick,
                args=(session, i, widget_key),
            )
        else:
            st.markdown(
                "".join(_option_html(o, m) for o, m in session.option_marks(i)),
                unsafe_allow_html=True,
            )

    if session.is_preview:
        return

    st.markdown("---")
    if session.is_submitted:
        if st.button("↺  Try again", use_container_width=True, type="primary"):
            session.retry()
            st.session_state[attempt_key] = attempt + 1
            st.rerun()
        return

    st.caption(f"{session.answered_count} / {session.total} answered")
    if st.button("📤  Submit answers", type="primary", use_container_width=True):
        try:
            with st.spinner("Submitting…"):
                session.submit(store.increment_response_count)
        except IncompleteSubmissionError as e:
            st.warning(str(e))
            return
        except QuizMakerError as e:
            st.error(f"Your answers could not be submitted. {e}")
            return
        st.session_state["quizzes"][quiz.id] = quiz.model_copy(
            update={"response_count": quiz.response_count + 1}
        )
        st.rerun()


# ═════════════════════════════════════════════════════════════════════════════
# VIEW – Feedback (#/feedback, #/feedback/list)
# ═════════════════════════════════════════════════════════════════════════════

def render_feedback_form() -> None:
    st.markdown("## 💬 Feature requests & bug reports")
    st.caption("Thanks for using QuizMaker. Tell us what to improve.")
    c1, c2 = st.columns(2)
    with c1:
        _nav_button("← Back to admin menu", DASHBOARD_HASH, key="nav_admin_from_feedback")
    with c2:
        _nav_button("View submitted reports →", FEEDBACK_LIST_HASH, key="nav_list_from_feedback")

    with st.form("feedback_form", clear_on_submit=False):
        st.text_input("Reporter", value=identity.display_name, disabled=True)
        report_type = st.selectbox(
            "Type", list(FeedbackType), format_func=lambda t: t.label,
        )
        content = st.text_area(
            "Details", height=200,
            placeholder="Describe the improvement you would like or the problem you ran into.",
        )
        submitted = st.form_submit_button("Send", type="primary", use_container_width=True)

    if submitted:
        if not content.strip():
            st.warning("Please describe your report.")
            return
        try:
            with st.spinner("Sending…"):
                store.create_feedback(FeedbackReport(
                    reporter_name=identity.display_name,
                    reporter_email=identity.email,
                    type=report_type,
                    content=content,
                ))
        except QuizMakerError as e:
            st.error(f"Sending failed. Please try again later. ({e})")
            return
        st.toast("Thank you for your report!", icon="🙏")
        _navigate(DASHBOARD_HASH)


def render_feedback_list() -> None:
    st.markdown("## 📋 Submitted reports")
    _nav_button("← Back to report form", FEEDBACK_HASH, key="nav_form_from_list")
    try:
        with st.spinner("Loading…"):
            reports = store.list_feedback()
    except QuizMakerError as e:
        st.error(f"Reports could not be loaded. {e}")
        return
    if not reports:
        st.info("No reports yet.", icon="📭")
        return
    st.dataframe(
        pd.DataFrame(feedback_rows(reports)),
        use_container_width=True,
        hide_index=True,
        column_config={
            "Reported": st.column_config.TextColumn("Reported", width="medium"),
            "Reporter": st.column_config.TextColumn("Reporter", width="medium"),
            "Type":     st.column_config.TextColumn("Type", width="small"),
            "Content":  st.column_config.TextColumn("Details", width="large"),
        },
    )


def render_not_found() -> None:
    st.markdown("""
    <div class="qm-card" style="text-align:center;margin-top:40px;">
      <h2>Quiz Not Found</h2>
      <p>The quiz could not be found or may have been deleted.</p>
    </div>
    """, unsafe_allow_html=True)
    _nav_button("← Back to create", CREATE_HASH, key="nav_create_from_404")


# ─── Router ──────────────────────────────────────────────────────────────────

route = resolve_view(parse_route(hash_from_query_params(st.query_params.to_dict())), quizzes)

if isinstance(route, CreateRoute):
    render_create()
elif isinstance(route, DashboardRoute):
    render_dashboard()
elif isinstance(route, QuizRoute):
    render_quiz(route)
elif isinstance(route, FeedbackFormRoute):
    render_feedback_form()
elif isinstance(route, FeedbackListRoute):
    render_feedback_list()
else:
    render_not_found()

_footer()
