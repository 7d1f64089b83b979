import html
import streamlit as st

# session key holding the threading.Event of the analysis in flight
CANCEL_KEY = "analysis_cancel"

PALETTE = {
    "low": "#2e7d32",
    "medium": "#1565c0",
    "high": "#f9a825",
    "emergency": "#c62828",
    "info": "#455a64",
}

STATUS_PALETTE = {
    "normal": "#059669",
    "low": "#d97706",
    "high": "#d97706",
    "critical": "#e11d48",
    "pending": "#64748b",
    "analyzed": "#059669",
    "failed": "#e11d48",
}

# (background, text) per severity, light then dark
HIGHLIGHT_THEME = {
    "light": {
        "red": ("#fecaca", "#7f1d1d"),
        "yellow": ("#fef08a", "#713f12"),
        "green": ("#bbf7d0", "#14532d"),
    },
    "dark": {
        "red": ("rgba(127,29,29,0.4)", "#fca5a5"),
        "yellow": ("rgba(113,63,18,0.4)", "#fde047"),
        "green": ("rgba(20,83,45,0.4)", "#86efac"),
    },
}

DARK_APP_CSS = """
.stApp { background: #020617; color: #e2e8f0; }
section[data-testid="stSidebar"] { background: #0f172a; }
.report-prose { background: rgba(15,23,42,0.6) !important; border-color: #334155 !important; }
"""


def highlight_css(dark: bool = False) -> str:
    theme = HIGHLIGHT_THEME["dark" if dark else "light"]
    rules = [
        ".hl { padding: 0 0.2em; border-radius: 0.35em; font-weight: 700; cursor: help; "
        "border-bottom: 2px solid currentColor; text-decoration: none; }",
        ".hl:hover, .hl:focus { text-decoration: underline; outline: none; }",
    ]
    for color, (bg, fg) in theme.items():
        rules.append(f".hl-{color} {{ background: {bg}; color: {fg}; }}")
    rules.append(
        ".report-prose { line-height: 1.7; font-size: 1.05rem; "
        "padding: 1.5rem; border-radius: 1.2rem; border: 1px solid #e2e8f0; background: #f8fafc; }"
    )
    return "\n".join(rules)


def inject_css(dark: bool = False, rtl: bool = False) -> None:
    css = highlight_css(dark)
    if dark:
        css += DARK_APP_CSS
    if rtl:
        css += "\n.stApp { direction: rtl; }"
    st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)


def color_box(text: str, level: str = "info"):
    col = PALETTE.get(level, "#455a64")
    st.markdown(
        f"""
        <div style=\"background:{col};padding:12px;border-radius:8px;color:white;font-weight:600;\">{html.escape(text)}</div>
        """,
        unsafe_allow_html=True,
    )


def badge(text: str, status: str) -> str:
    col = STATUS_PALETTE.get(status, PALETTE.get(status, "#455a64"))
    return (
        f'<span style="background:{col}1a;color:{col};padding:2px 10px;border-radius:8px;'
        f'font-size:0.7rem;font-weight:800;text-transform:uppercase;letter-spacing:0.05em;">{html.escape(text)}</span>'
    )


def prose(markup: str) -> None:
    # one line keeps markdown from re-parsing the block after a blank line
    body = markup.replace("\r\n", "\n").replace("\n", "<br>")
    st.markdown(f'<div class="report-prose">{body}</div>', unsafe_allow_html=True)


def cancel_analysis() -> None:
    """Tell an analysis still waiting in this session to give up."""
    cancel = st.session_state.get(CANCEL_KEY)
    if cancel is not None:
        cancel.set()


def navigate(page: str, report_id: str | None = None) -> None:
    cancel_analysis()
    st.session_state["page"] = page
    if report_id is not None:
        st.session_state["report_id"] = report_id
    st.rerun()
