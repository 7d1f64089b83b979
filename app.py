import logging
import streamlit as st
from core.i18n import is_rtl, t
from core.registry import load_config, load_enabled_modules, nav_modules
from core.store import next_language, open_stores
from core.types import AppContext
from core.utils import cancel_analysis, inject_css, navigate

cfg = load_config()

logging.basicConfig(
    level=cfg["app"]["log_level"],
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)

st.set_page_config(page_title=cfg["app"]["title"], layout="wide")


@st.cache_resource
def _stores(data_dir: str):
    # one store pair per process; the file is loaded here and saved on each mutation
    return open_stores(data_dir)


# 1) Stores and preferences
reports, pref_store = _stores(cfg["app"]["data_dir"])
prefs = pref_store.load()
lang = prefs.language
inject_css(dark=prefs.dark_mode, rtl=is_rtl(lang))

# 2) Disclaimer gate
if not prefs.disclaimer_accepted:
    st.title(t("disclaimer_title", lang))
    st.warning(t("disclaimer_text", lang))
    if st.button(t("accept_disclaimer", lang), type="primary"):
        prefs.disclaimer_accepted = True
        pref_store.save(prefs)
        st.rerun()
    st.stop()

# 3) Pages
modules = {m.id: m for m in load_enabled_modules(cfg)}
nav = nav_modules(cfg, list(modules.values()))
page = st.session_state.get("page", nav[0].id if nav else "")

with st.sidebar:
    st.title(t("app_title", lang))
    for m in nav:
        if st.button(t(m.title, lang), key=f"nav_{m.id}", width="stretch",
                     type="primary" if m.id == page else "secondary"):
            navigate(m.id)
    st.divider()
    if st.button(f"{t('language', lang)}: {lang.upper()}", width="stretch"):
        cancel_analysis()
        prefs.language = next_language(lang)
        pref_store.save(prefs)
        st.rerun()
    dark = st.toggle(t("dark_mode", lang), value=prefs.dark_mode)
    if dark != prefs.dark_mode:
        cancel_analysis()
        prefs.dark_mode = dark
        pref_store.save(prefs)
        st.rerun()

ctx = AppContext(config=cfg, reports=reports, prefs=prefs, pref_store=pref_store)
if page in modules:
    modules[page].render(ctx)

st.caption(t("disclaimer_pdf", lang))
