import html
import logging

import streamlit as st
from core.capture import CaptureError, from_data_url
from core.i18n import t
from core.types import AppContext, MedicalReport
from core.utils import badge, navigate

id = "dashboard"
title = "dashboard"

logger = logging.getLogger(__name__)


def _thumbnail(report: MedicalReport) -> None:
    if not report.thumbnail:
        return
    try:
        st.image(from_data_url(report.thumbnail), width="stretch")
    except CaptureError:
        logger.warning("Report %s has an unreadable thumbnail", report.id)


def _card(report: MedicalReport, ctx: AppContext) -> None:
    lang = ctx.prefs.language
    data = report.analysis_data
    with st.container(border=True):
        c1, c2 = st.columns([1, 3])
        with c1:
            _thumbnail(report)
        with c2:
            st.markdown(f"**{html.escape(report.file_name)}**")
            status = badge(t(report.status.value, lang), report.status.value)
            urgency = badge(f"{t('urgency', lang)}: {t(data.urgency_level, lang)}", data.urgency_level) if data else ""
            st.markdown(f"{status} {urgency}", unsafe_allow_html=True)
            if data:
                st.caption(f"{data.document_type} · {report.created_at[:10]}")
            else:
                st.caption(report.created_at[:10])
            b1, b2 = st.columns(2)
            if data and b1.button(t("view_details", lang), key=f"view_{report.id}"):
                navigate("report", report.id)
            if b2.button(t("delete", lang), key=f"del_{report.id}"):
                ctx.reports.delete(report.id)
                st.rerun()


def render(ctx: AppContext) -> None:
    lang = ctx.prefs.language
    head, action = st.columns([3, 1])
    head.header(t("dashboard", lang))
    if action.button(t("upload_report", lang), type="primary"):
        navigate("upload")

    reports = ctx.reports.all()
    if not reports:
        st.info(t("no_reports", lang))
        return

    cols = st.columns(2)
    for i, r in enumerate(reports):
        with cols[i % 2]:
            _card(r, ctx)
