import html
from typing import List

import streamlit as st
from core.highlight import highlight
from core.i18n import t
from core.report import build_pdf
from core.types import AnalysisData, AppContext, DoctorSpecialty, VitalMarker
from core.utils import badge, color_box, navigate, prose

id = "report"
title = "report"

DOCTOR_SPECIALTIES = [
    DoctorSpecialty.GENERAL,
    DoctorSpecialty.CARDIOLOGY,
    DoctorSpecialty.LABORATORY,
    DoctorSpecialty.INTERNAL_MEDICINE,
]

# specialty -> findings shown for it
SPECIALTY_FINDINGS = {
    DoctorSpecialty.CARDIOLOGY: ("qrs_complex", "ejection_fraction"),
    DoctorSpecialty.LABORATORY: ("malignancy_risk",),
    DoctorSpecialty.INTERNAL_MEDICINE: ("drug_interactions",),
}


def _numbered(items: List[str]) -> None:
    st.markdown("\n".join(f"{i}. {x}" for i, x in enumerate(items, start=1)))


def _markers(markers: List[VitalMarker], lang: str) -> None:
    st.subheader(t("markers", lang))
    cols = st.columns(2)
    for i, m in enumerate(markers):
        with cols[i % 2].container(border=True):
            st.markdown(
                f"**{html.escape(m.name)}** &nbsp; {badge(t(m.status, lang), m.status)}",
                unsafe_allow_html=True,
            )
            st.markdown(f"### {html.escape(str(m.value))} <small>{html.escape(m.unit)}</small>", unsafe_allow_html=True)
            st.caption(f"{t('range', lang)}: {m.range or '—'}")


def _findings(data: AnalysisData, specialty: DoctorSpecialty, lang: str) -> None:
    keys = SPECIALTY_FINDINGS.get(specialty)
    if not keys or not data.specialized_findings:
        return
    cols = st.columns(len(keys))
    for col, key in zip(cols, keys):
        col.metric(t(key, lang), data.specialized_findings.get(key) or t("not_available", lang))


def render(ctx: AppContext) -> None:
    lang = ctx.prefs.language
    report = ctx.reports.get(st.session_state.get("report_id", ""))

    top, export = st.columns([3, 1])
    if top.button(f"← {t('dashboard', lang)}"):
        navigate("dashboard")

    if report is None or report.analysis_data is None:
        st.warning(t("report_missing", lang))
        return
    data = report.analysis_data

    export.download_button(
        t("export_pdf", lang),
        data=build_pdf(report, lang),
        file_name=f"{report.file_name.rsplit('.', 1)[0]}-analysis.pdf",
        mime="application/pdf",
        type="primary",
    )

    view = st.radio(
        t("report", lang),
        ["patient", "doctor"],
        format_func=lambda v: t(f"{v}_view", lang),
        horizontal=True,
        label_visibility="collapsed",
        key="report_view",
    )
    doctor = view == "doctor"
    specialty = DoctorSpecialty.GENERAL
    if doctor:
        specialty = st.radio(
            t("specialty", lang),
            DOCTOR_SPECIALTIES,
            format_func=lambda s: t(s.value, lang),
            horizontal=True,
            key="report_specialty",
        )

    main, side = st.columns([2, 1])
    with main:
        st.title(data.document_type)
        st.markdown(
            badge(f"{t('urgency', lang)}: {t(data.urgency_level, lang)}", data.urgency_level),
            unsafe_allow_html=True,
        )
        if data.urgency_level == "emergency":
            color_box(t("emergency_notice", lang), level="emergency")
        if doctor and data.executive_summary:
            st.info(f"**{t('executive_summary', lang)}**\n\n{data.executive_summary}")

        st.subheader(t("clinical_analysis", lang) if doctor else t("summary", lang))
        text = data.clinical_report if doctor else data.summary
        prose(highlight(text, data.highlight_map, escape_text=True))

        if doctor:
            _findings(data, specialty, lang)
            if data.differential_diagnosis:
                st.subheader(t("differential_diagnosis", lang))
                _numbered(data.differential_diagnosis)
            if data.complementary_tests:
                st.subheader(t("complementary_tests", lang))
                _numbered(data.complementary_tests)

        if data.vital_markers:
            _markers(data.vital_markers, lang)

    with side:
        items = data.treatment_plan if doctor else data.recommendations
        with st.container(border=True):
            st.subheader(t("treatment_plan", lang) if doctor else t("lifestyle_tips", lang))
            if items:
                _numbered(items)
        if data.geographic_tips:
            with st.container(border=True):
                st.subheader(t("local_tips", lang))
                st.markdown(f"*{data.geographic_tips}*")
        st.caption(t("hover_hint", lang))
