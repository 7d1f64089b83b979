import io
import json
from types import SimpleNamespace

import pytest
from PIL import Image
from streamlit.testing.v1 import AppTest

import modules.upload.upload as upload_page
from core.i18n import t
from core.registry import DEFAULTS
from core.store import KeyValueStore, PreferenceStore, ReportStore
from core.types import (
    AnalysisData,
    AnalysisStatus,
    AppContext,
    DoctorSpecialty,
    HighlightDirective,
    MedicalReport,
    Preferences,
)

ANALYSIS = {
    "document_type": "Lipid panel",
    "summary": "Your LDL is high.",
    "clinical_report": "LDL-C 162 mg/dL.",
    "executive_summary": "Consider statin.",
    "vital_markers": [{"name": "LDL", "value": "162", "unit": "mg/dL", "range": "<100", "status": "high"}],
    "highlight_map": [{"text": "LDL", "reason": "above target", "color": "red"}],
    "urgency_level": "medium",
}


def page_script(page, ctx):
    from importlib import import_module

    import_module(f"modules.{page}.{page}").render(ctx)


def make_ctx(tmp_path):
    kv = KeyValueStore(str(tmp_path / "store.json"))
    config = {k: dict(v) for k, v in DEFAULTS.items()}
    return AppContext(config=config, reports=ReportStore(kv), prefs=Preferences(), pref_store=PreferenceStore(kv))


def make_report(rid, data, thumbnail=""):
    return MedicalReport(
        id=rid,
        user_id="demo-user",
        file_name=f"{rid}.jpg",
        file_type="image/jpeg",
        file_size=10,
        thumbnail=thumbnail,
        status=AnalysisStatus.ANALYZED,
        created_at="2026-10-01T08:00:00+00:00",
        analysis_data=data,
    )


def bare_analysis(**extra):
    # no reasons, no specialty findings, no local tips
    return AnalysisData(
        document_type="Lipid panel",
        summary="LDL is high.",
        clinical_report="LDL-C 162 mg/dL.",
        executive_summary="",
        vital_markers=[],
        highlight_map=[HighlightDirective("LDL")],
        urgency_level="low",
        **extra,
    )


def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (40, 30), "white").save(buf, format="PNG")
    return buf.getvalue()


def fake_client(text=None, exc=None):
    def generate_content(**kwargs):
        if exc:
            raise exc
        return SimpleNamespace(text=text)

    return SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))


def submit_upload(ctx):
    at = AppTest.from_function(page_script, args=("upload", ctx), default_timeout=10)
    at.run()
    at.file_uploader[0].upload("scan.png", png_bytes(), "image/png")
    at.run()
    at.button[0].click()
    at.run()
    return at


def test_missing_api_key_shows_the_generic_alert(tmp_path, monkeypatch):
    monkeypatch.setattr(upload_page, "api_key", lambda: None)
    ctx = make_ctx(tmp_path)
    at = submit_upload(ctx)
    assert not at.exception
    assert [e.value for e in at.error] == [t("analysis_failed")]
    assert len(ctx.reports) == 0
    assert "page" not in at.session_state


def test_model_failure_shows_the_generic_alert(tmp_path, monkeypatch):
    monkeypatch.setattr(upload_page, "api_key", lambda: "test-key")
    monkeypatch.setattr(upload_page, "make_client", lambda key, timeout: fake_client(exc=RuntimeError("quota")))
    ctx = make_ctx(tmp_path)
    at = submit_upload(ctx)
    assert [e.value for e in at.error] == [t("analysis_failed")]
    assert "quota" not in at.error[0].value
    assert len(ctx.reports) == 0


def test_successful_analysis_is_stored_first_and_opened(tmp_path, monkeypatch):
    monkeypatch.setattr(upload_page, "api_key", lambda: "test-key")
    monkeypatch.setattr(upload_page, "make_client", lambda key, timeout: fake_client(json.dumps(ANALYSIS)))
    ctx = make_ctx(tmp_path)
    ctx.reports.add(make_report("older", bare_analysis()))
    at = submit_upload(ctx)
    assert not at.exception
    assert not at.error
    reports = ctx.reports.all()
    assert len(reports) == 2
    assert reports[1].id == "older"
    new = reports[0]
    assert new.file_name == "scan.png"
    assert new.status is AnalysisStatus.ANALYZED
    assert new.thumbnail.startswith("data:image/jpeg;base64,")
    assert new.analysis_data.document_type == "Lipid panel"
    assert at.session_state["page"] == "report"
    assert at.session_state["report_id"] == new.id


def run_report(ctx, rid):
    at = AppTest.from_function(page_script, args=("report", ctx), default_timeout=10)
    at.session_state["report_id"] = rid
    at.run()
    return at


def test_report_without_optional_fields_renders(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.reports.add(make_report("r1", bare_analysis()))
    at = run_report(ctx, "r1")
    assert not at.exception
    assert any("hl-yellow" in m.value for m in at.markdown)

    at.radio(key="report_view").set_value("doctor")
    at.run()
    at.radio(key="report_specialty").set_value(DoctorSpecialty.CARDIOLOGY)
    at.run()
    assert not at.exception
    assert len(at.metric) == 0
    assert t("local_tips") not in [s.value for s in at.subheader]


def test_missing_specialty_value_reads_not_available(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.reports.add(make_report("r1", bare_analysis(specialized_findings={"qrs_complex": "92 ms"})))
    at = run_report(ctx, "r1")
    at.radio(key="report_view").set_value("doctor")
    at.run()
    at.radio(key="report_specialty").set_value(DoctorSpecialty.CARDIOLOGY)
    at.run()
    assert [m.value for m in at.metric] == ["92 ms", t("not_available")]


def test_unknown_report_shows_warning(tmp_path):
    at = run_report(make_ctx(tmp_path), "gone")
    assert not at.exception
    assert [w.value for w in at.warning] == [t("report_missing")]


def test_dashboard_skips_unreadable_thumbnail(tmp_path):
    ctx = make_ctx(tmp_path)
    ctx.reports.add(make_report("broken", bare_analysis(), thumbnail="data:image/jpeg;base64,@@not-base64@@"))
    at = AppTest.from_function(page_script, args=("dashboard", ctx), default_timeout=10)
    at.run()
    assert not at.exception
    assert len(at.get("imgs")) == 0
    assert any("broken.jpg" in m.value for m in at.markdown)


def navigate_script():
    import threading

    import streamlit as st
    from core.utils import CANCEL_KEY, navigate

    if "page" not in st.session_state:
        st.session_state[CANCEL_KEY] = threading.Event()
        navigate("dashboard")


def test_navigating_away_cancels_a_running_analysis():
    at = AppTest.from_function(navigate_script)
    at.run()
    assert not at.exception
    assert at.session_state["page"] == "dashboard"
    assert at.session_state["analysis_cancel"].is_set()


@pytest.mark.parametrize("lang", ["ar", "fr"])
def test_upload_page_renders_in_every_language(tmp_path, lang):
    ctx = make_ctx(tmp_path)
    ctx.prefs.language = lang
    at = AppTest.from_function(page_script, args=("upload", ctx))
    at.run()
    assert not at.exception
    assert at.header[0].value == t("upload", lang)
