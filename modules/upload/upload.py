import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

import streamlit as st
from core.analysis import AnalysisCancelled, AnalysisError, analyze_medical_report, make_client, run_with_progress
from core.capture import CaptureError, CapturedImage, UPLOAD_EXTENSIONS, from_camera, load_capture, make_thumbnail
from core.i18n import t
from core.registry import api_key
from core.types import AnalysisStatus, AppContext, MedicalReport
from core.utils import CANCEL_KEY, navigate

id = "upload"
title = "upload"

logger = logging.getLogger(__name__)


def _acquire(lang: str) -> Optional[CapturedImage]:
    use_camera = st.toggle(t("use_camera", lang), key="upload_camera")
    try:
        if use_camera:
            shot = st.camera_input(t("take_photo", lang))
            return from_camera(shot.getvalue(), shot.type or "image/jpeg") if shot is not None else None
        up = st.file_uploader(t("choose_file", lang), type=UPLOAD_EXTENSIONS)
        return load_capture(up.getvalue(), up.type, up.name) if up is not None else None
    except CaptureError:
        logger.warning("Rejected upload", exc_info=True)
        st.error(t("invalid_file", lang))
        return None


def new_report(image: CapturedImage, data, user_id: str, thumb_px: int) -> MedicalReport:
    return MedicalReport(
        id=str(uuid.uuid4()),
        user_id=user_id,
        file_name=image.file_name,
        file_type=image.mime_type,
        file_size=image.file_size,
        thumbnail=make_thumbnail(image.image_bytes, thumb_px),
        status=AnalysisStatus.ANALYZED,
        created_at=datetime.now(timezone.utc).isoformat(),
        analysis_data=data,
    )


def render(ctx: AppContext) -> None:
    lang = ctx.prefs.language
    app_cfg = ctx.config["app"]
    cfg = ctx.config["analysis"]
    st.header(t("upload", lang))

    image = _acquire(lang)
    if image is None:
        return

    st.image(image.image_bytes, width=320)
    location = st.text_input(t("location", lang), value=cfg["default_location"])

    if not st.button(t("analyze", lang), type="primary"):
        return

    cancel = threading.Event()
    st.session_state[CANCEL_KEY] = cancel
    report = None
    with st.status(t("analyzing", lang), expanded=False) as status:
        try:
            client = make_client(api_key(), cfg["timeout_seconds"])
            data = run_with_progress(
                lambda: analyze_medical_report(image, client, location=location, language=lang, model=cfg["model"]),
                timeout=float(cfg["timeout_seconds"]),
                interval=float(cfg["progress_interval"]),
                on_progress=lambda key: status.update(label=t(key, lang)),
                cancel=cancel,
            )
            report = new_report(image, data, app_cfg["user_id"], int(app_cfg["thumbnail_px"]))
            ctx.reports.add(report)
            status.update(label=data.document_type, state="complete")
        except AnalysisCancelled:
            logger.info("Analysis of %s cancelled", image.file_name)
            return
        except (AnalysisError, CaptureError):
            logger.exception("Analysis of %s failed", image.file_name)
            status.update(state="error")

    if report is None:
        st.error(t("analysis_failed", lang))
        return
    navigate("report", report.id)
