import json
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, TypeVar

from google import genai
from google.genai import types as gat

from core.capture import CapturedImage
from core.types import AnalysisData, HIGHLIGHT_COLORS, MARKER_STATUSES, URGENCY_LEVELS

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MODEL = "gemini-3-pro-preview"
PROGRESS_STEPS = ("scanning_doc", "biometric_ext", "clinical_val")

LANGUAGE_NAMES = {"en": "English", "ar": "Arabic", "fr": "French"}


class AnalysisError(RuntimeError):
    pass


class AnalysisTimeout(AnalysisError):
    pass


class AnalysisCancelled(AnalysisError):
    pass


def _str(description: Optional[str] = None, enum: Optional[tuple] = None) -> dict:
    s: dict = {"type": "STRING"}
    if description:
        s["description"] = description
    if enum:
        s["enum"] = list(enum)
    return s


def _str_array(description: str) -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}, "description": description}


RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "document_type": _str("Exact type of medical document (e.g. Histopathology, CBC, MRI, ECG, Prescription)."),
        "summary": _str("Patient explanation in simple language. Trilingual comparison: (Arabic, French, English)."),
        "clinical_report": _str("Technical professional report for doctors with Differential Diagnosis and evidence-based plan."),
        "executive_summary": _str("Short executive summary for busy doctors with local pharmacy medicine suggestions."),
        "vital_markers": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": _str(),
                    "value": _str(),
                    "unit": _str(),
                    "range": _str(),
                    "status": _str(enum=MARKER_STATUSES),
                },
                "required": ["name", "value", "status"],
            },
        },
        "highlight_map": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "text": _str("Exact phrase from the document."),
                    "reason": _str("Why this is highlighted."),
                    "color": _str(enum=HIGHLIGHT_COLORS),
                },
                "required": ["text", "color"],
            },
        },
        "recommendations": _str_array("Lifestyle suggestions for patients."),
        "treatment_plan": _str_array("Clinical next steps and tests for the doctor."),
        "differential_diagnosis": _str_array("Differential diagnoses to consider, most likely first."),
        "complementary_tests": _str_array("Further tests that would narrow the diagnosis."),
        "urgency_level": _str(enum=URGENCY_LEVELS),
        "geographic_tips": _str("Generic medicine names and local protocols for the user region."),
        "specialized_findings": {
            "type": "OBJECT",
            "properties": {
                "qrs_complex": _str(),
                "ejection_fraction": _str(),
                "malignancy_risk": _str(),
                "drug_interactions": _str(),
            },
        },
    },
    "required": [
        "document_type", "summary", "clinical_report", "executive_summary",
        "vital_markers", "highlight_map", "urgency_level",
    ],
}


def build_prompt(location: str, language: str) -> str:
    lang_name = LANGUAGE_NAMES.get(language, language)
    return f"""You are a consultant professor of internal medicine and digital diagnostics.
Analyse the attached medical document with rigorous scientific accuracy.

Supported documents include lab panels, radiology, biopsies, ECGs and surgical reports.
Apply this conditional focus:
1. Biopsy: malignant versus benign.
2. Radiology: impression and findings.
3. ECG: QRS complex and ejection fraction.
4. Prescription: drug-drug interactions.

Required output:
- Trilingual explanation of the results (Arabic, French, English) in clear comparable sections.
- highlight_map: the exact sensitive phrases from the document, each with a reason and a severity color.
- A simplified report for the patient and an evidence-based technical report for the doctor.
- Generic medicine names and regional protocols for: {location}.
- Write all free-text fields primarily in {lang_name}.

Respond with JSON only."""


def make_client(api_key: Optional[str], timeout_seconds: float) -> genai.Client:
    if not api_key:
        raise AnalysisError("Missing API key: set GEMINI_API_KEY")
    return genai.Client(
        api_key=api_key,
        http_options=gat.HttpOptions(timeout=int(timeout_seconds * 1000)),
    )


def parse_response(text: Optional[str]) -> AnalysisData:
    if not text:
        raise AnalysisError("Empty response from model")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise AnalysisError("Model response is not valid JSON") from e
    try:
        return AnalysisData.from_dict(payload)
    except ValueError as e:
        raise AnalysisError(f"Model response does not match schema: {e}") from e


def analyze_medical_report(
    image: CapturedImage,
    client: Any,
    location: str = "Global",
    language: str = "en",
    model: str = DEFAULT_MODEL,
) -> AnalysisData:
    logger.info("Analysing %s (%d bytes) with %s", image.file_name, len(image.image_bytes), model)
    try:
        resp = client.models.generate_content(
            model=model,
            contents=[
                gat.Part.from_bytes(data=image.image_bytes, mime_type=image.image_mime),
                build_prompt(location or "Global", language),
            ],
            config=gat.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
    except Exception as e:
        raise AnalysisError(f"Model request failed: {e}") from e
    data = parse_response(getattr(resp, "text", None))
    logger.info("Analysis done: %s, urgency %s", data.document_type, data.urgency_level)
    return data


def run_with_progress(
    fn: Callable[[], T],
    timeout: float,
    interval: float = 3.0,
    on_progress: Optional[Callable[[str], None]] = None,
    cancel: Optional[threading.Event] = None,
) -> T:
    """Run ``fn`` on a worker thread, waiting at most ``timeout`` seconds.

    ``on_progress`` is handed the next label of PROGRESS_STEPS every
    ``interval`` seconds. The labels are narration only; they say nothing about
    how far the request has actually got. Setting ``cancel`` abandons the wait.
    """
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analysis")
    try:
        future = pool.submit(fn)
        deadline = time.monotonic() + timeout
        step = 0
        if on_progress:
            on_progress(PROGRESS_STEPS[0])
        while True:
            if cancel is not None and cancel.is_set():
                future.cancel()
                raise AnalysisCancelled("Analysis cancelled")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                future.cancel()
                raise AnalysisTimeout(f"Analysis timed out after {timeout:g}s")
            done, _ = wait([future], timeout=min(interval, remaining))
            if done:
                break
            step += 1
            if on_progress:
                on_progress(PROGRESS_STEPS[step % len(PROGRESS_STEPS)])
        try:
            return future.result()
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(str(e)) from e
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
