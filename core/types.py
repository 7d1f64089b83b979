from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, List, Dict, Any, Optional, Union


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    ANALYZED = "analyzed"
    FAILED = "failed"


class DoctorSpecialty(str, Enum):
    GENERAL = "general"
    CARDIOLOGY = "cardiology"
    LABORATORY = "laboratory"
    RADIOLOGY = "radiology"
    INTERNAL_MEDICINE = "internal_medicine"


HIGHLIGHT_COLORS = ("red", "yellow", "green")
MARKER_STATUSES = ("normal", "low", "high", "critical")
URGENCY_LEVELS = ("low", "medium", "high", "emergency")
LANGUAGES = ("en", "ar", "fr")

REQUIRED_ANALYSIS_FIELDS = (
    "document_type", "summary", "clinical_report", "executive_summary",
    "vital_markers", "highlight_map", "urgency_level",
)


def _str(v: Any) -> str:
    return "" if v is None else str(v)


def _str_list(v: Any) -> List[str]:
    if not isinstance(v, list):
        return []
    return [str(x) for x in v if x is not None]


@dataclass(frozen=True)
class HighlightDirective:
    text: str
    reason: str = ""
    color: str = "yellow"  # "red" | "yellow" | "green"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HighlightDirective":
        color = _str(d.get("color")).lower()
        return cls(
            text=_str(d.get("text")),
            reason=_str(d.get("reason")),
            color=color if color in HIGHLIGHT_COLORS else "yellow",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "reason": self.reason, "color": self.color}


@dataclass
class VitalMarker:
    name: str
    value: Union[str, float, int]
    unit: str = ""
    range: str = ""
    status: str = "normal"  # "normal" | "low" | "high" | "critical"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "VitalMarker":
        status = _str(d.get("status")).lower()
        value = d.get("value")
        return cls(
            name=_str(d.get("name")),
            value=value if isinstance(value, (int, float)) else _str(value),
            unit=_str(d.get("unit")),
            range=_str(d.get("range")),
            status=status if status in MARKER_STATUSES else "normal",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "unit": self.unit, "range": self.range, "status": self.status}


@dataclass
class AnalysisData:
    document_type: str
    summary: str
    clinical_report: str
    executive_summary: str
    vital_markers: List[VitalMarker]
    highlight_map: List[HighlightDirective]
    urgency_level: str  # "low" | "medium" | "high" | "emergency"
    recommendations: List[str] = field(default_factory=list)
    treatment_plan: List[str] = field(default_factory=list)
    differential_diagnosis: List[str] = field(default_factory=list)
    complementary_tests: List[str] = field(default_factory=list)
    geographic_tips: Optional[str] = None
    specialized_findings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisData":
        if not isinstance(d, dict):
            raise ValueError("analysis payload must be a JSON object")
        missing = [k for k in REQUIRED_ANALYSIS_FIELDS if k not in d]
        if missing:
            raise ValueError(f"analysis payload missing fields: {', '.join(missing)}")
        urgency = _str(d.get("urgency_level")).lower()
        if urgency not in URGENCY_LEVELS:
            raise ValueError(f"unknown urgency level: {d.get('urgency_level')!r}")
        findings = d.get("specialized_findings")
        return cls(
            document_type=_str(d["document_type"]),
            summary=_str(d["summary"]),
            clinical_report=_str(d["clinical_report"]),
            executive_summary=_str(d["executive_summary"]),
            vital_markers=[VitalMarker.from_dict(m) for m in d.get("vital_markers") or [] if isinstance(m, dict)],
            highlight_map=[HighlightDirective.from_dict(h) for h in d.get("highlight_map") or [] if isinstance(h, dict)],
            urgency_level=urgency,
            recommendations=_str_list(d.get("recommendations")),
            treatment_plan=_str_list(d.get("treatment_plan")),
            differential_diagnosis=_str_list(d.get("differential_diagnosis")),
            complementary_tests=_str_list(d.get("complementary_tests")),
            geographic_tips=d.get("geographic_tips") or None,
            specialized_findings=findings if isinstance(findings, dict) else {},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "document_type": self.document_type,
            "summary": self.summary,
            "clinical_report": self.clinical_report,
            "executive_summary": self.executive_summary,
            "vital_markers": [m.to_dict() for m in self.vital_markers],
            "highlight_map": [h.to_dict() for h in self.highlight_map],
            "urgency_level": self.urgency_level,
            "recommendations": list(self.recommendations),
            "treatment_plan": list(self.treatment_plan),
        }
        if self.differential_diagnosis:
            out["differential_diagnosis"] = list(self.differential_diagnosis)
        if self.complementary_tests:
            out["complementary_tests"] = list(self.complementary_tests)
        if self.geographic_tips:
            out["geographic_tips"] = self.geographic_tips
        if self.specialized_findings:
            out["specialized_findings"] = dict(self.specialized_findings)
        return out


@dataclass
class MedicalReport:
    id: str
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    thumbnail: str  # base64 data URL
    status: AnalysisStatus
    created_at: str  # ISO-8601
    analysis_data: Optional[AnalysisData] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MedicalReport":
        raw = d.get("analysisData")
        try:
            status = AnalysisStatus(d.get("status", "pending"))
        except ValueError:
            status = AnalysisStatus.PENDING
        return cls(
            id=_str(d.get("id")),
            user_id=_str(d.get("userId")),
            file_name=_str(d.get("fileName")),
            file_type=_str(d.get("fileType")),
            file_size=int(d.get("fileSize") or 0),
            thumbnail=_str(d.get("thumbnail")),
            status=status,
            created_at=_str(d.get("createdAt")),
            analysis_data=AnalysisData.from_dict(raw) if raw else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "fileName": self.file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
            "thumbnail": self.thumbnail,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
        if self.analysis_data is not None:
            out["analysisData"] = self.analysis_data.to_dict()
        return out


@dataclass
class Preferences:
    dark_mode: bool = False
    disclaimer_accepted: bool = False
    language: str = "en"  # "en" | "ar" | "fr"


@dataclass
class AppContext:
    config: Dict[str, Any]
    reports: Any  # core.store.ReportStore
    prefs: Preferences
    pref_store: Any  # core.store.PreferenceStore


class Page(Protocol):
    id: str
    title: str
    def render(self, ctx: AppContext) -> None: ...
