import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.types import MedicalReport

MAX_POINTS = 8

# leading number, the way a lab value such as "110 mg/dL" or "4.5e3" reads
_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class TrendPoint:
    value: float
    date: str


def parse_number(v: Any) -> Optional[float]:
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        num = float(v)
    else:
        m = _NUMBER.match(str(v))
        if not m:
            return None
        num = float(m.group(0))
    # nan and inf cannot be charted or compared
    return num if math.isfinite(num) else None


def marker_trends(reports: List[MedicalReport]) -> Dict[str, List[TrendPoint]]:
    """Numeric marker values by name, in store order (newest first)."""
    trends: Dict[str, List[TrendPoint]] = {}
    for r in reports:
        if r.analysis_data is None:
            continue
        for m in r.analysis_data.vital_markers:
            val = parse_number(m.value)
            if val is None:
                continue
            trends.setdefault(m.name, []).append(TrendPoint(val, r.created_at))
    return trends


def direction(points: List[TrendPoint]) -> Optional[str]:
    if len(points) < 2:
        return None
    return "up" if points[0].value > points[1].value else "down"


def chart_points(points: List[TrendPoint], limit: int = MAX_POINTS) -> List[TrendPoint]:
    # oldest first for plotting
    return list(reversed(points[:limit]))
