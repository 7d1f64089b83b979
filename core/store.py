"""Local persistence: one JSON object on disk used as a key-value store.

Reports live under ``reports`` as a JSON array, newest first. Preferences live
under ``darkMode``, ``disclaimer_accepted`` and ``language``. The file is read
once when the store is built and rewritten on every mutation.
"""
import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional, Union

from core.types import LANGUAGES, MedicalReport, Preferences

logger = logging.getLogger(__name__)

REPORTS_KEY = "reports"
DARK_MODE_KEY = "darkMode"
DISCLAIMER_KEY = "disclaimer_accepted"
LANGUAGE_KEY = "language"


class KeyValueStore:
    def __init__(self, path: str):
        self.path = path
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.warning("Store file %s unreadable; starting empty", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s is not a JSON object; starting empty", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def update(self, values: Dict[str, Any]) -> None:
        """Set several keys with a single write."""
        self._data.update(values)
        self._save()

    def _save(self) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=folder, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise


class ReportStore:
    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        # parsed reports, plus raw records that failed to parse; those are written back untouched
        self._entries: List[Union[MedicalReport, Any]] = self._load()

    def _load(self) -> List[Union[MedicalReport, Any]]:
        raw = self.kv.get(REPORTS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring non-list %r entry in store", REPORTS_KEY)
            return []
        entries: List[Union[MedicalReport, Any]] = []
        for item in raw:
            try:
                entries.append(MedicalReport.from_dict(item))
            except (TypeError, ValueError, AttributeError):
                logger.warning("Keeping unreadable report record as is", exc_info=True)
                entries.append(item)
        return entries

    def _save(self) -> None:
        self.kv.set(REPORTS_KEY, [e.to_dict() if isinstance(e, MedicalReport) else e for e in self._entries])

    def all(self) -> List[MedicalReport]:
        return [e for e in self._entries if isinstance(e, MedicalReport)]

    def get(self, report_id: str) -> Optional[MedicalReport]:
        for r in self.all():
            if r.id == report_id:
                return r
        return None

    def add(self, report: MedicalReport) -> None:
        self._entries.insert(0, report)
        self._save()
        logger.info("Stored report %s (%s)", report.id, report.file_name)

    def delete(self, report_id: str) -> bool:
        before = len(self._entries)
        self._entries = [e for e in self._entries if not (isinstance(e, MedicalReport) and e.id == report_id)]
        if len(self._entries) == before:
            return False
        self._save()
        logger.info("Deleted report %s", report_id)
        return True

    def __len__(self) -> int:
        return len(self.all())


class PreferenceStore:
    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def load(self) -> Preferences:
        lang = self.kv.get(LANGUAGE_KEY, "en")
        return Preferences(
            dark_mode=bool(self.kv.get(DARK_MODE_KEY, False)),
            disclaimer_accepted=bool(self.kv.get(DISCLAIMER_KEY, False)),
            language=lang if lang in LANGUAGES else "en",
        )

    def save(self, prefs: Preferences) -> None:
        self.kv.update({
            DARK_MODE_KEY: prefs.dark_mode,
            DISCLAIMER_KEY: prefs.disclaimer_accepted,
            LANGUAGE_KEY: prefs.language,
        })


def next_language(lang: str) -> str:
    idx = LANGUAGES.index(lang) if lang in LANGUAGES else -1
    return LANGUAGES[(idx + 1) % len(LANGUAGES)]


def open_stores(data_dir: str) -> tuple[ReportStore, PreferenceStore]:
    kv = KeyValueStore(os.path.join(data_dir, "store.json"))
    return ReportStore(kv), PreferenceStore(kv)
