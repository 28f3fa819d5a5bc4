from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .filters import FilterSelection

logger = logging.getLogger(__name__)

SELECTED_HEALTH_KEY = "selectedHealth"
SELECTED_DIETS_KEY = "selectedDiets"


class PreferenceStore:
    """JSON-file key/value store for filter choices saved by the application.

    The file is re-read on every access so changes made elsewhere are seen by
    the next search.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_list(self, key: str) -> List[str]:
        value = self._read().get(key)
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, str)]

    def set_list(self, key: str, values: Iterable[str]) -> None:
        data = self._read()
        data[key] = list(values)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def selection(self) -> FilterSelection:
        return FilterSelection(
            health=self.get_list(SELECTED_HEALTH_KEY),
            diet=self.get_list(SELECTED_DIETS_KEY),
        )
