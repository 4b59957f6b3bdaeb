"""Games-played counter per opponent configuration, kept in a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


class PlayCounts:
    def __init__(self, path: Path) -> None:
        self.path = path

    def all(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("ignoring unreadable play counts file %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("ignoring play counts file %s: expected a JSON object", self.path)
            return {}
        return {str(k): int(v) for k, v in raw.items() if type(v) is int}

    def get(self, identifier: str) -> int:
        return self.all().get(identifier, 0)

    def increment(self, identifier: str) -> int:
        counts = self.all()
        counts[identifier] = counts.get(identifier, 0) + 1
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(counts, indent=2, sort_keys=True))
        return counts[identifier]
