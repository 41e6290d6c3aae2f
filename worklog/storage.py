from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import List

from .models import ScreenshotAnalysis
from .utils import ensure_directory


class AnalysisLog:
    """JSON-lines hand-off file between the analyze and report steps."""

    def __init__(self, path: Path):
        self.path = path
        ensure_directory(path.parent)

    def append(
        self,
        analysis: ScreenshotAnalysis,
        *,
        captured_at: datetime,
        image_path: Path | None = None,
        provenance: str = "model",
    ) -> None:
        entry = analysis.to_dict()
        entry["captured_at"] = captured_at.isoformat()
        entry["image_path"] = str(image_path) if image_path else None
        entry["provenance"] = provenance
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def load(self) -> List[ScreenshotAnalysis]:
        if not self.path.exists():
            return []
        records: List[ScreenshotAnalysis] = []
        with self.path.open("r", encoding="utf-8") as handle:
            for line_no, line in enumerate(handle, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(ScreenshotAnalysis.from_dict(json.loads(line)))
                except (ValueError, AttributeError, TypeError) as exc:
                    raise ValueError(f"{self.path}:{line_no}: invalid analysis entry ({exc})") from exc
        return records

    def count(self) -> int:
        return len(self.load())
