from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Sequence, Tuple

from .models import (
    ActivityType,
    Fallback,
    ModelDerived,
    Outcome,
    ScreenshotAnalysis,
    TimeAllocation,
    TimeBreakdown,
    WorkReport,
)
from .openai_client import OpenAIChatClient, TextOnly
from .schemas import ReportPayload

logger = logging.getLogger(__name__)

DIGEST_MAX_RECORDS = 30
DIGEST_MAX_DETAIL_CHARS = 200
FALLBACK_SUMMARY_APPS = 3
FALLBACK_HIGHLIGHT_APPS = 5


def tally(analyses: Sequence[ScreenshotAnalysis]) -> Tuple[Dict[ActivityType, int], Dict[str, int]]:
    """Count records per activity type and per app name, in first-seen order."""
    activity_counts: Dict[ActivityType, int] = {}
    app_counts: Dict[str, int] = {}
    for analysis in analyses:
        activity_counts[analysis.activity_type] = activity_counts.get(analysis.activity_type, 0) + 1
        app_counts[analysis.app_name] = app_counts.get(analysis.app_name, 0) + 1
    return activity_counts, app_counts


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_time_breakdown(
    activity_counts: Dict[ActivityType, int], total: int, duration_minutes: float
) -> TimeBreakdown:
    # Each category is rounded on its own; totals may drift from the duration or 100.
    denominator = max(total, 1)
    breakdown: TimeBreakdown = {}
    for activity, count in activity_counts.items():
        if count <= 0:
            continue
        breakdown[activity] = TimeAllocation(
            duration_minutes=round_half_up(duration_minutes * count / denominator),
            percentage=round_half_up(count / denominator * 100),
        )
    return breakdown


def build_digest(analyses: Sequence[ScreenshotAnalysis]) -> str:
    return "\n".join(
        f"[{a.app_name}] {a.description}: {(a.detailed_content or '')[:DIGEST_MAX_DETAIL_CHARS]}"
        for a in analyses[:DIGEST_MAX_RECORDS]
    )


def build_report_prompt(duration_minutes: float, record_count: int, digest: str) -> str:
    return f"""Write a summary of the following work log. Respond strictly as a JSON object:

Work duration: {_format_minutes(duration_minutes)} minutes
Records: {record_count}

Activity details:
{digest}

{{
  "summary": "summary of the work session in 5-8 sentences, concretely describing what was done",
  "activity_log": ["main activity 1", "main activity 2", "... 5-10 items"]
}}"""


def _format_minutes(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class WorkReporter:
    def __init__(self, client: OpenAIChatClient):
        self._client = client

    def generate(self, analyses: Sequence[ScreenshotAnalysis], duration_minutes: float) -> Outcome[WorkReport]:
        """Build a session report. Never raises: failures become a ``Fallback``."""
        analyses = list(analyses)
        activity_counts, app_counts = tally(analyses)
        breakdown = compute_time_breakdown(activity_counts, len(analyses), duration_minutes)
        prompt = build_report_prompt(duration_minutes, len(analyses), build_digest(analyses))

        try:
            text = self._client.complete(TextOnly(prompt=prompt))
            payload = ReportPayload.decode(text)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.error("Report generation failed: %s", message)
            apps = list(app_counts)
            report = WorkReport(
                summary=_fallback_summary(duration_minutes, len(analyses), apps),
                highlights=tuple(f"used {app}" for app in apps[:FALLBACK_HIGHLIGHT_APPS]),
                time_breakdown=breakdown,
                generated_at=datetime.now(timezone.utc),
            )
            return Fallback(report, error=message)

        logger.info("Report generated from %s records (%s highlights)", len(analyses), len(payload.activity_log))
        return ModelDerived(
            WorkReport(
                summary=payload.summary,
                highlights=payload.activity_log,
                time_breakdown=breakdown,
                generated_at=datetime.now(timezone.utc),
            )
        )


def _fallback_summary(duration_minutes: float, record_count: int, apps: List[str]) -> str:
    used = ", ".join(apps[:FALLBACK_SUMMARY_APPS]) or "various applications"
    return f"Worked {_format_minutes(duration_minutes)} minutes with {record_count} records. Used {used}."


def generate_report(
    analyses: Sequence[ScreenshotAnalysis], duration_minutes: float, client: OpenAIChatClient
) -> Outcome[WorkReport]:
    return WorkReporter(client).generate(analyses, duration_minutes)
