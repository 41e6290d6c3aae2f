from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from worklog.config import get_settings
from worklog.logging_utils import init_logger
from worklog.models import Fallback, WorkReport
from worklog.openai_client import OpenAIChatClient
from worklog.reporting import WorkReporter
from worklog.storage import AnalysisLog
from worklog.utils import ensure_directory, timestamp_slug


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a work-session report from an analysis log")
    parser.add_argument("--duration", type=float, required=True, help="Session duration in minutes")
    parser.add_argument(
        "--log",
        default=None,
        help="JSON-lines analysis log (defaults to REPORT_OUTPUT_DIR/analyses.jsonl)",
    )
    parser.add_argument("--output-dir", default=None, help="Override REPORT_OUTPUT_DIR")
    args = parser.parse_args(argv)

    if args.duration < 0:
        parser.error("--duration must be non-negative")

    settings = get_settings()
    logger = init_logger("summarizer", settings.logging.directory, settings.logging.level)
    output_dir = ensure_directory(Path(args.output_dir).resolve() if args.output_dir else settings.output.report_dir)
    log_path = Path(args.log).resolve() if args.log else settings.output.report_dir / "analyses.jsonl"

    try:
        analyses = AnalysisLog(log_path).load()
    except ValueError as exc:
        logger.error("Cannot load analysis log: %s", exc)
        return 1
    if not analyses:
        logger.warning("No analyses in %s", log_path)

    outcome = WorkReporter(OpenAIChatClient(settings.openai)).generate(analyses, args.duration)
    if isinstance(outcome, Fallback):
        logger.warning("Model summary unavailable, using local summary: %s", outcome.error)

    report = outcome.value
    slug = timestamp_slug(report.generated_at.astimezone(settings.timezone))
    markdown_path = output_dir / f"work-report-{slug}.md"
    json_path = output_dir / f"work-report-{slug}.json"

    payload = report.to_dict()
    payload["provenance"] = outcome.provenance
    markdown_path.write_text(render_markdown(report, args.duration, len(analyses)), encoding="utf-8")
    json_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Work report saved to %s", markdown_path)
    return 0


def render_markdown(report: WorkReport, duration_minutes: float, record_count: int) -> str:
    lines = [f"# Work report {report.generated_at.strftime('%Y/%m/%d %H:%M')}", ""]
    lines.append(f"- Session length: **{duration_minutes:g} min**")
    lines.append(f"- Records: {record_count}")

    lines.append("\n## Summary\n")
    lines.append(report.summary)

    if report.highlights:
        lines.append("\n## Highlights\n")
        for item in report.highlights:
            lines.append(f"- {item}")

    lines.append("\n## Time breakdown")
    lines.append("| Activity | Minutes | Share |")
    lines.append("| --- | ---: | ---: |")
    for activity, allocation in report.time_breakdown.items():
        lines.append(f"| {activity.value} | {allocation.duration_minutes} | {allocation.percentage}% |")
    if not report.time_breakdown:
        lines.append("| (no data) | 0 | 0% |")

    return "\n".join(lines) + "\n"


if __name__ == "__main__":
    sys.exit(main())
