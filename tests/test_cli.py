import json
from datetime import datetime, timezone

from PIL import Image

import analyzer
import summarizer
from worklog.models import ActivityType, ScreenshotAnalysis, TimeAllocation, WorkReport
from worklog.storage import AnalysisLog


def test_analyzer_records_fallback_without_api_key(tmp_path, monkeypatch, app_settings):
    monkeypatch.setattr(analyzer, "get_settings", lambda: app_settings)
    image = tmp_path / "capture.png"
    Image.new("RGB", (32, 32), "black").save(image)
    log_path = tmp_path / "analyses.jsonl"

    exit_code = analyzer.main(["--image", str(image), "--log", str(log_path)])

    assert exit_code == 0
    (entry,) = AnalysisLog(log_path).load()
    assert entry.activity_type is ActivityType.OTHER
    assert entry.confidence == 0
    assert json.loads(log_path.read_text(encoding="utf-8"))["provenance"] == "fallback"


def test_analyzer_reports_unreadable_images(tmp_path, monkeypatch, app_settings):
    monkeypatch.setattr(analyzer, "get_settings", lambda: app_settings)
    log_path = tmp_path / "analyses.jsonl"

    exit_code = analyzer.main(["--image", str(tmp_path / "missing.png"), "--log", str(log_path)])

    assert exit_code == 1
    assert AnalysisLog(log_path).load() == []


def test_summarizer_writes_json_and_markdown(tmp_path, monkeypatch, app_settings):
    monkeypatch.setattr(summarizer, "get_settings", lambda: app_settings)
    log_path = tmp_path / "analyses.jsonl"
    log = AnalysisLog(log_path)
    for app in ["VS Code", "VS Code", "Firefox"]:
        activity = ActivityType.CODING if app == "VS Code" else ActivityType.BROWSING
        log.append(
            ScreenshotAnalysis(app, activity, "working", "detail", 0.8, "{}"),
            captured_at=datetime.now(timezone.utc),
        )

    exit_code = summarizer.main(["--duration", "60", "--log", str(log_path)])

    assert exit_code == 0
    (json_path,) = sorted(app_settings.output.report_dir.glob("work-report-*.json"))
    report = json.loads(json_path.read_text(encoding="utf-8"))
    assert report["provenance"] == "fallback"
    assert report["time_breakdown"]["coding"] == {"duration_minutes": 40, "percentage": 67}
    assert report["summary"] == "Worked 60 minutes with 3 records. Used VS Code, Firefox."
    markdown = json_path.with_suffix(".md").read_text(encoding="utf-8")
    assert "| coding | 40 | 67% |" in markdown


def test_render_markdown_without_data():
    report = WorkReport(
        summary="Nothing recorded.",
        highlights=(),
        time_breakdown={},
        generated_at=datetime(2026, 10, 18, 17, 0, tzinfo=timezone.utc),
    )

    markdown = summarizer.render_markdown(report, 0, 0)

    assert markdown.startswith("# Work report 2026/10/18 17:00")
    assert "| (no data) | 0 | 0% |" in markdown
    assert "## Highlights" not in markdown


def test_render_markdown_lists_breakdown_rows():
    report = WorkReport(
        summary="Coded.",
        highlights=("Refactor",),
        time_breakdown={ActivityType.CODING: TimeAllocation(30, 100)},
        generated_at=datetime(2026, 10, 18, tzinfo=timezone.utc),
    )

    markdown = summarizer.render_markdown(report, 30, 2)

    assert "- Refactor" in markdown
    assert "| coding | 30 | 100% |" in markdown
