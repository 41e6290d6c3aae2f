from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from worklog.analysis import ScreenshotAnalyzer
from worklog.config import get_settings
from worklog.imaging import encode_screenshot
from worklog.logging_utils import init_logger
from worklog.models import Fallback
from worklog.openai_client import OpenAIChatClient
from worklog.storage import AnalysisLog


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Describe screenshots with the configured vision model")
    parser.add_argument(
        "--image",
        action="append",
        required=True,
        help="Screenshot to analyze (repeat for several)",
    )
    parser.add_argument(
        "--log",
        default=None,
        help="JSON-lines analysis log to append to (defaults to REPORT_OUTPUT_DIR/analyses.jsonl)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logger = init_logger("analyzer", settings.logging.directory, settings.logging.level)
    log_path = Path(args.log).resolve() if args.log else settings.output.report_dir / "analyses.jsonl"
    analysis_log = AnalysisLog(log_path)

    if not settings.openai.api_key:
        logger.warning("OPENAI_API_KEY is not set; every screenshot will get a fallback record")

    analyzer = ScreenshotAnalyzer(OpenAIChatClient(settings.openai))
    logger.info("Analyzing %s screenshot(s) with %s", len(args.image), settings.openai.model)

    exit_code = 0
    for index, raw_path in enumerate(args.image, start=1):
        image_path = Path(raw_path).resolve()
        try:
            image_base64 = encode_screenshot(
                image_path,
                quality=settings.image.jpeg_quality,
                max_width=settings.image.max_width,
            )
        except (OSError, ValueError) as exc:
            logger.error("Cannot read screenshot %s/%s (%s): %s", index, len(args.image), image_path, exc)
            exit_code = 1
            continue

        outcome = analyzer.analyze(image_base64)
        analysis_log.append(
            outcome.value,
            captured_at=datetime.now(tz=settings.timezone),
            image_path=image_path,
            provenance=outcome.provenance,
        )
        if isinstance(outcome, Fallback):
            logger.warning("Screenshot %s/%s (%s) -> fallback: %s", index, len(args.image), image_path.name, outcome.error)
        else:
            logger.info(
                "Screenshot %s/%s (%s) -> [%s] %s",
                index,
                len(args.image),
                image_path.name,
                outcome.value.activity_type.value,
                outcome.value.app_name,
            )

    logger.info("Analysis log: %s", log_path)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
