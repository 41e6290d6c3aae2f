from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-5-mini-2025-08-07"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"


@dataclass(frozen=True)
class OpenAISettings:
    api_key: str | None
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    max_completion_tokens: int = 2000
    timeout_seconds: float = 120.0


@dataclass(frozen=True)
class ImageSettings:
    jpeg_quality: int = 85
    max_width: int = 1920


@dataclass(frozen=True)
class LoggingSettings:
    directory: Path
    level: str = "INFO"


@dataclass(frozen=True)
class OutputSettings:
    report_dir: Path


@dataclass(frozen=True)
class AppSettings:
    timezone: ZoneInfo
    openai: OpenAISettings
    image: ImageSettings
    logging: LoggingSettings
    output: OutputSettings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    dotenv_path = Path(__file__).resolve().parents[1] / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False, encoding="utf-8-sig")

    timezone = ZoneInfo(os.getenv("TIMEZONE", "UTC"))

    # A missing key is not a startup error: every model call falls back instead.
    openai = OpenAISettings(
        api_key=os.getenv("OPENAI_API_KEY") or None,
        model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
        api_url=os.getenv("OPENAI_API_URL", DEFAULT_API_URL),
        max_completion_tokens=int(os.getenv("OPENAI_MAX_COMPLETION_TOKENS", "2000")),
        timeout_seconds=float(os.getenv("OPENAI_TIMEOUT_SECONDS", "120")),
    )

    image = ImageSettings(
        jpeg_quality=int(os.getenv("JPEG_QUALITY", "85")),
        max_width=int(os.getenv("MAX_IMAGE_WIDTH", "1920")),
    )

    logging_settings = LoggingSettings(
        directory=Path(os.getenv("LOG_DIR", "logs")).resolve(),
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    output_settings = OutputSettings(
        report_dir=Path(os.getenv("REPORT_OUTPUT_DIR", "output")).resolve(),
    )

    return AppSettings(
        timezone=timezone,
        openai=openai,
        image=image,
        logging=logging_settings,
        output=output_settings,
    )
