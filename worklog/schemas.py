"""Decoders for the JSON objects the model is asked to return.

Each field has a named default that applies when the key is missing or its
value is falsy (empty string, null).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Tuple

from .models import ActivityType, validate_activity_type

DEFAULT_APP_NAME = "Unknown"
DEFAULT_DESCRIPTION = ""
DEFAULT_DETAILED_CONTENT = ""
DEFAULT_REPORT_SUMMARY = "Work session completed."


class PayloadParseError(ValueError):
    pass


def parse_json_object(text: str) -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadParseError(f"Model returned invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise PayloadParseError(f"Model returned JSON {type(payload).__name__}, expected an object")
    return payload


def _text_or(value: Any, default: str) -> str:
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class AnalysisPayload:
    app_name: str
    activity_type: ActivityType
    description: str
    detailed_content: str

    @classmethod
    def decode(cls, text: str) -> "AnalysisPayload":
        payload = parse_json_object(text)
        return cls(
            app_name=_text_or(payload.get("app_name"), DEFAULT_APP_NAME),
            activity_type=validate_activity_type(payload.get("activity_type")),
            description=_text_or(payload.get("description"), DEFAULT_DESCRIPTION),
            detailed_content=_text_or(payload.get("detailed_content"), DEFAULT_DETAILED_CONTENT),
        )


@dataclass(frozen=True)
class ReportPayload:
    summary: str
    activity_log: Tuple[str, ...]

    @classmethod
    def decode(cls, text: str) -> "ReportPayload":
        payload = parse_json_object(text)
        activity_log = payload.get("activity_log")
        if not isinstance(activity_log, list):
            activity_log = []
        return cls(
            summary=_text_or(payload.get("summary"), DEFAULT_REPORT_SUMMARY),
            activity_log=tuple(str(item) for item in activity_log),
        )
