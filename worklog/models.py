from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, Tuple, TypeVar, Union

T = TypeVar("T")


class ActivityType(str, Enum):
    CODING = "coding"
    BROWSING = "browsing"
    DOCUMENTATION = "documentation"
    COMMUNICATION = "communication"
    MEETING = "meeting"
    DESIGN = "design"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


_ACTIVITY_BY_VALUE = {member.value: member for member in ActivityType}


def validate_activity_type(value: Any) -> ActivityType:
    """Return the matching ActivityType, or ``OTHER`` for anything unrecognized."""
    if isinstance(value, ActivityType):
        return value
    if not isinstance(value, str):
        return ActivityType.OTHER
    return _ACTIVITY_BY_VALUE.get(value, ActivityType.OTHER)


@dataclass(frozen=True)
class ScreenshotAnalysis:
    app_name: str
    activity_type: ActivityType
    description: str
    detailed_content: str
    confidence: float
    raw_response: str
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "app_name": self.app_name,
            "activity_type": self.activity_type.value,
            "description": self.description,
            "detailed_content": self.detailed_content,
            "tags": list(self.tags),
            "confidence": self.confidence,
            "raw_response": self.raw_response,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScreenshotAnalysis":
        return cls(
            app_name=str(data.get("app_name") or "Unknown"),
            activity_type=validate_activity_type(data.get("activity_type")),
            description=str(data.get("description") or ""),
            detailed_content=str(data.get("detailed_content") or ""),
            tags=tuple(str(tag) for tag in data.get("tags") or ()),
            confidence=float(data.get("confidence", 0.0)),
            raw_response=str(data.get("raw_response") or ""),
        )


@dataclass(frozen=True)
class TimeAllocation:
    duration_minutes: int
    percentage: int


TimeBreakdown = Dict[ActivityType, TimeAllocation]


@dataclass(frozen=True)
class WorkReport:
    summary: str
    highlights: Tuple[str, ...]
    time_breakdown: TimeBreakdown
    generated_at: datetime
    # Reserved: no scoring or suggestion logic exists yet.
    productivity_score: int = 0
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "highlights": list(self.highlights),
            "time_breakdown": {
                activity.value: {
                    "duration_minutes": allocation.duration_minutes,
                    "percentage": allocation.percentage,
                }
                for activity, allocation in self.time_breakdown.items()
            },
            "productivity_score": self.productivity_score,
            "suggestions": list(self.suggestions),
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class ModelDerived(Generic[T]):
    value: T
    provenance: str = field(default="model", init=False)


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    error: str
    provenance: str = field(default="fallback", init=False)


Outcome = Union[ModelDerived[T], Fallback[T]]
