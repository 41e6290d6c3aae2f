from __future__ import annotations

import logging

from .models import ActivityType, Fallback, ModelDerived, Outcome, ScreenshotAnalysis
from .openai_client import OpenAIChatClient, TextWithImage
from .schemas import AnalysisPayload

logger = logging.getLogger(__name__)

MODEL_CONFIDENCE = 0.8
FALLBACK_CONFIDENCE = 0.0
FAILURE_PREFIX = "Analysis failed: "

PROMPT = """
Analyze this screenshot and record in detail what the user is doing. Respond strictly as a JSON object:

{
  "app_name": "name of the application in the foreground",
  "activity_type": "coding/browsing/documentation/communication/meeting/design/entertainment/other",
  "description": "one sentence describing what the user is doing",
  "detailed_content": "a concrete account of the screen: which file is being edited and what code is written, which web page is open, who is being chatted with and about what, which document is being read. 200-400 characters."
}
""".strip()


class ScreenshotAnalyzer:
    def __init__(self, client: OpenAIChatClient):
        self._client = client

    def analyze(self, image_base64: str) -> Outcome[ScreenshotAnalysis]:
        """Describe one screenshot. Never raises: failures become a ``Fallback``."""
        try:
            text = self._client.complete(TextWithImage(prompt=PROMPT, image_base64=image_base64))
            payload = AnalysisPayload.decode(text)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.error("Screenshot analysis failed: %s", message)
            return Fallback(_fallback_analysis(message), error=message)

        return ModelDerived(
            ScreenshotAnalysis(
                app_name=payload.app_name,
                activity_type=payload.activity_type,
                description=payload.description,
                detailed_content=payload.detailed_content,
                tags=(),
                confidence=MODEL_CONFIDENCE,
                raw_response=text,
            )
        )


def _fallback_analysis(message: str) -> ScreenshotAnalysis:
    return ScreenshotAnalysis(
        app_name="Unknown",
        activity_type=ActivityType.OTHER,
        description=FAILURE_PREFIX + message[:50],
        detailed_content=message,
        tags=(),
        confidence=FALLBACK_CONFIDENCE,
        raw_response=message,
    )


def analyze_screenshot(image_base64: str, client: OpenAIChatClient) -> Outcome[ScreenshotAnalysis]:
    return ScreenshotAnalyzer(client).analyze(image_base64)
