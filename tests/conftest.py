from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import requests

from worklog.config import AppSettings, ImageSettings, LoggingSettings, OpenAISettings, OutputSettings
from worklog.openai_client import OpenAIChatClient

from tests.fakes import RecordingPost


@pytest.fixture
def openai_settings() -> OpenAISettings:
    return OpenAISettings(api_key="sk-test", model="test-model", api_url="https://example.test/v1/chat/completions")


@pytest.fixture
def client(openai_settings) -> OpenAIChatClient:
    return OpenAIChatClient(openai_settings)


@pytest.fixture
def unconfigured_client() -> OpenAIChatClient:
    return OpenAIChatClient(OpenAISettings(api_key=None))


@pytest.fixture
def fake_post(monkeypatch):
    def install(*responses) -> RecordingPost:
        recorder = RecordingPost(*responses)
        monkeypatch.setattr(requests, "post", recorder)
        return recorder

    return install


@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        timezone=ZoneInfo("UTC"),
        openai=OpenAISettings(api_key=None),
        image=ImageSettings(),
        logging=LoggingSettings(directory=tmp_path / "logs"),
        output=OutputSettings(report_dir=tmp_path / "output"),
    )
