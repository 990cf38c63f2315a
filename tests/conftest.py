"""Shared fixtures for the Podsite API tests."""

import json

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def episode_record(number: int, **overrides) -> dict:
    record = {
        "id": f"ep{number:03d}",
        "number": number,
        "title": f"Episode {number}",
        "description": f"Description for episode {number}",
        "duration": "30:00",
        "publishDate": f"2025-02-{number:02d}",
        "artworkUrl": f"/assets/images/ep{number:03d}.svg",
        "artworkAlt": f"Episode {number} artwork",
        "audioUrl": f"/assets/audio/ep{number:03d}.mp3",
        "tags": ["test"],
    }
    record.update(overrides)
    return record


ABOUT_MD = """\
# About The Test Show

A show used in tests.

## Our Mission

Make tests pass.

## Who We Are

Two fixtures and a conftest.

## What We Cover

- Caching
- Rate limiting

## Join Our Community

Run pytest with us.
"""


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def content_dir(tmp_path):
    episodes = [episode_record(1), episode_record(3, artworkAlt=None), episode_record(2)]
    (tmp_path / "episodes.json").write_text(json.dumps(episodes), encoding="utf-8")
    (tmp_path / "faq.json").write_text(
        json.dumps({"items": [{"question": "Is this a test?", "answer": "Yes."}]}),
        encoding="utf-8",
    )
    (tmp_path / "about.md").write_text(ABOUT_MD, encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_settings(monkeypatch, content_dir):
    """Build Settings from env vars, pointing CONTENT_DIR at the temp content."""

    def _make(**env) -> Settings:
        monkeypatch.setenv("CONTENT_DIR", str(content_dir))
        for name, value in env.items():
            monkeypatch.setenv(name, str(value))
        return Settings()

    return _make


@pytest.fixture
def make_client(make_settings):
    clients = []

    def _make(**env) -> TestClient:
        client = TestClient(create_app(make_settings(**env)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
