"""
Layout advisor: rule-based fallback and AI reply handling.

Run: pytest test_advisor.py
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from services import layout_advisor
from services.booth_engine import Zone, ZoneKind


def _layout():
    return [
        Zone(id="b1", kind=ZoneKind.BOOTH, x=0, y=0, w=200, h=200, label="B-1"),
        Zone(id="p1", kind=ZoneKind.PILLAR, x=150, y=150, w=100, h=100),
    ]


class _FakeClient:
    def __init__(self, reply=None, error=None):
        self._reply = reply
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        if self._error:
            raise self._error
        message = SimpleNamespace(content=self._reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_fallback_without_api_key():
    result = asyncio.run(layout_advisor.analyze_layout(_layout(), 10))
    assert result["provider"] == "fallback"
    assert result["totalArea"] == pytest.approx(400)
    assert result["usableArea"] == pytest.approx(375)
    assert result["pillarIntrusion"] == pytest.approx(25)
    assert "B-1" in result["suggestion"]


def test_fallback_for_empty_layout():
    result = asyncio.run(layout_advisor.analyze_layout([], 10))
    assert result["totalArea"] == 0
    assert "no booths" in result["suggestion"]


def test_ai_reply_is_used(monkeypatch):
    reply = "Here you go:\n```json\n" + json.dumps({
        "analysis": "Efficient layout.",
        "suggestions": ["Put the island booth near the entrance"],
    }) + "\n```"
    monkeypatch.setattr(layout_advisor, "_get_ai_client", lambda: _FakeClient(reply=reply))

    result = asyncio.run(layout_advisor.analyze_layout(_layout(), 10))
    assert result["provider"] == "ai"
    assert result["suggestion"].startswith("Efficient layout.")
    assert "island booth" in result["suggestion"]
    assert result["usableArea"] == pytest.approx(375)


def test_client_error_falls_back(monkeypatch):
    monkeypatch.setattr(
        layout_advisor, "_get_ai_client",
        lambda: _FakeClient(error=TimeoutError("timed out")),
    )
    result = asyncio.run(layout_advisor.analyze_layout(_layout(), 10))
    assert result["provider"] == "fallback"
    assert result["error"] == "timed out"
    assert result["totalArea"] == pytest.approx(400)


def test_unparseable_reply_falls_back(monkeypatch):
    monkeypatch.setattr(layout_advisor, "_get_ai_client", lambda: _FakeClient(reply="no json here"))
    result = asyncio.run(layout_advisor.analyze_layout(_layout(), 10))
    assert result["provider"] == "fallback"


def test_extract_json_from_plain_reply():
    assert layout_advisor._extract_json_from_response('ok {"analysis": "x"} done') == {"analysis": "x"}
    assert layout_advisor._extract_json_from_response("nothing") is None
