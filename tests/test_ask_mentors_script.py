"""Tests for the ask_mentors terminal script."""

from __future__ import annotations

import importlib
import logging
from unittest.mock import patch

import pytest

from mentor.orchestrator import Orchestrator
from mentor.providers.base import TransportError
from scripts import ask_mentors


def test_import_leaves_logging_alone():
    with patch.object(logging, "basicConfig") as basic_config:
        importlib.reload(ask_mentors)

    basic_config.assert_not_called()


@pytest.mark.parametrize(
    ("argv", "level"),
    [
        (["ask_mentors", "--list"], logging.INFO),
        (["ask_mentors", "-v", "--list"], logging.DEBUG),
    ],
)
def test_main_configures_logging(monkeypatch, capsys, argv, level):
    monkeypatch.setattr("sys.argv", argv)

    with patch.object(logging, "basicConfig") as basic_config:
        assert ask_mentors.main() == 0

    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == level
    out = capsys.readouterr().out
    assert "architect" in out
    assert "debugger" in out


@pytest.mark.asyncio
async def test_console_sink_prints_success(make_provider, capsys):
    orchestrator = Orchestrator(make_provider(['["architect"]', "PLAN"]))

    await orchestrator.run_turn("q", sink=ask_mentors.ConsoleSink(orchestrator.registry))

    out = capsys.readouterr().out
    assert "Router" in out
    assert "Architect" in out
    assert "PLAN" in out
    assert "success (1 result(s))" in out


@pytest.mark.asyncio
async def test_console_sink_prints_error_entry(make_provider, capsys):
    orchestrator = Orchestrator(make_provider(['["architect"]', TransportError("down")]))

    await orchestrator.run_turn("q", sink=ask_mentors.ConsoleSink(orchestrator.registry))

    out = capsys.readouterr().out
    assert "Error ဖြစ်သွားတယ်: down" in out
    assert "error (1 result(s))" in out
