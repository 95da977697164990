from __future__ import annotations

import importlib
import logging

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("echoverse.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_levels_command_lists_catalogue() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from echoverse.main import app

    result = typer_testing.CliRunner().invoke(app, ["levels", "--mode", "adventure"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Whispering Forest" in result.stdout
    assert "Sky Bridge" in result.stdout
    assert "Training Grounds" not in result.stdout


def test_levels_command_rejects_unknown_mode() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from echoverse.main import app

    result = typer_testing.CliRunner().invoke(app, ["levels", "--mode", "arcade"])

    assert result.exit_code != 0


def test_play_command_runs_typed_session() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from echoverse.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["play", "--mode", "practice", "--no-speak"],
        input="s\ngo forward\nquit\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "Game started" in result.stdout
    assert "'final_state': 'playing'" in result.stdout
    assert "'score': 1" in result.stdout


def test_play_command_logs_transitions_to_telemetry(caplog) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from echoverse.main import app

    caplog.set_level(logging.INFO, logger="echoverse.telemetry")
    typer_testing.CliRunner().invoke(app, ["play", "--no-speak"], input="s\nquit\n", catch_exceptions=False)

    records = [record for record in caplog.records if record.name == "echoverse.telemetry"]
    assert [record.getMessage() for record in records] == ["transition"]
    assert records[0].log_line.startswith("Started")
