from __future__ import annotations

import sys
import types

import pytest


def test_voice_command_falls_back_to_keyboard_when_backends_missing(monkeypatch) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from echoverse.main import app

    fake_stt = types.ModuleType("echoverse.voice.stt_speechrecognition")
    fake_tts = types.ModuleType("echoverse.voice.tts_pyttsx3")

    class _MissingBackend:
        def __init__(self, *args, **kwargs) -> None:
            raise RuntimeError("Voice backend missing. Install with: pip install 'echoverse[voice]'")

    fake_stt.SpeechRecognitionSource = _MissingBackend
    fake_tts.Pyttsx3SpeechSink = _MissingBackend

    monkeypatch.setitem(sys.modules, "echoverse.voice.stt_speechrecognition", fake_stt)
    monkeypatch.setitem(sys.modules, "echoverse.voice.tts_pyttsx3", fake_tts)

    result = typer_testing.CliRunner().invoke(app, ["voice"], input="s\nquit\n", catch_exceptions=False)

    assert result.exit_code == 0
    assert "Install with: pip install 'echoverse[voice]'" in result.stdout
    assert "keyboard-only play" in result.stdout
    assert "'final_state': 'playing'" in result.stdout
