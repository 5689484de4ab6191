# tests/test_start_server.py

import logging

import start_server


def test_launcher_logs_banner_and_runs_uvicorn(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(start_server.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("RELOAD", "false")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    with caplog.at_level(logging.INFO, logger="start_server"):
        start_server.main()

    assert calls == [("main:app", {"host": "127.0.0.1", "port": 9001, "reload": False, "log_level": "warning"})]
    assert "Starting ToDoApp API server on 127.0.0.1:9001 (reload=False)" in caplog.text
