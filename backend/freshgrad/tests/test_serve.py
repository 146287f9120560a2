from __future__ import annotations

import pytest

from freshgrad import serve


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "HOST",
        "PORT",
        "RELOAD",
        "LOG_LEVEL",
        "FORWARDED_ALLOW_IPS",
        "SSL_CERTFILE",
        "SSL_KEYFILE",
        "SSL_KEYFILE_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


def test_run_options_defaults():
    options = serve.run_options()

    assert options["host"] == "0.0.0.0"
    assert options["port"] == 8080
    assert options["reload"] is False
    assert options["log_level"] == "info"
    assert options["log_config"] is None
    assert "ssl_certfile" not in options


def test_run_options_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("RELOAD", "yes")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SSL_CERTFILE", "/certs/api.pem")
    monkeypatch.setenv("SSL_KEYFILE", "/certs/api.key")

    options = serve.run_options()

    assert options["port"] == 9000
    assert options["reload"] is True
    assert options["log_level"] == "debug"
    assert options["ssl_certfile"] == "/certs/api.pem"
    assert options["ssl_keyfile"] == "/certs/api.key"
    assert "ssl_keyfile_password" not in options


def test_half_configured_ssl_refuses_to_start(monkeypatch):
    monkeypatch.setenv("SSL_CERTFILE", "/certs/api.pem")

    with pytest.raises(SystemExit):
        serve.run_options()


def test_main_hands_options_to_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(serve.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(serve, "configure_logging", lambda level=None: None)

    serve.main()

    [(app, kwargs)] = calls
    assert app == "freshgrad.main:app"
    assert kwargs["port"] == 8080
