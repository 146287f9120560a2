# backend/freshgrad/serve.py
"""
`freshgrad-serve` entry point: runs the API under uvicorn from env settings.

HOST, PORT (8080), RELOAD, LOG_LEVEL, FORWARDED_ALLOW_IPS and the optional
SSL_CERTFILE / SSL_KEYFILE / SSL_KEYFILE_PASSWORD pair.
"""

import os
from typing import Any, Dict

import uvicorn

from .logging_config import configure_logging

_TRUTHY = {"1", "true", "yes", "on"}


def _ssl_options() -> Dict[str, str]:
    certfile = os.getenv("SSL_CERTFILE")
    keyfile = os.getenv("SSL_KEYFILE")
    if bool(certfile) != bool(keyfile):
        raise SystemExit("SSL_CERTFILE and SSL_KEYFILE must be set together.")
    if not certfile:
        return {}

    options = {"ssl_certfile": certfile, "ssl_keyfile": keyfile}
    keyfile_password = os.getenv("SSL_KEYFILE_PASSWORD")
    if keyfile_password:
        options["ssl_keyfile_password"] = keyfile_password
    return options


def run_options() -> Dict[str, Any]:
    """Keyword arguments for `uvicorn.run`, resolved from the environment."""
    return {
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT", "8080")),
        "reload": os.getenv("RELOAD", "false").lower() in _TRUTHY,
        "log_level": os.getenv("LOG_LEVEL", "info").lower(),
        # Uvicorn's own loggers go through the root handler set up below.
        "log_config": None,
        "proxy_headers": True,
        "forwarded_allow_ips": os.getenv("FORWARDED_ALLOW_IPS", "*"),
        **_ssl_options(),
    }


def main() -> None:
    options = run_options()
    configure_logging(options["log_level"])
    uvicorn.run("freshgrad.main:app", **options)


if __name__ == "__main__":
    main()
