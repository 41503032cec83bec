# cms_backend/server.py

"""
Process entry point.

Serves HTTPS when both the TLS key and certificate files are readable,
plain HTTP otherwise:

    cms-backend            # console script
    python -m cms_backend.server
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

import uvicorn

from cms_backend.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def resolve_ssl_files(settings: Settings) -> Optional[Tuple[str, str]]:
    """
    Return ``(keyfile, certfile)`` when both exist and can be read.
    """
    key_path = Path(settings.ssl_key_path)
    cert_path = Path(settings.ssl_cert_path)
    try:
        for path in (key_path, cert_path):
            if not path.is_file() or not os.access(path, os.R_OK):
                return None
            with path.open("rb") as fh:
                fh.read(1)
    except OSError as exc:
        logger.warning("Cannot read SSL files, serving plain HTTP: %s", exc)
        return None
    return str(key_path), str(cert_path)


def main() -> None:
    from cms_backend.main import app

    settings = get_settings()

    ssl_files = resolve_ssl_files(settings)
    if ssl_files:
        keyfile, certfile = ssl_files
        logger.info("HTTPS server is running on port %s", settings.port)
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            ssl_keyfile=keyfile,
            ssl_certfile=certfile,
        )
    else:
        logger.info("HTTP server is running on port %s", settings.port)
        uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
