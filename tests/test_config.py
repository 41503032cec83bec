# File: tests/test_config.py

import pytest
from pydantic import ValidationError

from cms_backend.core.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.port == 4000
    assert settings.upload_path == "uploads"
    assert settings.ssl_key_path == "key.pem"
    assert settings.ssl_cert_path == "cert.pem"
    assert settings.max_image_size == 5 * 1024 * 1024
    assert settings.news_max_image_size == 50 * 1024 * 1024
    assert settings.max_project_images == 20
    assert settings.backend_cors_origins == ["*"]


def test_reads_environment():
    settings = Settings.from_env(
        {
            "PORT": "8080",
            "UPLOAD_PATH": "/srv/uploads",
            "SSL_KEY_PATH": "/etc/tls/key.pem",
            "CORS_ORIGINS": "https://a.example, https://b.example",
            "DEBUG": "true",
            "AREA_RESOLVER": "memory",
        }
    )
    assert settings.port == 8080
    assert settings.upload_path == "/srv/uploads"
    assert settings.ssl_key_path == "/etc/tls/key.pem"
    assert settings.backend_cors_origins == ["https://a.example", "https://b.example"]
    assert settings.debug is True
    assert settings.area_resolver == "memory"


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.port = 1


def test_rejects_unknown_area_resolver():
    with pytest.raises(ValidationError):
        Settings.from_env({"AREA_RESOLVER": "graph"})
