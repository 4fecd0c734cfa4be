"""Unit tests for settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from docsearch.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.elasticsearch_url == "http://localhost:9200"
    assert settings.elasticsearch_index == "documents"
    assert settings.uploads_dir == Path("uploads")
    assert settings.max_files_per_upload == 5
    assert settings.max_upload_size_bytes == 100 * 1024 * 1024
    assert settings.default_document_type == "documentos"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ELASTICSEARCH_URL", "http://es:9200")
    monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "10")
    monkeypatch.setenv("UPLOADS_DIR", "/srv/uploads")
    settings = Settings(_env_file=None)
    assert settings.elasticsearch_url == "http://es:9200"
    assert settings.max_upload_size_bytes == 10 * 1024 * 1024
    assert settings.uploads_dir == Path("/srv/uploads")


def test_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_FILES_PER_UPLOAD", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
