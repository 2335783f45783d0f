import pytest
import yaml
from unittest.mock import Mock, patch

from reading_buddy.models.config import PDFBackend
from reading_buddy.services.config_manager import (
    ConfigManager,
    ConfigValidationError,
    build_text_extractor,
)
from reading_buddy.services.document_resolver import ObjectStorageResolver


def _write_config(tmp_path, content, name="reading_buddy.yaml"):
    config_file = tmp_path / name
    if isinstance(content, str):
        config_file.write_text(content)
    else:
        with open(config_file, "w") as f:
            yaml.dump(content, f)
    return config_file


@pytest.fixture
def valid_config_file(tmp_path):
    return _write_config(
        tmp_path,
        {
            "storage": {
                "endpoint": "https://files.example.com",
                "bucket": "books",
            },
            "extraction": {"backend": "pdfplumber", "documents_dir": str(tmp_path)},
            "rate_limits": {
                "quiz_generation": {"max_requests": 2, "window_seconds": 60}
            },
            "logging": {"level": "DEBUG", "json_output": False},
        },
    )


def test_load_valid_config(valid_config_file, tmp_path):
    config = ConfigManager(config_path=str(valid_config_file)).load_config()

    assert config.storage.endpoint == "files.example.com"
    assert config.storage.bucket == "books"
    assert config.extraction.backend == PDFBackend.PDFPLUMBER
    assert config.extraction.documents_dir == str(tmp_path)
    assert config.rate_limits.quiz_generation.max_requests == 2
    # Unspecified rules keep their defaults
    assert config.rate_limits.file_conversion.max_requests == 5
    assert config.logging.level == "DEBUG"


def test_config_is_cached(valid_config_file):
    manager = ConfigManager(config_path=str(valid_config_file))

    assert manager.load_config() is manager.load_config()


def test_empty_file_uses_defaults(tmp_path):
    config = ConfigManager(str(_write_config(tmp_path, ""))).load_config()

    assert config.storage is None
    assert config.extraction.backend == PDFBackend.PYMUPDF


def test_env_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("RB_TEST_ENDPOINT", "minio.internal")
    monkeypatch.setenv("RB_TEST_BUCKET", "library")
    config_file = _write_config(
        tmp_path,
        "storage:\n"
        "  endpoint: ${RB_TEST_ENDPOINT}\n"
        "  bucket: ${RB_TEST_BUCKET}\n"
        "  use_ssl: false\n"
        "  port: 9000\n",
    )

    config = ConfigManager(str(config_file)).load_config()

    assert config.storage.endpoint == "minio.internal"
    assert config.storage.bucket == "library"
    assert config.storage.port == 9000


def test_load_missing_config():
    manager = ConfigManager(config_path="nonexistent.yaml")
    with pytest.raises(FileNotFoundError):
        manager.load_config()


def test_invalid_yaml(tmp_path):
    config_file = _write_config(tmp_path, "storage: [unclosed")

    with pytest.raises(ConfigValidationError, match="Failed to parse YAML"):
        ConfigManager(str(config_file)).load_config()


def test_unknown_section_rejected(tmp_path):
    config_file = _write_config(tmp_path, {"research_topics": []})

    with pytest.raises(ConfigValidationError, match="Invalid configuration"):
        ConfigManager(str(config_file)).load_config()


def test_invalid_backend_rejected(tmp_path):
    config_file = _write_config(tmp_path, {"extraction": {"backend": "tesseract"}})

    with pytest.raises(ConfigValidationError):
        ConfigManager(str(config_file)).load_config()


def test_top_level_list_rejected(tmp_path):
    config_file = _write_config(tmp_path, "- one\n- two\n")

    with pytest.raises(ConfigValidationError):
        ConfigManager(str(config_file)).load_config()


def test_build_text_extractor_wires_resolvers(valid_config_file, tmp_path):
    config = ConfigManager(str(valid_config_file)).load_config()

    with patch(
        "reading_buddy.services.config_manager.get_backend",
        return_value=Mock(name="backend"),
    ) as mock_get_backend:
        extractor = build_text_extractor(config)

    mock_get_backend.assert_called_once_with(PDFBackend.PDFPLUMBER)
    assert extractor.resolver.local.base_dir == tmp_path.resolve()
    assert isinstance(extractor.resolver.remote, ObjectStorageResolver)


def test_build_text_extractor_without_storage(tmp_path):
    config = ConfigManager(str(_write_config(tmp_path, ""))).load_config()

    with patch("reading_buddy.services.config_manager.get_backend"):
        extractor = build_text_extractor(config)

    assert extractor.resolver.remote is None
