"""Configuration loading and service wiring.

The YAML file may reference environment variables as ``${VAR}``; a ``.env``
file in the working directory is loaded first. Placeholders without a value
are left as written so pydantic reports them against the right field.
"""

import os
from pathlib import Path
from string import Template
from typing import Optional

import structlog
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from reading_buddy.models.config import ReadingBuddyConfig
from reading_buddy.services.document_resolver import (
    LocalFileResolver,
    ObjectStorageResolver,
    ReferenceRouter,
)
from reading_buddy.services.pdf_extractors import get_backend
from reading_buddy.services.text_extractor import TextExtractor

logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = "config/reading_buddy.yaml"


class ConfigValidationError(Exception):
    """Configuration file is unreadable or invalid"""

    pass


class ConfigManager:
    """Loads and caches the reading core configuration"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self._config: Optional[ReadingBuddyConfig] = None

    def load_config(self) -> ReadingBuddyConfig:
        """Load, expand and validate the configuration file

        Raises:
            FileNotFoundError: The file does not exist
            ConfigValidationError: The file cannot be read, parsed or validated
        """
        if self._config is not None:
            return self._config

        load_dotenv()
        try:
            data = yaml.safe_load(self._read_expanded()) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Failed to parse YAML: {e}") from e

        try:
            config = ReadingBuddyConfig(**data)
        except (ValidationError, TypeError) as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

        logger.info(
            "config_loaded",
            path=str(self.config_path),
            backend=config.extraction.backend.value,
            storage_configured=config.storage is not None,
        )
        self._config = config
        return config

    def _read_expanded(self) -> str:
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        try:
            raw = self.config_path.read_text()
        except OSError as e:
            raise ConfigValidationError(f"Failed to read config file: {e}") from e
        return Template(raw).safe_substitute(os.environ)


def build_text_extractor(config: ReadingBuddyConfig) -> TextExtractor:
    """Wire a TextExtractor from configuration

    URL references go to object storage when it is configured; other
    references are read from extraction.documents_dir (default: cwd).
    """
    documents_dir = Path(config.extraction.documents_dir or Path.cwd())
    remote = ObjectStorageResolver(config.storage) if config.storage else None
    resolver = ReferenceRouter(local=LocalFileResolver(documents_dir), remote=remote)
    return TextExtractor(resolver=resolver, backend=get_backend(config.extraction.backend))
