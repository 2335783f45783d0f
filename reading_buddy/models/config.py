from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from reading_buddy.models.rate_limit import RateLimitRule


class PDFBackend(str, Enum):
    """PDF text backend identifier."""

    PYMUPDF = "pymupdf"
    PDFPLUMBER = "pdfplumber"


class StorageSettings(BaseModel):
    """S3-compatible object storage holding book PDFs"""

    endpoint: str = Field(
        ..., min_length=1, description="Public host, without scheme or port"
    )
    bucket: str = Field(..., min_length=1, description="Bucket holding book assets")
    use_ssl: bool = Field(True, description="Serve public URLs over https")
    port: Optional[int] = Field(None, ge=1, le=65535)
    timeout_seconds: int = Field(
        60, ge=1, le=600, description="Total timeout for one object download"
    )
    max_file_size_mb: int = Field(
        200, ge=1, le=2000, description="Maximum PDF size in MB"
    )

    @field_validator("endpoint")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        for scheme in ("https://", "http://"):
            if v.startswith(scheme):
                v = v[len(scheme) :]
        return v


class ExtractionSettings(BaseModel):
    """Text extraction settings"""

    backend: PDFBackend = Field(
        PDFBackend.PYMUPDF, description="Backend used to read PDF text layers"
    )
    documents_dir: Optional[str] = Field(
        None, description="Base directory for local document references"
    )


class RateLimitSettings(BaseModel):
    """Per-operation rate limits"""

    file_conversion: RateLimitRule = Field(
        default_factory=lambda: RateLimitRule(max_requests=5, window_seconds=15 * 60)
    )
    quiz_generation: RateLimitRule = Field(
        default_factory=lambda: RateLimitRule(max_requests=10, window_seconds=60 * 60)
    )
    auth: RateLimitRule = Field(
        default_factory=lambda: RateLimitRule(max_requests=10, window_seconds=5 * 60)
    )
    standard_api: RateLimitRule = Field(
        default_factory=lambda: RateLimitRule(max_requests=100, window_seconds=60)
    )
    file_upload: RateLimitRule = Field(
        default_factory=lambda: RateLimitRule(max_requests=20, window_seconds=15 * 60)
    )


class LoggingSettings(BaseModel):
    """Structured logging output"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True


class ReadingBuddyConfig(BaseModel):
    """Root configuration model"""

    model_config = ConfigDict(extra="forbid")

    storage: Optional[StorageSettings] = Field(
        default=None, description="Object storage (required for URL references)"
    )
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    rate_limits: RateLimitSettings = Field(default_factory=RateLimitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
