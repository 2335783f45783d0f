"""Document resolution: turning a book reference into PDF bytes.

Two resolvers are provided:
1. LocalFileResolver - references are paths under a documents directory
2. ObjectStorageResolver - references are public object-storage URLs

Security Features:
- Path sanitization for local references
- File size limits while streaming
- PDF magic byte validation
- Timeout enforcement
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

import aiohttp
import structlog

from reading_buddy.models.config import StorageSettings
from reading_buddy.observability.metrics import DOCUMENT_FETCHES
from reading_buddy.utils.exceptions import (
    DocumentFetchError,
    ExtractionFailure,
    UnresolvableDocumentError,
)
from reading_buddy.utils.object_keys import ObjectUrlMapper
from reading_buddy.utils.security import DocumentPathGuard, SecurityError

logger = structlog.get_logger()

PDF_MAGIC = b"%PDF"


def validate_pdf_bytes(data: bytes, reference: str) -> bytes:
    """Check that fetched bytes look like a PDF.

    Raises:
        ExtractionFailure: Empty content or missing %PDF header
    """
    if not data:
        raise ExtractionFailure(f"Document is empty: {reference}")
    if not data.startswith(PDF_MAGIC):
        logger.warning(
            "pdf_validation_failed",
            reason="invalid_magic_bytes",
            reference=reference,
            header=data[:4].hex(),
        )
        raise ExtractionFailure(f"Document is not a PDF: {reference}")
    return data


class DocumentResolver(ABC):
    """Resolves a document reference to raw PDF bytes."""

    @abstractmethod
    async def fetch(self, reference: str) -> bytes:
        """
        Fetch the document's bytes.

        Raises:
            UnresolvableDocumentError: Reference cannot be mapped to content
            ExtractionFailure: Content exists but could not be read
        """
        raise NotImplementedError("Subclasses must implement fetch()")


class LocalFileResolver(DocumentResolver):
    """Resolves references relative to a local documents directory."""

    def __init__(self, base_dir: Path):
        self.path_guard = DocumentPathGuard(base_dir)
        self.base_dir = self.path_guard.documents_dir

    async def fetch(self, reference: str) -> bytes:
        if not reference or not reference.strip():
            raise UnresolvableDocumentError(reference, "empty reference")

        try:
            path = self.path_guard.resolve(reference)
        except (SecurityError, FileNotFoundError) as e:
            DOCUMENT_FETCHES.labels(source="local", status="unresolvable").inc()
            raise UnresolvableDocumentError(reference, str(e)) from e

        if not path.is_file():
            DOCUMENT_FETCHES.labels(source="local", status="unresolvable").inc()
            raise UnresolvableDocumentError(reference, "not a file")

        try:
            data = path.read_bytes()
        except OSError as e:
            DOCUMENT_FETCHES.labels(source="local", status="failed").inc()
            raise ExtractionFailure(f"Failed to read {path}: {e}", cause=e) from e

        DOCUMENT_FETCHES.labels(source="local", status="success").inc()
        logger.debug("document_loaded", path=str(path), size_bytes=len(data))
        return validate_pdf_bytes(data, reference)


class ObjectStorageResolver(DocumentResolver):
    """Resolves public object URLs and streams the object over HTTP

    The bucket is expected to allow public reads, matching how the
    library serves PDFs to readers.
    """

    def __init__(self, settings: StorageSettings):
        self.settings = settings
        self.mapper = ObjectUrlMapper(settings)
        self.max_size_bytes = settings.max_file_size_mb * 1024 * 1024
        self.timeout_seconds = settings.timeout_seconds

    async def fetch(self, reference: str) -> bytes:
        object_key = self.mapper.get_object_key(reference)
        if not object_key:
            DOCUMENT_FETCHES.labels(
                source="object_storage", status="unresolvable"
            ).inc()
            raise UnresolvableDocumentError(
                reference, "cannot extract object key from URL"
            )

        url = self.mapper.build_public_object_url(object_key)
        logger.info("document_download_started", object_key=object_key, url=url)

        try:
            data = await self._download(url, reference)
        except (UnresolvableDocumentError, DocumentFetchError):
            DOCUMENT_FETCHES.labels(source="object_storage", status="failed").inc()
            raise

        DOCUMENT_FETCHES.labels(source="object_storage", status="success").inc()
        logger.info(
            "document_download_success",
            object_key=object_key,
            size_bytes=len(data),
        )
        return validate_pdf_bytes(data, reference)

    async def _download(self, url: str, reference: str) -> bytes:
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as response:
                    if response.status == 404:
                        raise UnresolvableDocumentError(
                            reference, "object not found in storage"
                        )
                    if response.status != 200:
                        raise DocumentFetchError(f"HTTP {response.status} for {url}")

                    content_length = self._declared_size(response.headers, url)
                    if (
                        content_length is not None
                        and content_length > self.max_size_bytes
                    ):
                        raise DocumentFetchError(
                            f"Document too large: {content_length} bytes "
                            f"(max: {self.max_size_bytes})"
                        )

                    chunks = []
                    total_bytes = 0
                    async for chunk in response.content.iter_chunked(8192):
                        total_bytes += len(chunk)
                        if total_bytes > self.max_size_bytes:
                            raise DocumentFetchError(
                                f"Document exceeded size limit during download: "
                                f"{total_bytes} bytes"
                            )
                        chunks.append(chunk)

            return b"".join(chunks)

        except aiohttp.ClientError as e:
            logger.error("document_download_failed", url=url, error=str(e))
            raise DocumentFetchError(f"Download failed: {e}", cause=e) from e
        except asyncio.TimeoutError as e:
            logger.error("document_download_timeout", url=url)
            raise DocumentFetchError(
                f"Download timeout after {self.timeout_seconds}s", cause=e
            ) from e

    @staticmethod
    def _declared_size(headers: Mapping[str, str], url: str) -> Optional[int]:
        """Content-Length as an int, or None when the header is absent"""
        raw = headers.get("content-length")
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError as e:
            raise DocumentFetchError(
                f"Malformed Content-Length {raw!r} for {url}", cause=e
            ) from e


class ReferenceRouter(DocumentResolver):
    """Routes http(s) references to object storage and the rest to disk."""

    def __init__(
        self,
        local: LocalFileResolver | None = None,
        remote: ObjectStorageResolver | None = None,
    ):
        self.local = local
        self.remote = remote

    async def fetch(self, reference: str) -> bytes:
        is_url = bool(reference) and reference.strip().lower().startswith(
            ("http://", "https://")
        )
        resolver = self.remote if is_url else self.local
        if resolver is None:
            kind = "object storage" if is_url else "local documents"
            raise UnresolvableDocumentError(reference, f"{kind} not configured")
        return await resolver.fetch(reference)
