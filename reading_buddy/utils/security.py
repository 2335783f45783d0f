"""Containment of local document references.

Book references read from disk are untrusted input: they come from database
rows and command lines. Every reference must resolve to something inside the
documents directory.
"""

from pathlib import Path

import structlog

logger = structlog.get_logger()


class SecurityError(Exception):
    """A reference tried to leave its documents directory."""


class DocumentPathGuard:
    """Resolves references against one documents directory"""

    def __init__(self, documents_dir: Path):
        self.documents_dir = Path(documents_dir).resolve()

    def resolve(self, reference: str) -> Path:
        """Return the absolute path of an existing entry under documents_dir.

        Symlinks are followed before the containment check, so links that
        point outside the directory are rejected too.

        Raises:
            SecurityError: Reference resolves outside documents_dir
            FileNotFoundError: Nothing exists at the resolved path
        """
        cleaned = reference.replace("\0", "").strip()
        candidate = (self.documents_dir / cleaned).resolve()

        if not candidate.is_relative_to(self.documents_dir):
            logger.warning(
                "document_path_escape_blocked",
                documents_dir=str(self.documents_dir),
                reference=reference,
                resolved=str(candidate),
            )
            raise SecurityError(f"Path traversal attempt detected: {reference}")

        if not candidate.exists():
            raise FileNotFoundError(f"No document at {candidate}")
        return candidate
