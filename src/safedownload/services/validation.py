"""Download path validation."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import DownloadPolicy

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    """Why a requested file was refused. Never sent to the client."""

    PARAMETER_MISSING = "parameter_missing"
    FILE_NOT_FOUND = "file_not_found"
    EXTENSION_NOT_ALLOWED = "extension_not_allowed"
    PATH_ESCAPE_SUSPECTED = "path_escape_suspected"


@dataclass
class ValidationResult:
    """Result of validating a requested file path."""

    ok: bool = True
    reason: FailureReason | None = None

    @classmethod
    def failure(cls, reason: FailureReason) -> "ValidationResult":
        """Create a failure result."""
        return cls(ok=False, reason=reason)


class DownloadValidator:
    """Decides whether a requested path may be served under a policy."""

    def __init__(self, policy: DownloadPolicy):
        self.policy = policy

    def _full_path(self, file: str) -> Path:
        return self.policy.base_path / file

    def _exists(self, file: str) -> bool:
        try:
            return self._full_path(file).exists()
        except OSError:
            # ENAMETOOLONG and friends mean the name cannot refer to a file
            return False

    def _is_contained(self, file: str) -> bool:
        """Check the canonical path lies inside the canonical download dir."""
        try:
            root = (self.policy.base_path / self.policy.download_dir).resolve()
            target = self._full_path(file).resolve()
        except (OSError, RuntimeError):
            # Unresolvable names (too long, symlink loops) are never inside
            return False
        return target == root or root in target.parents

    def check(self, file: str | None) -> ValidationResult:
        """Validate a requested file path and report the first failed rule.

        Rules, in order:
            1. the path is given and exists
            2. it ends with an allowed extension (case-sensitive)
            3. it starts with the download directory (raw string prefix)
            4. it contains no '..' anywhere
            5. with strict containment, its resolved path is inside the
               resolved download directory

        Rule 4 deliberately rejects every '..', not only path segments:
        '/..', './../' and 'a/b/../../../' can all climb out of a path that
        still starts with the right prefix.
        """
        if not file:
            return ValidationResult.failure(FailureReason.PARAMETER_MISSING)

        if not self._exists(file):
            return ValidationResult.failure(FailureReason.FILE_NOT_FOUND)

        if not any(file.endswith(ext) for ext in self.policy.allowed_extensions):
            return ValidationResult.failure(FailureReason.EXTENSION_NOT_ALLOWED)

        if not file.startswith(self.policy.download_dir) or ".." in file:
            return ValidationResult.failure(FailureReason.PATH_ESCAPE_SUSPECTED)

        if self.policy.strict_containment and not self._is_contained(file):
            return ValidationResult.failure(FailureReason.PATH_ESCAPE_SUSPECTED)

        return ValidationResult()

    def validate(self, file: str | None) -> bool:
        """Return True if the file may be downloaded."""
        result = self.check(file)
        if not result.ok:
            logger.info(f"Rejected download of {file!r}: {result.reason.value}")
        return result.ok
