"""
Configuration validation for the transcript extractor backend.
Validates credentials, deadlines and scratch storage on startup.
"""
import os
from pathlib import Path
from typing import List, Dict, Any


class ConfigValidator:
    """Validates system configuration before serving requests."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self) -> Dict[str, Any]:
        """
        Run all validation checks.

        Returns:
            {
                "valid": bool,
                "errors": List[str],
                "warnings": List[str]
            }
        """
        self.errors = []
        self.warnings = []

        # Run all checks
        self._validate_credentials()
        self._validate_target()
        self._validate_deadlines()
        self._validate_scratch_dir()

        return {
            "valid": len(self.errors) == 0,
            "errors": self.errors,
            "warnings": self.warnings
        }

    def _validate_credentials(self):
        """Speech-to-text is optional; warn when it is switched off."""
        from core.config import OPENAI_API_KEY

        if not OPENAI_API_KEY:
            self.warnings.append(
                "OPENAI_API_KEY is not set. Video transcription is disabled and "
                "responses will carry the 'unavailable' transcript message."
            )

    def _validate_target(self):
        """Check the accepted source domain."""
        from core.config import TARGET_DOMAIN

        domain = TARGET_DOMAIN.strip()
        if not domain:
            self.errors.append("TARGET_DOMAIN must not be empty")
        elif "/" in domain or ":" in domain:
            self.errors.append(
                f"TARGET_DOMAIN ({TARGET_DOMAIN}) must be a bare host name such as instagram.com"
            )

    def _validate_deadlines(self):
        """Validate timeout values and how they relate."""
        from core.config import (
            EXTRACTION_DEADLINE_SEC,
            NAVIGATION_TIMEOUT_MS,
            DOWNLOAD_TIMEOUT_SEC,
        )

        if EXTRACTION_DEADLINE_SEC <= 0:
            self.errors.append(
                f"EXTRACTION_DEADLINE_SEC ({EXTRACTION_DEADLINE_SEC}) must be positive"
            )
        if NAVIGATION_TIMEOUT_MS <= 0:
            self.errors.append(
                f"NAVIGATION_TIMEOUT_MS ({NAVIGATION_TIMEOUT_MS}) must be positive"
            )
        if DOWNLOAD_TIMEOUT_SEC <= 0:
            self.errors.append(
                f"DOWNLOAD_TIMEOUT_SEC ({DOWNLOAD_TIMEOUT_SEC}) must be positive"
            )

        # Navigation alone should not be able to eat the whole budget
        if 0 < EXTRACTION_DEADLINE_SEC <= NAVIGATION_TIMEOUT_MS / 1000:
            self.warnings.append(
                f"NAVIGATION_TIMEOUT_MS ({NAVIGATION_TIMEOUT_MS}) is not shorter than "
                f"EXTRACTION_DEADLINE_SEC ({EXTRACTION_DEADLINE_SEC}); slow pages will "
                "always hit the pipeline deadline"
            )

    def _validate_scratch_dir(self):
        """Check that downloaded media can be written."""
        from core.config import SCRATCH_DIR

        # Closest existing ancestor decides whether the directory can be created
        path = Path(SCRATCH_DIR)
        while not path.exists() and path != path.parent:
            path = path.parent

        if not os.access(path, os.W_OK):
            self.warnings.append(
                f"Scratch directory {SCRATCH_DIR} is not writable. "
                "Video downloads will fail; set SCRATCH_DIR or SERVERLESS=1."
            )


# Global validator instance
config_validator = ConfigValidator()
