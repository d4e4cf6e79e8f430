"""Custom exceptions for docx-flow."""

from typing import Any, Dict, Optional


class DocxFlowError(Exception):
    """Base exception for docx-flow errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_text = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
            return f"{self.message}: {detail_text}"
        return self.message


class ConfigurationError(DocxFlowError):
    """Exception raised for invalid conversion options."""

    pass


class StyleResolutionError(DocxFlowError):
    """Exception raised when a style context is unusable."""

    pass


class NumberingError(DocxFlowError):
    """Exception raised when numbering state is inconsistent."""

    pass


class TableStructureError(DocxFlowError):
    """Exception raised for malformed table nodes passed to strict helpers."""

    pass


class SectionError(DocxFlowError):
    """Exception raised during section extraction."""

    pass


class GeometryError(DocxFlowError):
    """Exception raised during drawing geometry calculations."""

    pass


class DocumentStructureError(DocxFlowError):
    """Exception raised when the document root is not a node."""

    pass
