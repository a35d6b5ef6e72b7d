"""Custom exception hierarchy for resume-ranker."""

from __future__ import annotations


class ResumeRankerError(Exception):
    """Base exception for all resume-ranker errors."""


class ConfigurationError(ResumeRankerError):
    """Raised when a required setting (e.g. the API key) is missing."""


class CostLimitExceededError(ResumeRankerError):
    """Raised when estimated run cost exceeds the configured limit."""


# --- Input ---


class InputValidationError(ResumeRankerError):
    """Raised for user-correctable input problems (text length, missing fields)."""


class InvalidFileError(InputValidationError):
    """Raised when the input file is not a valid PDF."""


class FileTooLargeError(InputValidationError):
    """Raised when an uploaded file exceeds the size limit."""


class ScannedPDFError(InputValidationError):
    """Raised when a PDF has no text layer (scanned/image-only)."""


class EncryptedPDFError(InputValidationError):
    """Raised when a PDF is password-protected."""


# --- Preconditions ---


class PreconditionError(ResumeRankerError):
    """Raised when a requested operation is missing a required input."""


class MissingJobPostingError(PreconditionError):
    """Raised when scoring is requested without a resolvable job posting."""


class MissingResumesError(PreconditionError):
    """Raised when an operation needs at least one resume and none were given."""


# --- Stage failures ---


class StageFailedError(ResumeRankerError):
    """Raised when a pipeline stage cannot produce a valid result."""


class ExtractionFailedError(StageFailedError):
    """Raised when job posting extraction fails or violates its schema."""


class StructuringFailedError(StageFailedError):
    """Raised when a resume cannot be turned into a StructuredResume."""


class ScoringFailedError(StageFailedError):
    """Raised when the scoring call fails or violates its schema."""


class LatexConversionFailedError(StageFailedError):
    """Raised when LaTeX conversion of a resume fails."""


class StageTimeoutError(StageFailedError):
    """Raised when a pipeline step exceeds agent_timeout_seconds."""


# --- Results ---


class EmptyResultError(ResumeRankerError):
    """Raised when a stage returns zero usable items."""


class NoScoresProducedError(EmptyResultError):
    """Raised when there are no score entries to rank."""


# --- Storage ---


class StorageError(ResumeRankerError):
    """Raised when reading or writing the JSON stores fails."""


class ResumeNotFoundError(StorageError):
    """Raised when a requested resume id is not on disk."""
