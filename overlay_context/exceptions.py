"""
Overlay Context Exceptions

This module defines the exception hierarchy for report contextualization.
All package-specific exceptions inherit from ContextError, enabling
consistent error handling for callers that build and mutate overlay graphs.

Exception Hierarchy:
    ContextError (base)
    ├── ReportModelError (raw report records could not be built)
    └── OverlayCycleError (an overlay edge would break acyclicity)

The overlay linker itself never raises: unmatched parents and missing
ancestors degrade into "no edge". These exceptions surface only from the
raw model loaders and from explicit graph mutation helpers.
"""

from typing import Any, Dict, List, Optional


class ContextError(Exception):
    """
    Base exception for all contextualization operations.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional context for debugging
        cause: Original exception if wrapping another error

    Usage:
        try:
            evaluation = load_evaluation(data)
        except ContextError as e:
            logger.error(f"Context error {e.error_code}: {e.message}")
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONTEXT_ERROR",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary representation safe for API responses.
        """
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        """Format exception for logging."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f" (context: {self.context})")
        if self.cause:
            parts.append(f" (caused by: {self.cause})")
        return "".join(parts)


class ReportModelError(ContextError):
    """
    Raised when raw report records cannot be built from decoded JSON.

    Attributes:
        record_type: Which raw record failed ("evaluation", "profile")
        errors: Flattened validation error locations and messages

    Usage:
        raise ReportModelError(
            message="Profile record is malformed",
            record_type="profile",
            errors=["controls.0.id: Field required"],
        )
    """

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        errors: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        context: Dict[str, Any] = {}
        if record_type:
            context["record_type"] = record_type
        if errors:
            # Cap the list to keep log lines bounded
            context["errors"] = errors[:10]

        super().__init__(message, "REPORT_MODEL_ERROR", context, cause)
        self.record_type = record_type
        self.errors = errors or []


class OverlayCycleError(ContextError):
    """
    Raised when an overlay edge would link a node to itself or close a loop.

    Root and full-code traversal walk extends_from without a visited set,
    so every edge added after the linker runs must keep the graph acyclic.

    Attributes:
        overlay: Label of the node that would extend
        base: Label of the node it would extend from
    """

    def __init__(self, message: str, overlay: str, base: str):
        super().__init__(
            message,
            "OVERLAY_CYCLE",
            {"overlay": overlay, "base": base},
        )
        self.overlay = overlay
        self.base = base
