"""
Raw Report Models

Pydantic models for the normalized evaluation records produced by format
converters: Evaluation -> Profile[] -> Control[] -> ControlResult[].

These records follow the HDF execution JSON layout. They are deliberately
lenient: unknown keys are kept (extra="allow") and optional fields default
to empty values, because the contextualizer only needs names, parentage,
ids, code and results. The contextualizer treats them as read-only.

Usage:
    evaluation = load_evaluation(json.loads(report_text))
    context = contextualize_evaluation(evaluation)
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ReportModelError

logger = logging.getLogger(__name__)


class ControlResultStatus(str, Enum):
    """Outcome of one recorded control segment"""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    ERROR = "error"


class ControlResult(BaseModel):
    """One recorded outcome (segment) of executing a control"""

    model_config = ConfigDict(extra="allow")

    status: Optional[ControlResultStatus] = None
    code_desc: str = ""
    message: Optional[str] = None
    skip_message: Optional[str] = None
    resource: Optional[str] = None
    run_time: Optional[float] = None
    start_time: Optional[datetime] = None
    backtrace: Optional[List[str]] = None
    exception: Optional[str] = None

    @property
    def segments(self) -> List[str]:
        """Free-text detail recorded for this result, in display order."""
        parts = [self.code_desc, self.message, self.skip_message, self.exception]
        return [p for p in parts if p]


class Control(BaseModel):
    """One checkable rule with its source code and recorded results"""

    model_config = ConfigDict(extra="allow")

    id: str
    code: str = ""
    title: Optional[str] = None
    desc: Optional[str] = None
    impact: float = 0.0
    tags: Dict[str, Any] = Field(default_factory=dict)
    descriptions: List[Dict[str, Any]] = Field(default_factory=list)
    results: List[ControlResult] = Field(default_factory=list)

    @field_validator("code", mode="before")
    @classmethod
    def missing_code_is_empty(cls, v):
        # Profile-only exports frequently carry "code": null
        return "" if v is None else v


class Profile(BaseModel):
    """A named bundle of controls, possibly overlaying a parent profile"""

    model_config = ConfigDict(extra="allow")

    name: str
    title: Optional[str] = None
    version: Optional[str] = None
    parent_profile: Optional[str] = None
    status: Optional[str] = None
    depends: List[Dict[str, Any]] = Field(default_factory=list)
    controls: List[Control] = Field(default_factory=list)


class Evaluation(BaseModel):
    """One full scan execution"""

    model_config = ConfigDict(extra="allow")

    profiles: List[Profile] = Field(default_factory=list)
    version: Optional[str] = None
    platform: Dict[str, Any] = Field(default_factory=dict)
    statistics: Dict[str, Any] = Field(default_factory=dict)


def _flatten_errors(exc: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


def load_evaluation(data: Dict[str, Any]) -> Evaluation:
    """
    Build an Evaluation from an already-decoded report dictionary.

    Args:
        data: Decoded HDF execution JSON

    Returns:
        Evaluation model

    Raises:
        ReportModelError: If the dictionary does not describe an evaluation
    """
    try:
        evaluation = Evaluation.model_validate(data)
    except ValidationError as e:
        raise ReportModelError(
            message="Evaluation record is malformed",
            record_type="evaluation",
            errors=_flatten_errors(e),
            cause=e,
        ) from e

    logger.debug("Loaded evaluation with %d profiles", len(evaluation.profiles))
    return evaluation


def load_profile(data: Dict[str, Any]) -> Profile:
    """
    Build a stand-alone Profile from an already-decoded profile dictionary.

    Raises:
        ReportModelError: If the dictionary does not describe a profile
    """
    try:
        profile = Profile.model_validate(data)
    except ValidationError as e:
        raise ReportModelError(
            message="Profile record is malformed",
            record_type="profile",
            errors=_flatten_errors(e),
            cause=e,
        ) from e

    logger.debug("Loaded profile with %d controls", len(profile.controls))
    return profile
