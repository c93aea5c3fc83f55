"""
Unit test fixtures and helpers.

Provides raw report builders and an unlinked-wrapper helper so linking
phases can be exercised one at a time.
"""

from typing import Callable, List, Optional

import pytest

from overlay_context.config import get_settings
from overlay_context.models import (
    ContextualizedControl,
    ContextualizedEvaluation,
    ContextualizedProfile,
)
from overlay_context.report_models import Control, ControlResult, Evaluation, Profile


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_control() -> Callable[..., Control]:
    """Build a raw control, optionally with one recorded result segment."""

    def _make(control_id: str, code: str = "", with_results: bool = False) -> Control:
        results = []
        if with_results:
            results.append(ControlResult(status="passed", code_desc=f"{control_id} check"))
        return Control(id=control_id, code=code, results=results)

    return _make


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    """Build a raw profile from a name, optional parent and controls."""

    def _make(
        name: str,
        controls: Optional[List[Control]] = None,
        parent_profile: Optional[str] = None,
    ) -> Profile:
        return Profile(name=name, parent_profile=parent_profile, controls=controls or [])

    return _make


@pytest.fixture
def build_unlinked() -> Callable[[Evaluation], ContextualizedEvaluation]:
    """Wrap an evaluation's profiles and controls without adding any edge."""

    def _build(evaluation: Evaluation) -> ContextualizedEvaluation:
        eval_context = ContextualizedEvaluation(data=evaluation)
        eval_context.contains = [
            ContextualizedProfile(data=p, sourced_from=eval_context) for p in evaluation.profiles
        ]
        for profile_context in eval_context.contains:
            profile_context.contains = [
                ContextualizedControl(data=c, sourced_from=profile_context)
                for c in profile_context.data.controls
            ]
        return eval_context

    return _build
