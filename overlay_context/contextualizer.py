"""
Report Contextualizer

Entry points that wrap raw report records and hand back a linked overlay
graph. Construction is the only time edges are added; once these functions
return, the graph is treated as read-only by downstream consumers.
"""

import logging

from .linker import link_controls, link_profiles
from .logging_security import sanitize_for_log
from .models import ContextualizedControl, ContextualizedEvaluation, ContextualizedProfile
from .report_models import Evaluation, Profile

logger = logging.getLogger(__name__)


def _wrap_controls(profile_context: ContextualizedProfile) -> None:
    profile_context.contains = [
        ContextualizedControl(data=control, sourced_from=profile_context)
        for control in profile_context.data.controls
    ]


def contextualize_evaluation(evaluation: Evaluation) -> ContextualizedEvaluation:
    """
    Wrap an evaluation and resolve its profile and control overlays.

    Steps:
        1. Wrap every profile, in source order
        2. Link profiles by declared parent_profile
        3. Wrap every control of every profile
        4. Link controls (declared parentage first, same-id fallback)

    Args:
        evaluation: Raw evaluation from a format converter

    Returns:
        Fully linked ContextualizedEvaluation
    """
    eval_context = ContextualizedEvaluation(data=evaluation)
    eval_context.contains = [
        ContextualizedProfile(data=profile, sourced_from=eval_context)
        for profile in evaluation.profiles
    ]

    profile_edges = link_profiles(eval_context)

    for profile_context in eval_context.contains:
        _wrap_controls(profile_context)

    all_controls = eval_context.all_controls
    control_edges = link_controls(all_controls)

    logger.info(
        "Contextualized evaluation: %d profiles (%d overlay links), %d controls (%d overlay links)",
        len(eval_context.contains),
        profile_edges,
        len(all_controls),
        control_edges,
    )
    return eval_context


def contextualize_profile(profile: Profile) -> ContextualizedProfile:
    """
    Wrap a stand-alone profile without any overlay linking.

    Profiles exported on their own do not carry their overlays as separate
    records, so there is nothing to link against. Controls are wrapped with
    empty edge lists, even when two of them share an id.
    """
    profile_context = ContextualizedProfile(data=profile, sourced_from=None)
    _wrap_controls(profile_context)

    logger.info(
        "Contextualized stand-alone profile %s: %d controls",
        sanitize_for_log(profile.name),
        len(profile_context.contains),
    )
    return profile_context
