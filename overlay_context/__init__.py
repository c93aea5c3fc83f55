"""
Overlay Context - Overlay Resolution for Compliance Scan Reports

A scan report lists every profile that ran, and an overlay (wrapper) profile
repeats the controls of the profile it customizes. This package wraps the
raw report records and reconstructs who overlays whom, so consumers can ask
for the authoritative occurrence of a control and its full layered code.

Architecture Overview:
    1. Raw models (overlay_context.report_models)
       - Evaluation -> Profile -> Control -> ControlResult
       - Supplied by format converters, never mutated here

    2. Wrappers (overlay_context.models)
       - ContextualizedEvaluation / Profile / Control
       - Overlay edges plus root, is_redundant and full_code views

    3. Linker (overlay_context.linker)
       - Profile edges from declared parent_profile
       - Control edges from declared parentage or same-id fallback

    4. Entry points (overlay_context.contextualizer)
       - contextualize_evaluation / contextualize_profile

Quick Start:
    from overlay_context import contextualize_evaluation, load_evaluation

    context = contextualize_evaluation(load_evaluation(report))
    for profile in context.contains:
        for control in profile.contains:
            if not control.is_redundant:
                print(control.root.id, control.full_code)
"""

from .config import Settings, get_settings
from .contextualizer import contextualize_evaluation, contextualize_profile
from .exceptions import ContextError, OverlayCycleError, ReportModelError
from .linker import creates_cycle, link_controls, link_overlay, link_profiles
from .models import ContextualizedControl, ContextualizedEvaluation, ContextualizedProfile
from .report_models import (
    Control,
    ControlResult,
    ControlResultStatus,
    Evaluation,
    Profile,
    load_evaluation,
    load_profile,
)

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "contextualize_evaluation",
    "contextualize_profile",
    # Wrappers
    "ContextualizedEvaluation",
    "ContextualizedProfile",
    "ContextualizedControl",
    # Raw report models
    "Evaluation",
    "Profile",
    "Control",
    "ControlResult",
    "ControlResultStatus",
    "load_evaluation",
    "load_profile",
    # Linking phases
    "link_profiles",
    "link_controls",
    "link_overlay",
    "creates_cycle",
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "ContextError",
    "ReportModelError",
    "OverlayCycleError",
]
