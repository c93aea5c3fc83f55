"""
Contextualized Report Models

This module defines the wrapper records that attach overlay structure to raw
report data without modifying it:

    ContextualizedEvaluation  owns  ContextualizedProfile[]
    ContextualizedProfile     owns  ContextualizedControl[]

Profiles and controls additionally carry two non-owning edge lists:

    extends_from: what this node overlays (its ancestors)
    extended_by:  what overlays this node (its descendants)

Edges are plain object references. They and the sourced_from back pointers
are excluded from repr, and equality is identity (eq=False), so the mutual
references never recurse and wrappers can be used as dictionary keys.

Derived views on ContextualizedControl (root, is_redundant, full_code) walk
extends_from without a visited set. They are safe only because every edge is
added through linker.link_overlay, which refuses edges that would loop.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import get_settings
from .report_models import Control, Evaluation, Profile


@dataclass(eq=False)
class ContextualizedEvaluation:
    """
    An evaluation together with the profile wrappers it owns.

    Attributes:
        data: Raw evaluation (read-only)
        contains: Profile wrappers in source order
    """

    data: Evaluation
    contains: List["ContextualizedProfile"] = field(default_factory=list)

    @property
    def all_controls(self) -> List["ContextualizedControl"]:
        """Every control wrapper, in profile order then control order."""
        return [cc for profile in self.contains for cc in profile.contains]

    def find_profile(self, name: str) -> Optional["ContextualizedProfile"]:
        """Return the first profile wrapper with the given name, if any."""
        return next((p for p in self.contains if p.name == name), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profiles": [p.to_dict() for p in self.contains],
        }


@dataclass(eq=False)
class ContextualizedProfile:
    """
    A profile wrapper with its controls and profile-level overlay edges.

    sourced_from is None when the profile was contextualized on its own,
    outside of any evaluation.
    """

    data: Profile
    sourced_from: Optional[ContextualizedEvaluation] = field(default=None, repr=False)
    contains: List["ContextualizedControl"] = field(default_factory=list)
    extends_from: List["ContextualizedProfile"] = field(default_factory=list, repr=False)
    extended_by: List["ContextualizedProfile"] = field(default_factory=list, repr=False)

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def has_declared_dependency(self) -> bool:
        """True when declared parentage linked this profile to any other."""
        return bool(self.extends_from or self.extended_by)

    def find_control(self, control_id: str) -> Optional["ContextualizedControl"]:
        """
        Return the first control wrapper with the given raw id.

        Control ids are assumed unique within a profile; when they are not,
        the first one in source order is returned.
        """
        return next((c for c in self.contains if c.id == control_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "extends_from": [p.name for p in self.extends_from],
            "extended_by": [p.name for p in self.extended_by],
            "controls": [c.to_dict() for c in self.contains],
        }


@dataclass(eq=False)
class ContextualizedControl:
    """
    A control wrapper with control-level overlay edges and derived views.

    Attributes:
        data: Raw control (read-only)
        sourced_from: Profile wrapper that owns this control
        extends_from: Controls this one overlays, closest first
        extended_by: Controls that overlay this one
    """

    data: Control
    sourced_from: ContextualizedProfile = field(repr=False)
    extends_from: List["ContextualizedControl"] = field(default_factory=list, repr=False)
    extended_by: List["ContextualizedControl"] = field(default_factory=list, repr=False)

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def profile_name(self) -> str:
        return self.sourced_from.name

    @property
    def has_results(self) -> bool:
        """True when this occurrence recorded at least one result segment."""
        return bool(self.data.results)

    @property
    def root(self) -> "ContextualizedControl":
        """
        Drill down to the least-overlaid version of this control.

        Follows the first ancestor at every step. Use the root for all data
        operations that should not depend on which overlay layer was read.
        """
        curr = self
        while curr.extends_from:
            curr = curr.extends_from[0]
        return curr

    @property
    def overlay_chain(self) -> List["ContextualizedControl"]:
        """This control followed by each first ancestor, ending at root."""
        chain = [self]
        while chain[-1].extends_from:
            chain.append(chain[-1].extends_from[0])
        return chain

    @property
    def is_redundant(self) -> bool:
        """
        Whether this control adds nothing over its root.

        True for blank code, or for an overlay whose code is textually
        identical to the root's code.
        """
        code = self.data.code
        if not code or not code.strip():
            return True
        return bool(self.extends_from) and code == self.root.data.code

    @property
    def full_code(self) -> str:
        """
        The layered source of this control, outermost overlay first.

        Redundant layers collapse into their ancestor's listing.
        """
        if not self.extends_from:
            return self._banner_code().strip()

        ancestor = self.extends_from[0]
        if self.is_redundant:
            return ancestor.full_code
        return f"{self._banner_code()}\n\n{ancestor.full_code}".strip()

    def _banner_code(self) -> str:
        rule = get_settings().banner_rule
        return f"{rule}\n# Profile name: {self.profile_name}\n{rule}\n\n{self.data.code}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "profile": self.profile_name,
            "extends_from": [_edge_label(c) for c in self.extends_from],
            "extended_by": [_edge_label(c) for c in self.extended_by],
            "root": _edge_label(self.root),
            "is_redundant": self.is_redundant,
        }


def _edge_label(cc: ContextualizedControl) -> Dict[str, str]:
    return {"id": cc.id, "profile": cc.profile_name}
