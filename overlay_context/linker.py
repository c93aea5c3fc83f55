"""
Overlay Linker - Profile and Control Overlay Resolution

This module populates the extends_from / extended_by edges of an already
wrapped evaluation. It runs in two phases:

    1. link_profiles: profile -> profile edges from declared parent_profile
    2. link_controls: control -> control edges, two-tier

Control Linking Tiers:
    Case A - the owning profile took part in declared parentage.
        Controls of an overlay profile search each profile it extends, in
        order, and link to the first control with the same id. Controls of
        a base profile (nothing extended) initiate nothing; overlays link to
        them instead.

    Case B - the owning profile has no declared parentage at all.
        Every control in the evaluation sharing the id forms a peer group.
        The first peer with recorded results is the base (else the first
        peer), and every other peer becomes a direct overlay of that base.
        With more than two layers the true order cannot be recovered, so
        non-base peers end up as siblings.

Failure Handling:
    Nothing here raises for report content. Unmatched parent names, missing
    ancestors and cycle-closing declarations all degrade into "no edge".

Preconditions:
    Control ids are unique within each profile. This is not enforced; when
    violated, the first control in source order wins every lookup.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Union

from .exceptions import OverlayCycleError
from .logging_security import sanitize_for_log
from .models import ContextualizedControl, ContextualizedEvaluation, ContextualizedProfile

logger = logging.getLogger(__name__)

OverlayNode = Union[ContextualizedProfile, ContextualizedControl]


def _label(node: OverlayNode) -> str:
    if isinstance(node, ContextualizedControl):
        return f"{sanitize_for_log(node.profile_name)}/{sanitize_for_log(node.id)}"
    return sanitize_for_log(node.name)


def creates_cycle(overlay: OverlayNode, base: OverlayNode) -> bool:
    """
    Check whether adding overlay -> base would make extends_from loop.

    The edge closes a loop exactly when overlay is already reachable from
    base by following extends_from (including overlay being base itself).
    """
    stack = [base]
    seen = set()
    while stack:
        node = stack.pop()
        if node is overlay:
            return True
        if id(node) in seen:
            continue
        seen.add(id(node))
        stack.extend(node.extends_from)
    return False


def link_overlay(overlay: OverlayNode, base: OverlayNode) -> None:
    """
    Record that overlay extends base, on both ends of the edge.

    Args:
        overlay: Node that overlays (appended to base.extended_by)
        base: Node being overlaid (appended to overlay.extends_from)

    Raises:
        OverlayCycleError: If the edge is a self-link or would close a loop
    """
    if creates_cycle(overlay, base):
        raise OverlayCycleError(
            message="Overlay edge would create a cycle",
            overlay=_label(overlay),
            base=_label(base),
        )

    overlay.extends_from.append(base)
    base.extended_by.append(overlay)


def link_profiles(evaluation: ContextualizedEvaluation) -> int:
    """
    Link profiles by their declared parent_profile names.

    A profile naming a parent becomes an overlay of the first other profile
    in the evaluation carrying that name.

    Returns:
        Number of profile edges created
    """
    linked = 0
    for profile in evaluation.contains:
        parent_name = profile.data.parent_profile
        if parent_name is None:
            continue

        parent = next(
            (p for p in evaluation.contains if p.name == parent_name and p is not profile),
            None,
        )
        if parent is None:
            logger.warning(
                "Profile %s declares unknown parent %s; leaving it unlinked",
                sanitize_for_log(profile.name),
                sanitize_for_log(parent_name),
            )
            continue

        if creates_cycle(profile, parent):
            logger.warning(
                "Profile %s declares parent %s, which would form a cycle; edge dropped",
                sanitize_for_log(profile.name),
                sanitize_for_log(parent_name),
            )
            continue

        link_overlay(profile, parent)
        linked += 1
        logger.debug("Profile %s overlays %s", _label(profile), _label(parent))

    return linked


def _group_by_id(controls: List[ContextualizedControl]) -> Dict[str, List[ContextualizedControl]]:
    groups: Dict[str, List[ContextualizedControl]] = defaultdict(list)
    for cc in controls:
        groups[cc.id].append(cc)
    return groups


def _select_base(peers: List[ContextualizedControl]) -> ContextualizedControl:
    # peers always contains the control being linked, so it is never empty
    return next((c for c in peers if c.has_results), peers[0])


def _link_declared(cc: ContextualizedControl) -> bool:
    profile = cc.sourced_from
    if not profile.extends_from:
        # Base profile; its overlays link to this control instead
        return False

    for extended_profile in profile.extends_from:
        ancestor = extended_profile.find_control(cc.id)
        if ancestor is not None:
            link_overlay(cc, ancestor)
            logger.debug("Control %s overlays %s", _label(cc), _label(ancestor))
            return True

    logger.debug("Control %s has no ancestor in extended profiles", _label(cc))
    return False


def _link_by_peers(cc: ContextualizedControl, peers: List[ContextualizedControl]) -> bool:
    base = _select_base(peers)
    if base is cc:
        return False

    link_overlay(cc, base)
    logger.debug("Control %s overlays same-id base %s", _label(cc), _label(base))
    return True


def link_controls(controls: List[ContextualizedControl]) -> int:
    """
    Link every control to the control it overlays, if any.

    Args:
        controls: Flat list of every control wrapper in the evaluation, in
            profile order then control order. Order decides tie-breaks.

    Returns:
        Number of control edges created
    """
    peer_groups = _group_by_id(controls)

    linked = 0
    for cc in controls:
        if cc.sourced_from.has_declared_dependency:
            created = _link_declared(cc)
        else:
            created = _link_by_peers(cc, peer_groups[cc.id])
        if created:
            linked += 1

    return linked
