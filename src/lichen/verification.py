#!/usr/bin/env python3
"""
Lichen - Structural Verification

Reports transitions that can never fire because of how their arcs are
inscribed, independently of the current marking. Editors run this after
every arc change and show ``StructuralIssue.title`` next to the
transition.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Union
import logging

from lichen.binding.validators import find_unbound_outputs, has_mismatched_variable_types
from lichen.model.specs import PetriNet, Transition

logger = logging.getLogger(__name__)

_CANNOT_FIRE = "This transition cannot be fired.\n"


class IssueKind(Enum):
    """Kind of structural problem"""
    UNBOUND_OUTPUT = auto()  # Output variable no input supplies
    MISSING_INSCRIPTION = auto()  # Outgoing arc without inscription
    MISMATCHED_VARIABLE_TYPE = auto()  # Variable output without variable input


@dataclass(frozen=True)
class StructuralIssue:
    transition_id: str
    kind: IssueKind
    variables: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return format_issue_title(self)


def format_issue_title(issue: StructuralIssue) -> str:
    if issue.kind is IssueKind.UNBOUND_OUTPUT:
        return _CANNOT_FIRE + "Please check unbound output variable(s): " + ", ".join(issue.variables)
    if issue.kind is IssueKind.MISSING_INSCRIPTION:
        return _CANNOT_FIRE + "Please add properties to all Places."
    return _CANNOT_FIRE + "Please check the variable types of its arcs."


def verify_transition(net: PetriNet, transition: Union[str, Transition]) -> List[StructuralIssue]:
    """Structural issues of one transition, empty when it is well formed."""
    transition = net.transition(transition)
    issues: List[StructuralIssue] = []

    unbound = find_unbound_outputs(net, transition)
    if unbound.variables:
        issues.append(StructuralIssue(transition.id, IssueKind.UNBOUND_OUTPUT, list(unbound.variables)))
    elif unbound.has_unbound:
        issues.append(StructuralIssue(transition.id, IssueKind.MISSING_INSCRIPTION))
    elif has_mismatched_variable_types(net.incoming(transition), net.outgoing(transition)):
        # Only reachable through generated variable outputs
        issues.append(StructuralIssue(transition.id, IssueKind.MISMATCHED_VARIABLE_TYPE))

    for issue in issues:
        logger.warning("[verify] %s: %s", transition.id, issue.kind.name)
    return issues


def verify_net(net: PetriNet) -> Dict[str, List[StructuralIssue]]:
    """Issues per transition id, listing only transitions that have any."""
    report: Dict[str, List[StructuralIssue]] = {}
    for transition_id in net.transitions:
        issues = verify_transition(net, transition_id)
        if issues:
            report[transition_id] = issues
    return report
