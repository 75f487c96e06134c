"""
Inhibitor filter.

An inhibitor arc never supplies values. Each token in its source place
whose roles the transition actually reads names a combination of values
that must not be consumed: candidates holding all of those values lose
them, and candidates left with an empty role are dropped.
"""

from typing import Dict, List, Set

from .arc_place_info import ArcPlaceInfo, ArcPlaceInfoDict, incoming_roles, inhibitor_infos
from .keys import BindingPerDataClass, Role

# role -> value the inhibitor token blocks
InhibitorBinding = Dict[Role, str]


def _is_relevant(info: ArcPlaceInfo, roles: Set[Role]) -> bool:
    if not info.tokens:
        return False
    return all(key.role in roles for key in info.keys())


def inhibitor_bindings(infos: ArcPlaceInfoDict) -> List[InhibitorBinding]:
    """Blocking value combinations of all relevant inhibitor arcs.

    Identical combinations from several tokens or arcs appear once.
    """
    roles = incoming_roles(infos)
    bindings: List[InhibitorBinding] = []
    for info in inhibitor_infos(infos):
        if not _is_relevant(info, roles):
            continue
        for token in info.tokens:
            binding = {key.role: value for key, value in token.items()}
            if binding and binding not in bindings:
                bindings.append(binding)
    return bindings


def _values_by_role(candidate: BindingPerDataClass) -> Dict[Role, Set[str]]:
    values: Dict[Role, Set[str]] = {}
    for key, key_values in candidate.items():
        values.setdefault(key.role, set()).update(key_values)
    return values


def apply_inhibitor(
    candidate: BindingPerDataClass, inhibitor: InhibitorBinding
) -> BindingPerDataClass:
    """Return the candidate with the inhibitor's values removed.

    A candidate that does not hold every blocked value is returned
    unchanged. The result may contain empty roles.
    """
    held = _values_by_role(candidate)
    if not all(value in held.get(role, ()) for role, value in inhibitor.items()):
        return candidate
    return {
        key: [value for value in values if inhibitor.get(key.role) != value]
        for key, values in candidate.items()
    }


def filter_bindings_by_inhibitors(
    bindings: List[BindingPerDataClass], infos: ArcPlaceInfoDict
) -> List[BindingPerDataClass]:
    blockers = inhibitor_bindings(infos)
    if not blockers:
        return bindings

    result: List[BindingPerDataClass] = []
    for candidate in bindings:
        for blocker in blockers:
            candidate = apply_inhibitor(candidate, blocker)
            if any(not values for values in candidate.values()):
                break
        else:
            result.append(candidate)
    return result
