"""
Exact-synchronization filter.

Tokens of an exact-synchronization arc are grouped by their non-variable
values. For every key of a group, a candidate holds either all of the
group's values or none of them. Once a candidate selects a group it has to
take every value of it as well.
"""

from typing import List

from .arc_place_info import ArcPlaceInfoDict, non_inhibitor_infos
from .candidates import group_tokens_by_rigid_values
from .keys import BindingPerDataClass, DataClassKey


def _holds(candidate: BindingPerDataClass, key: DataClassKey, value: str) -> bool:
    return value in candidate.get(key, ())


def group_is_engaged(group: BindingPerDataClass, candidate: BindingPerDataClass) -> bool:
    """True if the candidate selects this synchronization group.

    A group is selected through its non-variable values; a group with no
    non-variable key is selected as soon as the candidate holds any of its
    values.
    """
    rigid = [key for key in group if not key.is_variable]
    if rigid:
        return all(_holds(candidate, key, group[key][0]) for key in rigid)
    return any(_holds(candidate, key, value) for key, values in group.items() for value in values)


def group_is_split(group: BindingPerDataClass, candidate: BindingPerDataClass) -> bool:
    """True if the candidate holds some, but not all, values of a group key."""
    for key, values in group.items():
        held = [value for value in values if _holds(candidate, key, value)]
        if held and len(held) < len(values):
            return True
    return False


def group_is_satisfied(group: BindingPerDataClass, candidate: BindingPerDataClass) -> bool:
    if group_is_split(group, candidate):
        return False
    if not group_is_engaged(group, candidate):
        return True
    return all(_holds(candidate, key, value) for key, values in group.items() for value in values)


def check_exact_sync_constraints(
    infos: ArcPlaceInfoDict, bindings: List[BindingPerDataClass]
) -> List[BindingPerDataClass]:
    for info in non_inhibitor_infos(infos):
        if not info.is_exact_synchronization:
            continue
        groups = list(group_tokens_by_rigid_values(info.keys(), info.tokens).values())
        bindings = [
            candidate for candidate in bindings
            if all(group_is_satisfied(group, candidate) for group in groups)
        ]
    return bindings
