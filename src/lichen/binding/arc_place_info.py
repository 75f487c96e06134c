"""
Arc-place info: a normalized view of an incoming arc's source marking.

For each incoming arc the builder records which data classes the source
place's tokens carry, under which variable name and variable flag the arc
binds them, and every distinct value seen. Tokens are re-keyed by
``DataClassKey`` so later stages never look at raw data classes again.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set

from lichen.model.specs import Arc, DataClass, PetriNet

from .keys import (
    BindingPerDataClass,
    DataClassKey,
    NormalizedToken,
    Role,
    combination_key,
    distinct,
    tokens_equal,
)


@dataclass
class DataClassInfo:
    """What one arc sees of one data class."""
    data_class: DataClass
    alias: str = ""
    is_variable: bool = False
    token_values: List[str] = field(default_factory=list)

    @property
    def key(self) -> DataClassKey:
        return DataClassKey(self.data_class.id, self.alias, self.is_variable)


@dataclass
class ArcPlaceInfo:
    arc_id: str
    place_id: str
    tokens: List[NormalizedToken]
    is_inhibitor_arc: bool
    is_exact_synchronization: bool
    is_linking_place: bool
    variable_class: Optional[DataClass]
    # data class id -> info, in first-seen order
    data_class_info: Dict[str, DataClassInfo]

    def keys(self) -> List[DataClassKey]:
        return [info.key for info in self.data_class_info.values()]

    def combination(self) -> FrozenSet[DataClassKey]:
        return combination_key(self.keys())


ArcPlaceInfoDict = Dict[str, ArcPlaceInfo]


def build_arc_place_info(net: PetriNet, arc: Arc) -> ArcPlaceInfo:
    """Build the info for one incoming arc."""
    place = net.place(arc.source)

    data_class_info: Dict[str, DataClassInfo] = {}
    for token in place.marking:
        for token_value in token.values:
            info = data_class_info.setdefault(
                token_value.data_class.id, DataClassInfo(token_value.data_class)
            )
            if token_value.value not in info.token_values:
                info.token_values.append(token_value.value)

    variable_class: Optional[DataClass] = None
    for element in arc.inscription.elements:
        info = data_class_info.get(element.data_class.id)
        if info is None:
            continue
        if arc.variable_type == element.data_class:
            info.is_variable = True
            variable_class = element.data_class
        info.alias = element.variable_name

    tokens: List[NormalizedToken] = []
    for token in place.marking:
        tokens.append({
            data_class_info[token_value.data_class.id].key: token_value.value
            for token_value in token.values
        })

    return ArcPlaceInfo(
        arc_id=arc.id,
        place_id=place.id,
        tokens=tokens,
        is_inhibitor_arc=arc.is_inhibitor_arc,
        is_exact_synchronization=arc.is_exact_synchronization,
        is_linking_place=len(data_class_info) > 1,
        variable_class=variable_class,
        data_class_info=data_class_info,
    )


def _rebuild_token_values(info: ArcPlaceInfo) -> None:
    dc_id_by_key = {dc_info.key: dc_id for dc_id, dc_info in info.data_class_info.items()}
    for dc_info in info.data_class_info.values():
        dc_info.token_values = []
    for token in info.tokens:
        for key, value in token.items():
            dc_info = info.data_class_info[dc_id_by_key[key]]
            if value not in dc_info.token_values:
                dc_info.token_values.append(value)


def build_arc_place_info_dict(net: PetriNet, incoming: List[Arc]) -> ArcPlaceInfoDict:
    """Build infos for every incoming arc, keyed by arc id.

    A non-inhibitor arc whose key combination (and exact-synchronization
    flag) repeats an earlier arc's is the same constraint seen twice: the
    earlier entry keeps only tokens present in both, and the later arc gets
    no entry. Inhibitor arcs are never merged.
    """
    infos: ArcPlaceInfoDict = {}
    seen_combinations: Dict[tuple, str] = {}

    for arc in incoming:
        info = build_arc_place_info(net, arc)

        if info.is_inhibitor_arc:
            infos[arc.id] = info
            continue

        combination = (info.combination(), info.is_exact_synchronization)
        existing_id = seen_combinations.get(combination)
        if existing_id is None:
            seen_combinations[combination] = arc.id
            infos[arc.id] = info
            continue

        existing = infos[existing_id]
        existing.tokens = [
            token for token in existing.tokens
            if any(tokens_equal(token, other) for other in info.tokens)
        ]
        _rebuild_token_values(existing)

    return infos


def non_inhibitor_infos(infos: ArcPlaceInfoDict) -> List[ArcPlaceInfo]:
    return [info for info in infos.values() if not info.is_inhibitor_arc]


def inhibitor_infos(infos: ArcPlaceInfoDict) -> List[ArcPlaceInfo]:
    return [info for info in infos.values() if info.is_inhibitor_arc]


def incoming_keys(infos: ArcPlaceInfoDict) -> Set[DataClassKey]:
    """Every role key offered by non-inhibitor arcs."""
    return {key for info in non_inhibitor_infos(infos) for key in info.keys()}


def incoming_roles(infos: ArcPlaceInfoDict) -> Set[Role]:
    return {key.role for key in incoming_keys(infos)}


def non_linking_bindings(infos: ArcPlaceInfoDict) -> BindingPerDataClass:
    """Union of distinct values per key over non-linking, non-inhibitor arcs.

    These roles are chosen independently of each other.
    """
    binding: BindingPerDataClass = {}
    for info in non_inhibitor_infos(infos):
        if info.is_linking_place:
            continue
        for dc_info in info.data_class_info.values():
            values = binding.setdefault(dc_info.key, [])
            binding[dc_info.key] = distinct(values + dc_info.token_values)
    return binding
