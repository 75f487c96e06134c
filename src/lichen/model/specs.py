#!/usr/bin/env python3
"""
Lichen - Model Layer

Core data structures of a colored Place/Transition net. The net owns its
places, transitions and arcs in id-indexed tables; arcs refer to their
endpoints by id, so there are no reference cycles between nodes.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Union

from lichen.exceptions import (
    InvalidArcError,
    InvalidInscriptionError,
    ModelError,
    UnknownElementError,
)


@dataclass(frozen=True)
class DataClass:
    """A token color. ``alias`` is the display name."""
    id: str
    alias: str


@dataclass(frozen=True)
class TokenValue:
    data_class: DataClass
    value: str


@dataclass
class Token:
    """An atomic bundle of typed values, consumed or produced as a unit"""
    values: List[TokenValue] = field(default_factory=list)

    @classmethod
    def of(cls, mapping: Mapping[DataClass, str]) -> "Token":
        """Build a token from a ``{data_class: value}`` mapping."""
        return cls([TokenValue(dc, str(value)) for dc, value in mapping.items()])

    def value_for(self, data_class: DataClass) -> Optional[str]:
        for token_value in self.values:
            if token_value.data_class.id == data_class.id:
                return token_value.value
        return None

    def data_classes(self) -> List[DataClass]:
        return [token_value.data_class for token_value in self.values]


@dataclass(frozen=True)
class InscriptionElement:
    """One variable of an arc inscription.

    ``is_generated`` marks output identifiers that are assigned when the
    transition fires instead of being taken from an input token.
    """
    data_class: DataClass
    variable_name: str
    is_generated: bool = False


@dataclass
class Inscription:
    elements: List[InscriptionElement] = field(default_factory=list)

    def data_classes(self) -> List[DataClass]:
        return [element.data_class for element in self.elements]


@dataclass
class Place:
    """A place and its current marking"""
    id: str
    name: str = ""
    marking: List[Token] = field(default_factory=list)

    def add_token(self, token: Token) -> None:
        self.marking.append(token)


@dataclass
class Transition:
    id: str
    name: str = ""


@dataclass
class Arc:
    """Arc between a place and a transition (either direction).

    ``source`` and ``target`` are element ids inside the owning net.
    """
    id: str
    source: str
    target: str
    inscription: Inscription = field(default_factory=Inscription)
    is_inhibitor_arc: bool = False
    variable_type: Optional[DataClass] = None
    is_exact_synchronization: bool = False


class PetriNet:
    """Colored Petri net: id-indexed tables of data classes, places,
    transitions and arcs.

    Insertion order is preserved everywhere, so ``incoming`` and
    ``outgoing`` return arcs in the order they were added.
    """

    def __init__(self, name: str = "net"):
        self.name = name
        self.data_classes: Dict[str, DataClass] = {}
        self.places: Dict[str, Place] = {}
        self.transitions: Dict[str, Transition] = {}
        self.arcs: Dict[str, Arc] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_data_class(self, data_class: DataClass) -> DataClass:
        existing = self.data_classes.get(data_class.id)
        if existing is not None and existing != data_class:
            raise InvalidInscriptionError(
                f"Data class {data_class.id} already declared as {existing.alias!r}"
            )
        self.data_classes[data_class.id] = data_class
        return data_class

    def add_place(self, place: Place) -> Place:
        self._check_unused_id(place.id)
        for token in place.marking:
            self._check_token(place.id, token)
        self.places[place.id] = place
        return place

    def add_transition(self, transition: Transition) -> Transition:
        self._check_unused_id(transition.id)
        self.transitions[transition.id] = transition
        return transition

    def add_arc(self, arc: Arc) -> Arc:
        if arc.id in self.arcs:
            raise InvalidArcError(f"Duplicate arc id {arc.id}")

        source_is_place = arc.source in self.places
        target_is_place = arc.target in self.places
        for end in (arc.source, arc.target):
            if end not in self.places and end not in self.transitions:
                raise UnknownElementError(f"Arc {arc.id} references unknown element {end}")
        if source_is_place == target_is_place:
            kind = "Place" if source_is_place else "Transition"
            raise InvalidArcError(
                f"Cannot connect {kind} to {kind} directly. "
                f"Arcs must alternate between places and transitions."
            )
        if arc.is_inhibitor_arc and not source_is_place:
            raise InvalidArcError(f"Inhibitor arc {arc.id} must start at a place")

        self._check_inscription(arc)
        self.arcs[arc.id] = arc
        return arc

    def add_token(self, place_id: str, token: Token) -> Token:
        place = self.place(place_id)
        self._check_token(place_id, token)
        place.add_token(token)
        return token

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def place(self, place_id: str) -> Place:
        try:
            return self.places[place_id]
        except KeyError:
            raise UnknownElementError(f"No place {place_id} in {self.name}") from None

    def transition(self, transition: Union[str, Transition]) -> Transition:
        transition_id = transition.id if isinstance(transition, Transition) else transition
        try:
            return self.transitions[transition_id]
        except KeyError:
            raise UnknownElementError(f"No transition {transition_id} in {self.name}") from None

    def incoming(self, transition: Union[str, Transition]) -> List[Arc]:
        transition_id = self.transition(transition).id
        return [arc for arc in self.arcs.values() if arc.target == transition_id]

    def outgoing(self, transition: Union[str, Transition]) -> List[Arc]:
        transition_id = self.transition(transition).id
        return [arc for arc in self.arcs.values() if arc.source == transition_id]

    def place_of(self, arc: Arc) -> Place:
        """Return the place end of an arc."""
        if arc.source in self.places:
            return self.places[arc.source]
        return self.place(arc.target)

    def accepted_colors(self, place_id: str) -> List[DataClass]:
        """Data classes a place accepts: those carried by its tokens plus
        those inscribed on its attached arcs, in first-seen order."""
        place = self.place(place_id)
        seen: Dict[str, DataClass] = {}
        for token in place.marking:
            for data_class in token.data_classes():
                seen.setdefault(data_class.id, data_class)
        for arc in self.arcs.values():
            if place_id in (arc.source, arc.target):
                for data_class in arc.inscription.data_classes():
                    seen.setdefault(data_class.id, data_class)
        return list(seen.values())

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def _check_unused_id(self, element_id: str) -> None:
        if element_id in self.places or element_id in self.transitions:
            raise ModelError(f"Duplicate element id {element_id}")

    def _check_declared(self, data_classes: Iterable[DataClass], where: str) -> None:
        for data_class in data_classes:
            declared = self.data_classes.get(data_class.id)
            if declared is None:
                raise InvalidInscriptionError(
                    f"{where} references undeclared data class {data_class.id}"
                )
            if declared != data_class:
                raise InvalidInscriptionError(
                    f"{where} references {data_class.id} with alias {data_class.alias!r}, "
                    f"declared as {declared.alias!r}"
                )

    def _check_token(self, place_id: str, token: Token) -> None:
        where = f"Token in place {place_id}"
        self._check_declared(token.data_classes(), where)
        ids = [data_class.id for data_class in token.data_classes()]
        if len(ids) != len(set(ids)):
            raise InvalidInscriptionError(f"{where} carries a data class twice")

    def _check_inscription(self, arc: Arc) -> None:
        where = f"Arc {arc.id}"
        inscribed = arc.inscription.data_classes()
        self._check_declared(inscribed, where)
        ids = [data_class.id for data_class in inscribed]
        if len(ids) != len(set(ids)):
            raise InvalidInscriptionError(f"{where} inscribes a data class twice")
        if arc.variable_type is not None and arc.variable_type not in inscribed:
            raise InvalidInscriptionError(
                f"{where} marks {arc.variable_type.id} as variable but does not inscribe it"
            )
