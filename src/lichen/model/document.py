#!/usr/bin/env python3
"""
Lichen - Model Documents

Pydantic models describing a colored Petri net as plain data (dicts or
JSON). Validation checks every cross reference up front, so a document
that validates always converts into a well-formed ``PetriNet``.

Example document:
    {
        "name": "Orders",
        "dataClasses": [{"id": "Order", "alias": "o"}],
        "places": [{"id": "p1", "marking": [{"Order": "1"}, {"Order": "2"}]}],
        "transitions": [{"id": "t1"}],
        "arcs": [
            {"id": "a1", "source": "p1", "target": "t1",
             "inscription": [{"dataClass": "Order", "variableName": "o"}]}
        ]
    }
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .specs import (
    Arc,
    DataClass,
    Inscription,
    InscriptionElement,
    PetriNet,
    Place,
    Token,
    TokenValue,
    Transition,
)


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class DataClassDocument(_Document):
    id: str = Field(min_length=1)
    alias: str


class InscriptionElementDocument(_Document):
    data_class: str
    variable_name: str
    is_generated: bool = False


class PlaceDocument(_Document):
    id: str = Field(min_length=1)
    name: str = ""
    # Each token maps data class id -> value
    marking: List[Dict[str, str]] = Field(default_factory=list)


class TransitionDocument(_Document):
    id: str = Field(min_length=1)
    name: str = ""


class ArcDocument(_Document):
    id: str = Field(min_length=1)
    source: str
    target: str
    inscription: List[InscriptionElementDocument] = Field(default_factory=list)
    is_inhibitor_arc: bool = False
    variable_type: Optional[str] = None
    is_exact_synchronization: bool = False

    @model_validator(mode="after")
    def _check_inscription(self) -> "ArcDocument":
        inscribed = [element.data_class for element in self.inscription]
        for data_class in inscribed:
            if inscribed.count(data_class) > 1:
                raise ValueError(f"arc {self.id} inscribes data class {data_class} twice")
        if self.variable_type is not None:
            if self.variable_type not in inscribed:
                raise ValueError(
                    f"arc {self.id} marks {self.variable_type} as variable "
                    f"but does not inscribe it"
                )
        return self


class NetDocument(_Document):
    """A complete net, validated for referential integrity."""

    name: str = "net"
    data_classes: List[DataClassDocument] = Field(default_factory=list)
    places: List[PlaceDocument] = Field(default_factory=list)
    transitions: List[TransitionDocument] = Field(default_factory=list)
    arcs: List[ArcDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "NetDocument":
        data_class_ids = [data_class.id for data_class in self.data_classes]
        _require_unique(data_class_ids, "data class")

        place_ids = {place.id for place in self.places}
        transition_ids = {transition.id for transition in self.transitions}
        _require_unique(
            [place.id for place in self.places]
            + [transition.id for transition in self.transitions],
            "element",
        )
        _require_unique([arc.id for arc in self.arcs], "arc")

        declared = set(data_class_ids)
        for place in self.places:
            for token in place.marking:
                unknown = set(token) - declared
                if unknown:
                    raise ValueError(
                        f"place {place.id} holds a token with undeclared "
                        f"data class(es) {sorted(unknown)}"
                    )

        for arc in self.arcs:
            ends = (arc.source in place_ids, arc.target in place_ids)
            for end in (arc.source, arc.target):
                if end not in place_ids and end not in transition_ids:
                    raise ValueError(f"arc {arc.id} references unknown element {end}")
            if ends[0] == ends[1]:
                raise ValueError(
                    f"arc {arc.id} must connect a place with a transition"
                )
            if arc.is_inhibitor_arc and not ends[0]:
                raise ValueError(f"inhibitor arc {arc.id} must start at a place")
            for element in arc.inscription:
                if element.data_class not in declared:
                    raise ValueError(
                        f"arc {arc.id} inscribes undeclared data class {element.data_class}"
                    )
        return self

    def to_net(self) -> PetriNet:
        """Build the ``PetriNet`` this document describes."""
        net = PetriNet(self.name)
        for doc in self.data_classes:
            net.add_data_class(DataClass(doc.id, doc.alias))

        for doc in self.places:
            marking = [
                Token([
                    TokenValue(net.data_classes[data_class_id], value)
                    for data_class_id, value in token.items()
                ])
                for token in doc.marking
            ]
            net.add_place(Place(doc.id, doc.name, marking))

        for doc in self.transitions:
            net.add_transition(Transition(doc.id, doc.name))

        for doc in self.arcs:
            net.add_arc(Arc(
                id=doc.id,
                source=doc.source,
                target=doc.target,
                inscription=Inscription([
                    InscriptionElement(
                        net.data_classes[element.data_class],
                        element.variable_name,
                        element.is_generated,
                    )
                    for element in doc.inscription
                ]),
                is_inhibitor_arc=doc.is_inhibitor_arc,
                variable_type=(
                    net.data_classes[doc.variable_type]
                    if doc.variable_type is not None else None
                ),
                is_exact_synchronization=doc.is_exact_synchronization,
            ))
        return net

    @classmethod
    def from_net(cls, net: PetriNet) -> "NetDocument":
        """Describe an existing net as a document."""
        return cls(
            name=net.name,
            data_classes=[
                DataClassDocument(id=dc.id, alias=dc.alias)
                for dc in net.data_classes.values()
            ],
            places=[
                PlaceDocument(
                    id=place.id,
                    name=place.name,
                    marking=[
                        {tv.data_class.id: tv.value for tv in token.values}
                        for token in place.marking
                    ],
                )
                for place in net.places.values()
            ],
            transitions=[
                TransitionDocument(id=transition.id, name=transition.name)
                for transition in net.transitions.values()
            ],
            arcs=[
                ArcDocument(
                    id=arc.id,
                    source=arc.source,
                    target=arc.target,
                    inscription=[
                        InscriptionElementDocument(
                            data_class=element.data_class.id,
                            variable_name=element.variable_name,
                            is_generated=element.is_generated,
                        )
                        for element in arc.inscription.elements
                    ],
                    is_inhibitor_arc=arc.is_inhibitor_arc,
                    variable_type=arc.variable_type.id if arc.variable_type else None,
                    is_exact_synchronization=arc.is_exact_synchronization,
                )
                for arc in net.arcs.values()
            ],
        )


def _require_unique(ids: List[str], kind: str) -> None:
    seen = set()
    for element_id in ids:
        if element_id in seen:
            raise ValueError(f"duplicate {kind} id {element_id}")
        seen.add(element_id)


def load_net(data: dict) -> PetriNet:
    """Validate a document given as a dict and build its net.

    Raises:
        pydantic.ValidationError: If the document is malformed
    """
    return NetDocument.model_validate(data).to_net()


def load_net_json(text: str) -> PetriNet:
    """Validate a JSON document and build its net."""
    return NetDocument.model_validate_json(text).to_net()
