#!/usr/bin/env python3
"""
Lichen - Builder Layer

NetBuilder provides the API for constructing colored Petri nets in code.
Every call validates against the net immediately, so a finished builder
always holds a well-formed model.

Example:
    builder = NetBuilder("Orders")
    order = builder.data_class("Order", "o")
    item = builder.data_class("Item", "i")

    cart = builder.place("cart", tokens=[{order: "1", item: "A"}])
    ship = builder.transition("ship")
    shipped = builder.place("shipped")

    builder.arc(cart, ship, inscription={order: "o", item: "i"}).arc(
        shipped, inscription={order: "o"}
    )
"""

from typing import Any, Iterable, Mapping, Optional, Union

from lichen.exceptions import InvalidArcError

from .specs import (
    Arc,
    DataClass,
    Inscription,
    InscriptionElement,
    PetriNet,
    Place,
    Token,
    Transition,
)

# Inscriptions may be given as elements or as {data_class: variable_name}
InscriptionLike = Union[Inscription, Iterable[InscriptionElement], Mapping[DataClass, str], None]
TokenLike = Union[Token, Mapping[DataClass, Any]]


def _as_inscription(
    inscription: InscriptionLike, generated: Iterable[DataClass] = ()
) -> Inscription:
    if inscription is None:
        return Inscription()
    if isinstance(inscription, Inscription):
        return inscription
    generated_ids = {data_class.id for data_class in generated}
    if isinstance(inscription, Mapping):
        return Inscription([
            InscriptionElement(data_class, name, data_class.id in generated_ids)
            for data_class, name in inscription.items()
        ])
    return Inscription(list(inscription))


def _as_token(token: TokenLike) -> Token:
    if isinstance(token, Token):
        return token
    return Token.of(token)


class ArcChain:
    """Fluent interface for chaining arc definitions"""

    def __init__(self, builder: "NetBuilder", last_ref: Union[Place, Transition]):
        self.builder = builder
        self.last_ref = last_ref

    def arc(self, target: Union[Place, Transition], **options: Any) -> "ArcChain":
        """Chain another arc from the last element to target"""
        return self.builder.arc(self.last_ref, target, **options)


class NetBuilder:
    """Builder for constructing colored Petri nets"""

    def __init__(self, name: str = "net"):
        self.net = PetriNet(name)
        self._arc_counter = 0

    def data_class(self, id: str, alias: Optional[str] = None) -> DataClass:
        """Declare a data class (token color)."""
        return self.net.add_data_class(DataClass(id, alias if alias is not None else id))

    def place(
        self,
        id: str,
        tokens: Iterable[TokenLike] = (),
        name: str = "",
    ) -> Place:
        """Declare a place with an initial marking.

        Tokens may be ``Token`` objects or ``{data_class: value}`` mappings.
        """
        place = Place(id, name or id, [_as_token(token) for token in tokens])
        return self.net.add_place(place)

    def transition(self, id: str, name: str = "") -> Transition:
        return self.net.add_transition(Transition(id, name or id))

    def token(self, place: Union[str, Place], values: TokenLike) -> Token:
        """Append a token to a place's marking."""
        place_id = place.id if isinstance(place, Place) else place
        return self.net.add_token(place_id, _as_token(values))

    def arc(
        self,
        source: Union[Place, Transition],
        target: Union[Place, Transition],
        inscription: InscriptionLike = None,
        *,
        id: Optional[str] = None,
        variable: Optional[DataClass] = None,
        inhibitor: bool = False,
        exact_sync: bool = False,
        generated: Iterable[DataClass] = (),
    ) -> ArcChain:
        """Create an arc and return chainable ArcChain.

        Args:
            source: Place or transition the arc starts at
            target: Place or transition the arc ends at
            inscription: Inscription elements or ``{data_class: variable_name}``
            id: Arc id; generated as ``arc_<n>`` when omitted
            variable: Data class bound as a variable (subset) role
            inhibitor: Whether the arc is a negative precondition
            exact_sync: Whether the arc enforces exact synchronization
            generated: Data classes whose output values are generated

        Raises:
            InvalidArcError: If both ends are places or both are transitions
            InvalidInscriptionError: If the inscription is inconsistent
        """
        source_type = type(source)
        target_type = type(target)

        if source_type == target_type:
            raise InvalidArcError(
                f"Cannot connect {source_type.__name__} to {target_type.__name__} directly. "
                f"Arcs must alternate between places and transitions."
            )

        if id is None:
            self._arc_counter += 1
            while f"arc_{self._arc_counter}" in self.net.arcs:
                self._arc_counter += 1
            id = f"arc_{self._arc_counter}"

        arc = Arc(
            id=id,
            source=source.id,
            target=target.id,
            inscription=_as_inscription(inscription, generated),
            is_inhibitor_arc=inhibitor,
            variable_type=variable,
            is_exact_synchronization=exact_sync,
        )
        self.net.add_arc(arc)

        return ArcChain(self, target)

    def build(self) -> PetriNet:
        return self.net

