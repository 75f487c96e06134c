"""
Early-return validators.

Cheap structural checks run before any binding is computed. A positive
result means the transition has no bindings; ``find_unbound_outputs`` also
feeds the structural verification that annotates the editor.
"""

from typing import Dict, List, NamedTuple, Set, Union

from lichen.model.specs import Arc, InscriptionElement, PetriNet, Transition

from .arc_place_info import ArcPlaceInfoDict


class UnboundOutputs(NamedTuple):
    """Diagnostic for outputs that no input can supply.

    ``variables`` lists unbound variable names, with ``[]`` appended for
    variable roles. ``has_unbound`` can be true with no variables listed
    when an outgoing arc has no inscription at all.
    """
    has_unbound: bool
    variables: List[str]


def _variable_key(arc: Arc, element: InscriptionElement) -> str:
    if arc.variable_type is not None and arc.variable_type == element.data_class:
        return element.variable_name + "[]"
    return element.variable_name


def find_unbound_outputs(net: PetriNet, transition: Union[str, Transition]) -> UnboundOutputs:
    """Find output variables of a transition that are neither read nor generated.

    Inhibitor arcs supply nothing and are ignored on both sides. Generated
    output elements are assigned at firing time and never need an input.
    """
    available: Set[str] = set()
    for arc in net.incoming(transition):
        if arc.is_inhibitor_arc:
            continue
        for element in arc.inscription.elements:
            available.add(_variable_key(arc, element))

    has_unbound = False
    unbound: List[str] = []
    for arc in net.outgoing(transition):
        if arc.is_inhibitor_arc:
            continue
        if not arc.inscription.elements:
            has_unbound = True
            continue
        for element in arc.inscription.elements:
            if element.is_generated:
                continue
            key = _variable_key(arc, element)
            if key not in available:
                has_unbound = True
                if key not in unbound:
                    unbound.append(key)

    return UnboundOutputs(has_unbound, unbound)


def _variable_names_by_data_class(arcs: List[Arc]) -> Dict[str, Set[str]]:
    names: Dict[str, Set[str]] = {}
    for arc in arcs:
        if arc.is_inhibitor_arc or arc.variable_type is None:
            continue
        for element in arc.inscription.elements:
            if element.data_class == arc.variable_type:
                names.setdefault(arc.variable_type.id, set()).add(element.variable_name)
    return names


def has_mismatched_variable_types(incoming: List[Arc], outgoing: List[Arc]) -> bool:
    """True if an outgoing variable arc produces a variable role that no
    incoming variable arc consumes.

    Inhibitor arcs are ignored, and the check only applies when the
    transition has both inputs and outputs.
    """
    incoming = [arc for arc in incoming if not arc.is_inhibitor_arc]
    outgoing = [arc for arc in outgoing if not arc.is_inhibitor_arc]
    if not incoming or not outgoing:
        return False

    consumed = _variable_names_by_data_class(incoming)
    produced = _variable_names_by_data_class(outgoing)
    for data_class_id, names in produced.items():
        if not names <= consumed.get(data_class_id, set()):
            return True
    return False


def has_available_tokens_for_all_arcs(infos: ArcPlaceInfoDict) -> bool:
    """Every non-inhibitor arc needs at least one token; an inhibitor arc
    with an empty source place simply blocks nothing."""
    return all(info.is_inhibitor_arc or len(info.tokens) > 0 for info in infos.values())
