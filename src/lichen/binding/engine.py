#!/usr/bin/env python3
"""
Lichen - Binding Engine

Answers one question about a colored Petri net: which input bindings are
currently valid for a transition. Resolution is synchronous and
read-only; every derived structure is rebuilt per call, so results are
never stale after the model changes.

Pipeline:
    validators -> arc-place infos -> links -> candidates
    -> inhibitor filter -> exact-synchronization filter
"""

from typing import List, Optional, Union
import logging

from lichen.common.tracing import BindingTrace, LoggingTrace
from lichen.model.specs import PetriNet, Transition

from .arc_place_info import build_arc_place_info_dict, non_linking_bindings
from .candidates import combine_bindings
from .exact_sync import check_exact_sync_constraints
from .inhibitor import filter_bindings_by_inhibitors
from .keys import BindingPerDataClass
from .links import get_biggest_links, get_tokens_per_link
from .validators import (
    find_unbound_outputs,
    has_available_tokens_for_all_arcs,
    has_mismatched_variable_types,
)

logger = logging.getLogger(__name__)

TransitionRef = Union[str, Transition]


class BindingEngine:
    """Resolves valid input bindings, reporting each stage to a trace hook.

    The engine holds no model state; one instance can serve any number of
    nets and calls.
    """

    def __init__(self, trace: Optional[BindingTrace] = None):
        self.trace: BindingTrace = trace if trace is not None else LoggingTrace()

    def get_valid_input_bindings(
        self, net: PetriNet, transition: TransitionRef
    ) -> List[BindingPerDataClass]:
        """Return every valid input binding of ``transition``.

        An empty list means the transition cannot fire. A transition with
        no incoming arcs yields one empty binding.

        Raises:
            UnknownElementError: If the transition is not part of ``net``
        """
        transition = net.transition(transition)
        incoming = net.incoming(transition)
        outgoing = net.outgoing(transition)
        self.trace("start", transition=transition.id,
                   incoming=[arc.id for arc in incoming],
                   outgoing=[arc.id for arc in outgoing])

        unbound = find_unbound_outputs(net, transition)
        if unbound.has_unbound:
            self.trace("unbound_outputs", variables=unbound.variables)
            return []

        if has_mismatched_variable_types(incoming, outgoing):
            self.trace("mismatched_variable_types")
            return []

        if not incoming:
            self.trace("result", bindings=[{}])
            return [{}]

        infos = build_arc_place_info_dict(net, incoming)
        self.trace("arc_place_info", infos=infos)

        if not has_available_tokens_for_all_arcs(infos):
            self.trace("missing_tokens",
                       arcs=[arc_id for arc_id, info in infos.items()
                             if not info.is_inhibitor_arc and not info.tokens])
            return []

        biggest_links, all_links = get_biggest_links(infos)
        tokens_per_link = get_tokens_per_link(infos)
        self.trace("links", biggest=biggest_links, all=all_links)

        non_linking = non_linking_bindings(infos)
        bindings = combine_bindings(biggest_links, all_links, tokens_per_link, non_linking)
        self.trace("candidates", bindings=bindings)

        bindings = filter_bindings_by_inhibitors(bindings, infos)
        self.trace("inhibitor_filter", bindings=bindings)

        bindings = check_exact_sync_constraints(infos, bindings)
        self.trace("result", bindings=bindings)

        logger.debug("[bindings] %s candidates=%d", transition.id, len(bindings))
        return bindings

    def transition_is_enabled(self, net: PetriNet, transition: TransitionRef) -> bool:
        return len(self.get_valid_input_bindings(net, transition)) > 0


def get_valid_input_bindings(
    net: PetriNet, transition: TransitionRef, trace: Optional[BindingTrace] = None
) -> List[BindingPerDataClass]:
    return BindingEngine(trace).get_valid_input_bindings(net, transition)


def transition_is_enabled(
    net: PetriNet, transition: TransitionRef, trace: Optional[BindingTrace] = None
) -> bool:
    return BindingEngine(trace).transition_is_enabled(net, transition)
