#!/usr/bin/env python3
"""
Lichen - Binding resolution for colored Petri nets

Build a net with ``NetBuilder`` (or load one with ``load_net``) and ask
which input bindings a transition can currently fire with:

    builder = NetBuilder("orders")
    order = builder.data_class("Order", "order")
    open_orders = builder.place("Open", tokens=[{order: "1"}, {order: "2"}])
    ship = builder.transition("Ship")
    builder.arc(open_orders, ship, {order: "order"})

    get_valid_input_bindings(builder.build(), "Ship")
    # [{DataClassKey('Order', 'order', False): ['1', '2']}]
"""

import logging

from lichen.binding import (
    BindingEngine,
    BindingPerDataClass,
    DataClassKey,
    UnboundOutputs,
    binding_as_strings,
    expand_binding,
    find_unbound_outputs,
    flatten_binding,
    get_valid_input_bindings,
    merge_links,
    transition_is_enabled,
)
from lichen.common import BindingTrace, LoggingTrace, RecordingTrace, TraceEvent
from lichen.exceptions import (
    LichenError,
    ModelError,
    UnknownElementError,
    InvalidArcError,
    InvalidInscriptionError,
)
from lichen.model import (
    DataClass,
    Token,
    TokenValue,
    InscriptionElement,
    Inscription,
    Place,
    Transition,
    Arc,
    PetriNet,
    NetBuilder,
    NetDocument,
    load_net,
    load_net_json,
)
from lichen.verification import IssueKind, StructuralIssue, verify_net, verify_transition

# Library does not configure handlers by default. Callers may configure logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Engine
    'BindingEngine',
    'BindingPerDataClass',
    'DataClassKey',
    'get_valid_input_bindings',
    'transition_is_enabled',
    'binding_as_strings',
    'flatten_binding',
    'expand_binding',
    'merge_links',

    # Diagnostics
    'UnboundOutputs',
    'find_unbound_outputs',
    'IssueKind',
    'StructuralIssue',
    'verify_net',
    'verify_transition',

    # Tracing
    'BindingTrace',
    'LoggingTrace',
    'RecordingTrace',
    'TraceEvent',

    # Model
    'DataClass',
    'Token',
    'TokenValue',
    'InscriptionElement',
    'Inscription',
    'Place',
    'Transition',
    'Arc',
    'PetriNet',
    'NetBuilder',
    'NetDocument',
    'load_net',
    'load_net_json',

    # Exceptions
    'LichenError',
    'ModelError',
    'UnknownElementError',
    'InvalidArcError',
    'InvalidInscriptionError',
]
