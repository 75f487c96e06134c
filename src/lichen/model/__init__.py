#!/usr/bin/env python3
"""
lichen.model - Colored Petri net model

Id-indexed model arena, the programmatic builder, and validated documents.
"""

from .specs import (
    DataClass,
    TokenValue,
    Token,
    InscriptionElement,
    Inscription,
    Place,
    Transition,
    Arc,
    PetriNet,
)

from .builder import (
    NetBuilder,
    ArcChain,
)

from .document import (
    NetDocument,
    load_net,
    load_net_json,
)

__all__ = [
    # Model types
    'DataClass',
    'TokenValue',
    'Token',
    'InscriptionElement',
    'Inscription',
    'Place',
    'Transition',
    'Arc',
    'PetriNet',

    # Builder
    'NetBuilder',
    'ArcChain',

    # Documents
    'NetDocument',
    'load_net',
    'load_net_json',
]
