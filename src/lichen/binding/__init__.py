from .keys import (
    DataClassKey,
    BindingPerDataClass,
    NormalizedToken,
    Link,
    Role,
    binding_as_strings,
    combination_key,
    tokens_equal,
    tokens_overlap,
)
from .arc_place_info import (
    ArcPlaceInfo,
    DataClassInfo,
    build_arc_place_info,
    build_arc_place_info_dict,
)
from .validators import UnboundOutputs, find_unbound_outputs
from .links import get_biggest_links, get_tokens_per_link, merge_links
from .selection import expand_binding, flatten_binding
from .engine import BindingEngine, get_valid_input_bindings, transition_is_enabled

__all__ = [
    # Keys
    "DataClassKey",
    "BindingPerDataClass",
    "NormalizedToken",
    "Link",
    "Role",
    "binding_as_strings",
    "combination_key",
    "tokens_equal",
    "tokens_overlap",
    # Arc-place info
    "ArcPlaceInfo",
    "DataClassInfo",
    "build_arc_place_info",
    "build_arc_place_info_dict",
    # Diagnostics
    "UnboundOutputs",
    "find_unbound_outputs",
    # Links
    "get_biggest_links",
    "get_tokens_per_link",
    "merge_links",
    # Selection
    "expand_binding",
    "flatten_binding",
    # Engine
    "BindingEngine",
    "get_valid_input_bindings",
    "transition_is_enabled",
]
