"""
Turning candidate bindings into concrete choices.

A candidate holds alternatives: a non-variable key with several values
means "pick one", a variable key means "pick any non-empty subset".
"""

from itertools import chain, combinations, product
from typing import Dict, List, Sequence, Tuple, Union

from .keys import BindingPerDataClass, DataClassKey

# One concrete firing: a single value per non-variable key, a subset per variable key
Choice = Dict[DataClassKey, Union[str, Tuple[str, ...]]]


def flatten_binding(binding: BindingPerDataClass) -> List[Dict[DataClassKey, str]]:
    """Every (key, value) pair of a binding as its own one-entry mapping."""
    return [{key: value} for key, values in binding.items() for value in values]


def non_empty_subsets(values: Sequence[str]) -> List[Tuple[str, ...]]:
    """All non-empty subsets, smallest first, each in input order."""
    return list(chain.from_iterable(
        combinations(values, size) for size in range(1, len(values) + 1)
    ))


def expand_binding(binding: BindingPerDataClass) -> List[Choice]:
    """Every concrete choice a candidate binding allows.

    Grows exponentially with the size of variable keys; meant for
    presenting small candidates, not for enumeration at scale.
    """
    keys = list(binding)
    options = [
        non_empty_subsets(binding[key]) if key.is_variable else list(binding[key])
        for key in keys
    ]
    return [dict(zip(keys, picked)) for picked in product(*options)]
