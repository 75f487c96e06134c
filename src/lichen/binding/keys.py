"""
Key and equality helpers for binding resolution.

Every role a transition binds is identified by a ``DataClassKey``: the data
class id, the variable name it is bound to, and whether the arc binds it as
a variable (subset) role. Candidates are grouped and intersected by these
keys, never by raw data class identity, so the same data class read under
two variable names yields two independent roles.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Tuple

# (data class id, alias): a key without its variable flag
Role = Tuple[str, str]


@dataclass(frozen=True, order=True)
class DataClassKey:
    id: str
    alias: str
    is_variable: bool = False

    @property
    def role(self) -> Role:
        return (self.id, self.alias)

    def __str__(self) -> str:
        return f"{self.id}:{self.alias}:{'true' if self.is_variable else 'false'}"

    @classmethod
    def parse(cls, text: str) -> "DataClassKey":
        """Inverse of ``str(key)``.

        The id ends at the first colon and the flag starts after the last,
        so aliases containing colons survive.

        Raises:
            ValueError: If ``text`` is not ``id:alias:true|false``
        """
        id, sep, rest = text.partition(":")
        alias, sep2, flag = rest.rpartition(":")
        if not sep or not sep2 or flag not in ("true", "false"):
            raise ValueError(f"Not a data class key: {text!r}")
        return cls(id, alias, flag == "true")


# A token normalized for one arc: role key -> value
NormalizedToken = Dict[DataClassKey, str]

# Candidate values per role; the engine's result unit
BindingPerDataClass = Dict[DataClassKey, List[str]]

# Correlated roles of one or more linking places
Link = Tuple[DataClassKey, ...]


def data_class_key(id: str, alias: str, is_variable: bool) -> DataClassKey:
    return DataClassKey(id, alias, is_variable)


def tokens_equal(token_a: NormalizedToken, token_b: NormalizedToken) -> bool:
    """True iff both tokens hold the same key/value pairs."""
    return token_a == token_b


def tokens_overlap(
    token_a: NormalizedToken,
    token_b: NormalizedToken,
    keys: Iterable[DataClassKey],
) -> bool:
    """True iff every key is defined by both tokens with equal values.

    Used to join partial tokens from linking places that share some but
    not all roles.
    """
    for key in keys:
        if key not in token_a or key not in token_b or token_a[key] != token_b[key]:
            return False
    return True


def combination_key(keys: Iterable[DataClassKey]) -> FrozenSet[DataClassKey]:
    """Order-insensitive identity of a set of roles."""
    return frozenset(keys)


def distinct(values: Iterable[str]) -> List[str]:
    """Distinct values in first-seen order."""
    return list(dict.fromkeys(values))


def binding_as_strings(binding: BindingPerDataClass) -> Dict[str, List[str]]:
    """Presentation form of a binding, keyed by ``str(key)``."""
    return {str(key): list(values) for key, values in sorted(binding.items())}
