"""
Binding candidate construction.

Roles read from non-linking places are chosen independently and simply
aggregated. Roles of a link are built from tokens: associated links are
joined on their shared roles, the joined tokens are grouped by their
non-variable values, and each group becomes one candidate.
"""

from typing import Dict, List, Set, Tuple

from .keys import (
    BindingPerDataClass,
    DataClassKey,
    Link,
    NormalizedToken,
    combination_key,
    tokens_overlap,
)
from .links import TokensPerLink, links_overlap, merge_links


def _join_tokens(
    tokens_a: List[NormalizedToken],
    tokens_b: List[NormalizedToken],
    overlap: List[DataClassKey],
) -> List[NormalizedToken]:
    joined: List[NormalizedToken] = []
    for token_a in tokens_a:
        for token_b in tokens_b:
            if tokens_overlap(token_a, token_b, overlap):
                merged = dict(token_a)
                for key, value in token_b.items():
                    merged.setdefault(key, value)
                joined.append(merged)
    return joined


def join_link_tokens(
    associated_links: List[Link], tokens_per_link: TokensPerLink
) -> List[NormalizedToken]:
    """Left-fold join of the token lists of associated links.

    Starts from the first link and repeatedly joins the first remaining
    link that overlaps everything merged so far. Associated links are one
    connected component, so a next overlapping link always exists.
    """
    remaining = list(associated_links)
    merged_link = remaining.pop(0)
    tokens = list(tokens_per_link.get(combination_key(merged_link), []))

    while remaining:
        index = next(i for i, link in enumerate(remaining) if links_overlap(merged_link, link))
        link = remaining.pop(index)
        overlap = [key for key in merged_link if key in link]
        tokens = _join_tokens(tokens, tokens_per_link.get(combination_key(link), []), overlap)
        merged_link = merge_links(merged_link, link)

    return tokens


def group_tokens_by_rigid_values(
    keys: List[DataClassKey], tokens: List[NormalizedToken]
) -> Dict[Tuple[str, ...], BindingPerDataClass]:
    """Group tokens by the values of their non-variable keys.

    Each group maps non-variable keys to their single value and variable
    keys to every distinct value seen in the group. Tokens that do not
    supply every key are skipped.
    """
    rigid = [key for key in keys if not key.is_variable]
    groups: Dict[Tuple[str, ...], BindingPerDataClass] = {}
    for token in tokens:
        if any(key not in token for key in keys):
            continue
        group_key = tuple(token[key] for key in rigid)
        group = groups.get(group_key)
        if group is None:
            group = {key: [] for key in keys}
            groups[group_key] = group
        for key in keys:
            if token[key] not in group[key]:
                group[key].append(token[key])
    return groups


def bindings_for_link(
    link: Link,
    all_links: List[Link],
    tokens_per_link: TokensPerLink,
    non_linking: BindingPerDataClass,
) -> List[BindingPerDataClass]:
    """Candidates for one biggest link.

    Values a non-linking arc also constrains are restricted to what that
    arc offers; candidates left with an empty role are dropped.
    """
    associated = [other for other in all_links if links_overlap(other, link)]

    if len(associated) == 1:
        tokens = list(tokens_per_link.get(combination_key(associated[0]), []))
    else:
        tokens = join_link_tokens(associated, tokens_per_link)

    bindings: List[BindingPerDataClass] = []
    for group in group_tokens_by_rigid_values(list(link), tokens).values():
        filtered: BindingPerDataClass = {}
        for key, values in group.items():
            if key in non_linking:
                allowed = set(non_linking[key])
                values = [value for value in values if value in allowed]
            filtered[key] = values
        if any(not values for values in filtered.values()):
            continue
        bindings.append(filtered)
    return bindings


def keys_not_in_links(binding: BindingPerDataClass, links: List[Link]) -> Set[DataClassKey]:
    used = {key for link in links for key in link}
    return {key for key in binding if key not in used}


def cartesian_product_bindings(
    candidates_per_group: List[List[BindingPerDataClass]],
) -> List[BindingPerDataClass]:
    """Every combination of one candidate per group, shallow-merged.

    Groups bind disjoint keys, so merging never overwrites.
    """
    if not candidates_per_group:
        return []
    result: List[BindingPerDataClass] = [{}]
    for candidates in candidates_per_group:
        result = [
            {**partial, **{key: list(values) for key, values in candidate.items()}}
            for partial in result
            for candidate in candidates
        ]
    return result


def combine_bindings(
    biggest_links: List[Link],
    all_links: List[Link],
    tokens_per_link: TokensPerLink,
    non_linking: BindingPerDataClass,
) -> List[BindingPerDataClass]:
    """Full candidate list before inhibitor and synchronization filters."""
    if not biggest_links:
        return [{key: list(values) for key, values in non_linking.items()}]

    candidates_per_group = [
        bindings_for_link(link, all_links, tokens_per_link, non_linking)
        for link in biggest_links
    ]

    free_keys = keys_not_in_links(non_linking, biggest_links)
    if free_keys:
        candidates_per_group.append([
            {key: list(values) for key, values in non_linking.items() if key in free_keys}
        ])

    return cartesian_product_bindings(candidates_per_group)
