"""
Link detection and merging.

A linking place carries tokens with several data classes; the same token
must supply all of them at once, so its roles form a *link*. Links that
share a role constrain each other (two places may each correlate two of
three classes), so they are merged into connected components over the
"shares a role" relation. Merging is done with a union-find, which makes
the result independent of the order links are visited in.
"""

from typing import Dict, FrozenSet, List, Tuple

from .arc_place_info import ArcPlaceInfoDict, non_inhibitor_infos
from .keys import DataClassKey, Link, NormalizedToken, combination_key, tokens_equal

# key combination of a link -> tokens that satisfy it
TokensPerLink = Dict[FrozenSet[DataClassKey], List[NormalizedToken]]


def collect_links(infos: ArcPlaceInfoDict) -> List[Link]:
    """One link per linking, non-inhibitor arc, in arc order."""
    return [
        tuple(info.keys())
        for info in non_inhibitor_infos(infos)
        if info.is_linking_place
    ]


def deduplicate_links(links: List[Link]) -> List[Link]:
    """Drop links that are set-equal to an earlier one."""
    seen = set()
    unique: List[Link] = []
    for link in links:
        identity = combination_key(link)
        if identity not in seen:
            seen.add(identity)
            unique.append(link)
    return unique


def links_overlap(link_a: Link, link_b: Link) -> bool:
    return not set(link_a).isdisjoint(link_b)


def merge_links(link_a: Link, link_b: Link) -> Link:
    """Union of two links, keys in first-appearance order."""
    return tuple(dict.fromkeys(link_a + link_b))


class _UnionFind:
    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, index: int) -> int:
        while self.parent[index] != index:
            self.parent[index] = self.parent[self.parent[index]]
            index = self.parent[index]
        return index

    def union(self, a: int, b: int) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a != root_b:
            # Lower index stays root so components keep first-appearance order
            self.parent[max(root_a, root_b)] = min(root_a, root_b)


def merge_overlapping_links(links: List[Link]) -> List[Link]:
    """Merge links into the connected components of "shares a role".

    Components are ordered by their earliest member; keys inside a
    component keep first-appearance order.
    """
    components = _UnionFind(len(links))
    owner: Dict[DataClassKey, int] = {}
    for index, link in enumerate(links):
        for key in link:
            if key in owner:
                components.union(owner[key], index)
            else:
                owner[key] = index

    merged: Dict[int, Link] = {}
    for index, link in enumerate(links):
        root = components.find(index)
        merged[root] = merge_links(merged.get(root, ()), link)
    return [merged[root] for root in sorted(merged)]


def remove_subset_links(links: List[Link]) -> List[Link]:
    """Keep only links that are not a strict subset of another link."""
    sets = [frozenset(link) for link in links]
    return [
        link for index, link in enumerate(links)
        if not any(other > sets[index] for j, other in enumerate(sets) if j != index)
    ]


def get_biggest_links(infos: ArcPlaceInfoDict) -> Tuple[List[Link], List[Link]]:
    """Return ``(biggest_links, all_links)``.

    ``all_links`` is the deduplicated per-place list before merging;
    ``biggest_links`` are the maximal merged links that binding
    construction works on.
    """
    all_links = deduplicate_links(collect_links(infos))
    biggest = remove_subset_links(merge_overlapping_links(all_links))
    return biggest, all_links


def get_tokens_per_link(infos: ArcPlaceInfoDict) -> TokensPerLink:
    """Tokens of every linking, non-inhibitor arc, indexed by key combination.

    Two arcs with the same combination (they differ only in exact
    synchronization) both constrain it, so only tokens present in both
    are kept.
    """
    tokens_per_link: TokensPerLink = {}
    for info in non_inhibitor_infos(infos):
        if not info.is_linking_place:
            continue
        combination = info.combination()
        if combination in tokens_per_link:
            tokens_per_link[combination] = [
                token for token in tokens_per_link[combination]
                if any(tokens_equal(token, other) for other in info.tokens)
            ]
        else:
            tokens_per_link[combination] = list(info.tokens)
    return tokens_per_link
