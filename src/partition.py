"""Family branch partitioning with union-find over parent-child links."""

import logging
from typing import Generic, Iterable, TypeVar

from models import PartitionResult, PartitionStats, Person, PersonId, Relation

logger = logging.getLogger(__name__)

Element = TypeVar("Element")


class UnionFind(Generic[Element]):
    """
    Disjoint sets with path compression and union by rank.

    Example:
        >>> uf = UnionFind([1, 2, 3])
        >>> uf.union(1, 2)
        True
        >>> uf.connected(2, 1), uf.connected(1, 3)
        (True, False)
    """

    def __init__(self, elements: Iterable[Element] = ()):
        self.parent: dict[Element, Element] = {}
        self.rank: dict[Element, int] = {}
        for element in elements:
            self.add(element)

    def add(self, element: Element) -> None:
        if element not in self.parent:
            self.parent[element] = element
            self.rank[element] = 0

    def find(self, element: Element) -> Element:
        self.add(element)

        root = element
        while self.parent[root] != root:
            root = self.parent[root]

        # Path compression
        while self.parent[element] != root:
            self.parent[element], element = root, self.parent[element]

        return root

    def union(self, a: Element, b: Element) -> bool:
        """Merge the sets of a and b. Returns False if they were already joined."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self.rank[root_a] < self.rank[root_b]:
            self.parent[root_a] = root_b
        elif self.rank[root_a] > self.rank[root_b]:
            self.parent[root_b] = root_a
        else:
            self.parent[root_b] = root_a
            self.rank[root_a] += 1
        return True

    def connected(self, a: Element, b: Element) -> bool:
        return self.find(a) == self.find(b)


def parent_child_relations(persons: list[Person]) -> list[Relation]:
    """Parent -> child relations from the records; unknown parent ids are dropped."""
    known = {p.id for p in persons}
    relations = []
    for person in persons:
        for parent_id in (person.father_id, person.mother_id):
            if parent_id is not None and parent_id in known:
                relations.append(Relation(from_id=parent_id, to_id=person.id, weight=1))
    return relations


def partition(persons: Iterable[Person]) -> PartitionResult:
    """
    Split persons into disjoint family branches connected by blood lineage.

    Kruskal's edge-list pattern over parent -> child relations: edges are sorted
    by weight (all equal to 1) and kept when they join two different sets.
    Spouse links are not used. Branches are listed in order of first appearance
    and keep the input order of their members.
    """
    persons = list(persons)
    relations = sorted(parent_child_relations(persons), key=lambda r: r.weight)

    uf = UnionFind(p.id for p in persons)
    retained: list[Relation] = []
    for relation in relations:
        if uf.union(relation.from_id, relation.to_id):
            retained.append(relation)

    branches: dict[PersonId, list[PersonId]] = {}
    for person in persons:
        branches.setdefault(uf.find(person.id), []).append(person.id)

    branch_lists = list(branches.values())
    stats = PartitionStats(
        total_branches=len(branch_lists),
        largest_branch_size=max((len(b) for b in branch_lists), default=0),
    )
    logger.debug(
        "Partitioned %d persons into %d branches (%d of %d relations retained)",
        len(persons),
        stats.total_branches,
        len(retained),
        len(relations),
    )
    return PartitionResult(branches=branch_lists, retained_relations=retained, stats=stats)


def nearest_family(
    target_id: PersonId, branches: list[list[PersonId]], relations: list[Relation]
) -> list[PersonId]:
    """Immediate parents and children of target_id among relations inside its branch."""
    branch = next((set(b) for b in branches if target_id in b), None)
    if branch is None:
        return []

    family: dict[PersonId, None] = {}
    for relation in relations:
        if relation.from_id not in branch or relation.to_id not in branch:
            continue
        if relation.from_id == target_id:
            family.setdefault(relation.to_id, None)
        elif relation.to_id == target_id:
            family.setdefault(relation.from_id, None)
    return list(family)
