"""Name-based relationship queries over one immutable dataset snapshot."""

from typing import Iterable

from graph import FamilyGraph, build_graph
from models import (
    CHILD,
    FATHER,
    MOTHER,
    PARENT_RELATIONS,
    SPOUSE,
    CommonAncestorResult,
    Finding,
    GenerationResult,
    LineageResult,
    PartitionResult,
    PathResult,
    Person,
    PersonId,
    PersonRef,
    RelatednessResult,
    Relative,
    RelativesResult,
)
from partition import nearest_family, partition
from paths import NO_RELATION, shortest_path
from store import PersonStore
from traversal import NodeEvent, TraversalHooks, bfs, relation_filter
from validation import detect_inconsistencies

_parent_edges = relation_filter(FATHER, MOTHER)
_child_edges = relation_filter(CHILD)


class RelationshipQueries:
    """
    Facade answering genealogy questions by person name.

    The store and graph are built once and never modified; a new dataset
    means a new RelationshipQueries. Unknown names are reported through the
    `error` field of the result, never raised.

    Usage:
        queries = RelationshipQueries(persons)
        queries.descendants("Alice Smith").names
        queries.closest_common_ancestor("Carol Smith", "Dan Smith").name
    """

    def __init__(self, persons: Iterable[Person]):
        self.store = PersonStore(persons)
        self.graph: FamilyGraph = build_graph(self.store)

    @classmethod
    def from_store(cls, store: PersonStore) -> "RelationshipQueries":
        queries = cls.__new__(cls)
        queries.store = store
        queries.graph = build_graph(store)
        return queries

    # ─────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────

    def _ref(self, person_id: PersonId) -> PersonRef:
        return PersonRef(id=person_id, name=self.store.name_of(person_id))

    def _refs(self, ids: Iterable[PersonId]) -> LineageResult:
        return LineageResult(members=[self._ref(pid) for pid in ids])

    def _not_found(self, name: str) -> str:
        return f'Person named "{name}" not found'

    def _lineage(self, name: str, edge_filter) -> LineageResult:
        person_id = self.store.resolve_id(name)
        if person_id is None:
            return LineageResult(error=self._not_found(name))

        result = bfs(self.graph, [person_id], TraversalHooks(filter_edges=edge_filter))
        return self._refs(pid for pid in result.order if pid != person_id)

    def _ancestor_distances(self, person_id: PersonId) -> dict[PersonId, int]:
        return bfs(self.graph, [person_id], TraversalHooks(filter_edges=_parent_edges)).distances

    # ─────────────────────────────────────────
    # Lineage
    # ─────────────────────────────────────────

    def descendants(self, name: str) -> LineageResult:
        """All descendants, nearest generation first."""
        return self._lineage(name, _child_edges)

    def ancestors(self, name: str) -> LineageResult:
        """All ancestors, nearest generation first."""
        return self._lineage(name, _parent_edges)

    def generation_level(self, name: str) -> GenerationResult:
        """
        Generation of a person counted in child edges from the nearest root.

        A root is a person with neither father nor mother recorded. Roots are
        scanned in dataset order and the first one at the minimum distance wins.
        """
        person_id = self.store.resolve_id(name)
        if person_id is None:
            return GenerationResult(error=self._not_found(name))

        roots = [p.id for p in self.store if p.father_id is None and p.mother_id is None]
        if not roots:
            return GenerationResult(error="No root (person without parents) found in the family tree")

        best_level = None
        best_root = None
        for root_id in roots:
            distances = bfs(self.graph, [root_id], TraversalHooks(filter_edges=_child_edges)).distances
            level = distances.get(person_id)
            if level is not None and (best_level is None or level < best_level):
                best_level, best_root = level, root_id

        if best_root is None:
            return GenerationResult(error=f'No path found from any root to "{name}"')
        return GenerationResult(level=best_level, root=self.store.name_of(best_root), root_id=best_root)

    def closest_common_ancestor(self, name1: str, name2: str) -> CommonAncestorResult:
        """
        Common ancestor with the smallest summed distance to both persons.

        Each person counts as their own ancestor at distance 0, so when one is
        an ancestor of the other, that person is the answer.
        """
        id1 = self.store.resolve_id(name1)
        id2 = self.store.resolve_id(name2)
        if id1 is None or id2 is None:
            return CommonAncestorResult(error=f'One or both people not found: "{name1}", "{name2}"')

        ancestors1 = self._ancestor_distances(id1)
        ancestors2 = self._ancestor_distances(id2)
        common = [(pid, d + ancestors2[pid]) for pid, d in ancestors1.items() if pid in ancestors2]
        if not common:
            return CommonAncestorResult(error=f'No common ancestor found between "{name1}" and "{name2}"')

        common.sort(key=lambda item: item[1])
        ancestor_id, total = common[0]
        return CommonAncestorResult(id=ancestor_id, name=self.store.name_of(ancestor_id), total_distance=total)

    # ─────────────────────────────────────────
    # Paths
    # ─────────────────────────────────────────

    def shortest_path(self, name1: str, name2: str) -> PathResult:
        id1 = self.store.resolve_id(name1)
        id2 = self.store.resolve_id(name2)
        if id1 is None or id2 is None:
            return PathResult(path=[], label=NO_RELATION)
        return shortest_path(self.graph, id1, id2)

    def are_related(self, name1: str, name2: str) -> RelatednessResult:
        id1 = self.store.resolve_id(name1)
        id2 = self.store.resolve_id(name2)
        if id1 is None or id2 is None:
            return RelatednessResult(
                related=False, error=f'One or both people not found: "{name1}", "{name2}"'
            )

        result = shortest_path(self.graph, id1, id2)
        return RelatednessResult(
            related=result.found,
            path=[self.store.name_of(pid) for pid in result.path],
            label=result.label,
        )

    # ─────────────────────────────────────────
    # Validation and partitioning
    # ─────────────────────────────────────────

    def detect_inconsistencies(self, min_parent_age: int | None = None) -> list[Finding]:
        """Cycles and child-before-parent dates; min_parent_age adds the plausibility checks."""
        return detect_inconsistencies(self.graph, self.store, min_parent_age)

    def partition(self) -> PartitionResult:
        return partition(self.store)

    def nearest_family(self, name: str) -> LineageResult:
        """Immediate parents and children within the person's branch."""
        person_id = self.store.resolve_id(name)
        if person_id is None:
            return LineageResult(error=self._not_found(name))
        result = self.partition()
        return self._refs(nearest_family(person_id, result.branches, result.retained_relations))

    # ─────────────────────────────────────────
    # Neighbourhood
    # ─────────────────────────────────────────

    def relatives_within(self, name: str, max_generations: int = 3) -> RelativesResult:
        """
        Everyone reachable through parent, child and spouse links, tagged with
        a signed generation offset (parents -1, children +1) and a coarse
        relationship. Persons more than max_generations above or below are
        left out.
        """
        person_id = self.store.resolve_id(name)
        if person_id is None:
            return RelativesResult(error=self._not_found(name))

        generation: dict[PersonId, int] = {person_id: 0}
        relationship: dict[PersonId, str] = {person_id: "self"}
        relatives: list[Relative] = []
        expanding = person_id

        def should_visit(node_id: PersonId, edge) -> bool:
            if edge is None:
                return True
            level = generation[expanding] + _generation_step(edge.relation_type)
            if abs(level) > max_generations:
                return False
            generation[node_id] = level
            relationship[node_id] = _describe_step(relationship[expanding], edge.relation_type)
            return True

        def on_node(event: NodeEvent) -> None:
            nonlocal expanding
            expanding = event.node_id
            relatives.append(
                Relative(
                    id=event.node_id,
                    name=self.store.name_of(event.node_id),
                    generation=generation[event.node_id],
                    relationship=relationship[event.node_id],
                )
            )

        bfs(self.graph, [person_id], TraversalHooks(should_visit_node=should_visit, on_node=on_node))
        return RelativesResult(relatives=relatives)

    # ─────────────────────────────────────────
    # Kinship helpers
    # ─────────────────────────────────────────

    def _related_ids(self, person_id: PersonId, *relation_types: str) -> list[PersonId]:
        return [e.neighbor_id for e in self.graph.neighbors(person_id) if e.relation_type in relation_types]

    def _parent_ids(self, person_id: PersonId) -> list[PersonId]:
        return self._related_ids(person_id, FATHER, MOTHER)

    def _child_ids(self, person_id: PersonId) -> list[PersonId]:
        return self._related_ids(person_id, CHILD)

    def _sibling_ids(self, person_id: PersonId) -> list[PersonId]:
        siblings = {}
        for parent_id in self._parent_ids(person_id):
            for child_id in self._child_ids(parent_id):
                if child_id != person_id:
                    siblings.setdefault(child_id, None)
        return list(siblings)

    def _kin(self, name: str, collect) -> LineageResult:
        person_id = self.store.resolve_id(name)
        if person_id is None:
            return LineageResult(error=self._not_found(name))
        return self._refs(dict.fromkeys(collect(person_id)))

    def parents(self, name: str) -> LineageResult:
        return self._kin(name, self._parent_ids)

    def children(self, name: str) -> LineageResult:
        return self._kin(name, self._child_ids)

    def spouses(self, name: str) -> LineageResult:
        return self._kin(name, lambda pid: self._related_ids(pid, SPOUSE))

    def siblings(self, name: str) -> LineageResult:
        """Full and half siblings."""
        return self._kin(name, self._sibling_ids)

    def grandparents(self, name: str) -> LineageResult:
        return self._kin(name, lambda pid: [g for p in self._parent_ids(pid) for g in self._parent_ids(p)])

    def grandchildren(self, name: str) -> LineageResult:
        return self._kin(name, lambda pid: [g for c in self._child_ids(pid) for g in self._child_ids(c)])

    def aunts_and_uncles(self, name: str) -> LineageResult:
        return self._kin(name, lambda pid: [s for p in self._parent_ids(pid) for s in self._sibling_ids(p)])

    def cousins(self, name: str) -> LineageResult:
        """First cousins: children of the parents' siblings."""
        return self._kin(
            name,
            lambda pid: [
                c for p in self._parent_ids(pid) for s in self._sibling_ids(p) for c in self._child_ids(s)
            ],
        )

    def nephews_and_nieces(self, name: str) -> LineageResult:
        return self._kin(name, lambda pid: [c for s in self._sibling_ids(pid) for c in self._child_ids(s)])


def _generation_step(relation_type: str) -> int:
    if relation_type in PARENT_RELATIONS:
        return -1
    if relation_type == CHILD:
        return 1
    return 0


def _describe_step(origin: str, relation_type: str) -> str:
    if origin == "self":
        return relation_type
    if relation_type in PARENT_RELATIONS and origin in (FATHER, MOTHER, "ancestor"):
        return "ancestor"
    if relation_type == CHILD and origin in (CHILD, "descendant"):
        return "descendant"
    if relation_type == CHILD and origin in (FATHER, MOTHER):
        return "sibling"
    return "relative"
