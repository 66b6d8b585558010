"""Adjacency construction for the family graph."""

from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Mapping

import networkx as nx

from models import CHILD, FATHER, MOTHER, SPOUSE, Edge, PersonId
from store import PersonStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FamilyGraph:
    """Directed, typed multigraph of persons. Never mutated after build_graph()."""

    adjacency: Mapping[PersonId, tuple[Edge, ...]]

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    @property
    def nodes(self) -> list[PersonId]:
        return list(self.adjacency)

    def neighbors(self, person_id: PersonId) -> tuple[Edge, ...]:
        return self.adjacency.get(person_id, ())

    def number_of_edges(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())


def build_graph(store: PersonStore) -> FamilyGraph:
    """
    Build the family graph from a person store.

    For every person with a recorded father or mother present in the store, a
    father/mother edge goes from the child to the parent together with the
    reciprocal child edge. Spouse edges come from explicit spouse references
    and from parents sharing a child; each pair is added once, in both
    directions. References to ids missing from the store are left out.
    """
    adjacency: dict[PersonId, list[Edge]] = {person.id: [] for person in store}
    dangling = 0

    for person in store:
        for relation, parent_id in ((FATHER, person.father_id), (MOTHER, person.mother_id)):
            if parent_id is None:
                continue
            if parent_id not in adjacency:
                dangling += 1
                continue
            adjacency[person.id].append(Edge(parent_id, relation))
            adjacency[parent_id].append(Edge(person.id, CHILD))

    # Collect spouse pairs (avoid duplicates by sorting)
    spouse_pairs: dict[tuple, None] = {}
    for person in store:
        if person.father_id in adjacency and person.mother_id in adjacency:
            if person.father_id != person.mother_id:
                spouse_pairs.setdefault(_canonical_pair(person.father_id, person.mother_id), None)
        for spouse_id in person.spouse_ids:
            if spouse_id not in adjacency:
                dangling += 1
            elif spouse_id != person.id:
                spouse_pairs.setdefault(_canonical_pair(person.id, spouse_id), None)

    for a, b in spouse_pairs:
        adjacency[a].append(Edge(b, SPOUSE))
        adjacency[b].append(Edge(a, SPOUSE))

    graph = FamilyGraph(MappingProxyType({k: tuple(v) for k, v in adjacency.items()}))
    logger.debug(
        "Built family graph: %d nodes, %d edges, %d spouse pairs, %d dangling references omitted",
        len(graph),
        graph.number_of_edges(),
        len(spouse_pairs),
        dangling,
    )
    return graph


def _canonical_pair(a: PersonId, b: PersonId) -> tuple:
    return tuple(sorted([a, b], key=str))


def to_networkx(graph: FamilyGraph, store: PersonStore | None = None) -> nx.MultiDiGraph:
    """Convert a FamilyGraph into a NetworkX MultiDiGraph with relation_type edge data."""
    G = nx.MultiDiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflicts with exporters
    for node in graph.nodes:
        attrs = {}
        person = store.get(node) if store is not None else None
        if person is not None:
            attrs = {
                "person_name": person.full_name,
                "sex": person.sex or "",
                "birth_date": person.date_of_birth or "",
                "death_date": person.date_of_death or "",
            }
        G.add_node(node, **attrs)

    for node, edges in graph.adjacency.items():
        for edge in edges:
            G.add_edge(node, edge.neighbor_id, relation_type=edge.relation_type)

    return G
