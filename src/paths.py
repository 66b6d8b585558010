"""Shortest relationship path between two persons."""

import math

from graph import FamilyGraph
from models import PathResult, PersonId
from store import PersonStore

SAME_PERSON = "same person"
NO_RELATION = "no relation found"

# Labels by number of edges on the path. Lengths 2 and 3 stay
# ambiguous: path length alone cannot tell a sibling from a grandparent.
RELATIONSHIP_LABELS = {
    0: SAME_PERSON,
    1: "direct parent/child relation",
    2: "grandparent/grandchild or sibling relation",
    3: "great-grandparent/great-grandchild or first cousin relation",
}


def relationship_label(edge_count: int) -> str:
    """Classify a relationship by path length only."""
    return RELATIONSHIP_LABELS.get(edge_count, f"distance-{edge_count} relative")


def shortest_path(graph: FamilyGraph, start_id: PersonId, end_id: PersonId) -> PathResult:
    """
    Find the shortest relationship path between two persons.

    Dijkstra with every edge weighing 1, over the undirected view of the graph
    (father, mother, child and spouse edges are all followed). The unvisited
    set is scanned linearly in graph order, so among equally distant nodes the
    first one encountered is selected.

    Args:
        graph: The family graph
        start_id: Person the path starts from
        end_id: Person the path leads to

    Returns:
        A PathResult; its path is empty when either id is unknown or the two
        persons are not connected.
    """
    if start_id not in graph or end_id not in graph:
        return PathResult(path=[], label=NO_RELATION)
    if start_id == end_id:
        return PathResult(path=[start_id], label=SAME_PERSON, distance=0)

    distances: dict[PersonId, float] = {node: math.inf for node in graph.nodes}
    predecessors: dict[PersonId, PersonId | None] = {node: None for node in graph.nodes}
    distances[start_id] = 0
    unvisited = dict.fromkeys(graph.nodes)

    while unvisited:
        current = _closest(unvisited, distances)
        if current is None or current == end_id:
            break
        del unvisited[current]

        for edge in graph.neighbors(current):
            neighbor = edge.neighbor_id
            if neighbor not in unvisited:
                continue
            tentative = distances[current] + 1
            if tentative < distances[neighbor]:
                distances[neighbor] = tentative
                predecessors[neighbor] = current

    path = reconstruct_path(predecessors, start_id, end_id)
    if not path:
        return PathResult(path=[], label=NO_RELATION)
    return PathResult(path=path, label=relationship_label(len(path) - 1), distance=len(path) - 1)


def _closest(unvisited: dict, distances: dict) -> PersonId | None:
    """Unvisited node with the smallest finite distance, first encountered wins."""
    best = None
    best_distance = math.inf
    for node in unvisited:
        if distances[node] < best_distance:
            best = node
            best_distance = distances[node]
    return best


def reconstruct_path(
    predecessors: dict[PersonId, PersonId | None], start_id: PersonId, end_id: PersonId
) -> list[PersonId]:
    """Walk predecessors back from end_id; empty list when end_id was never reached."""
    if start_id == end_id:
        return [start_id]
    if predecessors.get(end_id) is None:
        return []

    path = []
    current = end_id
    while current is not None:
        path.append(current)
        if current == start_id:
            break
        current = predecessors.get(current)
    path.reverse()
    return path


def path_steps(graph: FamilyGraph, path: list[PersonId]) -> list[str]:
    """Relation type of each hop along a path, as seen from the earlier person."""
    steps = []
    for a, b in zip(path, path[1:]):
        relation = next((e.relation_type for e in graph.neighbors(a) if e.neighbor_id == b), "relative")
        steps.append(relation)
    return steps


def describe_path(store: PersonStore, result: PathResult) -> str:
    """Render a path as 'Alice Smith → Carol Smith - direct parent/child relation'."""
    if not result.path:
        return NO_RELATION
    if len(result.path) == 1:
        return SAME_PERSON
    names = " → ".join(store.name_of(pid) for pid in result.path)
    return f"{names} - {result.label}"
