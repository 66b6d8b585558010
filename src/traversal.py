"""
Generic breadth-first and depth-first traversal over a FamilyGraph.

Both traversals take a TraversalHooks strategy object. filter_edges is applied
to a node's edges before they are examined, then should_visit_node decides
whether a WHITE neighbor is discovered. This lets callers restrict a walk to
a relation subtype (only child edges, only father/mother edges) without
building another graph.

All state (colors, parents, distances, timestamps) is allocated per call; the
graph is only read.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from graph import FamilyGraph
from models import Edge, PersonId


class Color(Enum):
    WHITE = 0  # unvisited
    GRAY = 1  # discovered, on the queue or stack
    BLACK = 2  # fully processed


@dataclass(frozen=True)
class NodeEvent:
    node_id: PersonId
    parent: PersonId | None
    distance: int | None = None
    discovery_time: int | None = None
    finish_time: int | None = None


@dataclass(frozen=True)
class EdgeEvent:
    from_id: PersonId
    to_id: PersonId
    relation_type: str
    color: Color  # color of to_id when the edge is examined


def _always(*_args) -> bool:
    return True


def _ignore(_event) -> None:
    return None


@dataclass(frozen=True)
class TraversalHooks:
    should_visit_node: Callable[[PersonId, Edge | None], bool] = _always
    filter_edges: Callable[[Edge], bool] = _always
    on_node: Callable[[NodeEvent], None] = _ignore
    on_node_start: Callable[[NodeEvent], None] = _ignore
    on_node_end: Callable[[NodeEvent], None] = _ignore
    on_edge: Callable[[EdgeEvent], None] = _ignore


def relation_filter(*relation_types: str) -> Callable[[Edge], bool]:
    """Edge filter accepting only the given relation types."""
    allowed = frozenset(relation_types)
    return lambda edge: edge.relation_type in allowed


@dataclass
class BFSResult:
    colors: dict[PersonId, Color] = field(default_factory=dict)
    parents: dict[PersonId, PersonId | None] = field(default_factory=dict)
    distances: dict[PersonId, int] = field(default_factory=dict)

    def color(self, node_id: PersonId) -> Color:
        return self.colors.get(node_id, Color.WHITE)

    @property
    def order(self) -> list[PersonId]:
        """Discovered nodes in discovery order."""
        return list(self.colors)


@dataclass
class DFSResult:
    colors: dict[PersonId, Color] = field(default_factory=dict)
    parents: dict[PersonId, PersonId | None] = field(default_factory=dict)
    discovery_times: dict[PersonId, int] = field(default_factory=dict)
    finish_times: dict[PersonId, int] = field(default_factory=dict)
    time: int = 0

    def color(self, node_id: PersonId) -> Color:
        return self.colors.get(node_id, Color.WHITE)


def _start_nodes(graph: FamilyGraph, start_nodes: Iterable[PersonId] | None) -> list[PersonId]:
    if start_nodes is None:
        return graph.nodes
    return [node for node in start_nodes if node in graph]


def bfs(
    graph: FamilyGraph,
    start_nodes: Iterable[PersonId] | None = None,
    hooks: TraversalHooks | None = None,
) -> BFSResult:
    """
    Breadth-first traversal from each start node in order.

    Start nodes already discovered by an earlier start are skipped, so several
    disconnected starting points can be handled in one call. The distance of a
    node is the distance of its discoverer plus one.
    """
    hooks = hooks or TraversalHooks()
    result = BFSResult()
    colors = result.colors

    for start in _start_nodes(graph, start_nodes):
        if colors.get(start, Color.WHITE) is not Color.WHITE or not hooks.should_visit_node(start, None):
            continue

        colors[start] = Color.GRAY
        result.parents[start] = None
        result.distances[start] = 0
        queue = deque([start])

        while queue:
            node = queue.popleft()
            hooks.on_node(NodeEvent(node, result.parents[node], distance=result.distances[node]))

            for edge in filter(hooks.filter_edges, graph.neighbors(node)):
                neighbor = edge.neighbor_id
                neighbor_color = colors.get(neighbor, Color.WHITE)
                hooks.on_edge(EdgeEvent(node, neighbor, edge.relation_type, neighbor_color))

                if neighbor_color is Color.WHITE and hooks.should_visit_node(neighbor, edge):
                    colors[neighbor] = Color.GRAY
                    result.parents[neighbor] = node
                    result.distances[neighbor] = result.distances[node] + 1
                    queue.append(neighbor)

            colors[node] = Color.BLACK

    return result


def dfs(
    graph: FamilyGraph,
    start_nodes: Iterable[PersonId] | None = None,
    hooks: TraversalHooks | None = None,
) -> DFSResult:
    """
    Depth-first traversal with discovery and finish timestamps.

    Uses an explicit stack of edge iterators instead of recursion so deep
    ancestry chains cannot exhaust the interpreter stack. Timestamps and hook
    order are the same as for the textbook recursive visit: the clock ticks
    once on discovery and once on finish. An edge examined while its target
    is GRAY is a back edge.
    """
    hooks = hooks or TraversalHooks()
    result = DFSResult()
    colors = result.colors

    def discover(node: PersonId, parent: PersonId | None) -> tuple:
        colors[node] = Color.GRAY
        result.parents[node] = parent
        result.time += 1
        result.discovery_times[node] = result.time
        hooks.on_node_start(NodeEvent(node, parent, discovery_time=result.time))
        return node, filter(hooks.filter_edges, graph.neighbors(node))

    for start in _start_nodes(graph, start_nodes):
        if colors.get(start, Color.WHITE) is not Color.WHITE or not hooks.should_visit_node(start, None):
            continue

        stack = [discover(start, None)]
        while stack:
            node, edges = stack[-1]
            edge = next(edges, None)

            if edge is None:
                stack.pop()
                colors[node] = Color.BLACK
                result.time += 1
                result.finish_times[node] = result.time
                hooks.on_node_end(
                    NodeEvent(
                        node,
                        result.parents[node],
                        discovery_time=result.discovery_times[node],
                        finish_time=result.time,
                    )
                )
                continue

            neighbor = edge.neighbor_id
            neighbor_color = colors.get(neighbor, Color.WHITE)
            hooks.on_edge(EdgeEvent(node, neighbor, edge.relation_type, neighbor_color))

            if neighbor_color is Color.WHITE and hooks.should_visit_node(neighbor, edge):
                stack.append(discover(neighbor, node))

    return result
