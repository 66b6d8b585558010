"""Consistency checks for family tree data."""

import logging

from graph import FamilyGraph
from models import FATHER, MOTHER, PARENT_RELATIONS, Finding, PersonId
from store import PersonStore
from traversal import Color, EdgeEvent, NodeEvent, TraversalHooks, dfs, relation_filter

logger = logging.getLogger(__name__)

# Suggested threshold for the opt-in plausibility checks
MIN_PARENT_AGE = 12


def find_cycles(graph: FamilyGraph, store: PersonStore) -> list[Finding]:
    """
    Detect persons who are their own ancestor.

    Runs one depth-first walk over father/mother edges, keeping the current
    path on a stack. An edge leading back to a GRAY node closes a loop; each
    such back edge is reported once, naming every person on the loop.
    """
    findings: list[Finding] = []
    path: list[PersonId] = []

    def on_edge(event: EdgeEvent) -> None:
        if event.color is not Color.GRAY:
            return
        loop = path[path.index(event.to_id):] + [event.to_id]
        names = [store.name_of(pid) for pid in loop]
        findings.append(
            Finding(
                type="cycle",
                message=f"Cycle detected: {' -> '.join(names)}",
                person_id=event.to_id,
                person_name=store.name_of(event.to_id),
                cycle=tuple(loop),
            )
        )

    def on_node_start(event: NodeEvent) -> None:
        path.append(event.node_id)

    def on_node_end(event: NodeEvent) -> None:
        path.pop()

    dfs(
        graph,
        hooks=TraversalHooks(
            filter_edges=relation_filter(FATHER, MOTHER),
            on_node_start=on_node_start,
            on_node_end=on_node_end,
            on_edge=on_edge,
        ),
    )
    return findings


def check_dates(
    graph: FamilyGraph, store: PersonStore, min_parent_age: int | None = None
) -> list[Finding]:
    """
    Check birth and death dates against recorded parents:
    - Impossible ages (child born before parent)

    Passing min_parent_age enables two plausibility checks as well:
    - Parents younger than min_parent_age at the birth
    - Death recorded before birth

    Dates are ISO strings (YYYY-MM-DD or YYYY) and are compared as strings.
    Persons or parents without a birth date are skipped.
    """
    findings: list[Finding] = []

    for person in store:
        for edge in graph.neighbors(person.id):
            if edge.relation_type not in PARENT_RELATIONS:
                continue
            parent = store.get(edge.neighbor_id)
            child_birth = person.date_of_birth
            parent_birth = parent.date_of_birth
            if not child_birth or not parent_birth:
                continue

            if child_birth < parent_birth:
                findings.append(
                    Finding(
                        type="date",
                        message=f"{person.full_name} was born before their {edge.relation_type} "
                        f"{parent.full_name}",
                        person_id=person.id,
                        person_name=person.full_name,
                    )
                )
            elif min_parent_age is not None:
                try:
                    age = int(child_birth[:4]) - int(parent_birth[:4])
                except ValueError:
                    continue
                if age < min_parent_age:
                    findings.append(
                        Finding(
                            type="date",
                            message=f"Suspicious: {parent.full_name} was less than {min_parent_age} "
                            f"years old when {person.full_name} was born",
                            person_id=person.id,
                            person_name=person.full_name,
                        )
                    )

        birth, death = person.date_of_birth, person.date_of_death
        if min_parent_age is not None and birth and death and death < birth:
            findings.append(
                Finding(
                    type="date",
                    message=f"Impossible: {person.full_name} died before being born",
                    person_id=person.id,
                    person_name=person.full_name,
                )
            )

    return findings


def detect_inconsistencies(
    graph: FamilyGraph, store: PersonStore, min_parent_age: int | None = None
) -> list[Finding]:
    """Run every check. Findings are advisory; nothing here stops other queries."""
    findings = find_cycles(graph, store) + check_dates(graph, store, min_parent_age)
    logger.debug("Consistency check produced %d findings", len(findings))
    return findings
