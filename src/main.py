"""
Answer structural questions about a family tree:
1) Load the family tree data from a GEDCOM file into Person records.
2) Build the relationship graph (one immutable snapshot).
3) Run the requested query: lineage, relatedness, generation level, common
   ancestor, branch partitioning, or consistency validation.
4) Optionally export the graph as GraphML for other tools.
"""

import argparse
import logging
from pathlib import Path
import sys

import networkx as nx

from graph import to_networkx
from models import LineageResult
from parsing import load_gedcom
from paths import describe_path
from queries import RelationshipQueries
from validation import MIN_PARENT_AGE

DEFAULT_GEDCOM_PATH = Path("family.ged")
MAX_LISTED = 10


def print_lineage(title: str, result: LineageResult) -> int:
    if result.error:
        print(result.error)
        return 1
    print(f"{title} ({len(result.members)}):")
    for member in result.members:
        print(f"  - {member.name} [{member.id}]")
    return 0


def cmd_descendants(queries: RelationshipQueries, args) -> int:
    return print_lineage(f"Descendants of {args.name}", queries.descendants(args.name))


def cmd_ancestors(queries: RelationshipQueries, args) -> int:
    return print_lineage(f"Ancestors of {args.name}", queries.ancestors(args.name))


def cmd_related(queries: RelationshipQueries, args) -> int:
    if queries.store.resolve_id(args.first) is None or queries.store.resolve_id(args.second) is None:
        print(f'One or both people not found: "{args.first}", "{args.second}"')
        return 1

    result = queries.shortest_path(args.first, args.second)
    if not result.found:
        print(f"{args.first} and {args.second} are not related")
        return 0
    print(describe_path(queries.store, result))
    return 0


def cmd_generation(queries: RelationshipQueries, args) -> int:
    result = queries.generation_level(args.name)
    if result.error:
        print(result.error)
        return 1
    print(f"{args.name} is generation {result.level} below {result.root}")
    return 0


def cmd_common_ancestor(queries: RelationshipQueries, args) -> int:
    result = queries.closest_common_ancestor(args.first, args.second)
    if result.error:
        print(result.error)
        return 1
    print(f"Closest common ancestor: {result.name} (total distance {result.total_distance})")
    return 0


def cmd_validate(queries: RelationshipQueries, args) -> int:
    findings = queries.detect_inconsistencies(min_parent_age=args.min_parent_age)
    if not findings:
        print("No validation issues found")
        return 0

    print(f"Found {len(findings)} validation warnings:")
    for finding in findings[:MAX_LISTED]:
        print(f"  - [{finding.type}] {finding.message}")
    if len(findings) > MAX_LISTED:
        print(f"  ... and {len(findings) - MAX_LISTED} more")
    return 0


def cmd_partition(queries: RelationshipQueries, args) -> int:
    result = queries.partition()
    print(
        f"{result.stats.total_branches} branches, largest has "
        f"{result.stats.largest_branch_size} persons"
    )
    for index, branch in enumerate(result.branches[:MAX_LISTED], start=1):
        names = ", ".join(queries.store.name_of(pid) for pid in branch[:5])
        more = f" ... (+{len(branch) - 5})" if len(branch) > 5 else ""
        print(f"  {index}. {names}{more}")
    return 0


def cmd_family(queries: RelationshipQueries, args) -> int:
    result = queries.relatives_within(args.name, max_generations=args.max_generations)
    if result.error:
        print(result.error)
        return 1
    for relative in result.relatives:
        print(f"  {relative.generation:+d}  {relative.relationship:<11} {relative.name}")
    return 0


def cmd_export(queries: RelationshipQueries, args) -> int:
    G = to_networkx(queries.graph, queries.store)
    nx.write_graphml(G, args.output)
    print(f"Graph saved to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query relationships in a GEDCOM family tree")
    parser.add_argument(
        "-g", "--gedcom", type=Path, default=DEFAULT_GEDCOM_PATH, help="GEDCOM file (default: ./family.ged)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("descendants", help="List all descendants of a person")
    p.add_argument("name")
    p.set_defaults(func=cmd_descendants)

    p = sub.add_parser("ancestors", help="List all ancestors of a person")
    p.add_argument("name")
    p.set_defaults(func=cmd_ancestors)

    p = sub.add_parser("related", help="Shortest relationship path between two persons")
    p.add_argument("first")
    p.add_argument("second")
    p.set_defaults(func=cmd_related)

    p = sub.add_parser("generation", help="Generation level below the nearest root")
    p.add_argument("name")
    p.set_defaults(func=cmd_generation)

    p = sub.add_parser("common-ancestor", help="Closest common ancestor of two persons")
    p.add_argument("first")
    p.add_argument("second")
    p.set_defaults(func=cmd_common_ancestor)

    p = sub.add_parser("validate", help="Report cycles and date inconsistencies")
    p.add_argument(
        "--min-parent-age",
        type=int,
        nargs="?",
        const=MIN_PARENT_AGE,
        default=None,
        help=f"Also flag parents younger than this (default {MIN_PARENT_AGE}) and deaths before birth",
    )
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("partition", help="Split the tree into blood-lineage branches")
    p.set_defaults(func=cmd_partition)

    p = sub.add_parser("family", help="Relatives within a number of generations")
    p.add_argument("name")
    p.add_argument("--max-generations", type=int, default=3)
    p.set_defaults(func=cmd_family)

    p = sub.add_parser("export", help="Write the relationship graph as GraphML")
    p.add_argument("output", type=Path)
    p.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.gedcom.exists():
        print(f"GEDCOM file not found: {args.gedcom}")
        return 2

    persons = load_gedcom(args.gedcom)
    queries = RelationshipQueries(persons)
    return args.func(queries, args)


if __name__ == "__main__":
    sys.exit(main())
