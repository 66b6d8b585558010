"""Data classes for family tree entities and query results."""

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

PersonId = int | str

# Relation types carried on graph edges
FATHER = "father"
MOTHER = "mother"
CHILD = "child"
SPOUSE = "spouse"

PARENT_RELATIONS = frozenset({FATHER, MOTHER})


@dataclass(frozen=True)
class Person:
    id: PersonId
    first_name: str
    last_name: str
    father_id: PersonId | None = None
    mother_id: PersonId | None = None
    date_of_birth: str | None = None  # ISO format YYYY-MM-DD (or YYYY) or None
    is_deceased: bool = False
    date_of_death: str | None = None
    sex: str | None = None
    spouse_ids: tuple[PersonId, ...] = ()
    middle_name: str | None = None
    place_of_birth: str | None = None
    nationality: str | None = None
    occupation: str | None = None
    notes: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    @property
    def lifespan(self) -> str:
        """Render birth and death years, e.g. '1900–1970' or '1900–?'."""
        birth_year = self.date_of_birth.split("-")[0] if self.date_of_birth else "?"
        if not self.is_deceased:
            return birth_year
        death_year = self.date_of_death.split("-")[0] if self.date_of_death else "?"
        return f"{birth_year}–{death_year}"


@dataclass(frozen=True)
class Edge:
    neighbor_id: PersonId
    relation_type: str  # father, mother, child, spouse


class _AsDict:
    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PersonRef(_AsDict):
    id: PersonId
    name: str


@dataclass(frozen=True)
class Finding(_AsDict):
    type: str  # cycle, date
    message: str
    person_id: PersonId | None = None
    person_name: str | None = None
    cycle: tuple[PersonId, ...] = ()


@dataclass(frozen=True)
class Relation(_AsDict):
    from_id: PersonId  # parent
    to_id: PersonId  # child
    weight: int = 1


@dataclass(frozen=True)
class PartitionStats(_AsDict):
    total_branches: int
    largest_branch_size: int


@dataclass
class PartitionResult(_AsDict):
    branches: list[list[PersonId]]
    retained_relations: list[Relation]
    stats: PartitionStats


@dataclass
class PathResult(_AsDict):
    path: list[PersonId]
    label: str
    distance: int | None = None

    @property
    def found(self) -> bool:
        return bool(self.path)


@dataclass
class LineageResult(_AsDict):
    members: list[PersonRef] = field(default_factory=list)
    error: str | None = None

    @property
    def ids(self) -> list[PersonId]:
        return [m.id for m in self.members]

    @property
    def names(self) -> list[str]:
        return [m.name for m in self.members]


@dataclass
class RelatednessResult(_AsDict):
    related: bool
    path: list[str] = field(default_factory=list)
    label: str | None = None
    error: str | None = None


@dataclass
class GenerationResult(_AsDict):
    level: int | None = None
    root: str | None = None
    root_id: PersonId | None = None
    error: str | None = None


@dataclass
class CommonAncestorResult(_AsDict):
    id: PersonId | None = None
    name: str | None = None
    total_distance: int | None = None
    error: str | None = None


@dataclass
class Relative(_AsDict):
    """A person reached from a focus person, with signed generation offset."""

    id: PersonId
    name: str
    generation: int
    relationship: str


@dataclass
class RelativesResult(_AsDict):
    relatives: list[Relative] = field(default_factory=list)
    error: str | None = None
