"""Immutable indexed view over person records."""

from types import MappingProxyType
from typing import Iterable, Iterator

from models import Person, PersonId


class DuplicatePersonError(ValueError):
    """Raised when two records share the same id."""


class PersonStore:
    """
    Read-only index over a snapshot of person records.

    Persons are looked up by id or by lower-cased full name. When two persons
    share a name, the first one indexed wins.
    """

    def __init__(self, persons: Iterable[Person]):
        by_id: dict[PersonId, Person] = {}
        by_name: dict[str, PersonId] = {}

        for person in persons:
            if person.id in by_id:
                raise DuplicatePersonError(f"Duplicate person id: {person.id!r}")
            by_id[person.id] = person
            by_name.setdefault(_name_key(person.full_name), person.id)

        self._by_id = MappingProxyType(by_id)
        self._by_name = MappingProxyType(by_name)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._by_id.values())

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._by_id

    @property
    def ids(self) -> list[PersonId]:
        return list(self._by_id)

    def get(self, person_id: PersonId) -> Person | None:
        return self._by_id.get(person_id)

    def resolve_id(self, name: str) -> PersonId | None:
        """Resolve a full name (case-insensitive, exact) to a person id."""
        if not name:
            return None
        return self._by_name.get(_name_key(name))

    def find_by_name(self, name: str) -> Person | None:
        person_id = self.resolve_id(name)
        return None if person_id is None else self._by_id[person_id]

    def name_of(self, person_id: PersonId) -> str:
        person = self._by_id.get(person_id)
        return person.full_name if person else str(person_id)

    def search(self, fragment: str) -> list[Person]:
        """Find persons whose full name contains fragment (case-insensitive)."""
        needle = _name_key(fragment)
        if not needle:
            return []
        return [p for p in self._by_id.values() if needle in _name_key(p.full_name)]


def _name_key(name: str) -> str:
    return " ".join(name.split()).lower()
