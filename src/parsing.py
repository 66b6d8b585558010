"""GEDCOM loading: turns INDI and FAM records into Person snapshots."""

from dataclasses import replace
from datetime import date
import logging
from pathlib import Path
import re

from ged4py import GedcomReader

from models import Person

logger = logging.getLogger(__name__)

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

_QUALIFIER = re.compile(
    r"^(ABOUT|ABT|BEFORE|BEF|AFTER|AFT|ESTIMATED|EST|CALCULATED|CAL|FROM|BETWEEN|BET|CIRCA|CA|AROUND)"
    r"\.?:?\s*",
    re.IGNORECASE,
)


def extract_numeric_id(xref_id: str) -> int:
    """Extract numeric part from GEDCOM xref_id like '@I_347421849@' or 'I674624289'."""
    digits = re.sub(r"[^0-9]", "", xref_id)
    if not digits:
        raise ValueError(f"No numeric ID found in: {xref_id}")
    return int(digits)


def _month(token: str) -> int | None:
    return MONTHS.get(token.upper().rstrip(".")[:3])


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalise a GEDCOM or loosely written date to ISO format.

    "25 NOV 1954" -> "1954-11-25", "ABT NOV 1954" -> "1954-11-01",
    "1698" -> "1698-01-01", "1839-08-29" stays as is, "05/15/1923" is read
    as month/day/year. Returns None if the date cannot be understood.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?").strip()
    s = _QUALIFIER.sub("", s).strip()
    # Ranges and periods ("BET 1900 AND 1910") keep their first date
    s = re.split(r"\s+(?:AND|TO)\s+", s, flags=re.IGNORECASE)[0]

    match = re.fullmatch(r"(\d{4})-(\d{2})-(\d{2})", s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _iso(year, month or 1, day or 1)

    match = re.fullmatch(r"(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})", s)
    if match and _month(match.group(2)):
        return _iso(int(match.group(3)), _month(match.group(2)), int(match.group(1)))

    match = re.fullmatch(r"([A-Za-z]+)\.?\s*(\d{1,2}),\s*(\d{4})", s)
    if match and _month(match.group(1)):
        return _iso(int(match.group(3)), _month(match.group(1)), int(match.group(2)))

    match = re.fullmatch(r"([A-Za-z]+)\.?,?\s*(\d{4})", s)
    if match and _month(match.group(1)):
        return _iso(int(match.group(2)), _month(match.group(1)), 1)

    match = re.fullmatch(r"(\d{1,2})[-/ ](\d{1,2})[-/ ](\d{4})", s)
    if match:
        return _iso(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    match = re.fullmatch(r"(\d{4})", s)
    if match:
        return _iso(int(match.group(1)), 1, 1)

    return None


def _iso(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def extract_name_parts(indi) -> tuple[str, str]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", "")

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _suffix = name_rec.value
        return (given or "Unknown", surname or "")

    # Fallback: string format "Given /Surname/"
    match = re.match(r"^([^/]*)/([^/]*)/", str(name_rec.value))
    if match:
        return (match.group(1).strip() or "Unknown", match.group(2).strip())
    return (str(name_rec.value).strip() or "Unknown", "")


def extract_event_details(indi, tag: str) -> tuple[bool, str | None, str | None]:
    """Return (present, date, place) for an event tag such as BIRT or DEAT."""
    event = indi.sub_tag(tag)
    if event is None:
        return (False, None, None)

    date_rec = event.sub_tag("DATE")
    place_rec = event.sub_tag("PLAC")

    # ged4py may return DateValue objects
    date_val = str(date_rec.value) if date_rec and date_rec.value else None
    place_val = str(place_rec.value) if place_rec and place_rec.value else None
    return (True, date_val, place_val)


def _sub_xref(rec, tag: str) -> int | None:
    sub = rec.sub_tag(tag)
    return extract_numeric_id(sub.xref_id) if sub and sub.xref_id else None


def load_gedcom(filepath: Path) -> list[Person]:
    """
    Read a GEDCOM file into Person records.

    HUSB and WIFE of a family become the father and mother of each CHIL and
    spouses of each other. A child listed in several families keeps the first
    recorded father and mother. Non-standard tags are ignored.
    """
    persons: dict[int, Person] = {}

    with GedcomReader(str(filepath)) as reader:
        # First pass: extract all individuals
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue

            first_name, last_name = extract_name_parts(rec)
            sex_rec = rec.sub_tag("SEX")
            _, birth_date, birth_place = extract_event_details(rec, "BIRT")
            died, death_date, _ = extract_event_details(rec, "DEAT")

            person_id = extract_numeric_id(rec.xref_id)
            persons[person_id] = Person(
                id=person_id,
                first_name=first_name,
                last_name=last_name,
                sex=sex_rec.value if sex_rec else None,
                date_of_birth=parse_date_string(birth_date),
                is_deceased=died,
                date_of_death=parse_date_string(death_date),
                place_of_birth=birth_place,
                attributes={"birth_date_string": birth_date, "death_date_string": death_date},
            )

        # Second pass: wire families
        families = 0
        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue
            families += 1
            husb_id = _sub_xref(rec, "HUSB")
            wife_id = _sub_xref(rec, "WIFE")

            if husb_id in persons and wife_id in persons:
                husb, wife = persons[husb_id], persons[wife_id]
                if wife_id not in husb.spouse_ids:
                    persons[husb_id] = replace(husb, spouse_ids=husb.spouse_ids + (wife_id,))
                if husb_id not in wife.spouse_ids:
                    persons[wife_id] = replace(wife, spouse_ids=wife.spouse_ids + (husb_id,))

            for child in rec.sub_tags("CHIL"):
                if not child.xref_id:
                    continue
                child_id = extract_numeric_id(child.xref_id)
                person = persons.get(child_id)
                if person is None:
                    continue
                persons[child_id] = replace(
                    person,
                    father_id=person.father_id if person.father_id is not None else husb_id,
                    mother_id=person.mother_id if person.mother_id is not None else wife_id,
                )

    logger.info("Loaded %d persons and %d families from %s", len(persons), families, filepath)
    return list(persons.values())
