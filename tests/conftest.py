"""Pytest fixtures for family graph tests."""

import pytest

from graph import build_graph
from models import Person
from queries import RelationshipQueries
from store import PersonStore


@pytest.fixture
def trio():
    """Alice and Bob with their daughter Carol."""
    return [
        Person(id=1, first_name="Alice", last_name=""),
        Person(id=2, first_name="Bob", last_name=""),
        Person(id=3, first_name="Carol", last_name="", father_id=1, mother_id=2),
    ]


@pytest.fixture
def smith_family():
    """
    Three generations plus a loner and a dangling father reference.

        George(1) + Mary(2)          Paul(5)     Helen(6)      Zed(10)
          |-- John(3) + Helen(6)        |
          |     |-- Lucy(7)             |
          |     `-- Emma(9) -- Kid(11)  |
          `-- Anne(4) + Paul(5) --------'
                `-- Tom(8)
    """
    return [
        Person(id=1, first_name="George", last_name="Smith", sex="M", date_of_birth="1900-01-01"),
        Person(id=2, first_name="Mary", last_name="Jones", sex="F", date_of_birth="1902-05-05"),
        Person(id=3, first_name="John", last_name="Smith", father_id=1, mother_id=2, date_of_birth="1925-03-10"),
        Person(id=4, first_name="Anne", last_name="Smith", father_id=1, mother_id=2, date_of_birth="1928-07-21"),
        Person(id=5, first_name="Paul", last_name="Brown", date_of_birth="1926-02-02"),
        Person(id=6, first_name="Helen", last_name="Clark", date_of_birth="1927-11-30"),
        Person(id=7, first_name="Lucy", last_name="Smith", father_id=3, mother_id=6, date_of_birth="1950-06-01"),
        Person(id=8, first_name="Tom", last_name="Brown", father_id=5, mother_id=4, date_of_birth="1952-09-09"),
        Person(id=9, first_name="Emma", last_name="Smith", father_id=3, mother_id=6, date_of_birth="1955-01-15"),
        Person(id=10, first_name="Zed", last_name="Loner", date_of_birth="1960-01-01"),
        Person(id=11, first_name="Kid", last_name="Smith", father_id=999, mother_id=9, date_of_birth="1980-04-04"),
    ]


@pytest.fixture
def smith_store(smith_family):
    return PersonStore(smith_family)


@pytest.fixture
def smith_graph(smith_store):
    return build_graph(smith_store)


@pytest.fixture
def smith_queries(smith_family):
    return RelationshipQueries(smith_family)


@pytest.fixture
def trio_queries(trio):
    return RelationshipQueries(trio)


SAMPLE_GEDCOM = """\
0 HEAD
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME George /Smith/
1 SEX M
1 BIRT
2 DATE 1 JAN 1900
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
0 @I3@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 10 MAR 1925
2 PLAC Leeds
0 @I4@ INDI
1 NAME Anne /Smith/
1 SEX F
1 DEAT Y
0 @I5@ INDI
1 NAME Zed /Loner/
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
1 CHIL @I4@
0 TRLR
"""


@pytest.fixture
def gedcom_file(tmp_path):
    """A small GEDCOM file with one family of four and a loner."""
    path = tmp_path / "family.ged"
    path.write_text(SAMPLE_GEDCOM, encoding="utf-8")
    return path
