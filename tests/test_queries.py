"""Tests for the name-based query facade."""

from models import Person
from paths import NO_RELATION
from queries import RelationshipQueries
from store import PersonStore


class TestTrio:
    """Two parents and one child."""

    def test_descendants(self, trio_queries):
        assert trio_queries.descendants("Alice").names == ["Carol"]
        assert trio_queries.descendants("Carol").names == []

    def test_ancestors(self, trio_queries):
        assert trio_queries.ancestors("Carol").names == ["Alice", "Bob"]

    def test_generation_level(self, trio_queries):
        result = trio_queries.generation_level("Carol")
        assert result.level == 1
        assert result.root == "Alice"
        assert result.root_id == 1

    def test_closest_common_ancestor(self, trio_queries):
        """A parent is the closest common ancestor of itself and its child."""
        result = trio_queries.closest_common_ancestor("Alice", "Carol")
        assert result.name == "Alice"
        assert result.total_distance == 1

    def test_parents_are_related_through_spouse_edge(self, trio_queries):
        result = trio_queries.are_related("Alice", "Bob")
        assert result.related
        assert result.path == ["Alice", "Bob"]
        assert result.label == "direct parent/child relation"

    def test_partition(self, trio_queries):
        assert trio_queries.partition().branches == [[1, 2, 3]]


class TestLineage:
    """Descendants and ancestors."""

    def test_descendants_nearest_first(self, smith_queries):
        assert smith_queries.descendants("George Smith").ids == [3, 4, 7, 9, 8, 11]

    def test_ancestors(self, smith_queries):
        assert smith_queries.ancestors("Tom Brown").ids == [5, 4, 1, 2]
        assert smith_queries.ancestors("Kid Smith").ids == [9, 3, 6, 1, 2]

    def test_spouses_not_followed(self, smith_queries):
        """Helen married into the family and is not a descendant of George."""
        assert 6 not in smith_queries.descendants("George Smith").ids

    def test_unknown_name(self, smith_queries):
        result = smith_queries.descendants("Nobody")
        assert result.members == []
        assert result.error == 'Person named "Nobody" not found'
        assert smith_queries.ancestors("Nobody").error is not None

    def test_members_serialise(self, smith_queries):
        data = smith_queries.ancestors("Lucy Smith").as_dict()
        assert data["members"][0] == {"id": 3, "name": "John Smith"}
        assert data["error"] is None


class TestGenerationLevel:
    """Distance from the nearest root."""

    def test_levels(self, smith_queries):
        tom = smith_queries.generation_level("Tom Brown")
        assert (tom.level, tom.root) == (1, "Paul Brown")

        kid = smith_queries.generation_level("Kid Smith")
        assert (kid.level, kid.root) == (2, "Helen Clark")

    def test_root_is_level_zero(self, smith_queries):
        result = smith_queries.generation_level("George Smith")
        assert result.level == 0
        assert result.root == "George Smith"

    def test_dangling_parent_is_not_a_root(self, smith_queries):
        """Kid has an unknown father recorded, so Kid is not a root."""
        assert smith_queries.generation_level("Kid Smith").level != 0

    def test_no_roots(self):
        queries = RelationshipQueries(
            [
                Person(id=1, first_name="A", last_name="", father_id=2),
                Person(id=2, first_name="B", last_name="", father_id=1),
            ]
        )
        result = queries.generation_level("A")
        assert result.level is None
        assert result.error == "No root (person without parents) found in the family tree"

    def test_unreachable_from_roots(self):
        queries = RelationshipQueries(
            [
                Person(id=1, first_name="Root", last_name=""),
                Person(id=2, first_name="Lost", last_name="", father_id=99),
            ]
        )
        assert queries.generation_level("Lost").error == 'No path found from any root to "Lost"'

    def test_unknown_name(self, smith_queries):
        assert smith_queries.generation_level("Nobody").error == 'Person named "Nobody" not found'


class TestClosestCommonAncestor:
    """Common ancestor with the smallest summed distance."""

    def test_cousins(self, smith_queries):
        result = smith_queries.closest_common_ancestor("Lucy Smith", "Tom Brown")
        assert result.name == "George Smith"
        assert result.total_distance == 4

    def test_siblings(self, smith_queries):
        result = smith_queries.closest_common_ancestor("Lucy Smith", "Emma Smith")
        assert result.id == 3
        assert result.total_distance == 2

    def test_ancestor_of_the_other(self, smith_queries):
        result = smith_queries.closest_common_ancestor("John Smith", "Lucy Smith")
        assert result.name == "John Smith"
        assert result.total_distance == 1

    def test_unrelated(self, smith_queries):
        result = smith_queries.closest_common_ancestor("Zed Loner", "George Smith")
        assert result.id is None
        assert result.error == 'No common ancestor found between "Zed Loner" and "George Smith"'

    def test_unknown_name(self, smith_queries):
        result = smith_queries.closest_common_ancestor("Nobody", "George Smith")
        assert result.error == 'One or both people not found: "Nobody", "George Smith"'


class TestRelatedness:
    """Shortest paths by name."""

    def test_siblings(self, smith_queries):
        result = smith_queries.are_related("Lucy Smith", "Emma Smith")
        assert result.related
        assert result.path == ["Lucy Smith", "John Smith", "Emma Smith"]
        assert result.label == "grandparent/grandchild or sibling relation"

    def test_cousins(self, smith_queries):
        result = smith_queries.shortest_path("Lucy Smith", "Tom Brown")
        assert result.distance == 4
        assert result.label == "distance-4 relative"

    def test_not_related(self, smith_queries):
        result = smith_queries.are_related("Zed Loner", "George Smith")
        assert not result.related
        assert result.path == []
        assert result.label == NO_RELATION
        assert result.error is None

    def test_self(self, smith_queries):
        result = smith_queries.are_related("george smith", "GEORGE SMITH")
        assert result.related
        assert result.path == ["George Smith"]
        assert result.label == "same person"

    def test_unknown_name(self, smith_queries):
        result = smith_queries.are_related("George Smith", "Nobody")
        assert not result.related
        assert result.error == 'One or both people not found: "George Smith", "Nobody"'
        assert smith_queries.shortest_path("George Smith", "Nobody").path == []


class TestKinship:
    """Named kinship helpers."""

    def test_immediate_family(self, smith_queries):
        assert smith_queries.parents("Kid Smith").names == ["Emma Smith"]
        assert smith_queries.children("John Smith").names == ["Lucy Smith", "Emma Smith"]
        assert smith_queries.spouses("John Smith").names == ["Helen Clark"]

    def test_siblings(self, smith_queries):
        assert smith_queries.siblings("Lucy Smith").names == ["Emma Smith"]
        assert smith_queries.siblings("Zed Loner").names == []

    def test_grandparents_and_grandchildren(self, smith_queries):
        assert smith_queries.grandparents("Tom Brown").names == ["George Smith", "Mary Jones"]
        assert smith_queries.grandchildren("George Smith").names == ["Lucy Smith", "Emma Smith", "Tom Brown"]

    def test_aunts_cousins_nephews(self, smith_queries):
        assert smith_queries.aunts_and_uncles("Lucy Smith").names == ["Anne Smith"]
        assert smith_queries.cousins("Lucy Smith").names == ["Tom Brown"]
        assert smith_queries.nephews_and_nieces("Anne Smith").names == ["Lucy Smith", "Emma Smith"]

    def test_unknown_name(self, smith_queries):
        assert smith_queries.cousins("Nobody").error == 'Person named "Nobody" not found'


class TestRelativesWithin:
    """Generation-bounded neighbourhood."""

    def test_one_generation(self, smith_queries):
        result = smith_queries.relatives_within("John Smith", max_generations=1)
        assert [r.id for r in result.relatives] == [3, 1, 2, 7, 9, 6, 4, 8, 5]
        assert result.relatives[0].relationship == "self"
        assert result.relatives[0].generation == 0

    def test_relationship_tags(self, smith_queries):
        result = smith_queries.relatives_within("John Smith", max_generations=1)
        by_id = {r.id: r for r in result.relatives}
        assert (by_id[1].relationship, by_id[1].generation) == ("father", -1)
        assert (by_id[7].relationship, by_id[7].generation) == ("child", 1)
        assert (by_id[6].relationship, by_id[6].generation) == ("spouse", 0)
        assert (by_id[4].relationship, by_id[4].generation) == ("sibling", 0)

    def test_generation_bound(self, smith_queries):
        """Kid is two generations below John and is left out."""
        ids = [r.id for r in smith_queries.relatives_within("John Smith", max_generations=1).relatives]
        assert 11 not in ids
        ids = [r.id for r in smith_queries.relatives_within("John Smith", max_generations=2).relatives]
        assert 11 in ids

    def test_isolated(self, smith_queries):
        result = smith_queries.relatives_within("Zed Loner")
        assert [r.name for r in result.relatives] == ["Zed Loner"]

    def test_unknown_name(self, smith_queries):
        assert smith_queries.relatives_within("Nobody").error == 'Person named "Nobody" not found'


class TestFacade:
    """Construction and the remaining passthroughs."""

    def test_from_store(self, smith_family):
        queries = RelationshipQueries.from_store(PersonStore(smith_family))
        assert queries.descendants("Anne Smith").names == ["Tom Brown"]

    def test_nearest_family(self, smith_queries):
        assert smith_queries.nearest_family("Anne Smith").ids == [1, 8]
        assert smith_queries.nearest_family("Nobody").error is not None

    def test_clean_family_has_no_findings(self, smith_queries):
        assert smith_queries.detect_inconsistencies() == []

    def test_duplicate_names_resolve_to_first(self):
        queries = RelationshipQueries(
            [
                Person(id=1, first_name="Sam", last_name="Lee"),
                Person(id=2, first_name="Sam", last_name="Lee", father_id=1),
            ]
        )
        assert queries.descendants("Sam Lee").ids == [2]
