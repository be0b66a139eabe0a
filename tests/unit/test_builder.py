"""Tests for DocumentBuilder."""

import pytest

from tabledoc import (
    CycleDetectedError,
    DocumentBuilder,
    NullInputError,
    Relation,
    RelationRegistry,
    Table,
)


class TestColumnKeys:
    """Test how row cells become document keys."""

    def test_row_without_relations(self):
        """A row with no relations maps exactly to its cells by column name."""
        table = Table("t")
        table.add_column("a")
        table.add_column("b")
        table.add_column("c")
        row = table.add_row([1, "two", None])

        document = DocumentBuilder(RelationRegistry()).build(row)

        assert document == {"a": 1, "b": "two", "c": None}
        assert list(document) == table.column_names
        assert [document[c.name] for c in table.columns] == row.values

    def test_duplicate_column_names(self):
        """The second column named X is keyed by its ordinal."""
        table = Table("t")
        table.add_column("X")
        table.add_column("Y")
        table.add_column("X")
        row = table.add_row([1, 2, 3])

        document = DocumentBuilder(RelationRegistry()).build(row)

        assert document == {"X": 1, "Y": 2, "X_col2": 3}

    def test_suffixed_name_already_taken(self):
        """A real column called X_col2 does not get overwritten."""
        table = Table("t")
        table.add_column("X")
        table.add_column("X_col2")
        table.add_column("X")
        row = table.add_row([1, "real", 3])

        document = DocumentBuilder(RelationRegistry()).build(row)

        assert document == {"X": 1, "X_col2": "real", "X_col2_col3": 3}

    def test_null_cells_are_kept(self):
        table = Table("t")
        table.add_column("a")
        row = table.add_row([None])

        document = DocumentBuilder(RelationRegistry()).build(row)

        assert "a" in document
        assert document["a"] is None

    def test_build_none(self):
        with pytest.raises(NullInputError):
            DocumentBuilder(RelationRegistry()).build(None)


class TestRelationEmbedding:
    """Test embedding related rows."""

    @pytest.fixture
    def people(self):
        people = Table("people")
        people.add_column("id")
        people.add_column("name")
        people.add_row([1, "ann"])
        people.add_row([2, "bob"])
        return people

    @pytest.fixture
    def addresses(self):
        addresses = Table("addresses")
        addresses.add_column("person_id")
        addresses.add_column("city")
        addresses.add_row([1, "Oslo"])
        addresses.add_row([1, "Bergen"])
        return addresses

    @pytest.fixture
    def registry(self, people, addresses):
        registry = RelationRegistry()
        registry.add_table(people)
        registry.add_table(addresses)
        return registry

    def _single(self, people, addresses, key="address"):
        relation = Relation.single(people, addresses, key)
        relation.add_join_column(people.column("id"), addresses.column("person_id"))
        return relation

    def test_single_embeds_first_match(self, registry, people, addresses):
        registry.add_relation(self._single(people, addresses))

        document = DocumentBuilder(registry).build(people.rows[0])

        assert document["address"] == {"person_id": 1, "city": "Oslo"}

    def test_single_without_match_is_null(self, registry, people, addresses):
        """The key is present with a null value, never omitted."""
        registry.add_relation(self._single(people, addresses))

        document = DocumentBuilder(registry).build(people.rows[1])

        assert "address" in document
        assert document["address"] is None

    def test_array_without_match_is_empty_list(self, registry, people, addresses):
        relation = Relation.array(people, addresses, "addresses")
        relation.add_join_column(people.column("id"), addresses.column("person_id"))
        registry.add_relation(relation)

        document = DocumentBuilder(registry).build(people.rows[1])

        assert document["addresses"] == []

    def test_output_key_colliding_with_column(self, registry, people, addresses):
        """A relation key equal to a column name is suffixed with the entry count."""
        registry.add_relation(self._single(people, addresses, key="name"))

        document = DocumentBuilder(registry).build(people.rows[0])

        assert document["name"] == "ann"
        assert document["name_col3"] == {"person_id": 1, "city": "Oslo"}

    def test_colliding_relation_keys(self, registry, people, addresses):
        """Relations are applied in registration order."""
        first = self._single(people, addresses, key="home")
        second = Relation.array(people, addresses, "home")
        second.add_join_column(people.column("id"), addresses.column("person_id"))
        registry.add_relation(first)
        registry.add_relation(second)

        document = DocumentBuilder(registry).build(people.rows[0])

        assert list(document) == ["id", "name", "home", "home_col4"]
        assert isinstance(document["home"], dict)
        assert len(document["home_col4"]) == 2

    def test_nested_relations(self, registry, people, addresses):
        """Child documents carry their own relations."""
        zips = Table("zips")
        zips.add_column("city")
        zips.add_column("zip")
        zips.add_row(["Oslo", "0150"])
        registry.add_table(zips)

        lives = Relation.array(people, addresses, "addresses")
        lives.add_join_column(people.column("id"), addresses.column("person_id"))
        registry.add_relation(lives)

        zip_code = Relation.single(addresses, zips, "zip")
        zip_code.add_join_column(addresses.column("city"), zips.column("city"))
        registry.add_relation(zip_code)

        document = DocumentBuilder(registry).build(people.rows[0])

        assert document["addresses"] == [
            {"person_id": 1, "city": "Oslo", "zip": {"city": "Oslo", "zip": "0150"}},
            {"person_id": 1, "city": "Bergen", "zip": None},
        ]

    def test_max_depth_stops_cycles(self, people, addresses):
        """Cycles let in by the reverse-only check are cut off by max_depth."""
        registry = RelationRegistry(cycle_check="reverse", max_depth=5)
        groups = Table("groups")
        groups.add_column("person_id")
        groups.add_row([1])
        for table in (people, addresses, groups):
            registry.add_table(table)

        to_address = Relation.array(people, addresses, "addresses")
        to_address.add_join_column(people.column("id"), addresses.column("person_id"))
        to_group = Relation.array(addresses, groups, "groups")
        to_group.add_join_column(addresses.column("person_id"), groups.column("person_id"))
        back = Relation.array(groups, people, "people")
        back.add_join_column(groups.column("person_id"), people.column("id"))
        for relation in (to_address, to_group, back):
            registry.add_relation(relation)

        with pytest.raises(CycleDetectedError):
            registry.resolve(people)
