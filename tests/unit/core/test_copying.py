"""Unit tests for copy_matching_fields."""

from enum import IntEnum

from pydantic import BaseModel

from src.catalog.core.utils.copying import copy_matching_fields


class Color(IntEnum):
    RED = 1
    BLUE = 2


class Target(BaseModel):
    name: str = ""
    count: int = 0
    note: str | None = "keep"
    color: Color = Color.RED
    labels: list[str] = []


class Source:
    def __init__(self, **attrs):
        self.__dict__.update(attrs)


class TestCopyMatchingFields:
    """Test field copying between loosely related objects."""

    def test_copies_same_named_compatible_fields(self):
        target = copy_matching_fields(Source(name="box", count=3, labels=["a"]), Target())

        assert target.name == "box"
        assert target.count == 3
        assert target.labels == ["a"]

    def test_skips_type_mismatches(self):
        target = copy_matching_fields(Source(name=42, count="three"), Target())

        assert target.name == ""
        assert target.count == 0

    def test_skips_missing_attributes(self):
        target = copy_matching_fields(Source(unrelated=True), Target(name="x"))

        assert target.name == "x"

    def test_optional_accepts_none(self):
        target = copy_matching_fields(Source(note=None), Target())

        assert target.note is None

    def test_converts_enum_values(self):
        target = copy_matching_fields(Source(color=2), Target())

        assert target.color is Color.BLUE

    def test_skips_unknown_enum_values(self):
        target = copy_matching_fields(Source(color=9), Target())

        assert target.color is Color.RED

    def test_respects_exclude(self):
        target = copy_matching_fields(Source(name="box", count=3), Target(), exclude={"count"})

        assert target.name == "box"
        assert target.count == 0

    def test_reads_mappings(self):
        target = copy_matching_fields({"name": "map", "count": 5}, Target())

        assert (target.name, target.count) == ("map", 5)

    def test_returns_destination(self):
        destination = Target()

        assert copy_matching_fields(Source(), destination) is destination

    def test_skips_bool_for_int_field(self):
        target = copy_matching_fields(Source(count=True), Target(count=4))

        assert target.count == 4
        assert type(target.count) is int

    def test_skips_bool_for_enum_field(self):
        target = copy_matching_fields(Source(color=True), Target(color=Color.BLUE))

        assert target.color is Color.BLUE
