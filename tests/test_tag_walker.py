"""
Unit tests for record type detection and field walking.
"""

from dataclasses import dataclass, field
from typing import Annotated, ClassVar

import pytest
from pydantic import BaseModel, Field

from structtags.errors import InvalidInputError
from structtags.tags.schema import FieldDescriptor, Tag
from structtags.tags.walker import (
    describe_fields,
    is_record_type,
    resolve_record_type,
    walk_type,
)


@dataclass
class DataUser:
    age: int = field(default=0, metadata={"tag": 'json:"age" yaml:"age" default:"23"'})
    name: Annotated[str, Tag('json:"name,omitempty" default:"inhere"')] = ""
    _inner: str = field(default="", metadata={"tag": 'json:"inner"'})
    plain: str = ""


class ModelUser(BaseModel):
    age: int = Field(0, json_schema_extra={"tag": 'json:"age" default:"23"'})
    name: Annotated[str, Tag('json:"name" default:"inhere"')] = ""
    plain: str = ""


class PlainUser:
    kind: ClassVar[str] = "user"
    age: Annotated[int, Tag('json:"age" default:"23"')]
    name: Annotated[str, Tag('json:"name"')]
    _inner: Annotated[str, Tag('json:"inner"')]


class Admin(PlainUser):
    level: Annotated[int, Tag('json:"level"')]


class TestRecordTypeDetection:
    """Test which values are accepted as records."""

    @pytest.mark.parametrize("cls", [DataUser, ModelUser, PlainUser, Admin])
    def test_record_types(self, cls):
        """Test that dataclasses, models and annotated classes are records."""
        assert is_record_type(cls) is True

    @pytest.mark.parametrize("cls", [int, str, list, dict, object, type, BaseModel])
    def test_non_record_types(self, cls):
        """Test that builtins and the model base class are not records."""
        assert is_record_type(cls) is False

    def test_non_class(self):
        """Test that instances are not record types themselves."""
        assert is_record_type(DataUser()) is False

    def test_resolve_instance_and_class(self):
        """Test that an instance resolves to its class."""
        assert resolve_record_type(DataUser()) is DataUser
        assert resolve_record_type(DataUser) is DataUser

    @pytest.mark.parametrize("value", [None, 23, "text", [1, 2], {"a": 1}, int])
    def test_resolve_rejects(self, value):
        """Test that None and non-record values are rejected."""
        with pytest.raises(InvalidInputError):
            resolve_record_type(value)


class TestDescribeFields:
    """Test field descriptions for each kind of record."""

    def test_dataclass_fields(self):
        """Test dataclass metadata and Annotated tags."""
        fields = describe_fields(DataUser)

        assert [f.name for f in fields] == ["age", "name", "_inner", "plain"]
        assert fields[0].raw_tag == 'json:"age" yaml:"age" default:"23"'
        assert fields[1].raw_tag == 'json:"name,omitempty" default:"inhere"'
        assert fields[2].exported is False
        assert fields[3].raw_tag == ""

    def test_model_fields(self):
        """Test pydantic json_schema_extra and Annotated tags."""
        fields = describe_fields(ModelUser)

        assert fields == [
            FieldDescriptor(name="age", exported=True, raw_tag='json:"age" default:"23"'),
            FieldDescriptor(name="name", exported=True, raw_tag='json:"name" default:"inhere"'),
            FieldDescriptor(name="plain", exported=True, raw_tag=""),
        ]

    def test_plain_class_skips_class_vars(self):
        """Test that ClassVar annotations are not fields."""
        names = [f.name for f in describe_fields(PlainUser)]

        assert names == ["age", "name", "_inner"]

    def test_inherited_fields_first(self):
        """Test that base class fields come first in declaration order."""
        names = [f.name for f in describe_fields(Admin)]

        assert names == ["age", "name", "_inner", "level"]

    def test_unresolvable_annotations_fall_back(self):
        """Test that forward references that cannot resolve still yield fields."""

        class Broken:
            ref: "MissingType"
            other: Annotated[int, Tag('json:"other"')]

        fields = describe_fields(Broken)

        assert [f.name for f in fields] == ["ref", "other"]
        assert fields[1].raw_tag == 'json:"other"'


class TestWalkType:
    """Test building per-field tag maps."""

    def test_private_fields_skipped(self):
        """Test that private fields never appear, whatever tags they have."""
        parsed = walk_type(DataUser, ["json", "yaml", "default"])

        assert "_inner" not in parsed
        assert set(parsed) == {"age", "name", "plain"}

    def test_untagged_field_has_empty_map(self):
        """Test that a public field without wanted tags maps to an empty map."""
        parsed = walk_type(DataUser, ["json"])

        assert parsed["plain"] == {}

    def test_raw_values(self):
        """Test that values are the exact raw strings."""
        parsed = walk_type(DataUser, ["json", "yaml", "default"])

        assert parsed["age"] == {"json": "age", "yaml": "age", "default": "23"}
        assert parsed["name"] == {"json": "name,omitempty", "default": "inhere"}

    def test_only_found_tags_are_keys(self):
        """Test that tag names absent from a field are not synthesised."""
        parsed = walk_type(ModelUser, ["json", "toml"])

        for tag_map in parsed.values():
            assert "toml" not in tag_map

    def test_malformed_segment_does_not_fail_walk(self):
        """Test that a bad segment on one field leaves the rest intact."""

        @dataclass
        class Messy:
            a: int = field(default=0, metadata={"tag": 'json:a yaml:"a"'})
            b: int = field(default=0, metadata={"tag": 'json:"b"'})

        parsed = walk_type(Messy, ["json", "yaml"])

        assert parsed == {"a": {"yaml": "a"}, "b": {"json": "b"}}
