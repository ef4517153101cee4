"""
Unit tests for Type descriptors.

Tests cover:
- Construction and validation of descriptors
- safe_parse / parse / is_valid
- Equality predicates
- Identity semantics
"""

import operator

import pytest
from pydantic import TypeAdapter, ValidationError

from semdag import SchemaValidationError, Type, approximately

from .conftest import User


class TestTypeConstruction:
    """Tests for building Types."""

    def test_of_uses_annotation_name(self):
        """Type.of defaults the name to the annotation's name."""
        assert Type.of(int).name == "int"
        assert Type.of(User).name == "User"

    def test_of_with_explicit_name(self, string_type):
        """Explicit name wins."""
        assert string_type.name == "String"
        assert isinstance(string_type.schema, TypeAdapter)
        assert string_type.equals is operator.eq

    def test_empty_name_raises(self):
        """Type name cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            Type(name="", schema=TypeAdapter(str))

    def test_schema_must_be_type_adapter(self):
        """A bare annotation is not a schema."""
        with pytest.raises(TypeError, match="TypeAdapter"):
            Type(name="String", schema=str)

    def test_equals_must_be_callable(self):
        """equals must be callable."""
        with pytest.raises(TypeError, match="callable"):
            Type(name="String", schema=TypeAdapter(str), equals="yes")

    def test_immutable(self, string_type):
        """Types cannot be modified."""
        with pytest.raises(AttributeError):
            string_type.name = "Other"

    def test_identity_equality(self):
        """Separately built Types are different even if they look the same."""
        a = Type.of(str, name="String")
        b = Type.of(str, name="String")
        assert a != b
        assert a == a
        assert len({a, b}) == 2

    def test_repr(self, string_type):
        """repr shows the name only."""
        assert repr(string_type) == "Type('String')"


class TestTypeValidation:
    """Tests for schema validation."""

    def test_safe_parse_accepts(self, string_type, number_type, boolean_type):
        """Valid values parse successfully."""
        assert string_type.safe_parse("hello").success
        assert number_type.safe_parse(123).success
        assert boolean_type.safe_parse(True).success

    def test_safe_parse_rejects(self, string_type, number_type, boolean_type):
        """Invalid values fail without raising."""
        result = string_type.safe_parse(123)
        assert not result.success
        assert isinstance(result.error, ValidationError)
        assert not number_type.safe_parse("hello").success
        assert not boolean_type.safe_parse(123).success

    def test_safe_parse_canonicalizes(self, number_type):
        """Parsing may coerce to the declared shape."""
        result = number_type.safe_parse(3)
        assert result.success
        assert isinstance(result.value, float)

    def test_parse_model(self, user_type):
        """Dicts parse into the model."""
        user = user_type.parse({"id": 1, "name": "Ada"})
        assert user == User(id=1, name="Ada")

    def test_parse_raises_schema_validation_error(self, user_type):
        """parse() raises with flattened errors."""
        with pytest.raises(SchemaValidationError) as exc_info:
            user_type.parse({"id": "not a number"})

        error = exc_info.value
        assert error.type_name == "User"
        assert error.code == "VALIDATION_ERROR"
        assert any(e.startswith("id:") for e in error.errors)
        assert any(e.startswith("name:") for e in error.errors)
        assert isinstance(error.__cause__, ValidationError)

    def test_is_valid(self, string_type):
        """is_valid mirrors safe_parse."""
        assert string_type.is_valid("x")
        assert not string_type.is_valid(None)

    def test_json_schema(self, string_type):
        """JSON schema comes from the adapter."""
        assert string_type.json_schema() == {"type": "string"}


class TestEquality:
    """Tests for equality predicates."""

    def test_default_equality(self, string_type, boolean_type):
        """Default equality is ==."""
        assert string_type.equals("hello", "hello")
        assert not string_type.equals("hello", "world")
        assert boolean_type.equals(True, True)
        assert not boolean_type.equals(True, False)

    def test_approximate_equality(self, number_type):
        """Number equality tolerates rounding noise."""
        assert number_type.equals(1.0, 1.0000000001)
        assert not number_type.equals(1, 2)

    def test_approximately_relative(self):
        """Relative tolerance scales with magnitude."""
        equals = approximately(abs_tol=0.0, rel_tol=1e-3)
        assert equals(1000.0, 1000.5)
        assert not equals(1.0, 1.5)

    def test_custom_equality(self, user_type):
        """Model equality compares fields."""
        assert user_type.equals(User(id=1, name="a"), User(id=1, name="a"))
        assert not user_type.equals(User(id=1, name="a"), User(id=2, name="a"))
