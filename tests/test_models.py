# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for place and outcome models:
# - Field normalization and validation messages
# - Ownership helpers
# - Outcome success/failure classification
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    OutcomeKind,
    Place,
    PlaceFields,
    PlaceList,
    PlaceOutcome,
)


# =============================================================================
# PlaceFields Tests
# =============================================================================

class TestPlaceFields:
    """Tests for PlaceFields model."""

    def test_defaults_are_empty_strings(self):
        """Missing fields become empty strings instead of parse errors."""
        fields = PlaceFields()

        assert fields.name == ""
        assert fields.description == ""
        assert fields.address == ""

    def test_valid_fields(self, cafe_lingo):
        """A name and an address are enough."""
        assert cafe_lingo.validation_errors() == []
        assert cafe_lingo.is_valid

    def test_description_may_be_empty(self):
        fields = PlaceFields(name="Cafe Lingo", address="68 Jay Street")
        assert fields.is_valid

    def test_blank_fields_report_both_errors(self, blank_fields):
        """Empty name and address are both reported."""
        assert blank_fields.validation_errors() == [
            "Name can't be blank",
            "Address can't be blank",
        ]
        assert not blank_fields.is_valid

    def test_whitespace_only_is_blank(self):
        """Surrounding whitespace is stripped before validation."""
        fields = PlaceFields(name="   ", address="\t")

        assert fields.name == ""
        assert fields.address == ""
        assert len(fields.validation_errors()) == 2

    def test_name_and_address_are_trimmed(self):
        fields = PlaceFields(name="  Cafe Lingo ", address=" 68 Jay Street  ")

        assert fields.name == "Cafe Lingo"
        assert fields.address == "68 Jay Street"

    def test_long_values_are_accepted(self):
        fields = PlaceFields(name="x" * 300, address="y" * 600)

        assert len(fields.name) == 300
        assert fields.is_valid

    def test_null_fields_are_blank(self):
        """JSON nulls are treated like missing fields."""
        fields = PlaceFields(name=None, description=None, address=None)

        assert fields.description == ""
        assert fields.validation_errors() == [
            "Name can't be blank",
            "Address can't be blank",
        ]


# =============================================================================
# Place Tests
# =============================================================================

class TestPlace:
    """Tests for Place model."""

    def test_from_supabase_row(self):
        """Rows with string uuids and ISO timestamps parse cleanly."""
        owner = uuid4()
        row = {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Cafe Lingo",
            "description": "Where the cool kids are.",
            "address": "68 Jay Street",
            "owner_id": str(owner),
            "created_at": "2024-01-15T10:30:00+00:00",
            "updated_at": "2024-01-15T10:30:00+00:00",
        }

        place = Place.model_validate(row)

        assert place.id == "550e8400-e29b-41d4-a716-446655440000"
        assert place.owner_id == owner
        assert place.created_at.year == 2024

    def test_uuid_id_becomes_string(self):
        place_id = uuid4()
        place = Place(id=place_id, name="A", address="B", owner_id=uuid4())
        assert place.id == str(place_id)

    def test_is_owned_by(self):
        owner = uuid4()
        place = Place(id="p1", name="A", address="B", owner_id=owner)

        assert place.is_owned_by(owner)
        assert place.is_owned_by(str(owner))
        assert not place.is_owned_by(uuid4())

    def test_fields_prefill_edit_form(self):
        place = Place(id="p1", name="A", description="C", address="B", owner_id=uuid4())
        assert place.fields() == PlaceFields(name="A", description="C", address="B")

    def test_owner_must_be_uuid(self):
        with pytest.raises(ValidationError):
            Place(id="p1", name="A", address="B", owner_id="not-a-uuid")


class TestPlaceList:
    def test_empty_list(self):
        listing = PlaceList()
        assert listing.places == []
        assert listing.total == 0


# =============================================================================
# PlaceOutcome Tests
# =============================================================================

class TestPlaceOutcome:
    """Tests for PlaceOutcome."""

    @pytest.mark.parametrize("kind", [
        OutcomeKind.OK,
        OutcomeKind.FOUND,
        OutcomeKind.CREATED,
        OutcomeKind.UPDATED,
        OutcomeKind.DELETED,
    ])
    def test_success_kinds(self, kind):
        assert PlaceOutcome.of(kind).ok

    @pytest.mark.parametrize("kind", [
        OutcomeKind.UNAUTHENTICATED,
        OutcomeKind.NOT_FOUND,
        OutcomeKind.FORBIDDEN,
        OutcomeKind.VALIDATION_FAILED,
        OutcomeKind.CONFLICT,
    ])
    def test_failure_kinds(self, kind):
        assert not PlaceOutcome.of(kind).ok

    def test_invalid_carries_errors(self):
        outcome = PlaceOutcome.invalid(["Name can't be blank"])

        assert outcome.kind is OutcomeKind.VALIDATION_FAILED
        assert outcome.errors == ["Name can't be blank"]
        assert outcome.place is None

    def test_kind_from_string(self):
        assert OutcomeKind("conflict") == OutcomeKind.CONFLICT
