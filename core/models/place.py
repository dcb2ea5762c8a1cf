# =============================================================================
# core/models/place.py - Place Schemas
# =============================================================================
# These models define the contract for place operations:
# - PlaceFields: Input for creating/updating a place (and uniqueness checks)
# - Place: A stored place, as returned by the Place Store
# - PlaceList: Output of the index endpoint
#
# A place is a user-submitted venue. Its owner is the user who created it,
# and (owner_id, name, address) is unique among one owner's places.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PlaceFields(BaseModel):
    """
    Editable fields of a place.

    Every field defaults to an empty string so that a missing field is
    reported by `validation_errors()` rather than by request parsing.
    A null field counts as empty. Surrounding whitespace is stripped from
    name and address.

    Example:
        {
            "name": "Cafe Lingo",
            "description": "Where the cool kids are.",
            "address": "68 Jay Street, Suite 720, Brooklyn 11201"
        }
    """

    name: str = Field(
        default="",
        description="Display name of the venue"
    )

    description: str = Field(
        default="",
        description="Free-form description (may be empty)"
    )

    address: str = Field(
        default="",
        description="Street address of the venue"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Cafe Lingo",
                    "description": "Where the cool kids are.",
                    "address": "68 Jay Street, Suite 720, Brooklyn 11201",
                },
            ]
        }
    }

    @field_validator("name", "description", "address", mode="before")
    @classmethod
    def _blank_if_null(cls, value):
        return "" if value is None else value

    @field_validator("name", "address", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    def validation_errors(self) -> list[str]:
        """
        Return human-readable messages for every invalid field.

        An empty list means the fields are valid.
        """
        errors = []
        if not self.name:
            errors.append("Name can't be blank")
        if not self.address:
            errors.append("Address can't be blank")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()


class Place(BaseModel):
    """
    A stored place.

    `id` is assigned by the store and never changes afterwards.
    """

    id: str = Field(
        ...,
        description="Opaque place identifier assigned by the store"
    )

    name: str
    description: str = ""
    address: str

    owner_id: UUID = Field(
        ...,
        description="ID of the user who created the place"
    )

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        # Supabase returns uuid columns as strings, the memory store as UUIDs
        return str(value) if isinstance(value, UUID) else value

    def is_owned_by(self, user_id: UUID | str) -> bool:
        """Check whether `user_id` created this place."""
        return str(self.owner_id) == str(user_id)

    def fields(self) -> PlaceFields:
        """Return the editable fields, e.g. to pre-fill an edit form."""
        return PlaceFields(
            name=self.name,
            description=self.description,
            address=self.address,
        )


class PlaceList(BaseModel):
    """
    Schema for listing places.

    Returned by the index endpoint.
    """

    places: list[Place] = Field(
        default_factory=list,
        description="All places, oldest first"
    )

    total: int = Field(
        default=0,
        ge=0,
        description="Number of places"
    )
