"""
HelloWebAPI Backend — Author Model
===================================

What:  Data-shape declaration for an author record.
Who:   Not served by any route; kept as the one model carrying a
       required-field constraint.

Validation:
    `Name` is required and must contain at least one non-whitespace
    character. `AuthorId` defaults to 0 when omitted.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class Author(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    author_id: int = Field(default=0, description="Author identifier")
    name: str = Field(description="Author name (required)")

    @field_validator("name")
    @classmethod
    def validate_name_required(cls, v: str) -> str:
        """Rejects empty and whitespace-only names."""
        if not v.strip():
            raise ValueError("The Name field is required.")
        return v
