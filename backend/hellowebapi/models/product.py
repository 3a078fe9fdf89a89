"""
HelloWebAPI Backend — Product Model
====================================

What:  The shape of a catalog entry, as served and as accepted in request bodies.
How:   Pydantic model with PascalCase wire names (`Id`, `Name`, `Category`,
       `Price`); Python code uses snake_case attributes.
Who:   Built by ProductService for the static catalog; validated from request
       bodies by the whole-body binder; written by the media type formatters.

Wire format:
    {"Id": 2, "Name": "Yo-yo", "Category": "Toys", "Price": 3.75}

    Price is held as a Decimal so catalog values stay exact, and written as
    a JSON number. Incoming bodies may use either the wire names or the
    attribute names.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_pascal


class Product(BaseModel):
    """A single product. Instances are immutable."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
    )

    id: int = Field(description="Product identifier (not guaranteed unique)")
    name: str = Field(description="Display name, e.g. 'Hammer'")
    category: str = Field(description="Catalog category, e.g. 'Hardware'")
    price: Decimal = Field(description="Unit price")

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)
