"""
Person API: Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI docs from them.

JSON field names are camelCase (`lastName`, `zipCode`); Python attributes
stay snake_case. Schemas are kept apart from the domain dataclasses in
models/person.py so the store never depends on Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from person_api.models.person import CreatePersonCommand


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PersonResponse(BaseModel):
    """
    What:  Full representation of one person.
    Who:   Returned by every /persons endpoint (alone or in a list).
    """
    id: int = Field(description="Line number of the record in the CSV file")
    name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    zip_code: str = Field(description="Zip code")
    city: str = Field(description="City, may contain spaces")
    color: str = Field(description="Color name, 'unbekannt' for unknown codes")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreatePersonRequest(BaseModel):
    """
    What:  Body of POST /persons.

    All five fields are required and must contain more than whitespace.
    Whether `color` names a known color is decided by the store, which
    owns the color table.

    Example:
        {"name": "John", "lastName": "Doe", "zipCode": "12345",
         "city": "Berlin", "color": "rot"}
    """
    name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    zip_code: str = Field(description="Zip code")
    city: str = Field(description="City")
    color: str = Field(description="Color name, e.g. 'blau' or 'rot'")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("name", "last_name", "zip_code", "city", "color")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Rejects empty and whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    def to_command(self) -> CreatePersonCommand:
        return CreatePersonCommand(
            name=self.name,
            last_name=self.last_name,
            zip_code=self.zip_code,
            city=self.city,
            color=self.color,
        )


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ProblemResponse(BaseModel):
    """
    What:  Problem details payload (RFC 7807 shape) for every error response.

    Example:
        {
            "type": "about:blank",
            "title": "Person not found",
            "status": 404,
            "detail": "No person with id 999 exists.",
            "instance": "/persons/999",
            "request_id": "a1b2c3d4"
        }
    """
    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(description="Short summary of the problem")
    status: int = Field(description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Explanation of this occurrence")
    instance: Optional[str] = Field(default=None, description="Request path")
    errors: Optional[dict] = Field(default=None, description="Field-level validation errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for container and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="CSV file status: available, missing, not_loaded")
    person_count: int = Field(description="Number of persons held in memory")
    csv_file: Optional[str] = Field(
        default=None, description="Path of the CSV file backing the store"
    )
