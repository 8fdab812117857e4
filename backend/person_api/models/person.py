"""
Person API: Domain Models
============================

What:  In-memory record types held and produced by PersonStore.
How:   Frozen dataclasses. A record handed to a reader can never change
       underneath it, so readers racing an append see whole records only.
Who:   Created by the CSV loader and by PersonStore.add(); serialized by
       the PersonResponse schema.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Person:
    """
    One parsed or appended person.

    Attributes:
        id:         1-based physical line number of the record in the CSV file
        name:       First name
        last_name:  Last name
        zip_code:   First token of the address field
        city:       Remaining address tokens joined with single spaces
        color:      Color name (never the numeric code)
    """
    id: int
    name: str
    last_name: str
    zip_code: str
    city: str
    color: str


@dataclass(frozen=True)
class CreatePersonCommand:
    """Input for PersonStore.add(); `color` is a color name such as "rot"."""
    name: str
    last_name: str
    zip_code: str
    city: str
    color: str
