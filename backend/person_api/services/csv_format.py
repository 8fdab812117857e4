"""
Person API: CSV Line Codec
=============================

What:  Pure functions that turn one CSV line into a Person and back.
How:   No I/O and no state besides the fixed color table. PersonStore does
       the reading, writing and locking; this module only knows the format.

Line format:
    LastName, FirstName, ZipCode City, ColorCode

    Müller, Hans, 67742 Lauterecken, 1
    │       │     │     │            └── color code (1-7, see COLOR_NAMES)
    │       │     │     └── city (may contain spaces)
    │       │     └── zip code (first token of the address field)
    │       └── first name
    └── last name

Tolerance rules (a line failing any of them is skipped, not reported):
    - exactly 4 comma-separated fields, each non-empty after trimming
    - the address field has at least 2 space-separated tokens
    - unknown color codes are kept, with the color name "unbekannt"
"""

from typing import Dict, Optional, Tuple

from person_api.models.person import Person

# ── Color Table ───────────────────────────────────────────────────────────
# Codes are stored on disk, names are used in memory and at the API.
COLOR_NAMES: Dict[str, str] = {
    "1": "blau",
    "2": "grün",
    "3": "violett",
    "4": "rot",
    "5": "gelb",
    "6": "türkis",
    "7": "weiß",
}

# Reverse lookup, keyed by lower-cased name
COLOR_CODES: Dict[str, str] = {name.lower(): code for code, name in COLOR_NAMES.items()}

UNKNOWN_COLOR = "unbekannt"

FIELD_SEPARATOR = ","
EXPECTED_FIELDS = 4


def color_name_for_code(code: str) -> str:
    """Maps a color code to its name; unknown codes give "unbekannt"."""
    return COLOR_NAMES.get(code.strip(), UNKNOWN_COLOR)


def color_code_for_name(name: str) -> Optional[str]:
    """
    Reverse lookup: color name → code.

    Matching is case-insensitive on the trimmed name. Returns None when the
    name is not in the table ("unbekannt" included, it has no code).
    """
    return COLOR_CODES.get(name.strip().lower())


def split_address(address: str) -> Optional[Tuple[str, str]]:
    """
    Split a "zip city" address field into (zip_code, city).

    The field is split on single spaces and each token trimmed. The first
    token is the zip code; the rest, joined by one space, is the city.

    Returns None when fewer than 2 tokens exist or either part is empty:
        "67742 Lauterecken"      → ("67742", "Lauterecken")
        "12345 Bad Homburg"      → ("12345", "Bad Homburg")
        "12345"                  → None
    """
    tokens = [token.strip() for token in address.split(" ")]
    if len(tokens) < 2:
        return None

    zip_code = tokens[0]
    city = " ".join(tokens[1:]).strip()
    if not zip_code or not city:
        return None
    return zip_code, city


def parse_line(line_number: int, line: str) -> Optional[Person]:
    """
    Parse one CSV line into a Person whose id is `line_number`.

    Args:
        line_number: 1-based physical position of the line in the file
        line:        Raw line content (trailing newline allowed)

    Returns:
        The parsed Person, or None when the line is blank or malformed.
    """
    if not line.strip():
        return None

    fields = [field.strip() for field in line.split(FIELD_SEPARATOR)]
    if len(fields) != EXPECTED_FIELDS:
        return None
    if any(not field for field in fields):
        return None

    last_name, name, address, color_code = fields

    address_parts = split_address(address)
    if address_parts is None:
        return None
    zip_code, city = address_parts

    return Person(
        id=line_number,
        name=name,
        last_name=last_name,
        zip_code=zip_code,
        city=city,
        color=color_name_for_code(color_code),
    )


def format_line(person: Person, color_code: str) -> str:
    """
    Render a person as one CSV line, without line terminator.

    The color is written as its numeric code, never the name:
        Person(name="John", last_name="Doe", ..., color="rot"), "4"
        → "Doe, John, 12345 Berlin, 4"
    """
    return f"{person.last_name}, {person.name}, {person.zip_code} {person.city}, {color_code}"
