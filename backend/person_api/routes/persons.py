"""
Person API: Persons Route Handlers
=====================================

What:  GET /persons, GET /persons/{id}, GET /persons/color/{color},
       POST /persons.
How:   Each handler calls PersonStore and converts the result; errors are
       raised as application exceptions and rendered by the global handlers
       in main.py.

Status mapping:
    get_all / get_by_color → 200 (a color matching nothing is an empty list)
    get_by_id              → 200, or 404 problem when the store returns None
    add                    → 201 + Location header, or 400 problem
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from person_api.exceptions import NotFoundError
from person_api.schemas.person import CreatePersonRequest, PersonResponse, ProblemResponse
from person_api.services.person_store import PersonStore
from person_api.storage import get_person_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/persons", tags=["Persons"])


@router.get(
    "",
    response_model=List[PersonResponse],
    summary="List all persons",
    description="Returns every person in file order, appended persons last.",
)
async def list_persons(
    store: PersonStore = Depends(get_person_store),
) -> List[PersonResponse]:
    persons = await store.get_all()
    return [PersonResponse.model_validate(person) for person in persons]


@router.get(
    "/{person_id:int}",
    response_model=PersonResponse,
    responses={
        404: {"description": "Person not found", "model": ProblemResponse},
    },
    summary="Get a single person by ID",
)
async def get_person(
    person_id: int,
    store: PersonStore = Depends(get_person_store),
) -> PersonResponse:
    """
    Get one person.

    Args:
        person_id: The person's id (its line number in the CSV file).
                   Non-integer ids match no route and get a 404.
    """
    person = await store.get_by_id(person_id)
    if person is None:
        raise NotFoundError(resource="person", resource_id=str(person_id))
    return PersonResponse.model_validate(person)


@router.get(
    "/color/{color}",
    response_model=List[PersonResponse],
    summary="List persons with a color",
    description=(
        "Returns persons whose color equals the given name, ignoring case and "
        "surrounding whitespace. Unknown colors return an empty list."
    ),
)
async def list_persons_by_color(
    color: str,
    store: PersonStore = Depends(get_person_store),
) -> List[PersonResponse]:
    persons = await store.get_by_color(color)
    return [PersonResponse.model_validate(person) for person in persons]


@router.post(
    "",
    status_code=201,
    response_model=PersonResponse,
    responses={
        201: {"description": "Person created", "model": PersonResponse},
        400: {"description": "Invalid person data", "model": ProblemResponse},
        500: {"description": "CSV file could not be written", "model": ProblemResponse},
    },
    summary="Create a person",
    description=(
        "Appends a person to the CSV file. The color is given by name "
        "(blau, grün, violett, rot, gelb, türkis, weiß) and stored as its code."
    ),
)
async def create_person(
    body: CreatePersonRequest,
    request: Request,
    response: Response,
    store: PersonStore = Depends(get_person_store),
) -> PersonResponse:
    """
    Create a person.

    Returns:
        PersonResponse (HTTP 201) with a Location header for GET /persons/{id}.

    Error responses (handled by global exception handlers):
        HTTP 400: Unknown color (InvalidColorError) or invalid body
        HTTP 500: CSV file could not be written (FileStorageError)
    """
    person = await store.add(body.to_command())
    response.headers["Location"] = str(request.url_for("get_person", person_id=person.id))
    logger.info("Created person %d", person.id)
    return PersonResponse.model_validate(person)
