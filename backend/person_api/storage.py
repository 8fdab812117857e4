"""
Person API: Store Lifecycle & Dependency
===========================================

What:  Builds the PersonStore from settings and hands it to route handlers.
How:   The lifespan builds one store per application and keeps it on
       `app.state.person_store`; `get_person_store` is the FastAPI
       dependency that reads it back for each request.
Who:   main.py (build_person_store), routes (Depends(get_person_store)).

Tests can place their own store on `app.state` before the first request;
the lifespan leaves an existing store alone.
"""

import logging
from typing import Optional

from fastapi import Request

from person_api.config import Settings, settings as default_settings
from person_api.exceptions import FileStorageError
from person_api.services.person_store import PersonStore

logger = logging.getLogger(__name__)


def build_person_store(settings: Optional[Settings] = None) -> PersonStore:
    """
    Construct the store from configuration.

    Raises:
        CsvFileNotFoundError: the configured CSV file does not exist.
    """
    cfg = settings or default_settings
    return PersonStore(cfg.csv_file_path, base_dir=cfg.csv_base_dir)


def get_person_store(request: Request) -> PersonStore:
    """FastAPI dependency providing the application's PersonStore."""
    store = getattr(request.app.state, "person_store", None)
    if store is None:
        logger.error("Person store requested before it was initialized")
        raise FileStorageError(message="Person storage is not available.")
    return store
