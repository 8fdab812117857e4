"""
Person API: CSV-Backed Person Store
======================================

What:  Loads persons from a CSV file, answers read queries from memory, and
       appends new persons to both the file and memory.
How:   The whole file is parsed once in the constructor. Reads scan the
       in-memory list. Appends run under one asyncio.Lock per store and use
       aiofiles so the event loop keeps serving reads during disk I/O.
Who:   Built once by the app lifespan; injected into routes via Depends().

Append sequence (lock held throughout):
    ┌──────────┐   ┌───────────────┐   ┌──────────────┐   ┌──────────────┐
    │ resolve  │──▶│ count lines   │──▶│ append line  │──▶│ append to    │
    │ color    │   │ next id = n+1 │   │ to the file  │   │ memory       │
    └──────────┘   └───────────────┘   └──────────────┘   └──────────────┘
         │                 │                   │
         └─ InvalidColorError / FileStorageError: nothing mutated, lock released

Identifiers:
    A loaded record's id is the physical line number it came from, blank and
    malformed lines included. An appended record's id is the file's current
    line count + 1, counted from disk on every append rather than cached.

Concurrency:
    - Reads never take the lock; they see the list before or after an append,
      and records are frozen, so a reader never sees half a record.
    - Only one append is in flight per store. The lock is process-local;
      other processes writing the same file are not coordinated with.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import aiofiles

from person_api.exceptions import CsvFileNotFoundError, FileStorageError, InvalidColorError
from person_api.models.person import CreatePersonCommand, Person
from person_api.services import csv_format

logger = logging.getLogger(__name__)

# Reads tolerate a BOM written by spreadsheet tools; writes never add one
READ_ENCODING = "utf-8-sig"
WRITE_ENCODING = "utf-8"
# Undecodable bytes become U+FFFD, so one bad line cannot fail a whole read
READ_ERRORS = "replace"


def resolve_file_path(file_path: Union[str, Path], base_dir: Union[str, Path, None] = None) -> Path:
    """Absolute paths are returned as-is; relative ones are joined onto base_dir."""
    path = Path(file_path)
    if path.is_absolute() or base_dir is None:
        return path
    return Path(base_dir) / path


class PersonStore:
    """
    Repository of persons backed by one CSV file.

    Operations:
        get_all()          → every record, in file/append order
        get_by_id(id)      → the record or None
        get_by_color(name) → records with that color (case-insensitive)
        add(command)       → appends and returns the new record

    Raises at construction:
        CsvFileNotFoundError if the file does not exist. Nothing is loaded
        partially: the store either exists fully loaded or not at all.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        base_dir: Union[str, Path, None] = None,
    ):
        self.file_path = resolve_file_path(file_path, base_dir)
        self._lock = asyncio.Lock()
        self._persons: List[Person] = self._load()
        self._ensure_trailing_newline()
        logger.info(
            "PersonStore initialized with %d persons from %s",
            len(self._persons),
            self.file_path,
        )

    # ── Loading ───────────────────────────────────────────────────────────

    def _load(self) -> List[Person]:
        if not self.file_path.is_file():
            raise CsvFileNotFoundError(str(self.file_path))

        persons: List[Person] = []
        skipped = 0
        with open(self.file_path, "r", encoding=READ_ENCODING, errors=READ_ERRORS) as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                person = csv_format.parse_line(line_number, line)
                if person is None:
                    skipped += 1
                    logger.debug("Skipping malformed line %d in %s", line_number, self.file_path)
                    continue
                persons.append(person)

        if skipped:
            logger.info("Skipped %d malformed line(s) in %s", skipped, self.file_path)
        return persons

    def _ensure_trailing_newline(self) -> None:
        """Terminate the last line so the next append starts on a fresh line."""
        with open(self.file_path, "rb+") as f:
            f.seek(0, 2)
            if f.tell() == 0:
                return
            f.seek(-1, 2)
            if f.read(1) == b"\n":
                return
            f.seek(0, 2)
            f.write(b"\n")
        logger.debug("Appended missing trailing newline to %s", self.file_path)

    # ── Reads ─────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._persons)

    async def get_all(self) -> Tuple[Person, ...]:
        return tuple(self._persons)

    async def get_by_id(self, person_id: int) -> Optional[Person]:
        return next((person for person in self._persons if person.id == person_id), None)

    async def get_by_color(self, color: str) -> Tuple[Person, ...]:
        """
        Records whose color equals `color`, trimmed and compared case-insensitively.

        An empty or unknown color is not an error; it simply matches nothing.
        """
        wanted = color.strip().lower()
        if not wanted:
            return ()
        return tuple(person for person in self._persons if person.color.lower() == wanted)

    # ── Append ────────────────────────────────────────────────────────────

    async def add(self, command: CreatePersonCommand) -> Person:
        """
        Append a new person to the file and to memory.

        Returns:
            The stored Person with its assigned id.

        Raises:
            InvalidColorError: command.color is not a known color name.
            FileStorageError:  counting or appending to the file failed.

        A caller cancelled while waiting for the lock leaves no trace. Once
        the lock is held the append is shielded and always runs to the end.
        """
        await self._lock.acquire()
        append = asyncio.ensure_future(self._append_locked(command))
        append.add_done_callback(self._consume_append_result)
        return await asyncio.shield(append)

    def _consume_append_result(self, append: "asyncio.Future[Person]") -> None:
        # the caller may be gone by now; fetch the error so it is not lost
        if append.cancelled():
            return
        exc = append.exception()
        if exc is not None:
            logger.debug(
                "Append to %s ended with %s: %s", self.file_path, type(exc).__name__, exc
            )

    async def _append_locked(self, command: CreatePersonCommand) -> Person:
        # caller must hold self._lock; released here on every path
        try:
            color_code = csv_format.color_code_for_name(command.color)
            if color_code is None:
                raise InvalidColorError(
                    command.color,
                    allowed=list(csv_format.COLOR_NAMES.values()),
                )

            try:
                next_id = await self._count_lines() + 1
                person = Person(
                    id=next_id,
                    name=command.name.strip(),
                    last_name=command.last_name.strip(),
                    zip_code=command.zip_code.strip(),
                    city=command.city.strip(),
                    color=command.color.strip(),
                )
                await self._append_line(csv_format.format_line(person, color_code))
            except OSError as e:
                logger.error("Failed to append to %s: %s", self.file_path, str(e))
                raise FileStorageError(
                    message="Failed to save the person. Please try again.",
                    context={"path": str(self.file_path), "os_error": str(e)},
                )

            self._persons.append(person)
            logger.info("Person %d appended to %s", person.id, self.file_path)
            return person
        finally:
            self._lock.release()

    async def _count_lines(self) -> int:
        count = 0
        async with aiofiles.open(
            self.file_path, "r", encoding=READ_ENCODING, errors=READ_ERRORS
        ) as f:
            async for _ in f:
                count += 1
        return count

    async def _append_line(self, line: str) -> None:
        async with aiofiles.open(self.file_path, "a", encoding=WRITE_ENCODING, newline="\n") as f:
            await f.write(line + "\n")
