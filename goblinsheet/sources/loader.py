"""
Source record loader.

Reads saved Open5e result pages from a directory:

    <data_path>/species.json      /v1/races/ page (or a bare list of races)
    <data_path>/classes.json      /v1/classes/ page
    <data_path>/backgrounds.json  /v1/backgrounds/ page

Missing files load as empty lists so a sheet can be built from a partial
data set.
"""

import asyncio
import json
from pathlib import Path
from typing import TypeVar

import aiofiles
from pydantic import BaseModel, Field

from goblinsheet.config.logging import get_logger
from goblinsheet.sources.models import (
    Background,
    CharacterClass,
    SourceRecord,
    Species,
    find_by_slug,
    results_from_payload,
)

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SourceRecord)

SPECIES_FILE = "species.json"
CLASSES_FILE = "classes.json"
BACKGROUNDS_FILE = "backgrounds.json"


class SourceLibrary(BaseModel):
    """All source records available to the sheet."""

    species: list[Species] = Field(default_factory=list)
    classes: list[CharacterClass] = Field(default_factory=list)
    backgrounds: list[Background] = Field(default_factory=list)

    def get_species(self, slug: str | None) -> Species | None:
        return find_by_slug(self.species, slug)

    def get_class(self, slug: str | None) -> CharacterClass | None:
        return find_by_slug(self.classes, slug)

    def get_background(self, slug: str | None) -> Background | None:
        return find_by_slug(self.backgrounds, slug)


class SourceLoader:
    """
    Loads Open5e JSON files into source records.

    Example:
        >>> loader = SourceLoader(Path("data/open5e"))
        >>> library = await loader.load_library()
        >>> library.get_class("barbarian").name
        'Barbarian'
    """

    def __init__(self, data_path: Path | str):
        self.data_path = Path(data_path)

    async def load_library(self) -> SourceLibrary:
        """Load species, classes and backgrounds concurrently."""
        species, classes, backgrounds = await asyncio.gather(
            self.load_optional(SPECIES_FILE, Species),
            self.load_optional(CLASSES_FILE, CharacterClass),
            self.load_optional(BACKGROUNDS_FILE, Background),
        )
        logger.info(
            f"Loaded {len(species)} species, {len(classes)} classes, "
            f"{len(backgrounds)} backgrounds from {self.data_path}"
        )
        return SourceLibrary(species=species, classes=classes, backgrounds=backgrounds)

    async def load_optional(self, file_name: str, model: type[RecordT]) -> list[RecordT]:
        """Like ``load_records``, but a missing file yields an empty list."""
        file_path = self.data_path / file_name
        if not file_path.exists():
            logger.warning(f"Source file not found, skipping: {file_path}")
            return []
        return await self.load_records(file_path, model)

    async def load_records(self, file_path: Path, model: type[RecordT]) -> list[RecordT]:
        """
        Load one JSON file of records.

        Args:
            file_path: Path to the JSON file
            model: Record type to validate each entry as

        Returns:
            Records in file order

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not valid JSON or a record is malformed
            IOError: If file cannot be read
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Source file not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        logger.debug(f"Loading source file: {file_path}")

        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                text = await f.read()

        except UnicodeDecodeError:
            logger.error(f"Failed to decode source file (not UTF-8): {file_path}")
            raise

        except Exception as e:
            logger.error(f"Failed to load source file: {e}")
            raise IOError(f"Could not load source file '{file_path}': {e}") from e

        try:
            entries = results_from_payload(json.loads(text))
            records = [model.model_validate(entry) for entry in entries]
        except ValueError as e:
            # JSONDecodeError and pydantic ValidationError are both ValueErrors
            logger.error(f"Invalid source file {file_path}: {e}")
            raise ValueError(f"Invalid source file '{file_path}': {e}") from e

        logger.debug(f"Loaded {len(records)} {model.__name__} records from {file_path.name}")
        return records
