"""
JSON file store for the character record and the selection list.

Both documents are read once at startup and rewritten whole on every
change (last write wins), the same contract as browser local storage.
"""

import json
from pathlib import Path

import aiofiles
from pydantic import TypeAdapter, ValidationError

from goblinsheet.character.model import CharacterDetails
from goblinsheet.config.logging import get_logger
from goblinsheet.config.settings import StorageSettings
from goblinsheet.features.base import FeatureOptionsSelection

logger = get_logger(__name__)

_SELECTIONS = TypeAdapter(list[FeatureOptionsSelection])


class CharacterStore:
    """
    Persists one character and its option selections.

    Unreadable or missing files load as defaults (a new level 1 character,
    no selections) so a corrupt save never prevents the sheet from opening.

    Example:
        >>> store = CharacterStore(Path("data/character"))
        >>> character = await store.load_character()
        >>> await store.save_character(character.model_copy(update={"level": 2}))
    """

    def __init__(
        self,
        directory: Path | str,
        character_file: str = "char_sheet_character.json",
        selections_file: str = "char_sheet_selected_optional_features.json",
    ):
        self.directory = Path(directory)
        self.character_path = self.directory / character_file
        self.selections_path = self.directory / selections_file

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "CharacterStore":
        return cls(
            settings.path,
            character_file=settings.character_file,
            selections_file=settings.selections_file,
        )

    async def load_character(self) -> CharacterDetails:
        text = await self._read(self.character_path)
        if text is None:
            return CharacterDetails()
        try:
            return CharacterDetails.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable character file {self.character_path}: {e}")
            return CharacterDetails()

    async def save_character(self, character: CharacterDetails) -> None:
        await self._write(self.character_path, character.model_dump_json(by_alias=True, indent=2))

    async def load_selections(self) -> list[FeatureOptionsSelection]:
        text = await self._read(self.selections_path)
        if text is None:
            return []
        try:
            return _SELECTIONS.validate_json(text)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable selections file {self.selections_path}: {e}")
            return []

    async def save_selections(self, selections: list[FeatureOptionsSelection]) -> None:
        payload = json.dumps([s.model_dump() for s in selections], indent=2)
        await self._write(self.selections_path, payload)

    async def reset(self) -> None:
        """Overwrite both documents with defaults."""
        await self.save_character(CharacterDetails())
        await self.save_selections([])
        logger.info(f"Reset character in {self.directory}")

    async def _read(self, path: Path) -> str | None:
        if not path.exists():
            logger.debug(f"No saved data at {path}, using defaults")
            return None
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}, using defaults: {e}")
            return None

    async def _write(self, path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise IOError(f"Could not save '{path}': {e}") from e
        logger.debug(f"Saved {path}")
