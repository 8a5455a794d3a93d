"""Character record, persistence and the assembled character sheet."""

from goblinsheet.character.model import AbilityScores, CharacterDetails
from goblinsheet.character.sheet import AbilityLine, CharacterSheet
from goblinsheet.character.store import CharacterStore

__all__ = ["AbilityLine", "AbilityScores", "CharacterDetails", "CharacterSheet", "CharacterStore"]
