"""
Character sheet facade.

Wires the feature pipeline for one character:

    source records --parse/compose--> base features
                   --resolve(selections)--> active features
                   --derive--> ability scores, proficiencies, saves, HP

Every property recomputes from the current inputs; build a new sheet (or
assign new inputs) after the character or selections change. Callers that
need caching should key it on (character, selections).
"""

from pydantic import BaseModel

from goblinsheet.character.model import CharacterDetails
from goblinsheet.features.base import Ability, Feature, FeatureOptions, FeatureOptionsSelection, ParseError
from goblinsheet.features.composer import FeatureComposer, current_subspecies
from goblinsheet.features.derivation import DerivedAttributes, derive_attributes
from goblinsheet.features.resolver import optional_features, resolve
from goblinsheet.sources.loader import SourceLibrary


class AbilityLine(BaseModel):
    """One ability row of the sheet."""

    ability: Ability
    base: int
    score: int
    modifier: int
    saving_throw: int
    save_proficient: bool


class CharacterSheet:
    """
    Computes everything the sheet shows for one character.

    Example::

        sheet = CharacterSheet(library, character, selections)
        for line in sheet.ability_lines():
            print(line.ability.value, line.score, line.modifier)
    """

    def __init__(
        self,
        library: SourceLibrary,
        character: CharacterDetails,
        selections: list[FeatureOptionsSelection] | None = None,
        composer: FeatureComposer | None = None,
    ):
        self.library = library
        self.character = character
        self.selections = list(selections or [])
        self.composer = composer or FeatureComposer()

    def _compose(self) -> tuple[list[Feature], list[ParseError]]:
        species = self.library.get_species(self.character.species)
        return self.composer.compose_with_errors(
            species=species,
            subspecies=current_subspecies(species, self.character.subspecies),
            class_=self.library.get_class(self.character.class_slug),
            background=self.library.get_background(self.character.background),
            level=self.character.level,
        )

    @property
    def base_features(self) -> list[Feature]:
        """Features of the current sources at or below the character's level."""
        return self._compose()[0]

    @property
    def parse_errors(self) -> list[ParseError]:
        return self._compose()[1]

    @property
    def optional_features(self) -> list[tuple[str, FeatureOptions]]:
        return optional_features(self.base_features)

    @property
    def active_features(self) -> list[Feature]:
        """Base features plus the resolved option selections."""
        return resolve(self.base_features, self.selections)

    @property
    def attributes(self) -> DerivedAttributes:
        return derive_attributes(self.active_features)

    @property
    def max_hp(self) -> int:
        character_class = self.library.get_class(self.character.class_slug)
        hit_die = character_class.hit_die if character_class else None
        return self.character.max_hp(hit_die, self.attributes.ability_score_deltas)

    def ability_lines(self) -> list[AbilityLine]:
        """Score, modifier and saving throw for each ability, in sheet order."""
        attributes = self.attributes
        deltas = attributes.ability_score_deltas
        scores = self.character.ability_scores
        lines = []
        for ability in Ability:
            proficient = ability in attributes.saving_throw_proficiencies
            lines.append(
                AbilityLine(
                    ability=ability,
                    base=scores.base(ability),
                    score=scores.score(ability, deltas),
                    modifier=scores.modifier(ability, deltas),
                    saving_throw=self.character.saving_throw_bonus(ability, deltas, proficient),
                    save_proficient=proficient,
                )
            )
        return lines
