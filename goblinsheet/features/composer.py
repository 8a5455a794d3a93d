"""
Feature composition.

Gathers the parsed features of a character's current species, subspecies,
class and background into one list and drops the ones above the
character's level.
"""

from __future__ import annotations

from goblinsheet.config.logging import get_logger
from goblinsheet.config.settings import Settings
from goblinsheet.features.base import Feature, ParseError
from goblinsheet.parsers import BackgroundParser, ClassParser, SpeciesParser, SubspeciesParser
from goblinsheet.sources.models import Background, CharacterClass, Species, Subspecies

logger = get_logger(__name__)


class FeatureComposer:
    """
    Builds the base (pre-selection) feature list for a character.

    Example::

        composer = FeatureComposer.from_settings(settings)
        features = composer.compose(species=elf, class_=wizard, level=5)
    """

    def __init__(
        self,
        species_parser: SpeciesParser | None = None,
        subspecies_parser: SubspeciesParser | None = None,
        class_parser: ClassParser | None = None,
        background_parser: BackgroundParser | None = None,
    ):
        self.species_parser = species_parser or SpeciesParser()
        self.subspecies_parser = subspecies_parser or SubspeciesParser()
        self.class_parser = class_parser or ClassParser()
        self.background_parser = background_parser or BackgroundParser()

    @classmethod
    def from_settings(cls, settings: Settings) -> FeatureComposer:
        """Create a composer whose parsers follow ``settings.parser`` and ``settings.sources``."""
        strict = settings.parser.strict
        return cls(
            species_parser=SpeciesParser(strict=strict),
            subspecies_parser=SubspeciesParser(strict=strict),
            class_parser=ClassParser(strict=strict),
            background_parser=BackgroundParser(
                strict=strict,
                ambiguous_choice_documents=settings.sources.ambiguous_choice_documents,
            ),
        )

    def compose(
        self,
        species: Species | None = None,
        subspecies: Subspecies | None = None,
        class_: CharacterClass | None = None,
        background: Background | None = None,
        level: int = 1,
    ) -> list[Feature]:
        """
        Concatenate parsed features (species, subspecies, class, background)
        and keep those with ``feature.level <= level``.

        No deduplication is performed.
        """
        features, _ = self.compose_with_errors(species, subspecies, class_, background, level)
        return features

    def compose_with_errors(
        self,
        species: Species | None = None,
        subspecies: Subspecies | None = None,
        class_: CharacterClass | None = None,
        background: Background | None = None,
        level: int = 1,
    ) -> tuple[list[Feature], list[ParseError]]:
        """Like ``compose``, also returning the parse errors of every source."""
        features: list[Feature] = []
        errors: list[ParseError] = []
        sources = [
            (self.species_parser, species),
            (self.subspecies_parser, subspecies),
            (self.class_parser, class_),
            (self.background_parser, background),
        ]
        for parser, record in sources:
            if record is None:
                continue
            parsed, parse_errors = parser.parse_with_errors(record)
            features.extend(parsed)
            errors.extend(parse_errors)

        for error in errors:
            logger.warning(f"Skipped feature in {error.source_slug}: {error.reason}")

        return [f for f in features if f.level <= level], errors


def compose(
    species: Species | None = None,
    subspecies: Subspecies | None = None,
    class_: CharacterClass | None = None,
    background: Background | None = None,
    level: int = 1,
) -> list[Feature]:
    """Compose with default parsers. See ``FeatureComposer.compose``."""
    return FeatureComposer().compose(species, subspecies, class_, background, level)


def current_subspecies(species: Species | None, slug: str | None) -> Subspecies | None:
    """The subspecies named by ``slug``, only if it belongs to ``species``."""
    if species is None or not slug:
        return None
    return species.subspecies(slug)
