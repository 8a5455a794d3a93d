"""
Species and subspecies trait parsers.

Open5e trait narratives are paragraphs introduced by a bold-italic title::

    ***Darkvision.*** Accustomed to twilit forests and the night sky...

Some documents write the title as ``**_Darkvision._**`` instead; both forms
are normalized to ``***`` before matching.
"""

import re

from goblinsheet.config.logging import get_logger
from goblinsheet.features.base import Ability, Asi, Feature, Fluff, ParseError
from goblinsheet.parsers.base import FeatureParser, RecordT, split_paragraphs
from goblinsheet.sources.models import Species, Subspecies

logger = get_logger(__name__)

TRAIT_TITLE = re.compile(r"\*\*\*(.+?)\*\*\*(.+)", re.DOTALL)

ASI_FEATURE_NAME = "Ability Score Increase"


def normalize_emphasis(paragraph: str) -> str:
    """Rewrite ``**_Title_**`` emphasis as ``***Title***``."""
    return paragraph.replace("**_", "***").replace("_**", "***")


class TraitParser(FeatureParser[RecordT]):
    """Shared trait-narrative and ASI parsing for species and subspecies."""

    def _parse(self, record: RecordT, errors: list[ParseError]) -> list[Feature]:
        return self.asi_features(record) + self.trait_features(record)

    def asi_features(self, record: RecordT) -> list[Feature]:
        """One hidden Asi feature per recognized ability in each ASI entry."""
        features = []
        for entry in record.asi:
            for attribute in entry.attributes:
                ability = Ability.from_string(attribute)
                if ability is None:
                    logger.debug(
                        f"Ignoring ASI attribute {attribute!r} in {self.source_slug(record)}"
                    )
                    continue
                features.append(
                    Feature(
                        name=ASI_FEATURE_NAME,
                        desc=record.asi_desc,
                        feature_type=Asi(ability=ability, amount=entry.value),
                        source_slug=self.source_slug(record),
                        hidden=True,
                    )
                )
        return features

    def trait_features(self, record: RecordT) -> list[Feature]:
        """Split the trait narrative into one Fluff feature per titled paragraph."""
        features = []
        name, desc = "", ""
        for paragraph in split_paragraphs(record.traits):
            paragraph = normalize_emphasis(paragraph)
            match = TRAIT_TITLE.search(paragraph)
            if match:
                if name:
                    features.append(self._feature(record, name, desc))
                name, desc = match.group(1).strip(), match.group(2).lstrip()
            else:
                desc += paragraph
        if name:
            features.append(self._feature(record, name, desc))
        return features

    def _feature(self, record: RecordT, name: str, desc: str) -> Feature:
        return Feature(name=name, desc=desc, source_slug=self.source_slug(record))


class SpeciesParser(TraitParser[Species]):
    """Parser for Open5e races."""

    kind = "species"


class SubspeciesParser(TraitParser[Subspecies]):
    """Parser for Open5e subraces."""

    kind = "subspecies"
