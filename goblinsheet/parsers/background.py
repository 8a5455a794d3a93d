"""
Background feature parser.

Backgrounds need no narrative parsing: every background yields its
description, its primary feature and its suggested characteristics, plus
hidden proficiency features read from the comma-separated proficiency
fields.
"""

from goblinsheet.config.logging import get_logger
from goblinsheet.features.base import (
    Feature,
    Fluff,
    OtherProficiency,
    ParseError,
    Plain,
    SkillProficiency,
)
from goblinsheet.parsers.base import FeatureParser
from goblinsheet.sources.models import Background

logger = get_logger(__name__)

DEFAULT_AMBIGUOUS_CHOICE_DOCUMENTS = ("a5e",)

NO_TOOLS = "No additional tool proficiencies"
NO_LANGUAGES = "No additional languages"
TOOL_CHOICES = {"Two of your choice": "Two tools of your choice"}
LANGUAGE_CHOICES = {
    "One of your choice": "One language of your choice",
    "Two of your choice": "Two languages of your choice",
}


def split_entries(text: str) -> list[str]:
    return [entry.strip() for entry in text.split(",") if entry.strip()]


class BackgroundParser(FeatureParser[Background]):
    """
    Parser for Open5e backgrounds.

    Some documents (by default ``a5e``) write background proficiencies as
    free-text choices ("Choose one from Deception or Persuasion, and one
    other") that cannot be read as a list. Skill proficiencies are not
    extracted for records from those documents; tools and languages are.
    """

    kind = "background"

    def __init__(
        self,
        strict: bool = False,
        ambiguous_choice_documents: tuple[str, ...] | list[str] = DEFAULT_AMBIGUOUS_CHOICE_DOCUMENTS,
    ):
        super().__init__(strict=strict)
        self.ambiguous_choice_documents = tuple(ambiguous_choice_documents)

    def _parse(self, record: Background, errors: list[ParseError]) -> list[Feature]:
        source_slug = self.source_slug(record)
        features = [
            Feature(
                name=f"{record.name} Description",
                desc=record.desc,
                feature_type=Fluff(),
                source_slug=source_slug,
            ),
            Feature(
                name=record.feature,
                desc=record.feature_desc,
                feature_type=Plain(),
                source_slug=source_slug,
            ),
            Feature(
                name=f"{record.name} Characteristics",
                desc=record.suggested_characteristics,
                feature_type=Fluff(),
                source_slug=source_slug,
            ),
        ]

        if record.document_slug not in self.ambiguous_choice_documents:
            features.extend(self.skill_features(record))
        else:
            logger.debug(f"Not reading skill proficiencies of {source_slug}")
        features.extend(self.tool_features(record))
        features.extend(self.language_features(record))
        return features

    def skill_features(self, record: Background) -> list[Feature]:
        # Entries offering a choice ("Arcana or History") are dropped, not
        # turned into an option group.
        return [
            self._hidden(record, entry, SkillProficiency(name=entry))
            for entry in split_entries(record.skill_proficiencies or "")
            if " or " not in entry
        ]

    def tool_features(self, record: Background) -> list[Feature]:
        if record.tool_proficiencies is None:
            return []
        features = []
        for entry in split_entries(record.tool_proficiencies):
            if entry == NO_TOOLS:
                continue
            entry = TOOL_CHOICES.get(entry, entry)
            features.append(self._hidden(record, entry, OtherProficiency(text=entry)))
        return features

    def language_features(self, record: Background) -> list[Feature]:
        if record.languages is None:
            return []
        text = record.languages.strip()
        features = []
        for entry in split_entries(text):
            if entry == NO_LANGUAGES:
                continue
            entry = LANGUAGE_CHOICES.get(entry, f"Language: {entry}")
            features.append(self._hidden(record, entry, OtherProficiency(text=entry)))
        return features

    def _hidden(self, record: Background, name: str, feature_type) -> Feature:
        return Feature(
            name=name,
            feature_type=feature_type,
            source_slug=self.source_slug(record),
            hidden=True,
        )
