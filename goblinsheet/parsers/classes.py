"""
Class feature parser.

Open5e class descriptions are one long markdown document::

    ### Rage

    In battle, you fight with primal ferocity...

    ### Reckless Attack

    Starting at 2nd level, you can throw aside all concern for defense...

Each ``### `` header opens a feature. The level a feature becomes available
is not a structured field: it is read from phrases like "Starting at 2nd
level" in the first paragraph that announces one. A later announcement
inside an already-levelled feature opens a new tier of the same feature
(e.g. a level 1 ability that improves at level 6).

The structured ``prof_skills`` and ``prof_saving_throws`` fields are parsed
separately into a skill choice group and saving throw proficiencies.
"""

import re

from pydantic import BaseModel

from goblinsheet.config.logging import get_logger
from goblinsheet.features.base import (
    Ability,
    Feature,
    FeatureOptions,
    Option,
    ParseError,
    Plain,
    SavingThrow,
    SkillProficiency,
)
from goblinsheet.parsers.base import FeatureParser, split_paragraphs
from goblinsheet.sources.models import CharacterClass

logger = get_logger(__name__)

HEADER_PREFIX = "### "

# Tried in order; the first match wins.
LEVEL_PATTERNS = [
    re.compile(r"At ([0-9]{1,2})[a-zA-Z]{1,2} level"),
    re.compile(r"When you reach ([0-9]{1,2})[a-zA-Z]{1,2} level"),
    re.compile(r"Starting at ([0-9]{1,2})[a-zA-Z]{1,2} level"),
    re.compile(r"By ([0-9]{1,2})[a-zA-Z]{1,2} level"),
    re.compile(r"Beginning at ([0-9]{1,2})[a-zA-Z]{1,2} level"),
    re.compile(r"Beginning when you reach ([0-9]{1,2})[a-zA-Z]{1,2} level"),
]

SKILLS = [
    "Acrobatics",
    "Animal Handling",
    "Arcana",
    "Athletics",
    "Deception",
    "History",
    "Insight",
    "Intimidation",
    "Investigation",
    "Medicine",
    "Nature",
    "Perception",
    "Performance",
    "Persuasion",
    "Religion",
    "Sleight of Hand",
    "Stealth",
    "Survival",
]

ANY_THREE_SKILLS = "Choose any three"
SKILL_CHOICE = re.compile(r"Choose (\w+)(?: skills)? from (.+)", re.DOTALL)
COUNT_WORDS = {"one": 1, "two": 2, "three": 3, "four": 4}

SKILL_CHOICE_FEATURE_NAME = "Skill Proficiencies"


class _PendingFeature(BaseModel):
    """
    Feature being accumulated by the description state machine.

    ``discard`` marks a feature or tier whose level announcement was invalid:
    its paragraphs are dropped until the next valid announcement or header.
    """

    name: str = ""
    level: int | None = None
    desc: str = ""
    discard: bool = False

    def append(self, text: str) -> None:
        if self.desc:
            self.desc += "\n\n"
        self.desc += text


class _LevelAnnouncement(BaseModel):
    level: str
    remainder: str


def find_level_announcement(paragraph: str) -> _LevelAnnouncement | None:
    """
    Find the first level announcement in a paragraph.

    ``remainder`` is the text following the announcement clause when the
    paragraph opens with it ("At 6th level, your rage improves." ->
    "your rage improves."), otherwise the whole paragraph.
    """
    for pattern in LEVEL_PATTERNS:
        match = pattern.search(paragraph)
        if match:
            if match.start() == 0:
                remainder = paragraph[match.end():].lstrip(", ").strip()
            else:
                remainder = paragraph.strip()
            return _LevelAnnouncement(level=match.group(1), remainder=remainder)
    return None


def parse_count_word(word: str) -> int | None:
    """Turn "two" / "Three" / "4" into an int."""
    word = word.lower()
    if word.isdigit():
        return int(word)
    return COUNT_WORDS.get(word)


def split_skill_list(text: str) -> list[str]:
    """Split "Athletics, Stealth and Deception" into skill names."""
    text = text.strip().rstrip(".")
    text = text.replace(", and ", ", ").replace(" and ", ", ")
    return [skill.strip() for skill in text.split(",") if skill.strip()]


class ClassParser(FeatureParser[CharacterClass]):
    """Parser for Open5e classes."""

    kind = "class"

    def _parse(self, record: CharacterClass, errors: list[ParseError]) -> list[Feature]:
        features = self.description_features(record, errors)
        skills = self.skill_choice_feature(record, errors)
        if skills is not None:
            features.append(skills)
        features.extend(self.saving_throw_features(record))
        return features

    def description_features(
        self, record: CharacterClass, errors: list[ParseError]
    ) -> list[Feature]:
        """Run the header / level-announcement state machine over ``record.desc``."""
        features: list[Feature] = []
        current = _PendingFeature()

        def flush() -> None:
            if current.name and not current.discard:
                features.append(
                    Feature(
                        name=current.name,
                        desc=current.desc,
                        level=current.level or 1,
                        feature_type=Plain(),
                        source_slug=self.source_slug(record),
                    )
                )

        def consume(paragraph: str) -> None:
            nonlocal current
            if not paragraph.strip():
                return
            announcement = find_level_announcement(paragraph)
            if announcement is None:
                if not current.discard:
                    current.append(paragraph.strip())
                return

            level = self._valid_level(announcement.level)
            if level is None:
                self._fail(
                    record,
                    f"Feature {current.name!r} announces invalid level {announcement.level!r}",
                    errors,
                )
                # Keep the tiers already read, drop only the bad one
                if current.level is not None:
                    flush()
                current = _PendingFeature(name=current.name, level=current.level, discard=True)
                return

            if current.level is not None or current.discard:
                flush()
                current = _PendingFeature(name=current.name, level=level)
                current.append(announcement.remainder)
            else:
                current.level = level
                current.append(paragraph.strip())

        desc = record.desc.replace("\n \n", "\n\n")
        for paragraph in split_paragraphs(desc):
            if paragraph.startswith(HEADER_PREFIX):
                flush()
                title, _, body = paragraph[len(HEADER_PREFIX):].partition("\n")
                current = _PendingFeature(name=title.strip())
                if body.strip():
                    # Text directly under the header describes the feature as
                    # it is first gained.
                    consume(body)
                    if current.level is None and not current.discard:
                        current.level = 1
            else:
                consume(paragraph)
        flush()

        return sorted(features, key=lambda f: f.level)

    def skill_choice_feature(
        self, record: CharacterClass, errors: list[ParseError]
    ) -> Feature | None:
        """Build the visible skill choice group from ``prof_skills``."""
        text = record.prof_skills.strip()
        if not text:
            return None

        if text.startswith(ANY_THREE_SKILLS):
            num_choices, skills = 3, list(SKILLS)
        else:
            match = SKILL_CHOICE.match(text)
            num_choices = parse_count_word(match.group(1)) if match else None
            if match is None or num_choices is None:
                self._fail(record, f"Unrecognized skill proficiencies {text!r}", errors)
                return None
            skills = split_skill_list(match.group(2))

        options = [
            Feature(
                name=skill,
                feature_type=SkillProficiency(name=skill),
                source_slug=self.source_slug(record),
                hidden=True,
            )
            for skill in skills
        ]
        return Feature(
            name=SKILL_CHOICE_FEATURE_NAME,
            desc=text,
            feature_type=Option(options=FeatureOptions(num_choices=num_choices, options=options)),
            source_slug=self.source_slug(record),
        )

    def saving_throw_features(self, record: CharacterClass) -> list[Feature]:
        """One hidden SavingThrow feature per ability named in ``prof_saving_throws``."""
        features = []
        for token in record.prof_saving_throws.split():
            ability = Ability.from_string(token.rstrip(","))
            if ability is None:
                continue
            features.append(
                Feature(
                    name=f"{ability.value} Saving Throw",
                    feature_type=SavingThrow(ability=ability),
                    source_slug=self.source_slug(record),
                    hidden=True,
                )
            )
        return features

    @staticmethod
    def _valid_level(captured: str) -> int | None:
        try:
            level = int(captured)
        except ValueError:
            return None
        return level if 1 <= level <= 20 else None
