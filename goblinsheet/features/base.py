"""
Core data structures for character features.

This module defines the typed feature model shared by every stage of the
feature pipeline (parsers -> composer -> resolver -> derivation):

- Ability: the six ability scores
- FeatureType: closed union of feature kinds (Asi, SavingThrow,
  SkillProficiency, OtherProficiency, Option, Fluff, Plain)
- Feature: one named trait, class ability, or proficiency
- FeatureOptions: a group of candidate features the player picks from
- FeatureOptionsSelection: one persisted pick within an option group
- ParseError: a feature skipped while parsing a source record

Features are pure values recomputed from source records, the character's
level and the selection list. Only the character record and the selection
list are persisted.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

SOURCE_KINDS = ("species", "subspecies", "class", "background")


class Ability(str, Enum):
    """The six ability scores, valued by their display name."""

    STRENGTH = "Strength"
    DEXTERITY = "Dexterity"
    CONSTITUTION = "Constitution"
    WISDOM = "Wisdom"
    INTELLIGENCE = "Intelligence"
    CHARISMA = "Charisma"

    @classmethod
    def from_string(cls, name: str) -> "Ability | None":
        """
        Look up an ability by its full name, ignoring case.

        Returns None for anything that is not one of the six names
        (Open5e uses e.g. "Other" for free-choice increases).
        """
        try:
            return cls(name.strip().title())
        except ValueError:
            return None


class Asi(BaseModel):
    """Ability score increase."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["asi"] = "asi"
    ability: Ability
    amount: int


class SavingThrow(BaseModel):
    """Saving throw proficiency."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["saving_throw"] = "saving_throw"
    ability: Ability


class SkillProficiency(BaseModel):
    """Skill proficiency, by skill name (e.g. "Stealth")."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["skill_proficiency"] = "skill_proficiency"
    name: str


class OtherProficiency(BaseModel):
    """Free-text proficiency: tools, languages and the like."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["other_proficiency"] = "other_proficiency"
    text: str


class Option(BaseModel):
    """A choice the player makes between several candidate features."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["option"] = "option"
    options: "FeatureOptions"


class Fluff(BaseModel):
    """Narrative-only text with no mechanical effect."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fluff"] = "fluff"


class Plain(BaseModel):
    """A described ability with no effect the sheet tracks."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


FeatureType = Annotated[
    Union[Asi, SavingThrow, SkillProficiency, OtherProficiency, Option, Fluff, Plain],
    Field(discriminator="kind"),
]


def slugify(name: str) -> str:
    """Lowercase a feature name and replace spaces with underscores."""
    return name.lower().replace(" ", "_")


class Feature(BaseModel):
    """
    A single character feature.

    Example:
        >>> rage = Feature(
        ...     name="Rage",
        ...     desc="You can enter a rage.",
        ...     level=1,
        ...     feature_type=Plain(),
        ...     source_slug="class:barbarian",
        ... )
        >>> rage.feature_slug
        'class:barbarian:rage'
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Display name")
    desc: str = Field(default="", description="Markdown description")
    level: int = Field(default=1, ge=1, le=20, description="Character level the feature applies from")
    feature_type: FeatureType = Field(default_factory=Fluff, description="What the feature does")
    source_slug: str = Field(description='Origin record, "<kind>:<slug>"')
    hidden: bool = Field(
        default=False,
        description="Excluded from narrative display but still counted when deriving attributes",
    )

    @property
    def feature_slug(self) -> str:
        """Stable identity used to key option selections."""
        return f"{self.source_slug}:{slugify(self.name)}"

    @property
    def source_kind(self) -> str:
        """The ``<kind>`` part of ``source_slug``."""
        return self.source_slug.split(":", 1)[0]


class FeatureOptions(BaseModel):
    """A group of candidate features, ``num_choices`` of which may be picked."""

    model_config = ConfigDict(frozen=True)

    num_choices: int = Field(default=1, ge=0, description="How many options the player picks")
    options: list[Feature] = Field(default_factory=list, description="Candidates, in source order")


class FeatureOptionsSelection(BaseModel):
    """
    One persisted pick.

    ``slug`` is ``"<feature_slug>:<choice_index>"`` so that a group offering
    several simultaneous picks stores one selection per pick.
    """

    slug: str = Field(description="Compound selection slug")
    selection: int = Field(ge=0, description="Index into the option group's options")


class ParseError(BaseModel):
    """A feature that was skipped because its source text was malformed."""

    model_config = ConfigDict(frozen=True)

    source_slug: str
    reason: str


class FeatureParseError(ValueError):
    """Raised by parsers in strict mode instead of recording a ParseError."""

    def __init__(self, error: ParseError):
        super().__init__(f"{error.source_slug}: {error.reason}")
        self.error = error


Option.model_rebuild()
Feature.model_rebuild()
FeatureOptions.model_rebuild()
