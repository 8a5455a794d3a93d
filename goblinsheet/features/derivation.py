"""
Attribute derivation.

Pure projections of the active feature list. Nothing here is cached: call
again whenever the active list changes.
"""

from collections import defaultdict

from pydantic import BaseModel, Field

from goblinsheet.features.base import (
    Ability,
    Asi,
    Feature,
    OtherProficiency,
    SavingThrow,
    SkillProficiency,
)


def ability_score_deltas(features: list[Feature]) -> dict[Ability, int]:
    """Sum every Asi feature per ability. Abilities without an increase are absent."""
    deltas: dict[Ability, int] = defaultdict(int)
    for feature in features:
        if isinstance(feature.feature_type, Asi):
            deltas[feature.feature_type.ability] += feature.feature_type.amount
    return dict(deltas)


def skill_proficiencies(features: list[Feature]) -> list[str]:
    return [
        f.feature_type.name for f in features if isinstance(f.feature_type, SkillProficiency)
    ]


def saving_throw_proficiencies(features: list[Feature]) -> set[Ability]:
    return {f.feature_type.ability for f in features if isinstance(f.feature_type, SavingThrow)}


def other_proficiencies(features: list[Feature]) -> list[str]:
    return [
        f.feature_type.text for f in features if isinstance(f.feature_type, OtherProficiency)
    ]


class DerivedAttributes(BaseModel):
    """Everything the sheet derives from the active feature list."""

    ability_score_deltas: dict[Ability, int] = Field(default_factory=dict)
    skill_proficiencies: list[str] = Field(default_factory=list)
    saving_throw_proficiencies: set[Ability] = Field(default_factory=set)
    other_proficiencies: list[str] = Field(default_factory=list)


def derive_attributes(features: list[Feature]) -> DerivedAttributes:
    """Run all four projections over ``features``."""
    return DerivedAttributes(
        ability_score_deltas=ability_score_deltas(features),
        skill_proficiencies=skill_proficiencies(features),
        saving_throw_proficiencies=saving_throw_proficiencies(features),
        other_proficiencies=other_proficiencies(features),
    )


def features_for_display(features: list[Feature], kind: str) -> list[Feature]:
    """
    Visible features from one source kind, for tabbed presentation.

    Args:
        features: Active feature list
        kind: "species", "subspecies", "class" or "background"
    """
    return [f for f in features if f.source_kind == kind and not f.hidden]
