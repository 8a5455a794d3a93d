"""
The persisted character record and the numbers derived from it.

Ability score increases and proficiencies come from the feature pipeline
(goblinsheet.features.derivation); this module combines them with the
player-entered base scores and level.
"""

from pydantic import BaseModel, ConfigDict, Field

from goblinsheet.features.base import Ability

DEFAULT_SCORE = 10


def score_to_modifier(score: int) -> int:
    """Ability modifier for a score (10-11 -> +0, 8-9 -> -1, 12-13 -> +1)."""
    return (score - 10) // 2


class AbilityScores(BaseModel):
    """Player-entered base ability scores, before any increases."""

    base_str: int = Field(default=DEFAULT_SCORE, ge=1, le=30)
    base_dex: int = Field(default=DEFAULT_SCORE, ge=1, le=30)
    base_con: int = Field(default=DEFAULT_SCORE, ge=1, le=30)
    base_wis: int = Field(default=DEFAULT_SCORE, ge=1, le=30)
    base_int: int = Field(default=DEFAULT_SCORE, ge=1, le=30)
    base_cha: int = Field(default=DEFAULT_SCORE, ge=1, le=30)

    def base(self, ability: Ability) -> int:
        return getattr(self, base_field(ability))

    def score(self, ability: Ability, deltas: dict[Ability, int] | None = None) -> int:
        """Base score plus the summed increases for ``ability``."""
        return self.base(ability) + (deltas or {}).get(ability, 0)

    def modifier(self, ability: Ability, deltas: dict[Ability, int] | None = None) -> int:
        return score_to_modifier(self.score(ability, deltas))


def base_field(ability: Ability) -> str:
    """Name of the AbilityScores field holding ``ability``'s base score."""
    return f"base_{ability.value[:3].lower()}"


class CharacterDetails(BaseModel):
    """
    The durable character record.

    Source records are referenced by slug; an empty slug means nothing is
    chosen yet.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    name: str = ""
    class_slug: str = Field(default="", alias="class")
    level: int = Field(default=1, ge=1, le=20)
    background: str = ""
    species: str = ""
    subspecies: str = ""
    xp: int = Field(default=0, ge=0)
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)

    @property
    def proficiency_bonus(self) -> int:
        return (self.level - 1) // 4 + 2

    def with_species(self, slug: str) -> "CharacterDetails":
        """Copy with a new species; the subspecies is cleared."""
        return self.model_copy(update={"species": slug, "subspecies": ""})

    def saving_throw_bonus(
        self,
        ability: Ability,
        deltas: dict[Ability, int] | None = None,
        proficient: bool = False,
    ) -> int:
        bonus = self.ability_scores.modifier(ability, deltas)
        if proficient:
            bonus += self.proficiency_bonus
        return bonus

    def max_hp(self, hit_die: int | None, deltas: dict[Ability, int] | None = None) -> int:
        """
        Hit point maximum using fixed hit points per level.

        Maximum hit die at level 1, ``hit_die // 2 + 1`` for each later
        level, plus the Constitution modifier per level. Without a class
        (``hit_die`` is None) only the Constitution part counts.
        """
        con_mod = self.ability_scores.modifier(Ability.CONSTITUTION, deltas)
        base = 0
        if hit_die:
            base = hit_die + (self.level - 1) * (hit_die // 2 + 1)
        return base + con_mod * self.level
