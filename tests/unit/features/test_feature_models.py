"""Unit tests for the feature data model."""

import pytest
from pydantic import TypeAdapter, ValidationError

from goblinsheet.features.base import (
    Ability,
    Asi,
    Feature,
    FeatureOptions,
    FeatureOptionsSelection,
    FeatureParseError,
    Fluff,
    Option,
    ParseError,
    Plain,
    SkillProficiency,
    slugify,
)


class TestAbility:
    @pytest.mark.parametrize("name", ["Strength", "strength", "STRENGTH", " Strength "])
    def test_from_string_ignores_case(self, name):
        assert Ability.from_string(name) is Ability.STRENGTH

    @pytest.mark.parametrize("name", ["Other", "", "Str"])
    def test_from_string_unknown(self, name):
        assert Ability.from_string(name) is None

    def test_declaration_order(self):
        assert [a.value for a in Ability] == [
            "Strength",
            "Dexterity",
            "Constitution",
            "Wisdom",
            "Intelligence",
            "Charisma",
        ]


class TestFeature:
    def test_feature_slug(self):
        feature = Feature(name="Unarmored Defense", source_slug="class:barbarian")

        assert feature.feature_slug == "class:barbarian:unarmored_defense"
        assert feature.source_kind == "class"

    def test_defaults(self):
        feature = Feature(name="Darkvision", source_slug="species:elf")

        assert feature.level == 1
        assert feature.desc == ""
        assert feature.feature_type == Fluff()
        assert feature.hidden is False

    @pytest.mark.parametrize("level", [0, 21])
    def test_level_out_of_range(self, level):
        with pytest.raises(ValidationError):
            Feature(name="Rage", level=level, source_slug="class:barbarian")

    def test_frozen(self):
        feature = Feature(name="Rage", source_slug="class:barbarian")

        with pytest.raises(ValidationError):
            feature.level = 3

    def test_feature_type_discriminated_by_kind(self):
        """Feature types round-trip through plain dicts by their ``kind`` tag."""
        feature = Feature.model_validate(
            {
                "name": "Skill Proficiencies",
                "source_slug": "class:bard",
                "feature_type": {
                    "kind": "option",
                    "options": {
                        "num_choices": 1,
                        "options": [
                            {
                                "name": "Stealth",
                                "source_slug": "class:bard",
                                "hidden": True,
                                "feature_type": {"kind": "skill_proficiency", "name": "Stealth"},
                            }
                        ],
                    },
                },
            }
        )

        assert isinstance(feature.feature_type, Option)
        option = feature.feature_type.options.options[0]
        assert option.feature_type == SkillProficiency(name="Stealth")

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Feature.model_validate(
                {"name": "X", "source_slug": "class:x", "feature_type": {"kind": "spell"}}
            )

    def test_plain_kind_tag(self):
        assert Plain().kind == "none"
        assert Asi(ability=Ability.WISDOM, amount=1).kind == "asi"


class TestFeatureOptions:
    def test_negative_choices_rejected(self):
        with pytest.raises(ValidationError):
            FeatureOptions(num_choices=-1)

    def test_selection_index_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            FeatureOptionsSelection(slug="class:bard:skill_proficiencies:0", selection=-1)

    def test_selection_list_from_json(self):
        selections = TypeAdapter(list[FeatureOptionsSelection]).validate_json(
            '[{"slug": "class:bard:skill_proficiencies:0", "selection": 2}]'
        )

        assert selections == [
            FeatureOptionsSelection(slug="class:bard:skill_proficiencies:0", selection=2)
        ]


def test_slugify():
    assert slugify("Keen Senses.") == "keen_senses."


def test_feature_parse_error_carries_error():
    error = ParseError(source_slug="class:barbarian", reason="bad level")

    exc = FeatureParseError(error)

    assert exc.error is error
    assert str(exc) == "class:barbarian: bad level"
    assert isinstance(exc, ValueError)
