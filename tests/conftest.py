"""Shared Open5e-shaped source records for tests."""

import pytest

from goblinsheet.sources.models import ApiAsi, Background, CharacterClass, Species, Subspecies

BARBARIAN_DESC = (
    "### Rage \n \nIn battle, you fight with primal ferocity.\n\n"
    "On your turn, you can enter a rage as a bonus action.\n\n"
    "### Unarmored Defense \n \nWhile you are not wearing any armor, your AC equals "
    "10 + your Dexterity modifier + your Constitution modifier.\n\n"
    "### Reckless Attack \n \nStarting at 2nd level, you can throw aside all concern "
    "for defense.\n\n"
    "### Extra Attack \n \nBeginning at 5th level, you can attack twice, instead of once.\n\n"
    "### Brutal Critical \n \nBeginning at 9th level, you can roll one additional weapon "
    "damage die.\n\n"
    "At 13th level, this increases to two additional dice."
)


@pytest.fixture
def barbarian() -> CharacterClass:
    return CharacterClass(
        slug="barbarian",
        name="Barbarian",
        desc=BARBARIAN_DESC,
        hit_dice="1d12",
        prof_saving_throws="Strength, Constitution",
        prof_skills=(
            "Choose two from Animal Handling, Athletics, Intimidation, Nature, "
            "Perception, and Survival"
        ),
    )


@pytest.fixture
def high_elf() -> Subspecies:
    return Subspecies(
        slug="high-elf",
        name="High Elf",
        traits="***Elf Weapon Training.*** You have proficiency with the longsword.",
        asi=[ApiAsi(attributes=["Intelligence"], value=1)],
        asi_desc="***Ability Score Increase.*** Your Intelligence score increases by 1.",
    )


@pytest.fixture
def elf(high_elf) -> Species:
    return Species(
        slug="elf",
        name="Elf",
        traits=(
            "**_Darkvision._** Accustomed to twilit forests, you have superior vision.\n\n"
            "***Keen Senses.*** You have proficiency in the Perception skill.\n\n"
            "***Fey Ancestry.*** You have advantage on saving throws against being charmed."
        ),
        asi=[ApiAsi(attributes=["Dexterity"], value=2)],
        asi_desc="***Ability Score Increase.*** Your Dexterity score increases by 2.",
        subraces=[high_elf],
    )


@pytest.fixture
def acolyte() -> Background:
    return Background(
        slug="acolyte",
        name="Acolyte",
        desc="You have spent your life in the service of a temple.",
        feature="Shelter of the Faithful",
        feature_desc="You command the respect of those who share your faith.",
        suggested_characteristics="Acolytes are shaped by their experience in temples.",
        skill_proficiencies="Insight, Religion",
        tool_proficiencies=None,
        languages="Two of your choice",
        document_slug="wotc-srd",
    )
