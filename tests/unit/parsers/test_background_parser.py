"""Unit tests for BackgroundParser."""

from goblinsheet.features.base import Fluff, OtherProficiency, Plain, SkillProficiency
from goblinsheet.parsers.background import BackgroundParser
from goblinsheet.sources.models import Background


def _background(**overrides) -> Background:
    fields = dict(
        slug="sage",
        name="Sage",
        desc="You spent years learning the lore of the multiverse.",
        feature="Researcher",
        feature_desc="You often know where to obtain information.",
        suggested_characteristics="Sages are defined by their extensive studies.",
        skill_proficiencies="Arcana, History",
        tool_proficiencies=None,
        languages=None,
        document_slug="wotc-srd",
    )
    fields.update(overrides)
    return Background(**fields)


class TestNarrativeFeatures:
    def test_three_visible_features(self, acolyte):
        visible = [f for f in BackgroundParser().parse(acolyte) if not f.hidden]

        assert [(f.name, f.feature_type) for f in visible] == [
            ("Acolyte Description", Fluff()),
            ("Shelter of the Faithful", Plain()),
            ("Acolyte Characteristics", Fluff()),
        ]
        assert visible[1].desc == "You command the respect of those who share your faith."

    def test_acolyte_proficiencies(self, acolyte):
        hidden = [f for f in BackgroundParser().parse(acolyte) if f.hidden]

        assert [f.feature_type for f in hidden] == [
            SkillProficiency(name="Insight"),
            SkillProficiency(name="Religion"),
            OtherProficiency(text="Two languages of your choice"),
        ]

    def test_two_skills_and_no_tools_or_languages(self):
        """Background with two skills and nothing else yields five features."""
        features = BackgroundParser().parse(
            _background(
                tool_proficiencies="No additional tool proficiencies",
                languages="No additional languages",
            )
        )

        assert len(features) == 5
        assert [f.name for f in features[3:]] == ["Arcana", "History"]
        assert all(f.source_slug == "background:sage" for f in features)


class TestProficiencies:
    def test_choice_skills_are_dropped(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="Arcana or History, Insight")
        )

        assert [f.name for f in features if f.hidden] == ["Insight"]

    def test_tool_entries(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="", tool_proficiencies="Thieves' tools, Disguise kit")
        )

        assert [f.feature_type for f in features if f.hidden] == [
            OtherProficiency(text="Thieves' tools"),
            OtherProficiency(text="Disguise kit"),
        ]

    def test_tool_choice_is_reworded(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="", tool_proficiencies="Two of your choice")
        )

        assert [f.name for f in features if f.hidden] == ["Two tools of your choice"]

    def test_one_language_choice(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="", languages="One of your choice")
        )

        assert [f.name for f in features if f.hidden] == ["One language of your choice"]

    def test_named_languages(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="", languages="Elvish, Dwarvish")
        )

        assert [f.feature_type for f in features if f.hidden] == [
            OtherProficiency(text="Language: Elvish"),
            OtherProficiency(text="Language: Dwarvish"),
        ]

    def test_language_choice_within_list(self):
        features = BackgroundParser().parse(
            _background(skill_proficiencies="", languages="Elvish, One of your choice")
        )

        assert [f.feature_type for f in features if f.hidden] == [
            OtherProficiency(text="Language: Elvish"),
            OtherProficiency(text="One language of your choice"),
        ]


class TestAmbiguousDocuments:
    """Skill text from some documents is free-form and not read."""

    def test_a5e_background_keeps_tools_and_languages(self):
        features = BackgroundParser().parse(
            _background(
                document_slug="a5e",
                skill_proficiencies="Choose one from Arcana or History, and one other",
                tool_proficiencies="Thieves' tools",
                languages="Elvish",
            )
        )

        assert not any(isinstance(f.feature_type, SkillProficiency) for f in features)
        assert [f.feature_type for f in features if f.hidden] == [
            OtherProficiency(text="Thieves' tools"),
            OtherProficiency(text="Language: Elvish"),
        ]
        assert len([f for f in features if not f.hidden]) == 3

    def test_document_list_is_configurable(self):
        parser = BackgroundParser(ambiguous_choice_documents=["homebrew"])

        assert len(parser.parse(_background(document_slug="a5e"))) == 5
        assert len(parser.parse(_background(document_slug="homebrew"))) == 3
