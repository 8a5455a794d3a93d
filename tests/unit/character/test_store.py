"""
Unit tests for CharacterStore.

Tests cover:
- defaults when nothing has been saved
- save / load of the character and of the selection list
- recovery from unreadable files
"""

import json

import pytest

from goblinsheet.character.model import AbilityScores, CharacterDetails
from goblinsheet.character.store import CharacterStore
from goblinsheet.config.settings import StorageSettings
from goblinsheet.features.base import FeatureOptionsSelection


class TestCharacterStore:
    """Test suite for CharacterStore."""

    @pytest.mark.asyncio
    async def test_defaults_when_missing(self, tmp_path):
        store = CharacterStore(tmp_path)

        assert await store.load_character() == CharacterDetails()
        assert await store.load_selections() == []

    @pytest.mark.asyncio
    async def test_save_and_load_character(self, tmp_path):
        store = CharacterStore(tmp_path)
        character = CharacterDetails(
            name="Grug",
            class_slug="barbarian",
            level=3,
            species="half-orc",
            ability_scores=AbilityScores(base_str=16),
        )

        await store.save_character(character)

        assert await store.load_character() == character

    @pytest.mark.asyncio
    async def test_character_file_uses_class_key(self, tmp_path):
        store = CharacterStore(tmp_path)

        await store.save_character(CharacterDetails(class_slug="bard"))

        saved = json.loads((tmp_path / "char_sheet_character.json").read_text())
        assert saved["class"] == "bard"
        assert saved["ability_scores"]["base_str"] == 10

    @pytest.mark.asyncio
    async def test_save_and_load_selections(self, tmp_path):
        store = CharacterStore(tmp_path)
        selections = [
            FeatureOptionsSelection(slug="class:bard:skill_proficiencies:0", selection=2),
            FeatureOptionsSelection(slug="class:bard:skill_proficiencies:1", selection=0),
        ]

        await store.save_selections(selections)

        assert await store.load_selections() == selections
        saved = json.loads((tmp_path / "char_sheet_selected_optional_features.json").read_text())
        assert saved[0] == {"slug": "class:bard:skill_proficiencies:0", "selection": 2}

    @pytest.mark.asyncio
    async def test_corrupt_files_load_as_defaults(self, tmp_path):
        (tmp_path / "char_sheet_character.json").write_text("{not json")
        (tmp_path / "char_sheet_selected_optional_features.json").write_text('[{"slug": 1}]')
        store = CharacterStore(tmp_path)

        assert await store.load_character() == CharacterDetails()
        assert await store.load_selections() == []

    @pytest.mark.asyncio
    async def test_creates_directory(self, tmp_path):
        store = CharacterStore(tmp_path / "nested" / "dir")

        await store.save_selections([])

        assert (tmp_path / "nested" / "dir" / "char_sheet_selected_optional_features.json").exists()

    @pytest.mark.asyncio
    async def test_reset(self, tmp_path):
        store = CharacterStore(tmp_path)
        await store.save_character(CharacterDetails(name="Grug", level=7))
        await store.save_selections([FeatureOptionsSelection(slug="x:0", selection=1)])

        await store.reset()

        assert await store.load_character() == CharacterDetails()
        assert await store.load_selections() == []

    def test_from_settings(self, tmp_path):
        settings = StorageSettings(
            path=str(tmp_path), character_file="c.json", selections_file="s.json"
        )

        store = CharacterStore.from_settings(settings)

        assert store.character_path == tmp_path / "c.json"
        assert store.selections_path == tmp_path / "s.json"
