"""
Unit tests for SourceLoader.

Tests cover:
- loading paginated pages and bare lists
- document__slug aliasing
- missing and malformed files
"""

import json

import pytest

from goblinsheet.sources.loader import SourceLibrary, SourceLoader
from goblinsheet.sources.models import Background, CharacterClass, Species, results_from_payload


def _write(path, payload) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


RACES_PAGE = {
    "count": 1,
    "next": None,
    "results": [
        {
            "slug": "elf",
            "name": "Elf",
            "desc": "## Elf Traits",
            "asi": [{"attributes": ["Dexterity"], "value": 2}],
            "asi_desc": "***Ability Score Increase.*** Your Dexterity score increases by 2.",
            "traits": "***Darkvision.*** You see in the dark.",
            "subraces": [{"slug": "high-elf", "name": "High Elf", "asi": []}],
            "document__slug": "wotc-srd",
            "document__title": "Systems Reference Document",
            "speed": {"walk": 30},
        }
    ],
}


class TestSourceLoader:
    """Test suite for SourceLoader."""

    @pytest.mark.asyncio
    async def test_load_paginated_page(self, tmp_path):
        _write(tmp_path / "species.json", RACES_PAGE)

        records = await SourceLoader(tmp_path).load_records(tmp_path / "species.json", Species)

        assert len(records) == 1
        elf = records[0]
        assert elf.slug == "elf"
        assert elf.document_slug == "wotc-srd"
        assert elf.document_title == "Systems Reference Document"
        assert elf.subspecies("high-elf").name == "High Elf"

    @pytest.mark.asyncio
    async def test_load_bare_list(self, tmp_path):
        _write(
            tmp_path / "classes.json",
            [{"slug": "barbarian", "name": "Barbarian", "hit_dice": "1d12"}],
        )

        records = await SourceLoader(tmp_path).load_records(
            tmp_path / "classes.json", CharacterClass
        )

        assert records[0].hit_die == 12

    @pytest.mark.asyncio
    async def test_load_library(self, tmp_path):
        _write(tmp_path / "species.json", RACES_PAGE)
        _write(
            tmp_path / "backgrounds.json",
            {"results": [{"slug": "acolyte", "name": "Acolyte", "document__slug": "a5e"}]},
        )

        library = await SourceLoader(tmp_path).load_library()

        assert isinstance(library, SourceLibrary)
        assert library.get_species("elf").name == "Elf"
        assert library.get_background("acolyte").document_slug == "a5e"
        # classes.json is missing
        assert library.classes == []
        assert library.get_class("barbarian") is None

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await SourceLoader(tmp_path).load_records(tmp_path / "nope.json", Background)

    @pytest.mark.asyncio
    async def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(ValueError, match="not a file"):
            await SourceLoader(tmp_path).load_records(tmp_path, Background)

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        (tmp_path / "backgrounds.json").write_text("{broken", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid source file"):
            await SourceLoader(tmp_path).load_records(tmp_path / "backgrounds.json", Background)

    @pytest.mark.asyncio
    async def test_record_without_slug(self, tmp_path):
        _write(tmp_path / "backgrounds.json", [{"slug": "", "name": "Nameless"}])

        with pytest.raises(ValueError, match="Invalid source file"):
            await SourceLoader(tmp_path).load_records(tmp_path / "backgrounds.json", Background)

    @pytest.mark.asyncio
    async def test_not_utf8(self, tmp_path):
        (tmp_path / "species.json").write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(UnicodeDecodeError):
            await SourceLoader(tmp_path).load_records(tmp_path / "species.json", Species)


class TestResultsFromPayload:
    def test_page(self):
        assert results_from_payload({"results": [{"slug": "a"}]}) == [{"slug": "a"}]

    def test_list(self):
        assert results_from_payload([]) == []

    def test_other_shapes_rejected(self):
        with pytest.raises(ValueError):
            results_from_payload({"detail": "Not found."})
