"""
Open5e source records.

These mirror the JSON returned by the Open5e ``/v1/races/``, ``/v1/classes/``
and ``/v1/backgrounds/`` endpoints. Only the fields the feature pipeline and
the sheet read are declared; everything else in a payload is ignored.

Open5e names document fields with a double underscore (``document__slug``);
they are exposed here without it (``document_slug``) and accepted under
either name.
"""

from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_DOCUMENT_SLUG = Field(
    default="",
    validation_alias=AliasChoices("document__slug", "document_slug"),
    description="Slug of the rules document this record comes from (e.g. wotc-srd, a5e)",
)
_DOCUMENT_TITLE = Field(
    default="",
    validation_alias=AliasChoices("document__title", "document_title"),
    description="Title of the rules document this record comes from",
)


class SourceRecord(BaseModel):
    """Fields shared by every Open5e record."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    slug: str = Field(min_length=1, description="Machine-readable identifier")
    name: str = Field(description="Display name")
    desc: str = Field(default="", description="Markdown description")
    document_slug: str = _DOCUMENT_SLUG
    document_title: str = _DOCUMENT_TITLE


class ApiAsi(BaseModel):
    """One ability score increase entry, e.g. ``{"attributes": ["Strength"], "value": 2}``."""

    attributes: list[str] = Field(default_factory=list)
    value: int


class Subspecies(SourceRecord):
    """An Open5e subrace."""

    traits: str = Field(default="", description="Markdown trait narrative")
    asi: list[ApiAsi] = Field(default_factory=list)
    asi_desc: str = Field(default="", description="Narrative description of the ASI entries")


class Species(SourceRecord):
    """An Open5e race, with its subraces inline."""

    traits: str = Field(default="", description="Markdown trait narrative")
    asi: list[ApiAsi] = Field(default_factory=list)
    asi_desc: str = Field(default="", description="Narrative description of the ASI entries")
    subraces: list[Subspecies] = Field(default_factory=list)

    def subspecies(self, slug: str) -> Subspecies | None:
        """Return the subrace with ``slug``, only if it belongs to this species."""
        return next((s for s in self.subraces if s.slug == slug), None)


class CharacterClass(SourceRecord):
    """An Open5e class."""

    hit_dice: str = Field(default="", description='Hit die, e.g. "1d12"')
    prof_saving_throws: str = Field(default="", description='e.g. "Strength, Constitution"')
    prof_skills: str = Field(
        default="", description='e.g. "Choose two from Athletics, Stealth and Deception"'
    )

    @property
    def hit_die(self) -> int | None:
        """Number of faces on the class hit die, or None when unparseable."""
        _, _, faces = self.hit_dice.partition("d")
        return int(faces) if faces.strip().isdigit() else None


class Background(SourceRecord):
    """An Open5e background."""

    feature: str = Field(default="", description="Name of the background's primary feature")
    feature_desc: str = Field(default="", description="Description of the primary feature")
    suggested_characteristics: str = Field(default="")
    skill_proficiencies: str | None = Field(default=None)
    tool_proficiencies: str | None = Field(default=None)
    languages: str | None = Field(default=None)


RecordT = TypeVar("RecordT", bound=SourceRecord)


def find_by_slug(records: list[RecordT], slug: str | None) -> RecordT | None:
    """Return the record with ``slug`` from ``records``, or None."""
    if not slug:
        return None
    return next((r for r in records if r.slug == slug), None)


def results_from_payload(payload: Any) -> list[dict[str, Any]]:
    """
    Extract the record list from an Open5e payload.

    Accepts either a paginated page (``{"count": ..., "results": [...]}``)
    or a bare list of records.

    Raises:
        ValueError: If the payload has neither shape
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    raise ValueError("Expected a list of records or an object with a 'results' list")
