"""
Option resolution.

Merges the player's persisted option selections into the composed feature
list. Selections are passed in explicitly; this module keeps no state.

A selection slug is ``"<feature_slug>:<choice_index>"``: an option group
with ``num_choices == 2`` is answered by two selections,
``"class:bard:skill_proficiencies:0"`` and ``"...:1"``.
"""

from goblinsheet.config.logging import get_logger
from goblinsheet.features.base import Feature, FeatureOptions, FeatureOptionsSelection, Option

logger = get_logger(__name__)


def optional_features(base: list[Feature]) -> list[tuple[str, FeatureOptions]]:
    """List ``(feature_slug, FeatureOptions)`` for every option group in ``base``."""
    return [
        (f.feature_slug, f.feature_type.options)
        for f in base
        if isinstance(f.feature_type, Option)
    ]


def choice_slugs(feature: Feature) -> list[str]:
    """The selection slugs that answer an option feature, one per choice."""
    if not isinstance(feature.feature_type, Option):
        return []
    return [
        f"{feature.feature_slug}:{index}"
        for index in range(feature.feature_type.options.num_choices)
    ]


def find_option_group(
    groups: list[tuple[str, FeatureOptions]], selection_slug: str
) -> FeatureOptions | None:
    """
    Find the option group a selection belongs to.

    The group whose slug is the selection slug minus its choice index wins;
    otherwise the first group whose slug is contained in the selection slug.
    """
    group_slug = selection_slug.rsplit(":", 1)[0]
    for slug, options in groups:
        if slug == group_slug:
            return options
    for slug, options in groups:
        if slug in selection_slug:
            return options
    return None


def latest_selections(selections: list[FeatureOptionsSelection]) -> list[FeatureOptionsSelection]:
    """Keep only the last selection for each slug, in order of that last occurrence."""
    seen: set[str] = set()
    latest = []
    for selection in reversed(selections):
        if selection.slug in seen:
            continue
        seen.add(selection.slug)
        latest.append(selection)
    latest.reverse()
    return latest


def resolve(base: list[Feature], selections: list[FeatureOptionsSelection]) -> list[Feature]:
    """
    Produce the active feature list.

    Returns ``base`` followed by the chosen option of every selection whose
    group and index still exist, in selection order. Stale selections (no
    matching group, or an index past the end of the group) are ignored but
    not removed, so they apply again if their group comes back.
    """
    groups = optional_features(base)
    active = list(base)
    for selection in latest_selections(selections):
        options = find_option_group(groups, selection.slug)
        if options is None:
            logger.debug(f"No option group for selection {selection.slug!r}")
            continue
        if selection.selection >= len(options.options):
            logger.debug(
                f"Selection {selection.slug!r} index {selection.selection} is out of range"
            )
            continue
        active.append(options.options[selection.selection])
    return active


def select_option(
    selections: list[FeatureOptionsSelection], slug: str, index: int
) -> list[FeatureOptionsSelection]:
    """
    Record a pick, replacing any earlier pick for the same selection slug.

    Returns a new list; ``selections`` is not modified.
    """
    updated = clear_selection(selections, slug)
    updated.append(FeatureOptionsSelection(slug=slug, selection=index))
    return updated


def clear_selection(
    selections: list[FeatureOptionsSelection], slug: str
) -> list[FeatureOptionsSelection]:
    """Return ``selections`` without any pick for ``slug``."""
    return [s for s in selections if s.slug != slug]
