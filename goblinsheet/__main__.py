"""
GoblinSheet CLI entry point.

Builds the character sheet from saved Open5e data and the persisted
character, and edits the character and its option selections.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from goblinsheet import __version__
from goblinsheet.character.model import AbilityScores, CharacterDetails, base_field
from goblinsheet.character.sheet import CharacterSheet
from goblinsheet.character.store import CharacterStore
from goblinsheet.config.logging import get_logger, setup_logging
from goblinsheet.config.settings import Settings, load_settings
from goblinsheet.features.base import SOURCE_KINDS, Ability, Feature, Option
from goblinsheet.features.composer import FeatureComposer
from goblinsheet.features.derivation import features_for_display
from goblinsheet.features.resolver import choice_slugs, select_option
from goblinsheet.sources.loader import SourceLibrary, SourceLoader

ABILITY_FIELDS = {ability.value[:3].lower(): ability for ability in Ability}
TEXT_FIELDS = ("name", "class", "species", "subspecies", "background")
INT_FIELDS = ("level", "xp")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="goblinsheet",
        description="D&D 5th edition character sheet built from Open5e data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"GoblinSheet {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("config", help="Show current configuration")

    features_parser = subparsers.add_parser(
        "features",
        help="Show the features parsed from one source record",
    )
    features_parser.add_argument("kind", choices=SOURCE_KINDS, help="Source record kind")
    features_parser.add_argument("slug", help="Source record slug, e.g. barbarian")
    features_parser.add_argument(
        "--level",
        type=int,
        default=20,
        help="Only show features up to this level (default: 20)",
    )
    features_parser.add_argument(
        "--hidden",
        action="store_true",
        help="Also show hidden features (ability score increases, proficiencies)",
    )

    subparsers.add_parser("sheet", help="Show the current character sheet")

    subparsers.add_parser("options", help="List open option choices and their selection slugs")

    select_parser = subparsers.add_parser("select", help="Pick an option for a selection slug")
    select_parser.add_argument(
        "slug",
        help="Selection slug as listed by 'options', e.g. class:bard:skill_proficiencies:0",
    )
    select_parser.add_argument("index", type=int, help="Index of the option to pick")

    set_parser = subparsers.add_parser("set", help="Change a field of the character")
    set_parser.add_argument(
        "field",
        choices=TEXT_FIELDS + INT_FIELDS + tuple(ABILITY_FIELDS),
        help="Field to change; str/dex/con/wis/int/cha set a base ability score",
    )
    set_parser.add_argument("value", help="New value")

    subparsers.add_parser("reset", help="Reset the character and its selections")

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    print("\n=== GoblinSheet Configuration ===\n")
    print(f"Environment: {settings.environment}")
    print(f"Log Level: {settings.log_level}")
    print(f"Log File: {settings.log_file or 'None (console only)'}")
    print(f"\nSource Data Path: {settings.sources.data_path}")
    print(f"Ambiguous Choice Documents: {', '.join(settings.sources.ambiguous_choice_documents)}")
    print(f"Strict Parsing: {settings.parser.strict}")
    print(f"\nStorage Path: {settings.storage.path}")
    return 0


def _find_record(library: SourceLibrary, kind: str, slug: str):
    if kind == "species":
        return library.get_species(slug)
    if kind == "subspecies":
        for species in library.species:
            subspecies = species.subspecies(slug)
            if subspecies is not None:
                return subspecies
        return None
    if kind == "class":
        return library.get_class(slug)
    return library.get_background(slug)


def _print_feature(feature: Feature) -> None:
    flag = " (hidden)" if feature.hidden else ""
    print(f"\n[{feature.level}] {feature.name} <{feature.feature_type.kind}>{flag}")
    if isinstance(feature.feature_type, Option):
        group = feature.feature_type.options
        print(f"    choose {group.num_choices} of: {', '.join(o.name for o in group.options)}")
    if feature.desc:
        for line in feature.desc.strip().splitlines():
            print(f"    {line}")


async def cmd_features(args, settings: Settings) -> int:
    """Parse one source record and print its features."""
    logger = get_logger(__name__)

    library = await SourceLoader(settings.sources.data_path).load_library()
    record = _find_record(library, args.kind, args.slug)
    if record is None:
        logger.error(f"No {args.kind} with slug {args.slug!r} in {settings.sources.data_path}")
        return 1

    composer = FeatureComposer.from_settings(settings)
    parser = {
        "species": composer.species_parser,
        "subspecies": composer.subspecies_parser,
        "class": composer.class_parser,
        "background": composer.background_parser,
    }[args.kind]

    features, errors = parser.parse_with_errors(record)
    shown = [f for f in features if f.level <= args.level and (args.hidden or not f.hidden)]

    print(f"\n=== {record.name} ({args.kind}:{record.slug}) ===")
    for feature in shown:
        _print_feature(feature)
    for error in errors:
        print(f"\nSkipped: {error.reason}", file=sys.stderr)
    return 0


async def _load_sheet(settings: Settings) -> tuple[CharacterSheet, CharacterStore]:
    store = CharacterStore.from_settings(settings.storage)
    library, character, selections = await asyncio.gather(
        SourceLoader(settings.sources.data_path).load_library(),
        store.load_character(),
        store.load_selections(),
    )
    sheet = CharacterSheet(
        library,
        character,
        selections,
        composer=FeatureComposer.from_settings(settings),
    )
    return sheet, store


async def cmd_sheet(settings: Settings) -> int:
    """Print the character sheet."""
    sheet, _ = await _load_sheet(settings)
    character = sheet.character
    attributes = sheet.attributes
    active = sheet.active_features

    print(f"\n=== {character.name or 'Unnamed character'} ===")
    print(
        f"Level {character.level} {character.species or '-'}"
        f"{f' ({character.subspecies})' if character.subspecies else ''} "
        f"{character.class_slug or '-'}, background {character.background or '-'}"
    )
    print(f"Proficiency Bonus: +{character.proficiency_bonus}   Max HP: {sheet.max_hp}")

    print("\n--- Abilities ---")
    for line in sheet.ability_lines():
        marker = "*" if line.save_proficient else " "
        print(
            f"  {line.ability.value:<13} {line.score:>2} ({line.modifier:+d})"
            f"   save {line.saving_throw:+d}{marker}"
        )

    print("\n--- Proficiencies ---")
    print(f"  Skills: {', '.join(attributes.skill_proficiencies) or '-'}")
    print(f"  Other:  {', '.join(attributes.other_proficiencies) or '-'}")

    for kind in SOURCE_KINDS:
        shown = features_for_display(active, kind)
        if not shown:
            continue
        print(f"\n--- {kind.title()} Features ---")
        for feature in shown:
            print(f"  [{feature.level}] {feature.name}")

    for error in sheet.parse_errors:
        print(f"\nSkipped: {error.source_slug}: {error.reason}", file=sys.stderr)
    return 0


async def cmd_options(settings: Settings) -> int:
    """List every open choice with its selection slugs and current pick."""
    sheet, _ = await _load_sheet(settings)
    picked = {s.slug: s.selection for s in sheet.selections}

    groups = [f for f in sheet.base_features if isinstance(f.feature_type, Option)]
    if not groups:
        print("No option choices for the current character.")
        return 0

    for feature in groups:
        options = feature.feature_type.options.options
        print(f"\n=== {feature.name} ({feature.feature_slug}) ===")
        for index, option in enumerate(options):
            print(f"  {index}: {option.name}")
        for slug in choice_slugs(feature):
            choice = picked.get(slug)
            current = options[choice].name if choice is not None and choice < len(options) else "-"
            print(f"  {slug} = {current}")
    return 0


async def cmd_select(args, settings: Settings) -> int:
    """Store a pick for one selection slug."""
    logger = get_logger(__name__)
    sheet, store = await _load_sheet(settings)

    if args.index < 0:
        logger.error("Option index must not be negative")
        return 1
    known = {slug for f in sheet.base_features for slug in choice_slugs(f)}
    if args.slug not in known:
        # Stored anyway: it becomes active once a matching option appears
        logger.warning(f"{args.slug!r} does not match a current option choice")

    await store.save_selections(select_option(sheet.selections, args.slug, args.index))
    logger.info(f"Selected option {args.index} for {args.slug}")
    return 0


def _updated_character(character: CharacterDetails, field: str, value: str) -> CharacterDetails:
    """
    Apply one CLI field change.

    Raises:
        ValueError: If the value is not valid for the field
    """
    if field == "species":
        return character.with_species(value)
    if field in TEXT_FIELDS:
        attribute = "class_slug" if field == "class" else field
        return character.model_validate(
            {**character.model_dump(), attribute: value}
        )
    number = int(value)
    if field in INT_FIELDS:
        return character.model_validate({**character.model_dump(), field: number})
    scores = AbilityScores.model_validate(
        {**character.ability_scores.model_dump(), base_field(ABILITY_FIELDS[field]): number}
    )
    return character.model_copy(update={"ability_scores": scores})


async def cmd_set(args, settings: Settings) -> int:
    """Change one field of the persisted character."""
    logger = get_logger(__name__)
    store = CharacterStore.from_settings(settings.storage)
    character = await store.load_character()

    try:
        character = _updated_character(character, args.field, args.value)
    except ValueError as e:
        logger.error(f"Invalid value for {args.field}: {e}")
        return 1

    await store.save_character(character)
    logger.info(f"Set {args.field} = {args.value}")
    return 0


async def cmd_reset(settings: Settings) -> int:
    await CharacterStore.from_settings(settings.storage).reset()
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)
    logger = get_logger(__name__)

    try:
        if args.command == "config":
            return cmd_config(settings)
        elif args.command == "features":
            return asyncio.run(cmd_features(args, settings))
        elif args.command == "sheet":
            return asyncio.run(cmd_sheet(settings))
        elif args.command == "options":
            return asyncio.run(cmd_options(settings))
        elif args.command == "select":
            return asyncio.run(cmd_select(args, settings))
        elif args.command == "set":
            return asyncio.run(cmd_set(args, settings))
        elif args.command == "reset":
            return asyncio.run(cmd_reset(settings))
        else:
            # Default: show help
            parser.print_help()
            return 0
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
