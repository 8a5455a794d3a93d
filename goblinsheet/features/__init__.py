"""
Character feature model and the composition / resolution / derivation steps.

Parsing lives in goblinsheet.parsers; the composer that ties parsers to a
character is in goblinsheet.features.composer.
"""

from goblinsheet.features.base import (
    Ability,
    Asi,
    Feature,
    FeatureOptions,
    FeatureOptionsSelection,
    FeatureParseError,
    FeatureType,
    Fluff,
    Option,
    OtherProficiency,
    ParseError,
    Plain,
    SavingThrow,
    SkillProficiency,
)
from goblinsheet.features.derivation import DerivedAttributes, derive_attributes
from goblinsheet.features.resolver import resolve, select_option

__all__ = [
    "Ability",
    "Asi",
    "DerivedAttributes",
    "Feature",
    "FeatureOptions",
    "FeatureOptionsSelection",
    "FeatureParseError",
    "FeatureType",
    "Fluff",
    "Option",
    "OtherProficiency",
    "ParseError",
    "Plain",
    "SavingThrow",
    "SkillProficiency",
    "derive_attributes",
    "resolve",
    "select_option",
]
