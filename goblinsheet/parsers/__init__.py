"""
Feature parsers for Open5e source records.

Each parser converts one record into an ordered list of Features:

    SpeciesParser / SubspeciesParser  trait narrative + ability score increases
    ClassParser                       class description, skill choices, saves
    BackgroundParser                  fixed fields + proficiency lists
"""

from goblinsheet.parsers.background import BackgroundParser
from goblinsheet.parsers.base import FeatureParser
from goblinsheet.parsers.classes import ClassParser
from goblinsheet.parsers.species import SpeciesParser, SubspeciesParser

__all__ = [
    "BackgroundParser",
    "ClassParser",
    "FeatureParser",
    "SpeciesParser",
    "SubspeciesParser",
]
