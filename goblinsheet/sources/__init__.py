"""
Open5e source records and the loader that reads them from disk.

Fetching records over HTTP is out of scope; save the Open5e result pages
(``/v1/races/``, ``/v1/classes/``, ``/v1/backgrounds/``) as JSON files and
point ``SOURCES__DATA_PATH`` at their directory.
"""

from goblinsheet.sources.loader import SourceLibrary, SourceLoader
from goblinsheet.sources.models import Background, CharacterClass, Species, Subspecies

__all__ = [
    "Background",
    "CharacterClass",
    "SourceLibrary",
    "SourceLoader",
    "Species",
    "Subspecies",
]
