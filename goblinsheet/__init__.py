"""
GoblinSheet - D&D 5th edition character sheet core.

This package turns Open5e source records (species, classes, backgrounds)
into typed character features, resolves the player's optional choices
against them, and derives the character's active attributes.
"""

__version__ = "0.1.0"
