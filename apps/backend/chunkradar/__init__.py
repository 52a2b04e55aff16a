"""Chunk Radar: phrase flashcards with progress, confidence and streak tracking."""

__version__ = "0.1.0"
