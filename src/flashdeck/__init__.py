"""
Flashdeck - AI flashcard decks from the command line.

Generate provisional decks from a prompt, image, or audio clip, review and
regenerate them with feedback, confirm them into real decks, and study.
"""

__version__ = "0.1.0"
