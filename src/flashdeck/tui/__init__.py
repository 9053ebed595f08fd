"""TUI components for Flashdeck."""

from .wizard import run_wizard
from .review import run_review

__all__ = ["run_wizard", "run_review"]
