"""Launcher for the Textual review UI."""

from typing import Optional

from rich.console import Console

from ..preview.review import ReviewSession

console = Console()


def check_textual():
    """Check if textual is installed."""
    try:
        import textual
        return True
    except ImportError:
        return False


def run_review(session: ReviewSession) -> Optional[str]:
    """Run the review TUI for an already loaded session.

    Returns:
        The new deck id if the user confirmed, otherwise None
    """
    if not check_textual():
        console.print(
            "[red]Review UI requires textual. Install with:[/red]\n"
            "  pip install flashdeck[tui]"
        )
        return None

    # Import here to avoid import errors if textual not installed
    from .review_app import ReviewApp

    app = ReviewApp(session)
    return app.run()
