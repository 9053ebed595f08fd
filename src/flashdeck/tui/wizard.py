"""Interactive wizard for capturing generation input."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..capture.media import EXTENSION_MIME_TYPES, MEDIA_LIMITS, MediaKind
from ..core.config import DEFAULT_MAX_CARDS, MAX_CARDS, MIN_CARDS

console = Console()


def check_questionary():
    """Check if questionary is installed."""
    try:
        import questionary
        return True
    except ImportError:
        return False


def run_wizard(default_max_cards: int = DEFAULT_MAX_CARDS) -> Optional[dict]:
    """Ask for one input (prompt, image, audio file, or live recording).

    Returns:
        Dict with ``source`` ("prompt", "image", "audio" or "record"), the
        matching ``prompt`` / ``path``, and ``max_cards``; None if cancelled
    """
    if not check_questionary():
        console.print(
            "[red]Wizard requires questionary. Install with:[/red]\n"
            "  pip install flashdeck[tui]"
        )
        return None

    import questionary
    from questionary import Style

    custom_style = Style([
        ('qmark', 'fg:cyan bold'),
        ('question', 'fg:white bold'),
        ('answer', 'fg:green'),
        ('pointer', 'fg:cyan bold'),
        ('highlighted', 'fg:cyan'),
        ('selected', 'fg:green'),
    ])

    console.print(Panel.fit(
        "[bold cyan]Flashdeck Wizard[/bold cyan]\n"
        "Generate a deck with AI, review it, then save it",
        border_style="cyan"
    ))
    console.print()

    # Step 1: What to generate from
    sources = [
        {"name": "Text prompt (what do you want to learn?)", "value": "prompt"},
        {"name": "Image (png, jpeg, webp, heic; max 20MB)", "value": "image"},
        {"name": "Audio file (transcribed into a prompt; max 50MB)", "value": "audio"},
        {"name": "Record from microphone", "value": "record"},
    ]

    source = questionary.select(
        "Generate cards from:",
        choices=[questionary.Choice(s["name"], value=s["value"]) for s in sources],
        style=custom_style,
    ).ask()

    if not source:
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    result = {"source": source, "prompt": None, "path": None}

    # Step 2: The input itself
    if source == "prompt":
        prompt = questionary.text(
            "What do you want to learn?",
            style=custom_style,
            validate=lambda x: bool(x.strip()) or "Prompt cannot be empty",
        ).ask()
        if not prompt:
            return None
        result["prompt"] = prompt.strip()
        console.print(f"  [green]✓[/green] Prompt: {result['prompt']}")

    elif source in ("image", "audio"):
        kind = MediaKind(source)
        path = questionary.path(
            f"Select {source} file:",
            style=custom_style,
            validate=lambda p: _validate_media_path(p, kind),
        ).ask()
        if not path:
            return None
        result["path"] = path
        console.print(f"  [green]✓[/green] {source.capitalize()}: {path}")

    else:
        console.print("  [dim]Recording starts after the summary; speak, then pause.[/dim]")

    # Step 3: Card count
    max_cards_str = questionary.text(
        f"Maximum number of cards ({MIN_CARDS}-{MAX_CARDS}):",
        style=custom_style,
        default=str(default_max_cards),
        validate=_validate_max_cards,
    ).ask()
    result["max_cards"] = int(max_cards_str) if max_cards_str else default_max_cards

    # Summary
    console.print()
    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Source", source)
    if result["prompt"]:
        table.add_row("Prompt", result["prompt"])
    if result["path"]:
        table.add_row("File", result["path"])
    table.add_row("Max cards", str(result["max_cards"]))
    console.print(table)
    console.print()

    proceed = questionary.confirm(
        "Generate preview?",
        style=custom_style,
        default=True,
    ).ask()

    if not proceed:
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    return result


def _validate_media_path(value: str, kind: MediaKind) -> bool | str:
    """Validate a media path before it is read."""
    path = Path(value)
    if not path.is_file():
        return "File not found"
    mime = EXTENSION_MIME_TYPES.get(path.suffix.lower())
    if mime not in MEDIA_LIMITS[kind]["types"]:
        return f"Unsupported {kind.value} type: {path.suffix or 'no extension'}"
    if path.stat().st_size > MEDIA_LIMITS[kind]["max_size"]:
        return f"File is too large (max {MEDIA_LIMITS[kind]['max_size'] // (1024 * 1024)}MB)"
    return True


def _validate_max_cards(value: str) -> bool | str:
    """Validate max cards input."""
    if not value.isdigit():
        return "Must be a whole number"
    if not MIN_CARDS <= int(value) <= MAX_CARDS:
        return f"Must be between {MIN_CARDS} and {MAX_CARDS}"
    return True
