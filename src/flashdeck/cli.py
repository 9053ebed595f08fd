"""Command-line interface for Flashdeck."""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from . import __version__
from .api import FlashdeckApi, get_api
from .capture import GenerateForm, MediaFile, MicrophoneRecorder
from .capture.input_state import ImageAttached, describe
from .core.config import Config, load_config, MAX_CARDS, MIN_CARDS
from .core.exceptions import FlashdeckError, MissingPreviewError
from .core.models import PreviewResponse
from .preview import PreviewOrchestrator, PreviewStore, ReviewSession
from .study import StudyOutcome, StudySession

# Rich console for enhanced output
console = Console()

logger = logging.getLogger(__name__)


class AppContext:
    """Lazily built services shared by all commands."""

    def __init__(self, config: Config, verbose: bool):
        self.config = config
        self.verbose = verbose
        self._api = None

    @property
    def api(self) -> FlashdeckApi:
        if self._api is None:
            self._api = get_api(self.config.api)
        return self._api

    @property
    def store(self) -> PreviewStore:
        return PreviewStore(self.config.storage.session_dir)

    def orchestrator(self) -> PreviewOrchestrator:
        return PreviewOrchestrator(self.api.ai, self.store)

    def review_session(self) -> ReviewSession:
        return ReviewSession(self.orchestrator(), self.store)


pass_app = click.make_pass_decorator(AppContext)


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"\n[bold red]Error:[/bold red] {error}")
    if verbose:
        console.print_exception()
    sys.exit(1)


def _print_preview(preview: PreviewResponse) -> None:
    console.print(Panel.fit(
        f"[bold]{preview.deck_title}[/bold]\n"
        f"{preview.deck_description}\n\n"
        f"[dim]Session {preview.session_id} · {preview.card_count} cards"
        + (f" · expires {preview.expires_at}" if preview.expires_at else "")
        + "[/dim]",
        title="[bold cyan]AI Preview[/bold cyan]",
        border_style="cyan"
    ))

    table = Table(show_lines=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Front", style="white")
    table.add_column("Back", style="green")
    for i, card in enumerate(preview.cards, 1):
        table.add_row(str(i), card.front, card.back)
    console.print(table)


def _show_deck(api: FlashdeckApi, deck_id: str) -> None:
    deck = api.decks.get_deck(deck_id)
    cards = api.cards.list_cards(deck_id)

    console.print(Panel.fit(
        f"[bold]{deck.title}[/bold]\n{deck.description}",
        title=f"[bold cyan]Deck {deck.id}[/bold cyan]",
        border_style="cyan"
    ))

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Front", style="white")
    table.add_column("Back", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Reviews", justify="right")
    for card in cards:
        table.add_row(card.id, card.front, card.back, card.status.value, str(card.review_count))
    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option('-c', '--config', 'config_path', type=click.Path(exists=True),
              help='Config file path')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Flashdeck - AI flashcard decks from the command line.

    \b
    QUICK START:
        export FLASHDECK_API_TOKEN=...
        flashdeck generate "Photosynthesis basics"
        flashdeck review

    \b
    INTERACTIVE MODES:
        flashdeck wizard    # Step-by-step input capture
        flashdeck review    # Page through a preview, regenerate, confirm
    """
    try:
        cfg = load_config(config_path)
    except FlashdeckError as e:
        _fail(e, verbose)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    ctx.obj = AppContext(cfg, verbose or cfg.verbose)


# ---------------------------------------------------------------------------
# AI generation
# ---------------------------------------------------------------------------

def _capture(
    app: AppContext,
    form: GenerateForm,
    prompt: Optional[str],
    image: Optional[str],
    audio: Optional[str],
    record: bool,
) -> None:
    """Load the requested input into the form, transcribing audio first."""
    if image:
        form.select_image(MediaFile.from_path(image))
    elif audio:
        form.select_audio(MediaFile.from_path(audio))
        with console.status("[cyan]Transcribing audio..."):
            text = form.transcribe_attached_audio()
        console.print(f"[green]✓[/green] Transcript: {text}")
    elif record:
        console.print("[cyan]Listening... speak now, then pause.[/cyan]")
        text = form.record_audio(MicrophoneRecorder(app.config.recording))
        console.print(f"[green]✓[/green] Transcript: {text}")
    elif prompt:
        form.set_prompt(prompt)


def _generate(
    app: AppContext,
    prompt: Optional[str],
    image: Optional[str],
    audio: Optional[str],
    record: bool,
    max_cards: int,
    direct: bool,
) -> Optional[PreviewResponse]:
    form = GenerateForm(app.orchestrator(), app.api.ai, max_cards=max_cards)
    _capture(app, form, prompt, image, audio, record)

    if direct:
        image_media = form.input.media if isinstance(form.input, ImageAttached) else None
        if image_media is None and not form.prompt.strip():
            raise click.UsageError("Enter a prompt or select an image")
        with console.status("[cyan]Generating deck..."):
            deck_id = app.api.ai.generate_deck(
                prompt=None if image_media else form.prompt.strip(),
                image=image_media,
                max_cards=max_cards,
            )
        console.print(f"[bold green]✓ Created deck {deck_id}[/bold green]\n")
        _show_deck(app.api, deck_id)
        return None

    with console.status(f"[cyan]Generating preview from {describe(form.input)}..."):
        preview = form.submit()
    _print_preview(preview)
    return preview


@cli.command()
@click.argument('prompt', required=False)
@click.option('--image', type=click.Path(exists=True, dir_okay=False),
              help='Generate from an image (png, jpeg, webp, heic, heif; max 20MB)')
@click.option('--audio', type=click.Path(exists=True, dir_okay=False),
              help='Transcribe an audio file (wav, mp3, aiff, aac, ogg, flac; max 50MB) '
                   'and generate from the transcript')
@click.option('--record', is_flag=True, help='Record the prompt from the microphone')
@click.option('--max-cards', type=click.IntRange(MIN_CARDS, MAX_CARDS),
              help='Maximum number of cards (default from config: 20)')
@click.option('--direct', is_flag=True, help='Skip the preview and create the deck immediately')
@click.option('--review', 'open_review', is_flag=True, help='Open the review UI afterwards')
@pass_app
def generate(
    app: AppContext,
    prompt: Optional[str],
    image: Optional[str],
    audio: Optional[str],
    record: bool,
    max_cards: Optional[int],
    direct: bool,
    open_review: bool,
):
    """Generate flashcards with AI from a prompt, image, or audio.

    Examples:
        # Preview cards for a topic, then review them
        flashdeck generate "Photosynthesis basics" --review

        # From a photo of your notes
        flashdeck generate --image notes.jpg

        # Speak the prompt
        flashdeck generate --record
    """
    sources = [bool(prompt), bool(image), bool(audio), record]
    if sum(sources) != 1:
        raise click.UsageError("Give exactly one of PROMPT, --image, --audio or --record")

    try:
        preview = _generate(
            app, prompt, image, audio, record,
            max_cards or app.config.generation.max_cards, direct,
        )
    except (FlashdeckError, FileNotFoundError) as e:
        _fail(e, app.verbose)

    if preview is None:
        return

    if open_review:
        _review(app)
    else:
        console.print(
            "\nNext: [cyan]flashdeck review[/cyan] to page through the cards, "
            "[cyan]flashdeck regenerate \"...\"[/cyan] or [cyan]flashdeck confirm[/cyan]"
        )


@cli.command()
@pass_app
def wizard(app: AppContext):
    """Interactive wizard for guided generation.

    Requires: pip install flashdeck[tui]
    """
    from .tui import run_wizard

    result = run_wizard(app.config.generation.max_cards)
    if not result:
        return

    console.print("\n[bold]Starting generation...[/bold]\n")
    source = result["source"]
    try:
        preview = _generate(
            app,
            prompt=result["prompt"],
            image=result["path"] if source == "image" else None,
            audio=result["path"] if source == "audio" else None,
            record=source == "record",
            max_cards=result["max_cards"],
            direct=False,
        )
    except (FlashdeckError, FileNotFoundError) as e:
        _fail(e, app.verbose)

    if preview and Confirm.ask("Open the review UI now?", default=True, console=console):
        _review(app)


@cli.command()
@click.argument('audio', type=click.Path(exists=True, dir_okay=False))
@pass_app
def transcribe(app: AppContext, audio: str):
    """Transcribe an audio file to text."""
    try:
        form = GenerateForm(app.orchestrator(), app.api.ai)
        form.select_audio(MediaFile.from_path(audio))
        with console.status("[cyan]Transcribing audio..."):
            text = form.transcribe_attached_audio()
    except (FlashdeckError, FileNotFoundError) as e:
        _fail(e, app.verbose)

    console.print(text)


# ---------------------------------------------------------------------------
# Preview session
# ---------------------------------------------------------------------------

def _load_session(app: AppContext) -> ReviewSession:
    session = app.review_session()
    try:
        session.load()
    except MissingPreviewError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print(f"  Start with: [cyan]flashdeck {e.redirect_to} \"your topic\"[/cyan]")
        sys.exit(1)
    return session


def _review(app: AppContext) -> None:
    from .tui import run_review

    session = app.review_session()
    try:
        session.load()
    except MissingPreviewError as e:
        console.print(f"[yellow]{e}[/yellow]")
        if Confirm.ask("Start the generate wizard?", default=True, console=console):
            ctx = click.get_current_context()
            ctx.invoke(wizard)
        return

    deck_id = run_review(session)
    if deck_id:
        console.print(f"[bold green]✓ Saved as deck {deck_id}[/bold green]\n")
        try:
            _show_deck(app.api, deck_id)
        except FlashdeckError as e:
            _fail(e, app.verbose)


@cli.command()
@pass_app
def review(app: AppContext):
    """Review the current preview in a full-screen UI.

    Page with the arrow keys, flip with space, send feedback to
    regenerate, or confirm to save the deck.

    Requires: pip install flashdeck[tui]
    """
    _review(app)


@cli.command()
@pass_app
def preview(app: AppContext):
    """Show the current preview session."""
    session = _load_session(app)
    _print_preview(session.preview)


@cli.command()
@click.argument('feedback')
@pass_app
def regenerate(app: AppContext, feedback: str):
    """Regenerate the preview cards using FEEDBACK.

    Example:
        flashdeck regenerate "make it harder"
    """
    session = _load_session(app)
    try:
        with console.status("[cyan]Regenerating cards..."):
            new_preview = session.regenerate(feedback)
    except FlashdeckError as e:
        _fail(e, app.verbose)

    console.print("[green]✓ Cards regenerated[/green]")
    _print_preview(new_preview)


@cli.command()
@pass_app
def confirm(app: AppContext):
    """Save the current preview as a new deck."""
    session = _load_session(app)
    try:
        with console.status("[cyan]Saving deck..."):
            deck_id = session.confirm()
        console.print(f"[bold green]✓ Saved as deck {deck_id}[/bold green]\n")
        _show_deck(app.api, deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)


@cli.command()
@pass_app
def discard(app: AppContext):
    """Drop the current preview without saving it."""
    app.store.clear()
    console.print("[green]✓[/green] Preview discarded")


# ---------------------------------------------------------------------------
# Decks and cards
# ---------------------------------------------------------------------------

@cli.group()
def decks():
    """Manage decks."""
    pass


@decks.command('list')
@pass_app
def decks_list(app: AppContext):
    """List your decks."""
    try:
        items = app.api.decks.list_decks()
    except FlashdeckError as e:
        _fail(e, app.verbose)

    if not items:
        console.print("No decks yet. Try: [cyan]flashdeck generate \"your topic\"[/cyan]")
        return

    table = Table(title="Decks")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Description", style="dim")
    table.add_column("Updated", style="dim")
    for deck in items:
        table.add_row(deck.id, deck.title, deck.description, deck.updated_at or "")
    console.print(table)


@decks.command('show')
@click.argument('deck_id')
@pass_app
def decks_show(app: AppContext, deck_id: str):
    """Show a deck and its cards."""
    try:
        _show_deck(app.api, deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)


@decks.command('create')
@click.option('--title', prompt=True, help='Deck title')
@click.option('--description', prompt=True, default='', help='Deck description')
@pass_app
def decks_create(app: AppContext, title: str, description: str):
    """Create an empty deck."""
    try:
        deck = app.api.decks.create_deck(title, description)
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Created deck [cyan]{deck.id}[/cyan]: {deck.title}")


@decks.command('edit')
@click.argument('deck_id')
@click.option('--title', help='New title')
@click.option('--description', help='New description')
@pass_app
def decks_edit(app: AppContext, deck_id: str, title: Optional[str], description: Optional[str]):
    """Change a deck's title or description."""
    try:
        current = app.api.decks.get_deck(deck_id)
        deck = app.api.decks.update_deck(
            deck_id,
            title if title is not None else current.title,
            description if description is not None else current.description,
        )
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Updated deck [cyan]{deck.id}[/cyan]: {deck.title}")


@decks.command('delete')
@click.argument('deck_id')
@click.confirmation_option(prompt='Delete this deck and all of its cards?')
@pass_app
def decks_delete(app: AppContext, deck_id: str):
    """Delete a deck."""
    try:
        app.api.decks.delete_deck(deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Deleted deck {deck_id}")


@cli.group()
def cards():
    """Manage cards."""
    pass


@cards.command('list')
@click.argument('deck_id')
@pass_app
def cards_list(app: AppContext, deck_id: str):
    """List the cards of a deck."""
    try:
        _show_deck(app.api, deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)


@cards.command('add')
@click.argument('deck_id')
@click.option('--front', prompt=True, help='Front side')
@click.option('--back', prompt=True, help='Back side')
@pass_app
def cards_add(app: AppContext, deck_id: str, front: str, back: str):
    """Add a card to a deck."""
    try:
        card = app.api.cards.create_card(deck_id, front, back)
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Added card [cyan]{card.id}[/cyan]")


@cards.command('edit')
@click.argument('card_id')
@click.option('--front', prompt=True, help='New front side')
@click.option('--back', prompt=True, help='New back side')
@pass_app
def cards_edit(app: AppContext, card_id: str, front: str, back: str):
    """Change a card's front and back."""
    try:
        card = app.api.cards.update_card(card_id, front, back)
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Updated card [cyan]{card.id}[/cyan]")


@cards.command('delete')
@click.argument('card_id')
@click.confirmation_option(prompt='Delete this card?')
@pass_app
def cards_delete(app: AppContext, card_id: str):
    """Delete a card."""
    try:
        app.api.cards.delete_card(card_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)
    console.print(f"[green]✓[/green] Deleted card {card_id}")


# ---------------------------------------------------------------------------
# Study
# ---------------------------------------------------------------------------

@cli.command()
@click.argument('deck_id')
@pass_app
def stats(app: AppContext, deck_id: str):
    """Show study statistics for a deck."""
    try:
        s = app.api.study.get_deck_stats(deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)

    table = Table(title=f"Deck {s.deck_id} Statistics", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Total cards", str(s.total_cards))
    table.add_row("Mastered", f"[green]{s.mastered_cards}[/green]")
    table.add_row("Learning", f"[yellow]{s.learning_cards}[/yellow]")
    table.add_row("New", str(s.new_cards))
    table.add_row("Accuracy", f"{s.accuracy_rate:.1f}%")
    table.add_row("Progress", f"{s.progress_percent:.1f}%")
    table.add_row("Study streak", f"{s.study_streak} days")
    table.add_row("Total study time", f"{s.total_study_time // 60}m {s.total_study_time % 60}s")
    table.add_row("Last studied", s.last_studied_at or "never")
    console.print(table)


ANSWER_CHOICES = {
    "c": StudyOutcome.CORRECT,
    "i": StudyOutcome.INCORRECT,
    "d": StudyOutcome.DONT_KNOW,
}


@cli.command()
@click.argument('deck_id')
@pass_app
def study(app: AppContext, deck_id: str):
    """Study a deck card by card."""
    try:
        deck = app.api.decks.get_deck(deck_id)
        deck_cards = app.api.cards.list_cards(deck_id)
    except FlashdeckError as e:
        _fail(e, app.verbose)

    if not deck_cards:
        console.print("[yellow]No cards to study.[/yellow] This deck doesn't have any cards yet.")
        return

    console.print(Panel.fit(
        f"[bold]Study: {deck.title}[/bold]\n{deck.description}",
        border_style="cyan"
    ))

    session = StudySession(app.api.study, deck_id, deck_cards)
    while True:
        try:
            _study_loop(session)
        except FlashdeckError as e:
            _fail(e, app.verbose)

        summary = session.summary()
        table = Table(title="Study Complete!", show_header=False, box=None)
        table.add_column("Result", style="cyan")
        table.add_column("Count", style="white", justify="right")
        table.add_row("[green]Correct[/green]", str(summary["correct"]))
        table.add_row("[red]Incorrect[/red]", str(summary["incorrect"]))
        table.add_row("[yellow]Don't know[/yellow]", str(summary["dont_know"]))
        table.add_row("[bold]Total[/bold]", str(summary["total"]))
        console.print()
        console.print(table)
        if summary["failed_recordings"]:
            console.print(
                f"[yellow]{summary['failed_recordings']} answer(s) could not be recorded.[/yellow]"
            )

        if not Confirm.ask("Study again?", default=False, console=console):
            break
        session.restart()


def _study_loop(session: StudySession) -> None:
    total = len(session.cards)
    while not session.completed:
        card = session.current_card
        console.print(f"\n[dim]{session.index + 1} / {total}[/dim]")
        console.print(Panel(card.front, title="Front", border_style="white"))
        Prompt.ask("[dim]Press Enter to reveal the answer[/dim]", default="", show_default=False,
                   console=console)

        session.flip()
        console.print(Panel(card.back, title="Back", border_style="green"))
        choice = Prompt.ask(
            "(c)orrect / (i)ncorrect / (d)on't know",
            choices=list(ANSWER_CHOICES),
            console=console,
        )
        session.answer(ANSWER_CHOICES[choice])


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@cli.command()
@click.argument('output_path', type=click.Path())
def init_config(output_path: str):
    """Create a sample configuration file."""
    sample_config = """# Flashdeck Configuration

api:
  base_url: http://localhost:8080   # or set FLASHDECK_API_URL
  # token: ...                      # optional, uses FLASHDECK_API_TOKEN if not set
  timeout: 60                       # seconds per request

generation:
  max_cards: 20                     # 1-100 cards per preview

recording:
  timeout: 10                       # seconds to wait for speech to start
  phrase_time_limit: 60             # stop recording after this many seconds
  # device_index: 0                 # microphone to use, default device if unset

storage:
  session_dir: ~/.cache/flashdeck   # where the current preview is kept

log_level: INFO
"""
    with open(output_path, 'w') as f:
        f.write(sample_config)

    console.print(f"[green]✓[/green] Created config file: [cyan]{output_path}[/cyan]")
    console.print("  Edit this file and run: [dim]flashdeck -c config.yaml generate \"topic\"[/dim]")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
