"""Textual application for reviewing a preview session."""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Input, Label, Static

from ..core.exceptions import FlashdeckError
from ..preview.review import ReviewSession, ReviewState


class DeckInfo(Static):
    """Deck title, description and card count."""

    def show(self, session: ReviewSession) -> None:
        preview = session.preview
        self.update(
            f"[bold]{preview.deck_title}[/bold]\n"
            f"{preview.deck_description}\n"
            f"[dim]Cards: {preview.card_count}[/dim]"
        )


class CardFace(Static):
    """The current card; click to flip."""

    def on_click(self) -> None:
        self.app.action_flip()


class ReviewApp(App):
    """Page through preview cards, regenerate with feedback, or confirm.

    Exits with the new deck id after a successful confirm, or None.
    """

    CSS = """
    Screen {
        padding: 1 2;
    }

    #deck-info {
        border: solid cyan;
        padding: 1;
        height: auto;
    }

    #nav-bar {
        height: auto;
        align: center middle;
        margin: 1 0;
    }

    #position {
        padding: 1 2;
    }

    #card-face {
        border: solid green;
        height: 10;
        content-align: center middle;
        padding: 1;
    }

    #side-label {
        color: gray;
        text-style: italic;
    }

    #controls {
        height: auto;
        margin-top: 1;
    }

    #confirm-btn {
        background: green;
    }

    #status-label {
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("left", "previous", "Previous"),
        Binding("right", "next", "Next"),
        Binding("space", "flip", "Flip"),
        Binding("ctrl+r", "regenerate", "Regenerate"),
        Binding("ctrl+s", "confirm", "Confirm"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, session: ReviewSession):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield DeckInfo(id="deck-info")
        yield Horizontal(
            Button("< Previous", id="prev-btn"),
            Label("", id="position"),
            Button("Next >", id="next-btn"),
            id="nav-bar",
        )
        yield Label("", id="side-label")
        yield CardFace("", id="card-face")
        yield Vertical(
            Label("Feedback for the AI (e.g. make it harder, add examples):"),
            Input(placeholder="Enter feedback...", id="feedback-input"),
            Horizontal(
                Button("Regenerate with feedback", id="regenerate-btn", variant="primary"),
                Button("Confirm these cards", id="confirm-btn", variant="success"),
            ),
            id="controls",
        )
        yield Label("Ready", id="status-label")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Flashdeck"
        self.sub_title = "AI preview"
        self._refresh()

    # -- rendering -----------------------------------------------------

    def _refresh(self) -> None:
        session = self.session
        self.query_one("#deck-info", DeckInfo).show(session)
        self.query_one("#position", Label).update(session.position)
        self.query_one("#side-label", Label).update(
            "Back (click to show front)" if session.flipped else "Front (click to show back)"
        )
        self.query_one("#card-face", CardFace).update(session.current_face)

        busy = session.state in (ReviewState.REGENERATING, ReviewState.CONFIRMING)
        self.query_one("#prev-btn", Button).disabled = busy or not session.can_go_previous
        self.query_one("#next-btn", Button).disabled = busy or not session.can_go_next
        self.query_one("#feedback-input", Input).disabled = busy
        self.query_one("#regenerate-btn", Button).disabled = busy or not session.can_regenerate
        self.query_one("#confirm-btn", Button).disabled = busy or not session.can_confirm

    def _disable_actions(self) -> None:
        """Lock every control until the worker reports back."""
        for widget_id in ("#prev-btn", "#next-btn", "#regenerate-btn", "#confirm-btn"):
            self.query_one(widget_id, Button).disabled = True
        self.query_one("#feedback-input", Input).disabled = True

    def _set_status(self, message: str) -> None:
        self.query_one("#status-label", Label).update(message)

    def _show_error(self) -> None:
        if self.session.state is ReviewState.ERROR:
            self.notify(self.session.error or "Request failed", severity="error")
            self._set_status(f"[red]{self.session.error}[/red]")
            self.session.acknowledge_error()

    # -- events --------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "feedback-input":
            self.session.feedback = event.value
            self._refresh()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "prev-btn": self.action_previous,
            "next-btn": self.action_next,
            "regenerate-btn": self.action_regenerate,
            "confirm-btn": self.action_confirm,
        }
        action = actions.get(event.button.id)
        if action:
            action()

    def action_previous(self) -> None:
        if self.session.previous():
            self._refresh()

    def action_next(self) -> None:
        if self.session.next():
            self._refresh()

    def action_flip(self) -> None:
        self.session.flip()
        self._refresh()

    def action_regenerate(self) -> None:
        if not self.session.feedback.strip():
            self.notify("Please enter feedback", severity="warning")
            return
        if not self.session.can_regenerate:
            return

        # Claimed here, on the UI thread, so a second action sees the session busy
        self.session.begin_regenerate()
        self._disable_actions()
        self._set_status("Regenerating cards...")
        self.run_worker(self._run_regenerate, thread=True, name="regenerate")

    def action_confirm(self) -> None:
        if not self.session.can_confirm:
            return

        self.session.begin_confirm()
        self._disable_actions()
        self._set_status("Saving deck...")
        self.run_worker(self._run_confirm, thread=True, name="confirm")

    # -- workers -------------------------------------------------------

    def _run_regenerate(self) -> None:
        try:
            self.session.finish_regenerate()
        except FlashdeckError:
            self.call_from_thread(self._after_call)
            return

        self.call_from_thread(self._after_regenerate)

    def _after_regenerate(self) -> None:
        self.query_one("#feedback-input", Input).value = ""
        self.notify("Cards regenerated")
        self._set_status("Cards regenerated")
        self._refresh()

    def _run_confirm(self) -> None:
        try:
            deck_id = self.session.finish_confirm()
        except FlashdeckError:
            self.call_from_thread(self._after_call)
            return

        self.call_from_thread(self.exit, deck_id)

    def _after_call(self) -> None:
        self._show_error()
        self._refresh()
