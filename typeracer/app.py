from __future__ import annotations

import logging
from typing import Dict, List, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen, Screen
from textual.widgets import OptionList, Static

from .attempt import Attempt
from .categories import Categories
from .config import Settings
from .history import HistoryLog, HistoryRecord
from .improvement import get_improvement

logger = logging.getLogger(__name__)

TYPE_MODE = "type"
COMMAND_MODE = "command"


# ---------------------------
# Rendering helpers
# ---------------------------

def clip_parts(parts: List[str], skip: int) -> List[str]:
    """Drop the first ``skip`` characters, keeping every span in place."""
    out: List[str] = []
    for part in parts:
        cut = min(skip, len(part))
        out.append(part[cut:])
        skip -= cut
    return out


def render_parts(parts: List[str], palette: Dict[str, str]) -> Text:
    text = Text()
    last = len(parts) - 1
    for i, part in enumerate(parts):
        if i == last:
            if part:
                text.append(part[0], style=palette["current"])
                text.append(part[1:], style=palette["upcoming"])
        elif i % 2 == 0:
            text.append(part, style=f"bold {palette['ok']}")
        else:
            text.append(part, style=palette["bad"])
    return text


def _fmt(value: Optional[float], scale: float = 1.0) -> str:
    return f"{(value or 0.0) * scale:.2f}"


def render_info(attempt: Attempt, palette: Dict[str, str], rows: Optional[int] = None) -> Text:
    text = Text()
    for label, value in (
        ("Accuracy", _fmt(attempt.get_accuracy(), 100.0) + "%"),
        ("WPM", _fmt(attempt.get_wpm())),
        ("CPM", _fmt(attempt.get_cpm())),
    ):
        text.append(f"  {label}: ", style=palette["muted"])
        text.append(f"{value}\n", style=f"bold {palette['title']}")

    text.append("  Slowest letters:  Most error letters:\n", style=palette["muted"])
    pairs = list(zip(attempt.slowest_letters(rows), attempt.most_error_letters(rows)))
    for (slow, seconds), (wrong, errors) in pairs:
        text.append(f"  {slow!r} - {seconds * 1000:.0f} ms".ljust(20), style=palette["upcoming"])
        text.append(f"  {wrong!r} - {errors}\n", style=palette["upcoming"])
    return text


def summary_status(attempt: Attempt, record: Optional[HistoryRecord]) -> str:
    if record is None:
        if attempt.typed:
            return "Run too short to measure, not saved. "
        return "Nothing typed, run not saved. "
    if not attempt.saved:
        return "Could not save the run. "
    return "Run saved! "


def render_plot(series: Optional[List[int]], height: int, palette: Dict[str, str]) -> Text:
    text = Text()
    if series is None:
        text.append("No improvement data found\n", style=palette["muted"])
        return text
    text.append("Improvement: \n", style=f"bold {palette['title']}")
    top = max(height - 2, 0)
    for level in range(top, -1, -1):
        row = "".join("*" if point == level else " " for point in series)
        text.append(row.rstrip() + "\n", style=palette["plot"])
    return text


# ---------------------------
# Widgets
# ---------------------------

class TextPane(Static):
    """The practice text, coloured by correctness."""


class InfoPane(Static):
    """Live metrics and letter rankings."""


class HelpBar(Static):
    """Mode and key hints."""


# ---------------------------
# Screens
# ---------------------------

class CategoryMenu(ModalScreen):
    """Pick a category; dismisses with its index, or None."""

    BINDINGS = [("escape", "cancel", "Back")]

    def __init__(self, names: List[str]) -> None:
        super().__init__()
        self.names = names

    def compose(self) -> ComposeResult:
        yield Static("Press Up and Down to choose an option. Press Enter to make a selection.")
        yield OptionList(*self.names)

    def on_mount(self) -> None:
        self.query_one(OptionList).highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option_index)

    def action_cancel(self) -> None:
        self.dismiss(None)


class SummaryScreen(Screen):
    BINDINGS = [("q", "close", "Back")]

    def __init__(self, attempt: Attempt, record: Optional[HistoryRecord], palette: Dict[str, str]) -> None:
        super().__init__()
        self.attempt = attempt
        self.record = record
        self.palette = palette

    def compose(self) -> ComposeResult:
        text = Text()
        text.append(summary_status(self.attempt, self.record), style=f"bold {self.palette['hint']}")
        text.append("Press q to go back to typing.\n\n", style=self.palette["hint"])
        text.append_text(render_info(self.attempt, self.palette))
        yield Static(text)

    def action_close(self) -> None:
        self.dismiss(None)


class ImprovementScreen(Screen):
    BINDINGS = [("q", "close", "Back"), ("escape", "close", "Back")]

    def __init__(self, history: HistoryLog, palette: Dict[str, str]) -> None:
        super().__init__()
        self.history = history
        self.palette = palette
        self.series: Optional[List[int]] = None

    def compose(self) -> ComposeResult:
        yield Static(id="plot")

    def on_mount(self) -> None:
        self.redraw()

    def on_resize(self, event: events.Resize) -> None:
        self.redraw()

    def redraw(self) -> None:
        width, height = self.size.width, self.size.height
        self.series = None
        if width > 0 and height > 1:
            self.series = get_improvement(self.history, width, height - 2)
        self.query_one("#plot", Static).update(render_plot(self.series, height, self.palette))

    def action_close(self) -> None:
        self.dismiss(None)


# ---------------------------
# App
# ---------------------------

class TypingTUI(App):
    CSS = """
    Screen {
        background: transparent;
    }

    #main {
        height: 1fr;
    }

    TextPane {
        width: 2fr;
        height: 100%;
        padding: 1 2;
        overflow: hidden;
    }

    InfoPane {
        width: 1fr;
        height: 100%;
        padding: 1 1;
    }

    HelpBar {
        height: 1;
        padding: 0 2;
    }

    CategoryMenu {
        align: center middle;
    }

    CategoryMenu OptionList {
        width: 60;
        max-height: 20;
    }
    """

    TITLE = "typeracer"

    def __init__(self, settings: Settings, categories: Categories, history: HistoryLog) -> None:
        super().__init__()
        self.settings = settings
        self.categories = categories
        self.history = history
        self.palette = settings.palette
        self.current_category = settings.category
        self.ui_mode = TYPE_MODE
        self.window_start = 0
        self.attempt = Attempt(categories.get_text(self.current_category), history=history)

    def compose(self) -> ComposeResult:
        with Horizontal(id="main"):
            self.text_pane = TextPane()
            self.info_pane = InfoPane()
            yield self.text_pane
            yield self.info_pane
        self.help_bar = HelpBar()
        yield self.help_bar

    def on_mount(self) -> None:
        self._render_all()
        self.set_interval(0.5, self._render_info)

    def new_attempt(self, category: Optional[str] = None) -> None:
        if category is not None:
            self.current_category = category
        self.attempt = Attempt(self.categories.get_text(self.current_category), history=self.history)
        self.window_start = 0
        self.ui_mode = TYPE_MODE
        logger.info("new attempt from %r (%d characters)", self.current_category, len(self.attempt.target))
        self._render_all()

    def end_run(self) -> None:
        record = self.attempt.end_run()
        self.push_screen(
            SummaryScreen(self.attempt, record, self.palette),
            lambda _: self.new_attempt(),
        )

    # input

    def on_key(self, event: events.Key) -> None:
        if len(self.screen_stack) > 1:
            return
        if self.ui_mode == TYPE_MODE:
            self._type_key(event)
        else:
            self._command_key(event)

    def _type_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.ui_mode = COMMAND_MODE
            self._render_help()
            return
        if event.key == "backspace":
            self.attempt.delete_char()
        elif event.key == "enter":
            self.attempt.type_char("\n")
        elif event.is_printable and event.character:
            self.attempt.type_char(event.character)
        else:
            return
        event.stop()
        self._render_text()
        self._render_info()
        if self.attempt.is_complete():
            self.end_run()

    def _command_key(self, event: events.Key) -> None:
        key = event.character
        if key == "i":
            self.ui_mode = TYPE_MODE
            self._render_help()
        elif key == "q":
            self.exit()
        elif key == "c":
            names = self.categories.get_categories()
            if names:
                self.push_screen(CategoryMenu(names), lambda idx: self._choose_category(names, idx))
        elif key == "t":
            self.push_screen(ImprovementScreen(self.history, self.palette), lambda _: self._back_to_typing())
        elif key == "e":
            self.end_run()

    def _choose_category(self, names: List[str], idx: Optional[int]) -> None:
        if idx is None:
            self._back_to_typing()
            return
        self.new_attempt(names[idx])

    def _back_to_typing(self) -> None:
        self.ui_mode = TYPE_MODE
        self._render_help()

    # rendering

    def _render_all(self) -> None:
        self._render_text()
        self._render_info()
        self._render_help()

    def _render_text(self) -> None:
        size = self.text_pane.size
        capacity = max(size.width * size.height, 80)
        cursor = len(self.attempt.typed)
        # scroll in chunks so the text does not move on every key
        if cursor - self.window_start > capacity // 2:
            self.window_start = cursor - capacity // 4
        elif cursor < self.window_start:
            self.window_start = max(0, cursor - capacity // 4)
        parts = clip_parts(self.attempt.text_parts(), self.window_start)
        self.text_pane.update(render_parts(parts, self.palette))

    def _render_info(self) -> None:
        rows = max(self.info_pane.size.height - 5, 1)
        self.info_pane.update(render_info(self.attempt, self.palette, rows))

    def _render_help(self) -> None:
        theme = self.palette
        text = Text()
        if self.ui_mode == TYPE_MODE:
            text.append("TYPE ", style=f"bold {theme['title']}")
            text.append(f"{self.current_category}  ", style=theme["muted"])
            text.append("Esc commands", style=theme["hint"])
        else:
            text.append("COMMAND ", style=f"bold {theme['title']}")
            text.append(
                "i type  c category  t improvement  e end run  q quit",
                style=theme["hint"],
            )
        self.help_bar.update(text)
