"""Executable Textual app that types Hangul into an in-memory document."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hangul_engine.adapters.textual.app"
    ) from exc

from rich.text import Text

from hangul_engine.buffer.document import HostDocument
from hangul_engine.buffer.sync import Capability, PreeditStyle
from hangul_engine.candidates.dictionary import HanjaTable
from hangul_engine.config import ConfigStore, EngineConfig
from hangul_engine.engine import HangulEngine
from hangul_engine.runtime import telemetry

from .controller import TextualHangulAdapter, TextualUIHooks

DEMO_CAPABILITIES = Capability.PREEDIT_TEXT | Capability.SURROUNDING_TEXT
PREEDIT_STYLES = {
    PreeditStyle.UNDERLINE: "underline",
    PreeditStyle.HIGHLIGHT: "reverse",
}


def render_document(document: HostDocument) -> Text:
    """Document text with the preedit drawn at the caret in its range styles."""

    rendered = Text(document.text[: document.cursor])
    preedit = document.preedit
    if preedit is not None:
        start = len(rendered)
        rendered.append(preedit.text)
        for styled in preedit.ranges:
            rendered.stylize(
                PREEDIT_STYLES[styled.style], start + styled.start, start + styled.end
            )
    rendered.append(document.text[document.cursor :])
    return rendered


def create_default_engine(
    *,
    settings: Optional[dict[str, str]] = None,
    hanja_path: Optional[str] = None,
) -> HangulEngine:
    """Engine built from environment settings plus command line overrides."""

    config = EngineConfig.from_env()
    for key, value in (settings or {}).items():
        config = config.with_setting(key, value)
    hanja_table = HanjaTable.load(hanja_path) if hanja_path else None
    return HangulEngine(store=ConfigStore(config), hanja_table=hanja_table)


class HangulEngineApp(App[None]):
    """Minimal Textual UI embedding the Hangul engine."""

    CSS = """
    #document-view {
        height: 1fr;
        border: heavy $primary;
        padding: 0 1;
    }

    #candidate-line {
        height: 1;
        color: $accent;
        padding: 0 1;
    }

    #status-line {
        height: 1;
        background: $boost;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, engine: HangulEngine) -> None:
        super().__init__()
        self.engine = engine
        self.document = HostDocument()
        self.adapter: TextualHangulAdapter | None = None
        self._document_widget: Static | None = None
        self._candidate_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="document-area"):
            self._document_widget = Static("", id="document-view")
            yield self._document_widget
        self._candidate_widget = Static("", id="candidate-line")
        self._status_widget = Static("", id="status-line")
        yield self._candidate_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        session = self.engine.create_session(self.document)
        session.set_capabilities(DEMO_CAPABILITIES)
        session.enable()
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            show_candidates=self._show_candidates,
            log=self._log_line,
        )
        self.adapter = TextualHangulAdapter(session, self.document, hooks)

    async def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.focus_out()
            self.engine.destroy_session(self.adapter.session)
            self.adapter = None

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result is not None:
            event.stop()

    def _update_document(self, text: str) -> None:
        if self._document_widget:
            self._document_widget.update(render_document(self.document))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_candidates(
        self, candidates: Sequence[str], cursor: int, comment: str
    ) -> None:
        cells = []
        for index, value in enumerate(candidates):
            marker = ">" if index == cursor else " "
            cells.append(f"{marker}{index + 1}.{value}")
        line = " ".join(cells)
        if comment:
            line = f"{line}  ({comment})"
        if self._candidate_widget:
            self._candidate_widget.update(line)

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Hangul engine Textual demo.")
    parser.add_argument(
        "--keyboard",
        default=None,
        help="Keyboard layout id (default: HANGUL_ENGINE_HANGUL_KEYBOARD or 2)",
    )
    parser.add_argument(
        "--preedit-mode",
        choices=("none", "syllable", "word"),
        default=None,
        help="How composing text is shown",
    )
    parser.add_argument(
        "--hanja-table",
        default=None,
        help="Path to a key:value:comment hanja table",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("HANGUL_ENGINE_LOG_PRESET", "production"),
        help="telelog preset: development, production or performance",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # console logging would draw over the terminal UI
    telemetry.configure(preset=args.log_preset)
    settings: dict[str, str] = {}
    if args.keyboard:
        settings["hangul-keyboard"] = args.keyboard
    if args.preedit_mode:
        settings["preedit-mode"] = args.preedit_mode
    engine = create_default_engine(settings=settings, hanja_path=args.hanja_table)
    HangulEngineApp(engine).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
