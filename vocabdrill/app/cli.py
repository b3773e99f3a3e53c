from __future__ import annotations

"""Terminal drill runner built on SessionController and LevelLibrary."""

import argparse
import time
from typing import Any, Callable, Dict, List, Optional

from .. import __version__
from ..config.config import load_config, validate_config
from ..core.modes import Mode, parse_mode
from ..core.word_item import WordItem
from ..data.level import Level
from ..data.loader import LevelLibrary, LevelLoadError
from ..results.result_manager import ResultManager
from ..speech.speaker import ConsoleSpeaker, Speaker
from ..stats.progress import (
    ALL_COMPLETED_MESSAGE,
    INCORRECT_MASTERED_MESSAGE,
    REVIEW_STARTED_MESSAGE,
    format_attempts,
    format_progress,
    format_summary,
)
from ..util.randomness import seed_if_needed
from .events import EventBus
from .session_controller import DelayedAction, DelayedKind, SessionController, Signal, make_session_from_config

CMD_NEXT = ":next"
CMD_SAY = ":say"
CMD_QUIT = ":q"


def _parse_units(value: str | None) -> Optional[List[int]]:
    """'1,3' → [0, 2] (units are 1-based on the command line)."""
    if not value:
        return None
    out: List[int] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        out.append(int(token) - 1)
    return out


def _build_ui(speaker: Speaker) -> Dict[str, Callable[..., Any]]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    def speak(text: str | None) -> None:
        speaker.speak(text)

    def wait_ms(ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)

    return {"ask": ask, "inform": inform, "speak": speak, "wait_ms": wait_ms}


def render_word(controller: SessionController, item: WordItem, ui: Dict[str, Callable[..., Any]]) -> None:
    """Print the prompt for ``item`` in the controller's mode and speak it."""
    inform = ui["inform"]
    mode = controller.mode
    if mode is Mode.REVIEW:
        scrambled = controller.scramble_enabled and item.scrambled_text
        inform(item.display_text(controller.scramble_enabled))
        if not scrambled and item.syllables:
            # syllables would give a scrambled word away
            inform(item.syllables)
        inform(item.pronunciation)
        inform(item.meaning)
    elif mode is Mode.DICTATION:
        if item.has_pronunciation:
            inform(item.pronunciation)
        else:
            inform("(Cannot use this mode: IPA missing for this word)")
        inform(format_attempts(controller.attempt_count, controller.max_attempts))
    elif mode is Mode.LISTENING:
        inform("(listen)")
        inform(format_attempts(controller.attempt_count, controller.max_attempts))
    else:
        raise ValueError(f"Unhandled mode: {mode!r}")
    ui["speak"](item.text)


def _handle_pending(pending: Optional[DelayedAction], ui: Dict[str, Callable[..., Any]]) -> None:
    if pending is None:
        return
    ui["wait_ms"](pending.delay_ms)
    if pending.kind is DelayedKind.RESPEAK:
        ui["speak"](pending.text)


def _announce(signal: Optional[Signal], controller: SessionController, ui: Dict[str, Callable[..., Any]]) -> None:
    if signal is Signal.REVIEW_STARTED:
        ui["inform"](REVIEW_STARTED_MESSAGE.format(count=controller.review_size))
    elif signal is Signal.INCORRECT_MASTERED:
        ui["inform"](INCORRECT_MASTERED_MESSAGE)
    elif signal is Signal.ALL_COMPLETED:
        ui["inform"](ALL_COMPLETED_MESSAGE)


def run_session(controller: SessionController, level: Level, ui: Dict[str, Callable[..., Any]]) -> int:
    """Drive one session until both pool and review queue are exhausted or the user quits.

    Returns the number of correct answers.
    """
    ask = ui["ask"]
    inform = ui["inform"]
    _announce(controller.last_signal, controller, ui)
    shown: Optional[WordItem] = None
    while True:
        item = controller.current()
        if item is None:
            break
        if item is not shown:
            inform("")
            inform(format_progress(controller.progress(), level.id, level.selected_unit_indices))
            render_word(controller, item, ui)
            shown = item

        if not controller.input_enabled:
            ans = ask(f"[{CMD_NEXT} to continue, {CMD_QUIT} to quit] ").strip()
        else:
            ans = ask("> ").strip()
        if ans == CMD_QUIT:
            break
        if ans == CMD_SAY:
            ui["speak"](item.text)
            continue
        if ans == CMD_NEXT:
            controller.next_word()
            shown = None
            _announce(controller.last_signal, controller, ui)
            continue

        outcome = controller.submit(ans)
        if outcome is None:
            continue
        if outcome.correct:
            inform("Correct!")
            _handle_pending(outcome.pending, ui)
            shown = None
            _announce(outcome.signal, controller, ui)
        elif outcome.action == "reveal":
            inform(f"Attempts exceeded! The correct answer was: {outcome.revealed}")
            inform(f"Word: {item.text} {item.pronunciation if item.has_pronunciation else ''}".rstrip())
            inform(f"Meaning: {item.meaning or 'Not available'}")
        else:
            inform(f'Incorrect: "{ans}". Try again.')
            if controller.mode.counts_attempts:
                inform(format_attempts(controller.attempt_count, controller.max_attempts))
            _handle_pending(outcome.pending, ui)
    return controller.total_correct


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="vocabdrill")
    p.add_argument("--version", action="version", version=f"vocabdrill {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    lp = sub.add_parser("list-levels")
    lp.add_argument("--config", default=None)

    sp = sub.add_parser("show-level")
    sp.add_argument("--config", default=None)
    sp.add_argument("--level", default=None)

    rp = sub.add_parser("run")
    rp.add_argument("--config", default=None)
    rp.add_argument("--level", default=None)
    rp.add_argument("--units", default=None, help="Comma-separated 1-based unit numbers, e.g. 1,3")
    rp.add_argument("--mode", default=None, help="review | dictation | listening")
    rp.add_argument("--shuffle", dest="shuffle", action="store_true", default=None)
    rp.add_argument("--no-shuffle", dest="shuffle", action="store_false")
    rp.add_argument("--scramble", dest="scramble", action="store_true", default=None, help="Scramble letters (review mode)")
    rp.add_argument("--no-speech", dest="speech", action="store_false", default=None)
    rp.add_argument("--export", default=None, help="Write the answer log (.parquet or .ndjson)")
    rp.add_argument("--explain", action="store_true")

    args = p.parse_args(argv)
    cfg = validate_config(load_config(args.config))
    words_cfg = cfg["words"]
    library = LevelLibrary(words_cfg["levels_dir"], fallback_level=words_cfg["fallback_level"])

    if args.cmd == "list-levels":
        for level_id in library.available():
            print(level_id)
        return 0

    level_id = (getattr(args, "level", None) or words_cfg["default_level"]).strip().upper()
    try:
        level = library.load(level_id)
    except (LevelLoadError, ValueError) as e:
        print(f"Error loading level {level_id}: {e}")
        return 2

    if args.cmd == "show-level":
        print(f"Level {level.id} (version {level.version}, last updated {level.last_updated})")
        for unit in level.units:
            print(f"  {unit.index + 1}. {unit.name}: {unit.word_count} words")
        return 0

    if args.cmd == "run":
        seed_if_needed()
        if args.explain:
            from .explain import enable as explain_enable
            explain_enable(True)

        session_cfg = cfg["session"]
        if args.mode is not None:
            mode = parse_mode(args.mode)
            if mode is None:
                print(f"Unknown mode: {args.mode}")
                return 2
            session_cfg["mode"] = mode.value
        if args.shuffle is not None:
            session_cfg["shuffle"] = args.shuffle
        if args.scramble is not None:
            session_cfg["scramble"] = bool(args.scramble) and session_cfg["mode"] == Mode.REVIEW.value
        if args.speech is not None:
            cfg["speech"]["enabled"] = args.speech

        try:
            units = _parse_units(args.units)
            if units is not None:
                level.select_units(units)
        except (KeyError, ValueError) as e:
            print(f"Invalid unit selection '{args.units}': {e}")
            return 2

        results = ResultManager()
        controller = make_session_from_config(cfg, events=EventBus(), results_sink=results)
        controller.set_items(level.selected_items())

        ui = _build_ui(ConsoleSpeaker(enabled=cfg["speech"]["enabled"]))
        try:
            run_session(controller, level, ui)
        except (EOFError, KeyboardInterrupt):
            print()

        summary = results.summarize()
        print("\nSession Summary:")
        print(format_summary(summary))

        export_path = args.export or cfg["results"].get("export_path")
        if export_path and len(results) > 0:
            fmt = None if args.export else cfg["results"].get("export_format")
            out = results.export(export_path, fmt)
            print(f"Answer log written to {out}")
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
