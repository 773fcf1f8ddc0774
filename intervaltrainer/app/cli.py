from __future__ import annotations

"""CLI for the interval trainer: interactive drill and question sampling."""

import argparse
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config.config import load_config, validate_config
from ..drills import build_choice_set, generate_question
from ..render.layout import render_question_text
from ..stats.stats import format_summary, write_stats
from ..theory.intervals import interval_id, interval_short, interval_text, parse_interval
from ..theory.notes import note_to_name
from ..util.randomness import make_rng, seed_if_needed
from .session_manager import DrillSession, SessionContext

PROMPT = "Answer (1-9 or id like M3), 's' show, 'n' next, 'r' reset, 'q' quit: "


def _build_ui() -> Dict[str, Callable[..., Any]]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _show_question(session: DrillSession, index: int, num_questions: int, inform: Callable[[str], None]) -> None:
    q = session.current
    if q is None:
        return
    arrow = "ascending" if q.direction == "up" else "descending"
    inform(f"\nQ{index}/{num_questions}: {session.note_names()} ({arrow})")
    inform(render_question_text(q))
    for i, c in enumerate(session.choices, start=1):
        inform(f"  {i}. {session.label(c)} [{interval_short(c)}]")


def run_interactive(session: DrillSession, num_questions: int, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
    """Drive a session from ask/inform callbacks until done or quit."""
    ask = ui["ask"]
    inform = ui["inform"]

    index = 1
    session.next_question()
    _show_question(session, index, num_questions, inform)
    while True:
        a = ask(PROMPT).strip()
        cmd = a.lower()
        if cmd in {"q", "quit", "stop"}:
            break
        if cmd == "s":
            inform(session.reveal())
            continue
        if cmd == "r":
            index = 1
            session.reset()
            inform("Score reset.")
            _show_question(session, index, num_questions, inform)
            continue
        if cmd == "n":
            if index >= num_questions:
                break
            index += 1
            session.next_question()
            _show_question(session, index, num_questions, inform)
            continue

        if a.isdigit():
            outcome = session.answer_index(int(a))
        else:
            try:
                outcome = session.answer(parse_interval(a))
            except ValueError:
                inform(f"Unrecognised answer: {a!r}")
                continue
        if outcome is None:
            inform("No open choice for that answer.")
            continue
        if outcome.correct:
            inform(f"Correct! {outcome.detail}")
        else:
            inform(f"Incorrect. {outcome.detail}")
        inform(f"Score: {session.correct}/{session.total} ({session.accuracy}%)")
        if not outcome.correct:
            continue
        if index >= num_questions:
            break
        index += 1
        session.next_question()
        _show_question(session, index, num_questions, inform)

    session.stop()
    return session.summary()


def _sample(mode: str, allow_altered: bool, count: int, lang: str, seed: Optional[int] = None) -> None:
    rng = make_rng(seed) if seed is not None else None
    for _ in range(count):
        q = generate_question(mode, allow_altered, rng=rng)
        choices = build_choice_set(q.answer, allow_altered, rng=rng)
        line = f"{note_to_name(q.left)} -> {note_to_name(q.right)} ({q.direction}) = {interval_text(q.answer, lang)}"
        if q.tab is not None:
            line += f" | tab {q.tab.left.string}/{q.tab.left.fret} {q.tab.right.string}/{q.tab.right.fret}"
        print(line)
        print("   choices: " + ", ".join(interval_id(c) for c in choices))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="intervaltrainer")
    sub = p.add_subparsers(dest="cmd", required=True)

    rp = sub.add_parser("run")
    rp.add_argument("--config", default=None)
    rp.add_argument("--mode", choices=["staff", "tab"], default=None)
    rp.add_argument("--altered", dest="allow_altered", action="store_true", help="Allow sharps/flats")
    rp.add_argument("--no-altered", dest="allow_altered", action="store_false", help="Natural notes only")
    rp.set_defaults(allow_altered=None)
    rp.add_argument("--questions", type=int, default=None)
    rp.add_argument("--lang", choices=["en", "zh"], default=None)
    rp.add_argument("--explain", action="store_true")

    sp = sub.add_parser("sample")
    sp.add_argument("--mode", choices=["staff", "tab"], default="staff")
    sp.add_argument("--altered", action="store_true")
    sp.add_argument("-n", "--count", type=int, default=5)
    sp.add_argument("--lang", choices=["en", "zh"], default="en")
    sp.add_argument("--seed", type=int, default=None)

    args = p.parse_args(argv)

    seed_if_needed()

    if args.cmd == "sample":
        _sample(args.mode, bool(args.altered), max(1, args.count), args.lang, args.seed)
        return 0

    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    cfg = validate_config(load_config(args.config))
    drill = cfg["drill"]
    if args.mode is not None:
        drill["mode"] = args.mode
    if args.allow_altered is not None:
        drill["allow_altered"] = bool(args.allow_altered)
    if args.questions is not None:
        drill["questions"] = max(1, int(args.questions))
    if args.lang is not None:
        drill["label_lang"] = args.lang

    session = DrillSession(
        SessionContext(mode=drill["mode"], allow_altered=drill["allow_altered"], label_lang=drill["label_lang"])
    )
    summary = run_interactive(session, int(drill["questions"]), _build_ui())

    if cfg["stats"].get("show_summary", True):
        print("\nSession Summary:")
        print(format_summary(session.stats, drill["label_lang"]))
    output_path = cfg["stats"].get("output_path")
    if output_path:
        write_stats(summary, output_path)
    if cfg["storage"].get("enabled"):
        session.persist(Path(cfg["storage"]["data_dir"]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
