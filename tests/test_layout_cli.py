import contextlib
import io
import random
import unittest

from intervaltrainer.app.cli import _show_question, main, run_interactive
from intervaltrainer.app.session_manager import DrillSession, SessionContext
from intervaltrainer.drills.base_drill import Question, TabPair
from intervaltrainer.drills.tab_interval import fallback_tab_question
from intervaltrainer.render.layout import (
    ledger_steps,
    render_staff_text,
    render_tab_text,
    staff_step_for,
    tab_string_row,
    y_for_step,
)
from intervaltrainer.theory.intervals import Interval, interval_id
from intervaltrainer.theory.notes import parse_note


class LayoutTests(unittest.TestCase):
    def test_staff_steps(self) -> None:
        self.assertEqual(staff_step_for(parse_note("E4")), 0)
        self.assertEqual(staff_step_for(parse_note("F5")), 8)
        self.assertEqual(staff_step_for(parse_note("C#4")), -2)
        self.assertEqual(y_for_step(0), 104)
        self.assertEqual(y_for_step(8), 40)

    def test_ledger_lines(self) -> None:
        self.assertEqual(ledger_steps(-2), [-2])
        self.assertEqual(ledger_steps(-1), [])
        self.assertEqual(ledger_steps(-4), [-2, -4])
        self.assertEqual(ledger_steps(5), [])
        self.assertEqual(ledger_steps(10), [10])
        self.assertEqual(ledger_steps(9), [])

    def test_tab_rows(self) -> None:
        self.assertEqual(tab_string_row(1), 0)
        self.assertEqual(tab_string_row(6), 5)
        text = render_tab_text(fallback_tab_question()).splitlines()
        self.assertEqual(len(text), 6)
        self.assertIn("2", text[2])  # G string
        self.assertIn("2", text[3])  # D string
        self.assertNotIn("2", text[0])

    def test_staff_text_marks_notes(self) -> None:
        q = Question(parse_note("C4"), parse_note("F#4"), "up", Interval(4, "A"))
        text = render_staff_text(q)
        self.assertEqual(text.count("o"), 2)
        self.assertIn("♯", text)
        self.assertEqual(render_tab_text(q), "(no TAB data)")


class CliTests(unittest.TestCase):
    def test_interactive_all_correct(self) -> None:
        session = DrillSession(SessionContext(mode="tab"), rng=random.Random(8))
        out: list = []
        answers = iter(["s", "??", "99"])

        def ask(prompt: str) -> str:
            return next(answers, None) or interval_id(session.current.answer)

        summary = run_interactive(session, 3, {"ask": ask, "inform": out.append})
        self.assertEqual((summary["total"], summary["correct"]), (3, 3))
        self.assertTrue(any("Unrecognised" in line for line in out))
        self.assertTrue(any("No open choice" in line for line in out))

    def test_interactive_quit(self) -> None:
        session = DrillSession(rng=random.Random(2))
        summary = run_interactive(session, 5, {"ask": lambda _p: "q", "inform": lambda _m: None})
        self.assertEqual(summary["total"], 0)
        self.assertIsNotNone(summary["ended_at"])

    def test_show_question_without_question_prints_nothing(self) -> None:
        out: list = []
        _show_question(DrillSession(), 1, 3, out.append)
        self.assertEqual(out, [])

    def test_sample_command(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["sample", "--mode", "tab", "-n", "3"])
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().count("choices:"), 3)
        self.assertEqual(out.getvalue().count("| tab "), 3)


if __name__ == "__main__":
    unittest.main()
