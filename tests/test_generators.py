import random
import unittest

from intervaltrainer.drills import generate_question
from intervaltrainer.drills.staff_interval import (
    RANGE_HIGH,
    RANGE_LOW,
    fallback_staff_question,
    generate_staff_question,
)
from intervaltrainer.drills.tab_interval import fallback_tab_question, generate_tab_question
from intervaltrainer.theory.fretboard import FretPosition, semitone_from_tab_pos
from intervaltrainer.theory.intervals import classify_interval, interval_id
from intervaltrainer.theory.notes import Note, ensure_low_high


class LowestRng:
    """Always takes the first option / lower bound."""

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq):
        return seq[0]

    def random(self) -> float:
        return 0.0


class OctaveOverflowRng(LowestRng):
    """Always asks for an octave spelled Cb4 .. C#5, which spans 14 semitones."""

    def __init__(self) -> None:
        self._calls = 0

    def choice(self, seq):
        if len(seq) == 8:
            return 8
        self._calls += 1
        return -1 if self._calls % 2 else 1


class UnisonRng(LowestRng):
    """Offers G string fret 4 against the open B string: the same pitch."""

    def __init__(self, roll: float) -> None:
        self._roll = roll
        self._ints = [0, 2, 4, 0]
        self._i = 0

    def randint(self, a: int, b: int) -> int:
        v = self._ints[self._i % len(self._ints)]
        self._i += 1
        return v

    def choice(self, seq):
        return 3

    def random(self) -> float:
        return self._roll


class EnharmonicDownRng(LowestRng):
    """First attempt offers E4 / F♭4 shown descending, then behaves like LowestRng."""

    def __init__(self) -> None:
        self._choices = [2, 0, -1]
        self._first_randint = True
        self._first_random = True

    def randint(self, a: int, b: int) -> int:
        if self._first_randint:
            self._first_randint = False
            return Note("E", 0, 4).diatonic
        return a

    def choice(self, seq):
        if self._choices:
            return self._choices.pop(0)
        return seq[0]

    def random(self) -> float:
        if self._first_random:
            self._first_random = False
            return 0.9
        return 0.0


class StaffGeneratorTests(unittest.TestCase):
    def _check(self, q) -> None:
        low, high = ensure_low_high(q.left, q.right)
        self.assertEqual(q.answer, classify_interval(low, high))
        self.assertTrue(1 <= q.answer.number <= 8)
        self.assertLessEqual(high.semitone - low.semitone, 12)
        self.assertIsNone(q.tab)
        if q.direction == "up":
            self.assertGreaterEqual(q.right.semitone, q.left.semitone)
        else:
            self.assertGreaterEqual(q.left.semitone, q.right.semitone)
        for n in (q.left, q.right):
            self.assertTrue(RANGE_LOW.diatonic <= n.diatonic <= RANGE_HIGH.diatonic)

    def test_natural_only(self) -> None:
        rng = random.Random(11)
        for _ in range(10000):
            q = generate_staff_question(False, rng=rng)
            self._check(q)
            self.assertEqual(q.left.accidental, 0)
            self.assertEqual(q.right.accidental, 0)
            # naturals inside C4..C5 only allow the F-B tritone as an altered quality
            self.assertTrue(q.answer.quality in {"m", "M", "P"} or interval_id(q.answer) == "A4")

    def test_altered(self) -> None:
        rng = random.Random(5)
        seen_accidental = False
        for _ in range(3000):
            q = generate_staff_question(True, rng=rng)
            self._check(q)
            self.assertIn(q.left.accidental, (-1, 0, 1))
            seen_accidental = seen_accidental or q.left.accidental != 0 or q.right.accidental != 0
        self.assertTrue(seen_accidental)

    def test_both_directions_occur(self) -> None:
        rng = random.Random(3)
        directions = {generate_staff_question(False, rng=rng).direction for _ in range(200)}
        self.assertEqual(directions, {"up", "down"})

    def test_deterministic_with_stub_rng(self) -> None:
        q = generate_staff_question(False, rng=LowestRng())
        self.assertEqual((q.left, q.right, q.direction), (Note("C", 0, 4), Note("C", 0, 4), "up"))
        self.assertEqual(interval_id(q.answer), "P1")

    def test_fallback_after_exhaustion(self) -> None:
        q = generate_staff_question(True, rng=OctaveOverflowRng())
        self.assertEqual(q, fallback_staff_question())
        self.assertEqual((q.left, q.right, q.direction), (Note("C", 0, 5), Note("C", 0, 4), "down"))
        self.assertEqual(interval_id(q.answer), "P8")

    def test_presented_order_matches_direction_and_answer(self) -> None:
        for seed in (1, 5, 17, 99):
            rng = random.Random(seed)
            for _ in range(3000):
                q = generate_staff_question(True, rng=rng)
                if q.left.semitone != q.right.semitone:
                    self.assertEqual(q.direction == "up", q.right.semitone > q.left.semitone)
                else:
                    # a unison may be shown either way, but only in written order
                    self.assertLessEqual(q.left.diatonic, q.right.diatonic)
                self.assertEqual(classify_interval(*ensure_low_high(q.left, q.right)), q.answer)

    def test_enharmonic_pair_shown_descending_is_rejected(self) -> None:
        q = generate_staff_question(True, rng=EnharmonicDownRng())
        self.assertNotEqual((q.left, q.right), (Note("F", -1, 4), Note("E", 0, 4)))
        self.assertEqual((q.left, q.right, q.direction), (Note("C", -1, 4), Note("C", -1, 4), "up"))
        self.assertEqual(interval_id(q.answer), "P1")


class TabGeneratorTests(unittest.TestCase):
    def _check(self, q) -> None:
        self.assertIsNotNone(q.tab)
        a, b = q.tab.left, q.tab.right
        self.assertNotEqual(a, b)
        self.assertLessEqual(abs(a.string - b.string), 2)
        self.assertLessEqual(abs(a.fret - b.fret), 4)
        self.assertTrue(0 <= a.fret <= 12 and 0 <= b.fret <= 12)
        self.assertEqual(q.left.semitone, semitone_from_tab_pos(a))
        self.assertEqual(q.right.semitone, semitone_from_tab_pos(b))
        self.assertLessEqual(abs(q.right.semitone - q.left.semitone), 12)
        self.assertEqual(q.answer, classify_interval(*ensure_low_high(q.left, q.right)))
        self.assertEqual(q.direction, "up" if q.right.semitone >= q.left.semitone else "down")
        self.assertEqual(q.mode, "tab")

    def test_natural_only(self) -> None:
        rng = random.Random(23)
        for _ in range(10000):
            q = generate_tab_question(False, rng=rng)
            self.assertEqual(q.left.accidental, 0)
            self.assertEqual(q.right.accidental, 0)

    def test_altered_properties(self) -> None:
        rng = random.Random(29)
        for _ in range(3000):
            q = generate_tab_question(True, rng=rng)
            self._check(q)
            self.assertIn(q.left.accidental, (0, 1))

    def test_unison_kept_when_not_discarded(self) -> None:
        q = generate_tab_question(False, rng=UnisonRng(0.9))
        self.assertEqual((q.tab.left, q.tab.right), (FretPosition(3, 4), FretPosition(2, 0)))
        self.assertEqual((q.left, q.right), (Note("B", 0, 3), Note("B", 0, 3)))
        self.assertEqual(interval_id(q.answer), "P1")

    def test_unison_discarded(self) -> None:
        q = generate_tab_question(False, rng=UnisonRng(0.1))
        self.assertEqual(q, fallback_tab_question())

    def test_unisons_are_rare(self) -> None:
        rng = random.Random(31)
        unisons = sum(1 for _ in range(4000) if generate_tab_question(True, rng=rng).answer.number == 1)
        self.assertLess(unisons, 200)

    def test_fallback_after_exhaustion(self) -> None:
        # lowest choices always produce the same position twice
        q = generate_tab_question(True, rng=LowestRng())
        self.assertEqual(q, fallback_tab_question())
        self.assertEqual((q.tab.left, q.tab.right), (FretPosition(4, 2), FretPosition(3, 2)))
        self.assertEqual((q.left, q.right), (Note("E", 0, 3), Note("A", 0, 3)))
        self.assertEqual(q.direction, "up")
        self.assertEqual(interval_id(q.answer), "P4")


class DispatchTests(unittest.TestCase):
    def test_mode_dispatch(self) -> None:
        rng = random.Random(1)
        self.assertIsNone(generate_question("staff", False, rng=rng).tab)
        self.assertIsNotNone(generate_question("tab", False, rng=rng).tab)
        with self.assertRaises(ValueError):
            generate_question("piano", False)


if __name__ == "__main__":
    unittest.main()
