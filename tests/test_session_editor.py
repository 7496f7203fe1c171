import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import PerformedSet, SessionItem
from session_editor import add_performed_set, update_performed_set


def _items() -> tuple[SessionItem, ...]:
    return (
        SessionItem(exercise_name="Bench", target_sets=3, target_reps=8),
        SessionItem(exercise_name="Row", target_sets=3, target_reps=12),
    )


class AddPerformedSetTest(unittest.TestCase):
    def test_numbers_sets_in_order(self) -> None:
        items = _items()
        for _ in range(4):
            items = add_performed_set(items, 0)
        sets = items[0].performed_sets
        self.assertEqual([s.set_number for s in sets], [1, 2, 3, 4])
        self.assertTrue(all(s.reps == 8 and s.weight == 0 for s in sets))
        self.assertTrue(all(s.rpe is None for s in sets))

    def test_default_reps_without_target(self) -> None:
        items = (
            SessionItem(exercise_name="Plank"),
            SessionItem(exercise_name="Dips", target_reps=0),
        )
        items = add_performed_set(items, 0)
        items = add_performed_set(items, 1)
        self.assertEqual(items[0].performed_sets[0].reps, 10)
        self.assertEqual(items[1].performed_sets[0].reps, 10)

    def test_original_untouched_and_siblings_shared(self) -> None:
        original = _items()
        updated = add_performed_set(original, 0)
        self.assertIsNot(updated, original)
        self.assertEqual(original[0].performed_sets, ())
        self.assertIsNot(updated[0], original[0])
        self.assertIs(updated[1], original[1])

    def test_out_of_range_is_noop(self) -> None:
        items = _items()
        self.assertEqual(add_performed_set(items, 5), items)
        self.assertEqual(add_performed_set(items, -1), items)


class UpdatePerformedSetTest(unittest.TestCase):
    def setUp(self) -> None:
        items = _items()
        for _ in range(3):
            items = add_performed_set(items, 0)
        self.items = add_performed_set(items, 1)

    def test_changes_one_field_of_one_set(self) -> None:
        updated = update_performed_set(self.items, 0, 1, "weight", 62.5)
        target = updated[0].performed_sets[1]
        self.assertEqual(target, PerformedSet(set_number=2, weight=62.5, reps=8))
        self.assertIs(updated[0].performed_sets[0], self.items[0].performed_sets[0])
        self.assertIs(updated[0].performed_sets[2], self.items[0].performed_sets[2])
        self.assertIs(updated[1], self.items[1])
        self.assertEqual(self.items[0].performed_sets[1].weight, 0)

    def test_rpe_and_reps(self) -> None:
        items = update_performed_set(self.items, 0, 0, "rpe", 8)
        items = update_performed_set(items, 0, 0, "reps", 6)
        first = items[0].performed_sets[0]
        self.assertEqual((first.set_number, first.reps, first.rpe), (1, 6, 8))

    def test_out_of_range_is_noop(self) -> None:
        self.assertEqual(update_performed_set(self.items, 4, 0, "reps", 1), self.items)
        self.assertEqual(update_performed_set(self.items, 1, 3, "reps", 1), self.items)

    def test_set_number_is_not_editable(self) -> None:
        with self.assertRaises(ValueError):
            update_performed_set(self.items, 0, 0, "set_number", 9)


if __name__ == "__main__":
    unittest.main()
