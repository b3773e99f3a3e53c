import random
import unittest

from vocabdrill.core.review_queue import ReviewQueue
from vocabdrill.core.word_item import WordItem
from vocabdrill.core.word_pool import WordPool


def _words(*texts):
    return [WordItem(text=t, meaning=f"m-{t}") for t in texts]


class WordPoolTests(unittest.TestCase):
    def test_set_items_keeps_order_without_shuffle(self) -> None:
        items = _words("cup", "knife", "stove")
        pool = WordPool()
        pool.set_items(items)
        self.assertEqual(pool.cursor, 0)
        self.assertIs(pool.current(), items[0])
        self.assertEqual(len(pool), 3)

    def test_set_items_copies_source(self) -> None:
        items = _words("cup", "knife")
        pool = WordPool()
        pool.set_items(items)
        items.append(WordItem(text="fry"))
        self.assertEqual(len(pool), 2)

    def test_advance_until_exhausted(self) -> None:
        pool = WordPool()
        pool.set_items(_words("a", "b"))
        pool.advance()
        self.assertEqual(pool.current().text, "b")
        pool.advance()
        self.assertIsNone(pool.current())
        self.assertTrue(pool.is_exhausted)
        pool.advance()
        self.assertEqual(pool.cursor, 2)
        self.assertEqual(pool.remaining, 0)

    def test_empty_pool_is_exhausted(self) -> None:
        pool = WordPool()
        self.assertIsNone(pool.current())
        pool.set_items([])
        self.assertTrue(pool.is_exhausted)

    def test_shuffle_is_a_permutation(self) -> None:
        items = _words(*"abcdefghij")
        pool = WordPool(shuffle_enabled=True, rng=random.Random(3))
        pool.set_items(items)
        self.assertEqual(sorted(w.text for w in pool.items), list("abcdefghij"))
        self.assertEqual(pool.cursor, 0)

    def test_enable_shuffle_keeps_cursor(self) -> None:
        pool = WordPool(rng=random.Random(11))
        pool.set_items(_words(*"abcdef"))
        pool.advance()
        pool.advance()
        pool.set_shuffle_enabled(True)
        self.assertTrue(pool.shuffle_enabled)
        self.assertEqual(pool.cursor, 2)
        self.assertEqual(sorted(w.text for w in pool.items), list("abcdef"))

    def test_disable_shuffle_does_not_reorder(self) -> None:
        pool = WordPool()
        pool.set_items(_words("a", "b", "c"))
        pool.set_shuffle_enabled(False)
        self.assertEqual([w.text for w in pool.items], ["a", "b", "c"])

    def test_scramble_enabled_before_set_items(self) -> None:
        a, b = _words("teaspoon", "sprinkle")
        pool = WordPool()
        pool.set_scramble_enabled(True)
        pool.set_items([a, b])
        self.assertIsNotNone(a.scrambled_text)
        self.assertIsNotNone(b.scrambled_text)

    def test_toggle_scramble(self) -> None:
        items = _words("bake", "serve")
        pool = WordPool()
        pool.set_items(items)
        self.assertTrue(all(w.scrambled_text is None for w in items))
        pool.set_scramble_enabled(True)
        self.assertTrue(all(sorted(w.scrambled_text) == sorted(w.text) for w in items))
        pool.set_scramble_enabled(False)
        self.assertTrue(all(w.scrambled_text is None for w in items))


class ReviewQueueTests(unittest.TestCase):
    def test_add_is_unique_case_insensitive(self) -> None:
        q = ReviewQueue()
        self.assertTrue(q.add(WordItem(text="Actor")))
        self.assertFalse(q.add(WordItem(text="actor")))
        self.assertEqual(q.size(), 1)
        self.assertIn("ACTOR", q)

    def test_add_then_remove_round_trip(self) -> None:
        q = ReviewQueue()
        item = WordItem(text="comedy")
        q.add(item)
        self.assertTrue(q.remove(item.text))
        self.assertEqual(q.size(), 0)

    def test_remove_absent_is_noop(self) -> None:
        q = ReviewQueue()
        q.add(WordItem(text="mix"))
        self.assertFalse(q.remove("add"))
        self.assertEqual(len(q), 1)

    def test_remove_matches_case_folded(self) -> None:
        q = ReviewQueue()
        q.add(WordItem(text="Oven"))
        q.add(WordItem(text="bake"))
        q.remove("OVEN")
        self.assertEqual([w.text for w in q.drain_to_pool()], ["bake"])

    def test_drain_keeps_contents(self) -> None:
        q = ReviewQueue()
        items = _words("a", "b")
        for w in items:
            q.add(w)
        drained = q.drain_to_pool()
        self.assertEqual(drained, items)
        self.assertEqual(q.size(), 2)
        drained.pop()
        self.assertEqual(q.size(), 2)
        q.clear()
        self.assertEqual(q.size(), 0)


if __name__ == "__main__":
    unittest.main()
