import unittest

from vocabdrill.core.modes import Mode
from vocabdrill.policy.attempt_policy import LimitedAttempts, UnlimitedRetry, policy_for_mode


class AttemptPolicyTests(unittest.TestCase):
    def test_unlimited_retry(self) -> None:
        p = UnlimitedRetry()
        d = p.decide(False, 0)
        self.assertEqual((d.action, d.attempts, d.clear_input, d.respeak), ("retry", 0, True, True))
        self.assertEqual(p.decide(True, 0).action, "next")

    def test_limited_attempts(self) -> None:
        p = LimitedAttempts(3)
        self.assertEqual(p.decide(False, 0).action, "retry")
        self.assertEqual(p.decide(False, 1).attempts, 2)
        last = p.decide(False, 2)
        self.assertEqual((last.action, last.attempts, last.respeak), ("reveal", 3, False))
        self.assertEqual(p.decide(True, 2).attempts, 0)

    def test_single_attempt_reveals_at_once(self) -> None:
        self.assertEqual(LimitedAttempts(1).decide(False, 0).action, "reveal")

    def test_bad_max_attempts(self) -> None:
        with self.assertRaises(ValueError):
            LimitedAttempts(0)

    def test_policy_for_mode(self) -> None:
        self.assertIsInstance(policy_for_mode(Mode.REVIEW, 3), UnlimitedRetry)
        self.assertIsInstance(policy_for_mode(Mode.LISTENING, 3), LimitedAttempts)


if __name__ == "__main__":
    unittest.main()
