"""Unit tests for the credit scoring engine."""

import math
import threading
import unittest

import numpy as np

from altcredit.common.presets import get_preset
from altcredit.models.credit_inputs import CreditInputs
from altcredit.models.enums import ImpactLabel, RiskTier, ScoringVariant
from altcredit.models.exceptions import InvalidInputError, ScoringConfigError
from altcredit.models.scoring_config import ScoringConfig
from altcredit.scoring.engine import ScoringEngine


class FixedSource:
    """Random source stub returning the same draw every time."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = []

    def uniform(self, low: float, high: float) -> float:
        self.calls.append((low, high))
        return self.value


FEATURE_FIELDS = {
    "transactions": "monthlyTransactions",
    "topup": "averageTopup",
    "bills": "billsPaid",
    "data": "dataUsage",
    "usage": "phoneUsageDays",
}


class SimpleVariantTests(unittest.TestCase):
    """Validate the deterministic weighted-sum variant."""

    def setUp(self) -> None:
        self.engine = ScoringEngine()

    def test_good_profile_scores_low_risk(self) -> None:
        """Good profile lands at 768 in the low tier."""
        result = self.engine.compute(get_preset("good"))
        self.assertEqual(result.variant, ScoringVariant.SIMPLE)
        self.assertAlmostEqual(result.base_score, 0.5508333333, places=8)
        self.assertEqual(result.score, 768)
        self.assertEqual(result.risk, RiskTier.LOW)
        self.assertTrue(result.recommendation.startswith("Excellent creditworthiness."))

    def test_risky_profile_scores_high_risk(self) -> None:
        """Risky profile stays below 600 and is high risk."""
        result = self.engine.compute(get_preset("risky"))
        self.assertEqual(result.score, 484)
        self.assertLess(result.score, 600)
        self.assertEqual(result.risk, RiskTier.HIGH)
        self.assertIn("micro-loans", result.recommendation)

    def test_zero_input_floors_score(self) -> None:
        """All-zero inputs score 300 with every impact needing improvement."""
        result = self.engine.compute(CreditInputs())
        self.assertEqual(result.score, 300)
        self.assertEqual(result.risk, RiskTier.HIGH)
        for row in result.feature_importance:
            self.assertEqual(row.value, 0)
            self.assertEqual(row.impact, ImpactLabel.NEEDS_IMPROVEMENT)

    def test_medium_tier_text(self) -> None:
        """Scores in 600..699 map to the medium template."""
        # base 0.40 -> 0.40 * 850 + 300 = 640
        inputs = CreditInputs(averageTopup=100, billsPaid=5, phoneUsageDays=15)
        result = self.engine.compute(inputs)
        self.assertEqual(result.score, 640)
        self.assertEqual(result.risk, RiskTier.MEDIUM)
        self.assertTrue(result.recommendation.startswith("Good creditworthiness."))

    def test_score_is_clamped_to_ceiling(self) -> None:
        """Unclamped arithmetic would exceed 850 for strong profiles."""
        result = self.engine.compute(get_preset("excellent"))
        self.assertGreater(result.base_score * 850 + 300, 850)
        self.assertEqual(result.score, 850)

    def test_simple_variant_has_no_loan_terms(self) -> None:
        """Loan terms, confidence and probability belong to the ensemble only."""
        result = self.engine.compute(get_preset("good"))
        self.assertIsNone(result.loan_amount)
        self.assertIsNone(result.interest_rate)
        self.assertIsNone(result.confidence)
        self.assertIsNone(result.probability)

    def test_repeat_calls_are_identical(self) -> None:
        """Simple variant is idempotent."""
        inputs = get_preset("good")
        first = self.engine.compute(inputs)
        second = self.engine.compute(inputs)
        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_accepts_form_mapping(self) -> None:
        """A raw form mapping is coerced before scoring."""
        result = self.engine.compute(
            {
                "monthlyTransactions": "35",
                "averageTopup": 25,
                "billsPaid": "4",
                "dataUsage": 3500,
                "phoneUsageDays": 28,
            }
        )
        self.assertEqual(result.score, 768)

    def test_usage_days_above_month_saturate(self) -> None:
        """More than 31 active days is accepted and saturates."""
        capped = self.engine.compute(CreditInputs(phoneUsageDays=30))
        over = self.engine.compute(CreditInputs(phoneUsageDays=45))
        self.assertEqual(capped.score, over.score)


class EnsembleVariantTests(unittest.TestCase):
    """Validate the ensemble variant with a controlled random source."""

    def setUp(self) -> None:
        self.engine = ScoringEngine()
        self.zero = FixedSource(0.0)

    def test_risky_profile_breakdown(self) -> None:
        """Risky profile with zero variance scores 472 with a minimum loan."""
        result = self.engine.compute(get_preset("risky"), ScoringVariant.ENSEMBLE, rng=self.zero)
        self.assertAlmostEqual(result.feature_snapshot["transactions_normalized"], math.log1p(0.3) / math.log1p(1))
        self.assertAlmostEqual(result.feature_snapshot["interaction_bonus"], 0.045)
        self.assertAlmostEqual(result.feature_snapshot["consistency_bonus"], 0.025)
        self.assertAlmostEqual(result.final_score, 0.3134790680, places=8)
        self.assertEqual(result.score, 472)
        self.assertEqual(result.risk, RiskTier.HIGH)
        self.assertEqual(result.loan_amount, 100.0)
        self.assertEqual(result.interest_rate, 25.0)
        self.assertEqual(result.probability, 69)
        self.assertEqual(result.confidence, 85)

    def test_good_profile_low_tier_terms(self) -> None:
        """Good profile saturates at 850 and gets three times annual spend."""
        result = self.engine.compute(get_preset("good"), ScoringVariant.ENSEMBLE, rng=self.zero)
        self.assertEqual(result.score, 850)
        self.assertEqual(result.risk, RiskTier.LOW)
        self.assertEqual(result.loan_amount, 900.0)
        self.assertEqual(result.interest_rate, 8.5)
        self.assertEqual(result.confidence, 98)
        self.assertEqual(
            result.recommendation,
            "Excellent creditworthiness. Pre-approved for up to $900.00 at 8.5% annual interest.",
        )

    def test_probability_is_clamped_when_bonuses_exceed_one(self) -> None:
        """Final score above 1 would give a negative probability."""
        result = self.engine.compute(get_preset("good"), ScoringVariant.ENSEMBLE, rng=self.zero)
        self.assertGreater(result.final_score, 1.0)
        self.assertEqual(result.probability, 0)

    def test_upper_medium_band(self) -> None:
        """Scores in 650..719 get twice annual spend at 12.5%."""
        inputs = CreditInputs(averageTopup=100, billsPaid=10, dataUsage=5000, phoneUsageDays=30)
        result = self.engine.compute(inputs, "ensemble", rng=self.zero)
        self.assertEqual(result.score, 685)
        self.assertEqual(result.risk, RiskTier.MEDIUM)
        self.assertEqual(result.loan_amount, 2400.0)
        self.assertEqual(result.interest_rate, 12.5)
        self.assertEqual(result.probability, 30)
        self.assertEqual(result.confidence, 86)

    def test_lower_medium_band(self) -> None:
        """Scores in 550..649 get one and a half times annual spend at 18.5%."""
        inputs = CreditInputs(averageTopup=80, billsPaid=10, dataUsage=5000)
        result = self.engine.compute(inputs, ScoringVariant.ENSEMBLE, rng=self.zero)
        self.assertEqual(result.score, 575)
        self.assertEqual(result.risk, RiskTier.MEDIUM)
        self.assertEqual(result.loan_amount, 1440.0)
        self.assertEqual(result.interest_rate, 18.5)
        self.assertEqual(result.probability, 50)
        self.assertEqual(result.confidence, 42)

    def test_zero_input(self) -> None:
        """Zero inputs keep the floor score and the minimum loan."""
        result = self.engine.compute(CreditInputs(), ScoringVariant.ENSEMBLE, rng=self.zero)
        self.assertEqual(result.score, 300)
        self.assertEqual(result.loan_amount, 100.0)
        self.assertEqual(result.probability, 100)
        self.assertEqual(result.confidence, 0)

    def test_variance_draw_uses_configured_envelope(self) -> None:
        """The random source is asked for one draw in [-0.01, 0.01]."""
        source = FixedSource(0.005)
        result = self.engine.compute(get_preset("risky"), ScoringVariant.ENSEMBLE, rng=source)
        self.assertEqual(source.calls, [(-0.01, 0.01)])
        self.assertAlmostEqual(result.feature_snapshot["random_variance"], 0.005)

    def test_out_of_range_draw_is_clamped(self) -> None:
        """A misbehaving source cannot push the variance past the envelope."""
        result = self.engine.compute(get_preset("risky"), ScoringVariant.ENSEMBLE, rng=FixedSource(0.5))
        self.assertAlmostEqual(result.feature_snapshot["random_variance"], 0.01)

    def test_bounded_variance_across_runs(self) -> None:
        """Repeated draws stay within about 5.5 points of the zero-variance score."""
        inputs = get_preset("risky")
        baseline = self.engine.compute(inputs, ScoringVariant.ENSEMBLE, rng=self.zero).score
        engine = ScoringEngine(seed=11)
        scores = [engine.compute(inputs, ScoringVariant.ENSEMBLE).score for _ in range(50)]
        for score in scores:
            self.assertLessEqual(abs(score - baseline), 6)

    def test_seeded_engines_are_reproducible(self) -> None:
        """Same seed gives the same sequence of results."""
        inputs = get_preset("risky")
        first = ScoringEngine(seed=7)
        second = ScoringEngine(seed=7)
        for _ in range(5):
            self.assertEqual(
                first.compute(inputs, ScoringVariant.ENSEMBLE).final_score,
                second.compute(inputs, ScoringVariant.ENSEMBLE).final_score,
            )

    def test_numpy_generator_as_source(self) -> None:
        """An explicit numpy generator can be passed per call."""
        inputs = get_preset("risky")
        first = self.engine.compute(inputs, ScoringVariant.ENSEMBLE, rng=np.random.default_rng(3))
        second = self.engine.compute(inputs, ScoringVariant.ENSEMBLE, rng=np.random.default_rng(3))
        self.assertEqual(first.final_score, second.final_score)

    def test_zero_variance_config_skips_draw(self) -> None:
        """A zero envelope never consults the random source."""
        engine = ScoringEngine(config=ScoringConfig(random_variance=0.0))
        source = FixedSource(0.01)
        engine.compute(get_preset("risky"), ScoringVariant.ENSEMBLE, rng=source)
        self.assertEqual(source.calls, [])


class ThreadLocalSourceTests(unittest.TestCase):
    """Validate the per-thread random source used by the ensemble variant."""

    def _draws_per_thread(self, engine: ScoringEngine, threads: int = 3, calls: int = 3) -> dict:
        inputs = get_preset("risky")
        draws = {}
        barrier = threading.Barrier(threads)

        def worker(index: int) -> None:
            barrier.wait()
            draws[index] = [
                engine.compute(inputs, ScoringVariant.ENSEMBLE).feature_snapshot["random_variance"]
                for _ in range(calls)
            ]

        workers = [threading.Thread(target=worker, args=(index,)) for index in range(threads)]
        for thread in workers:
            thread.start()
        for thread in workers:
            thread.join()
        return draws

    def test_seeded_threads_draw_independent_streams(self) -> None:
        """Threads sharing one seeded engine do not repeat each other's draws."""
        draws = self._draws_per_thread(ScoringEngine(seed=7))
        self.assertEqual(len(draws), 3)
        streams = [tuple(values) for values in draws.values()]
        self.assertEqual(len(set(streams)), 3)
        for values in streams:
            for value in values:
                self.assertLessEqual(abs(value), 0.01)

    def test_thread_keeps_its_own_generator(self) -> None:
        """Repeated calls on one thread continue the same stream."""
        engine = ScoringEngine(seed=7)
        inputs = get_preset("risky")
        first = engine.compute(inputs, ScoringVariant.ENSEMBLE).feature_snapshot["random_variance"]
        second = engine.compute(inputs, ScoringVariant.ENSEMBLE).feature_snapshot["random_variance"]
        self.assertNotEqual(first, second)

    def test_explicit_source_wins_in_worker_thread(self) -> None:
        """A caller-supplied source overrides the thread generator."""
        engine = ScoringEngine(seed=7)
        source = FixedSource(0.004)
        results = []

        def worker() -> None:
            results.append(engine.compute(get_preset("risky"), ScoringVariant.ENSEMBLE, rng=source))

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        self.assertEqual(source.calls, [(-0.01, 0.01)])
        self.assertAlmostEqual(results[0].feature_snapshot["random_variance"], 0.004)


class InvariantTests(unittest.TestCase):
    """Properties that hold for every valid input."""

    def setUp(self) -> None:
        self.engine = ScoringEngine(seed=5)
        self.samples = [
            CreditInputs(),
            get_preset("good"),
            get_preset("risky"),
            get_preset("excellent"),
            CreditInputs(
                monthlyTransactions=1e6,
                averageTopup=1e6,
                billsPaid=1e6,
                dataUsage=1e9,
                phoneUsageDays=1e3,
            ),
        ]

    def test_score_range(self) -> None:
        """Scores stay within 300..850 for both variants."""
        for inputs in self.samples:
            for variant in ScoringVariant:
                result = self.engine.compute(inputs, variant)
                self.assertGreaterEqual(result.score, 300)
                self.assertLessEqual(result.score, 850)

    def test_importance_sums_to_hundred(self) -> None:
        """Static weights always add up to 100%."""
        for inputs in self.samples:
            result = self.engine.compute(inputs)
            total = sum(row.importance for row in result.feature_importance)
            self.assertAlmostEqual(total, 100.0, places=9)

    def test_importance_order(self) -> None:
        """Order follows weights with declaration order as tie-break."""
        for inputs in self.samples:
            for variant in ScoringVariant:
                result = self.engine.compute(inputs, variant)
                order = [row.feature for row in result.feature_importance]
                self.assertEqual(order, ["transactions", "topup", "bills", "data", "usage"])
                importances = [row.importance for row in result.feature_importance]
                self.assertEqual(importances, sorted(importances, reverse=True))

    def test_order_follows_changed_weights(self) -> None:
        """The report is sorted, not hardcoded."""
        config = ScoringConfig(
            weights={"transactions": 0.1, "topup": 0.1, "bills": 0.2, "data": 0.25, "usage": 0.35}
        )
        result = ScoringEngine(config=config).compute(get_preset("good"))
        order = [row.feature for row in result.feature_importance]
        self.assertEqual(order, ["usage", "data", "bills", "transactions", "topup"])

    def test_base_score_is_monotonic(self) -> None:
        """Raising any single input never lowers the base score."""
        steps = {
            "transactions": [0, 5, 25, 49, 50, 80],
            "topup": [0, 10, 50, 100, 150],
            "bills": [0, 1, 5, 10, 12],
            "data": [0, 100, 2500, 5000, 9000],
            "usage": [0, 5, 25, 30, 31],
        }
        base = get_preset("risky").to_dict(by_alias=True)
        for feature, values in steps.items():
            for variant in ScoringVariant:
                previous = -1.0
                for value in values:
                    payload = dict(base)
                    payload[FEATURE_FIELDS[feature]] = value
                    result = self.engine.compute(CreditInputs(**payload), variant, rng=FixedSource(0.0))
                    self.assertGreaterEqual(result.base_score, previous)
                    previous = result.base_score

    def test_impact_labels_for_good_profile(self) -> None:
        """Labels compare each value with its reference average."""
        result = self.engine.compute(get_preset("good"))
        impacts = {row.feature: row.impact for row in result.feature_importance}
        self.assertEqual(impacts["transactions"], ImpactLabel.STRONG_POSITIVE)
        self.assertEqual(impacts["topup"], ImpactLabel.NEEDS_IMPROVEMENT)
        self.assertEqual(impacts["bills"], ImpactLabel.NEUTRAL)
        self.assertEqual(impacts["data"], ImpactLabel.STRONG_POSITIVE)
        self.assertEqual(impacts["usage"], ImpactLabel.POSITIVE)


class InvalidInputTests(unittest.TestCase):
    """Negative and non-finite values are rejected before scoring."""

    def setUp(self) -> None:
        self.engine = ScoringEngine()

    def test_negative_value_rejected(self) -> None:
        """Negative fields raise InvalidInputError naming the field."""
        with self.assertRaises(InvalidInputError) as ctx:
            self.engine.compute(CreditInputs(averageTopup=-1))
        self.assertEqual(ctx.exception.field, "averageTopup")
        self.assertEqual(ctx.exception.value, -1)

    def test_nan_rejected(self) -> None:
        """NaN fields raise InvalidInputError."""
        with self.assertRaises(InvalidInputError):
            self.engine.compute(CreditInputs(dataUsage=float("nan")), ScoringVariant.ENSEMBLE)

    def test_infinity_rejected(self) -> None:
        """Infinite fields raise InvalidInputError."""
        with self.assertRaises(InvalidInputError) as ctx:
            self.engine.compute(CreditInputs(monthlyTransactions=float("inf")))
        self.assertEqual(ctx.exception.field, "monthlyTransactions")

    def test_unknown_variant_rejected(self) -> None:
        """Unknown variant names raise ScoringConfigError."""
        with self.assertRaises(ScoringConfigError):
            self.engine.compute(CreditInputs(), "boosted")

    def test_variant_name_is_case_insensitive(self) -> None:
        """String variants are normalized."""
        result = self.engine.compute(CreditInputs(), " Ensemble ", rng=FixedSource(0.0))
        self.assertEqual(result.variant, ScoringVariant.ENSEMBLE)


if __name__ == "__main__":
    unittest.main()
