"""Tests for the glycogen accumulator."""

from __future__ import annotations

import random
import threading

import pytest

from marathon_engine.config import EngineConfig
from marathon_engine.fueling import FuelingEngine, carb_utilization_fraction
from marathon_engine.models.enums import FuelingLevel


class TestCarbUtilization:
    def test_monotone_in_zone(self) -> None:
        fractions = [carb_utilization_fraction(z) for z in range(1, 6)]
        assert fractions == sorted(fractions)
        assert len(set(fractions)) == 5

    @pytest.mark.parametrize("zone,expected", [(0, 0.40), (-3, 0.40), (7, 0.85)])
    def test_out_of_range_zones_clamp(self, zone: int, expected: float) -> None:
        assert carb_utilization_fraction(zone) == expected

    @pytest.mark.parametrize("zone,expected", [(3.0, 0.60), (3.5, 0.60), (4.9, 0.75), (0.5, 0.40)])
    def test_fractional_zones_truncate(self, zone: float, expected: float) -> None:
        assert carb_utilization_fraction(zone) == expected


class TestInitialStore:
    def test_linear_in_weight(self) -> None:
        assert FuelingEngine(70).initial_glycogen_grams == pytest.approx(420.0)
        assert FuelingEngine(50).initial_glycogen_grams == pytest.approx(300.0)

    def test_starts_nominal_and_full(self) -> None:
        status = FuelingEngine(70).status()
        assert status.level == FuelingLevel.NOMINAL
        assert status.remaining_glycogen_grams == pytest.approx(420.0)

    @pytest.mark.parametrize("weight", [0.0, -60.0])
    def test_non_positive_weight_uses_default(self, weight: float) -> None:
        assert FuelingEngine(weight).initial_glycogen_grams == pytest.approx(420.0)

    def test_per_kg_constant_is_configurable(self) -> None:
        engine = FuelingEngine(70, EngineConfig(glycogen_grams_per_kg=7.0))
        assert engine.initial_glycogen_grams == pytest.approx(490.0)


class TestIngest:
    def test_single_minute_burn(self) -> None:
        engine = FuelingEngine(70)
        status = engine.ingest(12, 4)
        # 12 kcal × 0.75 / 4 kcal·g⁻¹ = 2.25 g
        assert status.remaining_glycogen_grams == pytest.approx(420.0 - 2.25)

    def test_duration_scales_burn(self) -> None:
        engine = FuelingEngine(70)
        status = engine.ingest(12, 4, duration_minutes=0.5)
        assert status.remaining_glycogen_grams == pytest.approx(420.0 - 1.125)

    def test_sustained_zone4_effort_reaches_critical(self) -> None:
        engine = FuelingEngine(70)
        for _ in range(190):
            engine.ingest(12, 4)
        depleted = engine.status()
        assert depleted.level == FuelingLevel.CRITICAL
        assert depleted.remaining_glycogen_grams <= 20

    def test_passes_through_warning(self) -> None:
        engine = FuelingEngine(70)
        levels = {engine.ingest(12, 4).level for _ in range(190)}
        assert levels == {FuelingLevel.NOMINAL, FuelingLevel.WARNING, FuelingLevel.CRITICAL}

    def test_negative_kcal_burns_nothing(self) -> None:
        engine = FuelingEngine(70)
        assert engine.ingest(-50, 5).remaining_glycogen_grams == pytest.approx(420.0)

    def test_floored_at_zero(self) -> None:
        engine = FuelingEngine(70)
        status = engine.ingest(10_000, 5)
        assert status.remaining_glycogen_grams == 0.0
        assert status.level == FuelingLevel.CRITICAL


class TestLogGel:
    def test_gel_lifts_out_of_critical(self) -> None:
        engine = FuelingEngine(70)
        for _ in range(190):
            engine.ingest(12, 4)
        depleted = engine.status()
        recovered = engine.log_gel(30)
        assert recovered.remaining_glycogen_grams > depleted.remaining_glycogen_grams
        assert recovered.level != FuelingLevel.CRITICAL

    def test_default_gel_size(self) -> None:
        engine = FuelingEngine(70)
        engine.ingest(100, 5, duration_minutes=4)  # 85 g
        before = engine.status().remaining_glycogen_grams
        assert engine.log_gel().remaining_glycogen_grams == pytest.approx(before + 25.0)

    def test_capped_at_initial_store(self) -> None:
        engine = FuelingEngine(70)
        engine.ingest(12, 4)
        assert engine.log_gel(200).remaining_glycogen_grams == pytest.approx(420.0)

    def test_negative_gel_is_ignored(self) -> None:
        engine = FuelingEngine(70)
        engine.ingest(12, 4)
        before = engine.status().remaining_glycogen_grams
        assert engine.log_gel(-30).remaining_glycogen_grams == pytest.approx(before)


class TestLevels:
    def test_thresholds_are_strictly_ordered(self) -> None:
        engine = FuelingEngine(70)
        assert 0 < engine.critical_threshold_grams < engine.warning_threshold_grams
        assert engine.warning_threshold_grams < engine.initial_glycogen_grams

    def test_critical_floor_holds_for_small_stores(self) -> None:
        engine = FuelingEngine(30)  # 180 g store, 5% = 9 g
        assert engine.critical_threshold_grams == pytest.approx(20.0)

    def test_critical_fraction_wins_for_large_stores(self) -> None:
        engine = FuelingEngine(100)  # 600 g store, 5% = 30 g
        assert engine.critical_threshold_grams == pytest.approx(30.0)

    def test_light_athlete_below_floor_is_critical(self) -> None:
        engine = FuelingEngine(60)  # 360 g store
        status = engine.ingest(2728, 2)  # 341 g burned
        assert status.remaining_glycogen_grams == pytest.approx(19.0)
        assert status.level == FuelingLevel.CRITICAL

    @pytest.mark.parametrize("weight", [45.0, 70.0, 95.0])
    def test_level_monotone_in_remaining_grams(self, weight: float) -> None:
        engine = FuelingEngine(weight)
        rank = {FuelingLevel.NOMINAL: 2, FuelingLevel.WARNING: 1, FuelingLevel.CRITICAL: 0}
        previous = rank[engine.status().level]
        for _ in range(400):
            current = rank[engine.ingest(8, 4).level]
            assert current <= previous
            previous = current


class TestGlycogenInvariant:
    @pytest.mark.parametrize("seed", range(20))
    def test_never_negative(self, seed: int) -> None:
        rng = random.Random(seed)
        engine = FuelingEngine(rng.uniform(40, 110))
        for _ in range(500):
            if rng.random() < 0.1:
                status = engine.log_gel(rng.uniform(0, 60))
            else:
                status = engine.ingest(rng.uniform(0, 30), rng.randint(1, 5), rng.uniform(0, 3))
            assert status.remaining_glycogen_grams >= 0
            assert status.remaining_glycogen_grams <= engine.initial_glycogen_grams


class TestConcurrency:
    def test_concurrent_ingest_is_linearised(self) -> None:
        engine = FuelingEngine(100)  # 600 g store
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            for _ in range(100):
                engine.ingest(4, 2)  # 0.5 g each
                engine.status()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # 800 burns × 0.5 g, no lost updates
        assert engine.status().remaining_glycogen_grams == pytest.approx(200.0)

    def test_concurrent_gels_and_burns(self) -> None:
        engine = FuelingEngine(100)
        engine.ingest(1000, 5, duration_minutes=10)  # drain to 0

        def gels() -> None:
            for _ in range(50):
                engine.log_gel(2)

        threads = [threading.Thread(target=gels) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert engine.status().remaining_glycogen_grams == pytest.approx(400.0)
