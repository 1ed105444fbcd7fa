"""
Unit tests for the injectable clock and id generators.
"""
import re
from datetime import datetime, timezone

import pytest

from pipeline.identity import FixedClock, RandomIdGenerator, SequentialIdGenerator, SystemClock


@pytest.mark.unit
class TestClocks:

    def test_system_clock_is_utc_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_fixed_clock_adds_utc_to_naive_instant(self):
        clock = FixedClock(datetime(2024, 1, 1, 12, 0))
        assert clock.now() == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert clock.now() is clock.now()


@pytest.mark.unit
class TestIdGenerators:

    def test_random_ids_have_expected_shape(self, fixed_instant):
        generator = RandomIdGenerator()
        value = generator.next_id(4, fixed_instant)
        millis = int(fixed_instant.timestamp() * 1000)
        assert re.fullmatch(rf"PO-{millis}-4-[a-z0-9]{{7}}", value)

    def test_random_ids_unique_per_row(self, fixed_instant):
        generator = RandomIdGenerator()
        ids = {generator.next_id(n, fixed_instant) for n in range(1, 500)}
        assert len(ids) == 499

    def test_sequential_ids(self, fixed_instant):
        generator = SequentialIdGenerator(prefix="T", start=7)
        assert generator.next_id(1, fixed_instant) == "T-000007"
        assert generator.next_id(9, fixed_instant) == "T-000008"
