#!/usr/bin/env python3
"""Tests for Schedule dataclass."""

import dataclasses

import pytest
from registry import Schedule


class TestSchedule:
    """Tests for Schedule."""

    def test_attributes(self):
        schedule = Schedule(10000, 5000, 15000, 100)
        assert schedule.last_maintenance_mileage == 10000
        assert schedule.maintenance_interval == 5000
        assert schedule.next_maintenance_mileage == 15000
        assert schedule.last_maintenance_date == 100

    def test_empty_is_all_zero(self):
        assert Schedule.empty() == Schedule(0, 0, 0, 0)

    def test_is_consistent(self):
        assert Schedule(10000, 5000, 15000, 100).is_consistent
        assert not Schedule(10000, 5000, 12000, 100).is_consistent

    def test_equality_by_value(self):
        assert Schedule(1, 2, 3, 4) == Schedule(1, 2, 3, 4)
        assert Schedule(1, 2, 3, 4) != Schedule(1, 2, 3, 5)

    def test_immutable(self):
        """Stored schedules can only change through the registry."""
        schedule = Schedule(10000, 5000, 15000, 100)
        with pytest.raises(dataclasses.FrozenInstanceError):
            schedule.next_maintenance_mileage = 0
