"""Tests for commit aggregation."""

import unittest
from datetime import timedelta

import pytest

from svnviz.errors import CallerContractError
from svnviz.models.entities import DateRange
from svnviz.reports.aggregator import (
    MODE_ALL, MODE_DASHBOARD, MODE_RANGE,
    aggregate_commits, filter_commits, normalize_range,
)
from svnviz.tests.helpers import make_commit, restore_test_timezone, set_test_timezone, utc
from svnviz.utils.periods import WEEKDAY_ORDER

NOW = utc(2024, 3, 15, 12, 0, 0)


def scenario_commits():
    return [
        make_commit(1, 'a', utc(2024, 3, 1, 10, 0)),
        make_commit(2, 'b', utc(2024, 3, 1, 15, 0)),
        make_commit(3, 'a', utc(2024, 3, 2, 9, 0)),
    ]


class TestEndToEndScenario(unittest.TestCase):
    """Three commits over two days."""

    def setUp(self):
        date_range = DateRange(start=utc(2024, 3, 1), end=utc(2024, 3, 2))
        self.view = aggregate_commits(scenario_commits(), date_range, MODE_ALL, now=NOW)

    def test_day_totals(self):
        self.assertEqual(self.view.range_totals.by_day, {'2024-03-01': 2, '2024-03-02': 1})

    def test_author_a_per_day(self):
        self.assertEqual(
            self.view.range_totals.author_by_day['a'],
            {'2024-03-01': 1, '2024-03-02': 1}
        )

    def test_author_b_per_day_has_no_untouched_day(self):
        self.assertEqual(self.view.range_totals.author_by_day['b'], {'2024-03-01': 1})
        self.assertNotIn('2024-03-02', self.view.range_totals.author_by_day['b'])

    def test_week_and_month_totals(self):
        # 2024-03-01 is a Friday, 2024-03-02 a Saturday: same ISO week
        self.assertEqual(self.view.range_totals.by_week, {'2024-W09': 3})
        self.assertEqual(self.view.range_totals.by_month, {'2024-03': 3})

    def test_commit_count(self):
        self.assertEqual(self.view.commit_count, 3)

    def test_author_totals(self):
        self.assertEqual(self.view.dashboard.author_totals, {'a': 2, 'b': 1})

    def test_weekday_and_hour(self):
        self.assertEqual(self.view.dashboard.by_weekday['Friday'], 2)
        self.assertEqual(self.view.dashboard.by_weekday['Saturday'], 1)
        self.assertEqual(self.view.dashboard.by_hour[10], 1)
        self.assertEqual(self.view.dashboard.by_hour[15], 1)
        self.assertEqual(self.view.dashboard.by_hour[9], 1)

    def test_view_carries_normalized_range_and_now(self):
        self.assertEqual(self.view.date_range.start, utc(2024, 3, 1))
        self.assertEqual(self.view.date_range.end, utc(2024, 3, 2, 23, 59, 59, 999000))
        self.assertEqual(self.view.generated_at, NOW)


class TestDensity(unittest.TestCase):
    """Overall fixed-range maps cover exactly the labels in the range."""

    def test_days_weeks_months_across_leap_day(self):
        date_range = DateRange(start=utc(2024, 2, 27, 15, 0), end=utc(2024, 3, 2, 1, 0))
        totals = aggregate_commits([], date_range, MODE_RANGE, now=NOW).range_totals

        self.assertEqual(
            list(totals.by_day),
            ['2024-02-27', '2024-02-28', '2024-02-29', '2024-03-01', '2024-03-02']
        )
        self.assertEqual(set(totals.by_week), {'2024-W09'})
        self.assertEqual(set(totals.by_month), {'2024-02', '2024-03'})

    def test_weeks_across_year_boundary(self):
        date_range = DateRange(start=utc(2022, 12, 30), end=utc(2023, 1, 2))
        totals = aggregate_commits([], date_range, MODE_RANGE, now=NOW).range_totals

        self.assertEqual(set(totals.by_week), {'2022-W52', '2023-W01'})
        self.assertEqual(set(totals.by_month), {'2022-12', '2023-01'})
        self.assertEqual(len(totals.by_day), 4)

    def test_single_day_range(self):
        date_range = DateRange(start=utc(2024, 3, 1, 18, 0), end=utc(2024, 3, 1, 6, 0))
        totals = aggregate_commits([], date_range, MODE_RANGE, now=NOW).range_totals
        self.assertEqual(totals.by_day, {'2024-03-01': 0})


class TestConservation(unittest.TestCase):
    """Every filtered commit lands in exactly one day, week and month."""

    def test_sums_match_filtered_count(self):
        commits = [
            make_commit(i, f"user{i % 3}", utc(2024, 1, 1) + timedelta(hours=17 * i))
            for i in range(1, 120)
        ]
        date_range = DateRange(start=utc(2024, 1, 10), end=utc(2024, 2, 20))
        view = aggregate_commits(commits, date_range, MODE_ALL, now=NOW)
        totals = view.range_totals

        filtered = filter_commits(commits, normalize_range(date_range))
        self.assertEqual(view.commit_count, len(filtered))
        self.assertEqual(sum(totals.by_day.values()), len(filtered))
        self.assertEqual(sum(totals.by_week.values()), len(filtered))
        self.assertEqual(sum(totals.by_month.values()), len(filtered))
        self.assertEqual(sum(view.dashboard.author_totals.values()), len(filtered))
        self.assertEqual(sum(view.dashboard.by_hour.values()), len(filtered))
        self.assertEqual(sum(view.dashboard.by_weekday.values()), len(filtered))

    def test_commits_outside_range_excluded(self):
        commits = scenario_commits() + [make_commit(4, 'c', utc(2024, 3, 3, 0, 0))]
        date_range = DateRange(start=utc(2024, 3, 1), end=utc(2024, 3, 2))
        view = aggregate_commits(commits, date_range, MODE_ALL, now=NOW)

        self.assertEqual(view.commit_count, 3)
        self.assertNotIn('2024-03-03', view.range_totals.by_day)
        self.assertNotIn('c', view.range_totals.author_by_day)
        self.assertNotIn('c', view.dashboard.author_totals)

    def test_range_bounds_are_inclusive(self):
        commits = [
            make_commit(1, 'a', utc(2024, 3, 1, 0, 0, 0)),
            make_commit(2, 'a', utc(2024, 3, 2, 23, 59, 59, 999000)),
        ]
        date_range = DateRange(start=utc(2024, 3, 1, 12), end=utc(2024, 3, 2, 12))
        view = aggregate_commits(commits, date_range, MODE_RANGE, now=NOW)
        self.assertEqual(view.commit_count, 2)


class TestEmptyInput(unittest.TestCase):
    """No commits: every dense map is all zeros and nothing raises."""

    def setUp(self):
        date_range = DateRange(start=utc(2024, 3, 1), end=utc(2024, 3, 10))
        self.view = aggregate_commits([], date_range, MODE_ALL, now=NOW)

    def test_fixed_range_maps_are_zero(self):
        totals = self.view.range_totals
        self.assertEqual(len(totals.by_day), 10)
        self.assertTrue(all(v == 0 for v in totals.by_day.values()))
        self.assertTrue(all(v == 0 for v in totals.by_week.values()))
        self.assertTrue(all(v == 0 for v in totals.by_month.values()))

    def test_no_author_keys(self):
        self.assertEqual(self.view.range_totals.author_by_day, {})
        self.assertEqual(self.view.range_totals.author_by_week, {})
        self.assertEqual(self.view.range_totals.author_by_month, {})
        self.assertEqual(self.view.dashboard.author_totals, {})

    def test_dashboard_maps_are_seeded(self):
        dashboard = self.view.dashboard
        self.assertEqual(len(dashboard.last_30_days), 30)
        self.assertEqual(len(dashboard.last_12_months), 12)
        self.assertEqual(list(dashboard.by_weekday), list(WEEKDAY_ORDER))
        self.assertEqual(sorted(dashboard.by_hour), list(range(24)))
        self.assertEqual(sum(dashboard.last_30_days.values()), 0)
        self.assertEqual(sum(dashboard.by_hour.values()), 0)


class TestRollingWindows(unittest.TestCase):
    """Windows anchored at `now`, independent of the reporting range."""

    def setUp(self):
        self.date_range = DateRange(start=utc(2023, 1, 1), end=utc(2024, 3, 15))

    def test_last_30_days_domain(self):
        dashboard = aggregate_commits([], self.date_range, MODE_DASHBOARD, now=NOW).dashboard
        days = sorted(dashboard.last_30_days)
        self.assertEqual(days[0], '2024-02-15')
        self.assertEqual(days[-1], '2024-03-15')

    def test_commit_thirty_days_back_at_midnight_is_counted(self):
        commits = [make_commit(1, 'a', utc(2024, 2, 14, 0, 0, 0))]
        dashboard = aggregate_commits(commits, self.date_range, MODE_DASHBOARD, now=NOW).dashboard

        # Inclusion bound is one day before the first seeded bucket
        self.assertEqual(dashboard.last_30_days.get('2024-02-14'), 1)
        self.assertEqual(len(dashboard.last_30_days), 31)

    def test_commit_thirty_one_days_back_is_not_counted(self):
        commits = [make_commit(1, 'a', utc(2024, 2, 13, 23, 59, 59))]
        dashboard = aggregate_commits(commits, self.date_range, MODE_DASHBOARD, now=NOW).dashboard

        self.assertNotIn('2024-02-13', dashboard.last_30_days)
        self.assertEqual(sum(dashboard.last_30_days.values()), 0)
        self.assertEqual(len(dashboard.last_30_days), 30)

    def test_last_12_months(self):
        commits = [
            make_commit(1, 'a', utc(2023, 3, 31, 23, 0)),
            make_commit(2, 'a', utc(2023, 4, 1, 0, 0)),
            make_commit(3, 'b', utc(2024, 3, 10, 8, 0)),
        ]
        dashboard = aggregate_commits(commits, self.date_range, MODE_DASHBOARD, now=NOW).dashboard

        months = sorted(dashboard.last_12_months)
        self.assertEqual(months[0], '2023-04')
        self.assertEqual(months[-1], '2024-03')
        self.assertEqual(len(months), 12)
        self.assertEqual(dashboard.last_12_months['2023-04'], 1)
        self.assertEqual(dashboard.last_12_months['2024-03'], 1)
        self.assertNotIn('2023-03', dashboard.last_12_months)

    def test_rolling_windows_only_see_filtered_commits(self):
        commits = [make_commit(1, 'a', utc(2024, 3, 10, 8, 0))]
        narrow = DateRange(start=utc(2024, 1, 1), end=utc(2024, 1, 31))
        dashboard = aggregate_commits(commits, narrow, MODE_DASHBOARD, now=NOW).dashboard
        self.assertEqual(sum(dashboard.last_30_days.values()), 0)
        self.assertEqual(dashboard.author_totals, {})

    def test_rolling_windows_depend_on_now(self):
        """Not reproducible across different instants."""
        commits = scenario_commits()
        first = aggregate_commits(commits, self.date_range, MODE_DASHBOARD, now=NOW).dashboard
        later = aggregate_commits(
            commits, self.date_range, MODE_DASHBOARD, now=NOW + timedelta(days=40)
        ).dashboard

        self.assertNotEqual(set(first.last_30_days), set(later.last_30_days))
        self.assertEqual(sum(first.last_30_days.values()), 3)
        self.assertEqual(sum(later.last_30_days.values()), 0)
        # Fixed-domain distributions don't move
        self.assertEqual(first.by_hour, later.by_hour)


class TestPerAuthorSparseMaps(unittest.TestCase):
    """
    Current behavior: per-author maps hold only the labels the author touched.

    Callers should not rely on this asymmetry with the dense overall maps.
    """

    def test_author_touching_one_week_of_four(self):
        commits = [
            make_commit(1, 'c', utc(2024, 3, 5, 10, 0)),
            make_commit(2, 'd', utc(2024, 3, 26, 10, 0)),
        ]
        date_range = DateRange(start=utc(2024, 3, 4), end=utc(2024, 3, 31))
        totals = aggregate_commits(commits, date_range, MODE_RANGE, now=NOW).range_totals

        self.assertEqual(len(totals.by_week), 4)
        self.assertEqual(totals.author_by_week['c'], {'2024-W10': 1})
        self.assertEqual(totals.author_by_week['d'], {'2024-W13': 1})
        self.assertEqual(totals.author_by_month['c'], {'2024-03': 1})
        self.assertEqual(len(totals.author_by_day['c']), 1)


class TestModes(unittest.TestCase):
    """Mode selection and caller contract errors."""

    def setUp(self):
        self.date_range = DateRange(start=utc(2024, 3, 1), end=utc(2024, 3, 2))

    def test_range_mode_skips_dashboard(self):
        view = aggregate_commits(scenario_commits(), self.date_range, MODE_RANGE, now=NOW)
        self.assertIsNotNone(view.range_totals)
        self.assertIsNone(view.dashboard)

    def test_dashboard_mode_skips_range(self):
        view = aggregate_commits(scenario_commits(), self.date_range, MODE_DASHBOARD, now=NOW)
        self.assertIsNone(view.range_totals)
        self.assertIsNotNone(view.dashboard)

    def test_unknown_mode_raises(self):
        with self.assertRaises(CallerContractError) as ctx:
            aggregate_commits(scenario_commits(), self.date_range, 'weekly', now=NOW)
        self.assertEqual(ctx.exception.stage, 'aggregate')

    def test_inverted_range_raises(self):
        inverted = DateRange(start=utc(2024, 3, 5), end=utc(2024, 3, 1))
        with self.assertRaises(CallerContractError):
            aggregate_commits(scenario_commits(), inverted, MODE_ALL, now=NOW)

    def test_same_day_inverted_times_normalize(self):
        same_day = DateRange(start=utc(2024, 3, 1, 18, 0), end=utc(2024, 3, 1, 9, 0))
        view = aggregate_commits(scenario_commits(), same_day, MODE_RANGE, now=NOW)
        self.assertEqual(view.range_totals.by_day, {'2024-03-01': 2})

    def test_input_order_does_not_matter(self):
        forward = aggregate_commits(scenario_commits(), self.date_range, MODE_ALL, now=NOW)
        backward = aggregate_commits(
            list(reversed(scenario_commits())), self.date_range, MODE_ALL, now=NOW
        )
        self.assertEqual(forward.range_totals, backward.range_totals)
        self.assertEqual(forward.dashboard, backward.dashboard)


def test_buckets_follow_local_timezone():
    """A 05:00Z commit is the previous evening in UTC-8."""
    old_tz = set_test_timezone("Etc/GMT+8")
    try:
        commits = [make_commit(1, 'a', utc(2024, 3, 2, 5, 0))]
        date_range = DateRange(start=utc(2024, 3, 1, 12), end=utc(2024, 3, 1, 12))
        view = aggregate_commits(commits, date_range, MODE_ALL, now=NOW)

        assert view.range_totals.by_day == {'2024-03-01': 1}
        assert view.dashboard.by_hour[21] == 1
        assert view.dashboard.by_weekday['Friday'] == 1
    finally:
        restore_test_timezone(old_tz)


@pytest.mark.parametrize("mode", [MODE_RANGE, MODE_DASHBOARD, MODE_ALL])
def test_empty_input_never_raises(mode):
    date_range = DateRange(start=utc(2024, 3, 1), end=utc(2024, 3, 1))
    view = aggregate_commits([], date_range, mode, now=NOW)
    assert view.commit_count == 0
