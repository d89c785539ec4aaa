"""
Unit tests for the attention service layer.

The repository is patched out; rows mimic what ``RealDictCursor`` returns.
"""

import os
import time
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from attention_api.services import attention
from attention_api.services.attention import (
    get_daily,
    get_ip_metrics,
    get_program_breakdown,
    get_publisher_breakdown,
    get_summary,
    get_tier_tables,
    row_to_event,
    window_start,
)


def make_row(conversion=False, asv_seconds=None, program=None, publisher=None,
             ip="10.0.0.1", created_at=datetime(2026, 10, 15, 12, 0)):
    return {
        "qr_id": "qr-1",
        "ip": ip,
        "program": program,
        "publisher": publisher,
        "conversion": conversion,
        "asv_seconds": asv_seconds,
        "created_at": created_at,
    }


class TestHelpers(unittest.TestCase):

    def test_window_start_is_midnight_days_ago(self):
        now = datetime(2026, 10, 16, 15, 30, 12, tzinfo=timezone.utc)
        self.assertEqual(window_start(7, now), datetime(2026, 10, 9, tzinfo=timezone.utc))

    def test_window_start_defaults_to_aware_now(self):
        start = window_start(1)
        self.assertIsNotNone(start.tzinfo)
        self.assertEqual((start.hour, start.minute, start.second), (0, 0, 0))

    @unittest.skipUnless(hasattr(time, "tzset"), "needs time.tzset to switch the local zone")
    def test_window_start_uses_offset_of_start_day(self):
        # US Eastern: daylight time ends on 2026-11-01.
        self.addCleanup(time.tzset)
        with patch.dict(os.environ, {"TZ": "EST5EDT,M3.2.0,M11.1.0"}):
            time.tzset()
            start = window_start(7, datetime(2026, 11, 3, 12, 0))

        self.assertEqual(start, datetime(2026, 10, 27, 4, 0, tzinfo=timezone.utc))
        self.assertEqual(start.utcoffset(), timedelta(hours=-4))

    def test_window_start_keeps_aware_zone(self):
        eastern = timezone(timedelta(hours=-5))
        start = window_start(2, datetime(2026, 3, 9, 0, 30, tzinfo=eastern))
        self.assertEqual(start, datetime(2026, 3, 7, tzinfo=eastern))

    def test_row_to_event(self):
        event = row_to_event(make_row(conversion=True, asv_seconds=12))
        self.assertTrue(event.converted)
        self.assertEqual(event.scan_to_action_seconds, 12.0)

        event = row_to_event(make_row(conversion=None))
        self.assertFalse(event.converted)
        self.assertIsNone(event.scan_to_action_seconds)


class TestSummary(unittest.TestCase):

    @patch.object(attention, "fetch_scans")
    def test_fetch_failure_returns_none(self, fetch):
        fetch.return_value = None
        self.assertIsNone(get_summary(30))

    @patch.object(attention, "fetch_scans")
    def test_empty_window(self, fetch):
        fetch.return_value = []
        payload = get_summary(7)

        self.assertEqual(payload.a2ar.tier, 1)
        self.assertEqual(payload.a2ar.label, "Low")
        self.assertEqual(payload.asv.label, "N/A")
        self.assertEqual(payload.aci.level, 0)

    @patch.object(attention, "fetch_scans")
    def test_summary_scores_every_row(self, fetch):
        fetch.return_value = [
            make_row(conversion=True, asv_seconds=2),
            make_row(asv_seconds=8),
            make_row(conversion=True),
            make_row(asv_seconds=50),
            make_row(),
        ]
        payload = get_summary(7)

        self.assertEqual(payload.a2ar.pause_opportunities, 5)
        self.assertEqual(payload.a2ar.qr_downloads, 2)
        self.assertEqual(payload.a2ar.percentage, 40.0)
        self.assertEqual(payload.asv.average_seconds, 20.0)
        self.assertEqual(payload.asv.tier, 3)
        self.assertEqual((payload.aci.score, payload.aci.level), (8.0, 4))

        since = fetch.call_args.args[0]
        self.assertEqual((since.hour, since.minute), (0, 0))


class TestBreakdowns(unittest.TestCase):

    def setUp(self):
        self.rows = [
            make_row(program="Evening News", publisher="Roku", conversion=True, asv_seconds=4),
            make_row(program="Evening News", publisher="Roku"),
            make_row(program="Evening News", publisher=None),
            make_row(program=None, publisher="Tubi", asv_seconds=45),
            make_row(program="", publisher="Tubi"),
            make_row(program="Cooking Hour", publisher="Tubi"),
        ]

    @patch.object(attention, "fetch_scans")
    def test_by_program_groups_and_sorts(self, fetch):
        fetch.return_value = self.rows
        payload = get_program_breakdown(30)

        names = [entry.program for entry in payload.programs]
        self.assertEqual(names, ["Evening News", "N/A", "Cooking Hour"])

        news = payload.programs[0]
        self.assertEqual(news.a2ar.pause_opportunities, 3)
        self.assertEqual(news.a2ar.qr_downloads, 1)
        self.assertEqual(news.asv.tier, 5)
        self.assertEqual(news.aci.score, 10)

        unknown = payload.programs[1]
        self.assertEqual(unknown.asv.label, "Low")
        self.assertEqual(unknown.aci.score, 2)

    @patch.object(attention, "fetch_scans")
    def test_by_publisher_defaults_to_direct(self, fetch):
        fetch.return_value = self.rows
        payload = get_publisher_breakdown(30)

        counts = {entry.publisher: entry.a2ar.pause_opportunities for entry in payload.publishers}
        self.assertEqual(counts, {"Tubi": 3, "Roku": 2, "Direct": 1})
        self.assertEqual(payload.publishers[0].publisher, "Tubi")

    @patch.object(attention, "fetch_scans")
    def test_breakdowns_propagate_fetch_failure(self, fetch):
        fetch.return_value = None
        self.assertIsNone(get_program_breakdown(30))
        self.assertIsNone(get_publisher_breakdown(30))


class TestDaily(unittest.TestCase):

    @patch.object(attention, "fetch_scans")
    def test_daily_series(self, fetch):
        day_one = datetime(2026, 10, 14, 9, 0)
        day_two = day_one + timedelta(days=1)
        fetch.return_value = [
            make_row(conversion=True, created_at=day_two),
            make_row(created_at=day_one),
            make_row(created_at=day_two),
            make_row(created_at=day_two),
        ]
        payload = get_daily(7)

        self.assertEqual([entry.date for entry in payload.daily], [day_one.date(), day_two.date()])
        self.assertEqual(payload.daily[0].a2ar, 0)
        self.assertEqual(payload.daily[1].pause_opportunities, 3)
        self.assertEqual(payload.daily[1].verified_conversions, 1)
        self.assertEqual(payload.daily[1].a2ar, 33.33)

    @patch.object(attention, "fetch_scans")
    def test_daily_failure(self, fetch):
        fetch.return_value = None
        self.assertIsNone(get_daily(7))


class TestIpMetrics(unittest.TestCase):

    @patch.object(attention, "fetch_scans")
    def test_scopes_fetch_to_ip(self, fetch):
        fetch.return_value = [make_row(conversion=True, asv_seconds=6)]
        payload = get_ip_metrics("10.0.0.1", 30)

        self.assertEqual(fetch.call_args.kwargs, {"ip": "10.0.0.1"})
        self.assertEqual(payload.ip, "10.0.0.1")
        self.assertEqual(payload.metrics.asv.tier, 4)
        self.assertEqual(payload.metrics.aci.level, 5)

    @patch.object(attention, "fetch_scans")
    def test_failure(self, fetch):
        fetch.return_value = None
        self.assertIsNone(get_ip_metrics("10.0.0.1", 30))


class TestTierTables(unittest.TestCase):

    def test_tables_come_from_engine(self):
        tables = get_tier_tables()
        self.assertEqual(len(tables.a2ar), 5)
        self.assertEqual(tables.asv[0].max, None)
        self.assertEqual(tables.aci[3].level, 4)


if __name__ == "__main__":
    unittest.main()
