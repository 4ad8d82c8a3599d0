#!/usr/bin/env python3
"""
Tests for SwipeService: daily caps, mutual interest, organisation review,
undo and streaks.

Runs against the in-memory repositories in tests/mocks/swipe_mocks.py.
"""

import unittest
from datetime import date, timedelta
from unittest.mock import Mock

from core.config_loader import SwipeConfig
from core.exceptions import (
    DailySwipeLimitExceeded,
    SuperLikeLimitExceeded,
    InvalidSwipeException,
    SwipeUndoNotAllowed,
    VolunteerNotFoundException,
    VacancyNotFoundException,
    MatchAccessDenied,
)
from core.swipes.swipe_service import SwipeService
from database.models.swipe import ACTOR_VOLUNTEER, ACTOR_ORGANISATION, LIKE, DISLIKE, SUPER_LIKE
from tests.mocks.swipe_mocks import FakeStore, PENDING, ACCEPTED, REJECTED

VOLUNTEER = "vol-1"
ORG = "org-1"
OTHER_ORG = "org-2"


class SwipeServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.store = FakeStore()
        self.store.volunteers.add(VOLUNTEER)
        for i in range(30):
            self.store.vacancies.add(f"vac-{i}", ORG)
        self.store.vacancies.add("foreign", OTHER_ORG)
        self.side_effects = Mock()
        self.service = SwipeService(
            SwipeConfig(daily_limit=15, super_like_daily_limit=3),
            uow_factory=self.store.uow,
            side_effects=self.side_effects,
            clock=self.store.clock
        )

    def like(self, vacancy_id, direction=LIKE, reason="cause"):
        return self.service.record_swipe(VOLUNTEER, vacancy_id, direction, reason=reason)

    def advance(self, **delta):
        self.store.clock.now += timedelta(**delta)


class TestVolunteerSwipes(SwipeServiceTestCase):

    def test_like_creates_pending_match(self):
        result = self.like("vac-0")

        self.assertFalse(result.matched)
        self.assertEqual(result.match_status, PENDING)
        self.assertEqual(result.today_count, 1)
        self.assertIsNone(result.conversation_id)
        self.side_effects.on_match_created.assert_called_once_with(result.match_id)

    def test_dislike_creates_no_match(self):
        result = self.like("vac-0", direction=DISLIKE, reason=None)
        self.assertIsNone(result.match_id)
        self.assertEqual(self.store.matches.rows, {})

    def test_like_requires_known_reason(self):
        with self.assertRaises(InvalidSwipeException):
            self.like("vac-0", reason=None)
        with self.assertRaises(InvalidSwipeException):
            self.like("vac-0", reason="bored")

    def test_invalid_direction(self):
        with self.assertRaises(InvalidSwipeException):
            self.like("vac-0", direction="MAYBE")

    def test_unknown_volunteer_and_vacancy(self):
        with self.assertRaises(VolunteerNotFoundException):
            self.service.record_swipe("nobody", "vac-0", LIKE, reason="cause")
        with self.assertRaises(VacancyNotFoundException):
            self.like("missing")

    def test_score_snapshot_is_stored(self):
        self.service.record_swipe(VOLUNTEER, "vac-0", LIKE, reason="skills", score_snapshot={'total': 80.0})
        row = self.store.swipes.get(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")
        self.assertEqual(row.score_snapshot, {'total': 80.0})
        self.assertEqual(row.reason, "skills")

    def test_volunteer_row_is_locked(self):
        self.like("vac-0")
        self.assertIn(VOLUNTEER, self.store.volunteers.locked)


class TestDailyCap(SwipeServiceTestCase):

    def test_sixteenth_swipe_is_rejected(self):
        for i in range(15):
            self.like(f"vac-{i}", direction=DISLIKE, reason=None)

        with self.assertRaises(DailySwipeLimitExceeded) as ctx:
            self.like("vac-15", direction=DISLIKE, reason=None)
        self.assertEqual(ctx.exception.limit, 15)
        self.assertIsNone(self.store.swipes.get(ACTOR_VOLUNTEER, VOLUNTEER, "vac-15"))

    def test_reswipe_does_not_count(self):
        for i in range(15):
            self.like(f"vac-{i}", direction=DISLIKE, reason=None)

        result = self.like("vac-3")
        self.assertEqual(result.today_count, 15)
        self.assertEqual(result.match_status, PENDING)

    def test_cap_resets_at_local_midnight(self):
        for i in range(15):
            self.like(f"vac-{i}", direction=DISLIKE, reason=None)

        # 09:00 UTC is 10:00 in Amsterdam; 14h later is past local midnight
        self.advance(hours=14)
        result = self.like("vac-20", direction=DISLIKE, reason=None)
        self.assertEqual(result.today_count, 1)

    def test_cap_follows_local_midnight_not_utc(self):
        # 22:30 UTC is 23:30 local, then 23:30 UTC is 00:30 local the next day
        self.store.clock.now = self.store.clock.now.replace(hour=22, minute=30)
        for i in range(15):
            self.like(f"vac-{i}", direction=DISLIKE, reason=None)
        self.advance(hours=1)
        self.assertEqual(self.service.today_count(ACTOR_VOLUNTEER, VOLUNTEER), 0)

    def test_super_like_cap(self):
        for i in range(3):
            self.like(f"vac-{i}", direction=SUPER_LIKE)
        with self.assertRaises(SuperLikeLimitExceeded):
            self.like("vac-3", direction=SUPER_LIKE)
        # Ordinary likes are still allowed
        self.assertEqual(self.like("vac-3").today_count, 4)


class TestMutualInterest(SwipeServiceTestCase):

    def test_organisation_like_first_then_volunteer_like_accepts(self):
        org_result = self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)
        self.assertIsNone(org_result.match_id)

        result = self.like("vac-0")

        self.assertTrue(result.matched)
        self.assertEqual(result.match_status, ACCEPTED)
        self.assertIsNotNone(result.conversation_id)
        match = self.store.matches.get_by_pair(VOLUNTEER, "vac-0")
        self.assertEqual(match.started_at, self.store.clock.now)
        self.side_effects.on_match_accepted.assert_called_once_with(result.match_id, ORG)
        self.side_effects.on_match_created.assert_not_called()

    def test_organisation_dislike_first_leaves_match_pending(self):
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", DISLIKE)
        result = self.like("vac-0")
        self.assertEqual(result.match_status, PENDING)

    def test_organisation_like_accepts_pending_match(self):
        pending = self.like("vac-0")
        self.advance(hours=5)

        result = self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)

        self.assertTrue(result.matched)
        self.assertEqual(result.match_id, pending.match_id)
        self.assertIsNotNone(result.conversation_id)
        self.side_effects.on_match_accepted.assert_called_once_with(pending.match_id, ORG)

    def test_organisation_dislike_rejects_pending_match(self):
        self.like("vac-0")
        result = self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", DISLIKE)

        self.assertEqual(result.match_status, REJECTED)
        self.assertFalse(result.matched)
        self.side_effects.on_match_rejected.assert_called_once_with(result.match_id, ORG)

    def test_organisation_cannot_swipe_for_foreign_vacancy(self):
        with self.assertRaises(MatchAccessDenied):
            self.service.record_organisation_swipe(ORG, VOLUNTEER, "foreign", LIKE)

    def test_organisation_swipe_locks_organisation_then_volunteer(self):
        del self.store.events[:]
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)
        self.assertEqual(self.store.events[:2], [('lock', ORG), ('lock', VOLUNTEER)])

    def test_second_like_does_not_duplicate_match(self):
        first = self.like("vac-0")
        second = self.like("vac-0", direction=SUPER_LIKE)

        self.assertEqual(first.match_id, second.match_id)
        self.assertEqual(len(self.store.matches.rows), 1)
        self.assertEqual(len(self.store.swipes.rows), 1)
        self.side_effects.on_match_created.assert_called_once()

    def test_organisation_swipes_are_not_capped(self):
        for i in range(20):
            self.store.volunteers.add(f"vol-{i}")
            self.service.record_organisation_swipe(ORG, f"vol-{i}", "vac-0", DISLIKE)
        self.assertEqual(self.service.today_count(ACTOR_ORGANISATION, ORG), 20)


class TestUndo(SwipeServiceTestCase):

    def test_undo_latest_swipe_decrements_count(self):
        self.like("vac-0", direction=DISLIKE, reason=None)
        self.advance(minutes=1)
        self.like("vac-1", direction=DISLIKE, reason=None)

        today = self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-1")

        self.assertEqual(today, 1)
        self.assertIsNone(self.store.swipes.get(ACTOR_VOLUNTEER, VOLUNTEER, "vac-1"))

    def test_undo_older_swipe_is_rejected(self):
        self.like("vac-0", direction=DISLIKE, reason=None)
        self.advance(minutes=1)
        self.like("vac-1", direction=DISLIKE, reason=None)

        with self.assertRaises(SwipeUndoNotAllowed):
            self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")
        self.assertEqual(self.service.today_count(ACTOR_VOLUNTEER, VOLUNTEER), 2)

    def test_undo_with_no_swipes_is_rejected(self):
        with self.assertRaises(SwipeUndoNotAllowed):
            self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")

    def test_undo_like_removes_pending_match(self):
        self.like("vac-0")
        self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")
        self.assertIsNone(self.store.matches.get_by_pair(VOLUNTEER, "vac-0"))

    def test_undo_does_not_touch_accepted_match(self):
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)
        self.advance(minutes=1)
        self.like("vac-0")

        self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")

        match = self.store.matches.get_by_pair(VOLUNTEER, "vac-0")
        self.assertEqual(match.status, ACCEPTED)

    def test_undo_does_not_touch_rejected_match(self):
        self.like("vac-0")
        self.advance(minutes=1)
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", DISLIKE)

        self.service.undo_last_swipe(ACTOR_ORGANISATION, ORG, "vac-0", volunteer_id=VOLUNTEER)

        self.assertEqual(self.store.matches.get_by_pair(VOLUNTEER, "vac-0").status, REJECTED)
        self.assertIsNone(self.store.swipes.get(ACTOR_ORGANISATION, VOLUNTEER, "vac-0"))

    def test_organisation_undo_checks_volunteer(self):
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)
        with self.assertRaises(SwipeUndoNotAllowed):
            self.service.undo_last_swipe(ACTOR_ORGANISATION, ORG, "vac-0", volunteer_id="vol-other")

    def test_invalid_actor_type(self):
        with self.assertRaises(InvalidSwipeException):
            self.service.undo_last_swipe("admin", VOLUNTEER, "vac-0")

    def test_undo_locks_volunteer_before_reading_latest(self):
        self.like("vac-0", direction=DISLIKE, reason=None)
        del self.store.events[:]

        self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")

        self.assertEqual(self.store.events[:2], [('lock', VOLUNTEER), ('latest', VOLUNTEER)])

    def test_organisation_undo_locks_organisation_before_reading_latest(self):
        self.service.record_organisation_swipe(ORG, VOLUNTEER, "vac-0", LIKE)
        del self.store.events[:]

        self.service.undo_last_swipe(ACTOR_ORGANISATION, ORG, "vac-0", volunteer_id=VOLUNTEER)

        self.assertEqual(
            self.store.events,
            [('lock', ORG), ('latest', ORG), ('lock', VOLUNTEER)]
        )

    def test_reswipe_becomes_latest_for_undo(self):
        self.like("vac-0", direction=DISLIKE, reason=None)
        self.advance(minutes=1)
        self.like("vac-1", direction=DISLIKE, reason=None)
        self.advance(minutes=1)
        self.like("vac-0")

        with self.assertRaises(SwipeUndoNotAllowed):
            self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-1")
        self.service.undo_last_swipe(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0")

        self.assertIsNone(self.store.swipes.get(ACTOR_VOLUNTEER, VOLUNTEER, "vac-0"))
        self.assertIsNone(self.store.matches.get_by_pair(VOLUNTEER, "vac-0"))


class TestStreak(SwipeServiceTestCase):

    def test_streak_counts_consecutive_local_days(self):
        self.assertEqual(self.like("vac-0").streak_days, 1)
        self.assertEqual(self.like("vac-1").streak_days, 1)
        self.advance(days=1)
        self.assertEqual(self.like("vac-2").streak_days, 2)
        self.advance(days=3)
        self.assertEqual(self.like("vac-3").streak_days, 1)

    def test_streak_uses_local_date(self):
        volunteer = self.store.volunteers.get_by_id(VOLUNTEER)
        self.like("vac-0")
        self.assertEqual(volunteer.last_active_date, date(2026, 3, 2))


if __name__ == '__main__':
    unittest.main()
