#!/usr/bin/env python3
"""
Tests for retrieval strategies and the candidate retrieval pipeline.

Repositories are mocked; rows are SimpleNamespace stand-ins for ORM objects.
"""

import unittest
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

from core.retrieval.pipeline import (
    CandidateRetrievalPipeline,
    to_vacancy_candidate,
    to_volunteer_profile,
    within_travel_distance,
)
from core.retrieval.strategies import SemanticRetriever, RecencyRetriever

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)
AMSTERDAM = (52.3676, 4.9041)
UTRECHT = (52.0907, 5.1214)


def volunteer_row(**overrides):
    fields = dict(
        id="vol-1", functions_profile=None, values_profile=None,
        interests=["Education"], skills=[], lat=AMSTERDAM[0], lon=AMSTERDAM[1],
        max_distance_km=25.0, embedding=[0.1, 0.2, 0.3],
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def vacancy_row(vacancy_id, org="org-1", lat=None, lon=None, remote=False):
    return SimpleNamespace(
        id=vacancy_id, organisation_id=org, created_at=NOW, title=vacancy_id,
        categories=["Education"], required_skills=[], lat=lat, lon=lon,
        remote=remote, embedding=None,
    )


def make_repos():
    repos = MagicMock()
    repos.swipes.swiped_vacancy_ids.return_value = {"already-swiped"}
    repos.swipes.swiped_volunteer_ids.return_value = set()
    repos.vacancies.organisation_swipe_counts.return_value = {"org-1": 3}
    return repos


class TestStrategies(unittest.TestCase):

    def test_semantic_requires_embedding(self):
        retriever = SemanticRetriever()
        self.assertFalse(retriever.is_available(None))
        self.assertFalse(retriever.is_available([]))
        self.assertTrue(retriever.is_available([0.1]))

    def test_semantic_can_be_disabled(self):
        self.assertFalse(SemanticRetriever(enabled=False).is_available([0.1]))

    def test_semantic_fetches_fixed_pool_in_savepoint(self):
        repo = MagicMock()
        repo.find_similar.return_value = [("row-a", 0.1), ("row-b", 0.2)]
        rows = SemanticRetriever(pool_size=80).fetch_vacancies(repo, [0.1], 5, set())

        self.assertEqual(rows, ["row-a", "row-b"])
        repo.find_similar.assert_called_once_with([0.1], 80, set())
        repo.db.begin_nested.assert_called_once()

    def test_semantic_pool_grows_with_take(self):
        repo = MagicMock()
        repo.find_similar.return_value = []
        SemanticRetriever(pool_size=80, pool_multiplier=4).fetch_vacancies(repo, [0.1], 100, set())
        repo.find_similar.assert_called_once_with([0.1], 400, set())

    def test_recency_over_fetches(self):
        repo = MagicMock()
        RecencyRetriever(pool_multiplier=4).fetch_vacancies(repo, None, 10, {"x"})
        repo.find_recent.assert_called_once_with(40, {"x"})

    def test_recency_is_always_available(self):
        self.assertTrue(RecencyRetriever().is_available(None))


class TestPipeline(unittest.TestCase):

    def setUp(self):
        self.semantic = MagicMock(spec=SemanticRetriever)
        self.semantic.name = "semantic"
        self.recency = MagicMock(spec=RecencyRetriever)
        self.recency.name = "recency"
        self.recency.is_available.return_value = True
        self.pipeline = CandidateRetrievalPipeline([self.semantic, self.recency])

    def test_uses_semantic_when_available(self):
        self.semantic.is_available.return_value = True
        self.semantic.fetch_vacancies.return_value = [vacancy_row("v1")]
        repos = make_repos()

        profile, candidates = self.pipeline.vacancies_for_volunteer(repos, volunteer_row(), take=10)

        self.assertEqual([c.id for c in candidates], ["v1"])
        self.assertEqual(candidates[0].organisation_swipe_count, 3)
        self.recency.fetch_vacancies.assert_not_called()
        args = self.semantic.fetch_vacancies.call_args[0]
        self.assertEqual(args[3], {"already-swiped"})

    def test_falls_back_to_recency_without_embedding(self):
        self.semantic.is_available.return_value = False
        self.recency.fetch_vacancies.return_value = [vacancy_row("v2")]

        _, candidates = self.pipeline.vacancies_for_volunteer(
            make_repos(), volunteer_row(embedding=None), take=10
        )

        self.assertEqual([c.id for c in candidates], ["v2"])
        self.semantic.fetch_vacancies.assert_not_called()

    def test_falls_back_when_semantic_raises(self):
        self.semantic.is_available.return_value = True
        self.semantic.fetch_vacancies.side_effect = RuntimeError("operator does not exist: vector <=> vector")
        self.recency.fetch_vacancies.return_value = [vacancy_row("v3")]

        _, candidates = self.pipeline.vacancies_for_volunteer(make_repos(), volunteer_row(), take=10)

        self.assertEqual([c.id for c in candidates], ["v3"])

    def test_falls_back_when_semantic_is_empty(self):
        self.semantic.is_available.return_value = True
        self.semantic.fetch_vacancies.return_value = []
        self.recency.fetch_vacancies.return_value = [vacancy_row("v4")]

        _, candidates = self.pipeline.vacancies_for_volunteer(make_repos(), volunteer_row(), take=10)

        self.assertEqual([c.id for c in candidates], ["v4"])

    def test_nothing_found_returns_empty(self):
        self.semantic.is_available.return_value = False
        self.recency.fetch_vacancies.return_value = []
        _, candidates = self.pipeline.vacancies_for_volunteer(make_repos(), volunteer_row(), take=10)
        self.assertEqual(candidates, [])

    def test_distance_filter_drops_far_vacancies(self):
        self.semantic.is_available.return_value = False
        self.recency.fetch_vacancies.return_value = [
            vacancy_row("near", lat=AMSTERDAM[0] + 0.01, lon=AMSTERDAM[1]),
            vacancy_row("far", lat=UTRECHT[0], lon=UTRECHT[1]),
            vacancy_row("far-remote", lat=UTRECHT[0], lon=UTRECHT[1], remote=True),
            vacancy_row("unknown"),
        ]
        _, candidates = self.pipeline.vacancies_for_volunteer(make_repos(), volunteer_row(), take=10)
        self.assertEqual([c.id for c in candidates], ["near", "far-remote", "unknown"])

    def test_falls_back_when_every_semantic_candidate_is_out_of_range(self):
        self.semantic.is_available.return_value = True
        self.semantic.fetch_vacancies.return_value = [
            vacancy_row("utrecht", lat=UTRECHT[0], lon=UTRECHT[1]),
        ]
        self.recency.fetch_vacancies.return_value = [vacancy_row("remote", remote=True)]

        _, candidates = self.pipeline.vacancies_for_volunteer(
            make_repos(), volunteer_row(max_distance_km=10), take=10
        )

        self.assertEqual([c.id for c in candidates], ["remote"])
        self.recency.fetch_vacancies.assert_called_once()

    def test_volunteer_fallback_when_semantic_pool_is_out_of_range(self):
        self.semantic.is_available.return_value = True
        self.semantic.fetch_volunteers.return_value = [
            volunteer_row(id="far", lat=UTRECHT[0], lon=UTRECHT[1], max_distance_km=10),
        ]
        self.recency.fetch_volunteers.return_value = [volunteer_row(id="near")]
        vacancy = vacancy_row("v1", lat=AMSTERDAM[0], lon=AMSTERDAM[1])
        vacancy.embedding = [0.3, 0.2, 0.1]

        _, profiles = self.pipeline.volunteers_for_vacancy(make_repos(), vacancy, take=10)

        self.assertEqual([p.id for p in profiles], ["near"])

    def test_volunteers_for_vacancy(self):
        self.semantic.is_available.return_value = False
        self.recency.fetch_volunteers.return_value = [
            volunteer_row(id="a"),
            volunteer_row(id="b", lat=UTRECHT[0], lon=UTRECHT[1], max_distance_km=10),
        ]
        vacancy = vacancy_row("v1", lat=AMSTERDAM[0], lon=AMSTERDAM[1])

        subject, profiles = self.pipeline.volunteers_for_vacancy(make_repos(), vacancy, take=10)

        self.assertEqual(subject.id, "v1")
        self.assertEqual([p.id for p in profiles], ["a"])

    def test_requires_a_strategy(self):
        with self.assertRaises(ValueError):
            CandidateRetrievalPipeline([])


class TestSnapshots(unittest.TestCase):

    def test_volunteer_profile_parses_questionnaires(self):
        row = volunteer_row(functions_profile='{"values": 5, "understanding": 4, "social": 3, '
                                              '"career": 2, "protection": 1, "enhancement": 4}')
        profile = to_volunteer_profile(row)
        self.assertEqual(profile.functions['values'], 5.0)
        self.assertIsNone(profile.values)
        self.assertEqual(profile.interests, frozenset({"Education"}))

    def test_missing_radius_uses_default(self):
        profile = to_volunteer_profile(volunteer_row(max_distance_km=None))
        self.assertEqual(profile.max_distance_km, 25.0)

    def test_within_travel_distance_boundary(self):
        profile = to_volunteer_profile(volunteer_row(max_distance_km=40))
        vacancy = to_vacancy_candidate(vacancy_row("v", lat=UTRECHT[0], lon=UTRECHT[1]))
        self.assertTrue(within_travel_distance(profile, vacancy))


if __name__ == '__main__':
    unittest.main()
