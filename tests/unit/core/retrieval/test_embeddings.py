#!/usr/bin/env python3
"""
Tests for embedding documents and the backfill batch.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from core.retrieval.embeddings import EmbeddingService, vacancy_to_text, volunteer_to_text


def vacancy(**overrides):
    fields = dict(
        id="vac-1", title="Reading buddy", description="Read with children after school.",
        categories=["Education"], required_skills=["Patience"], remote=False, city="Utrecht",
        embedding=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def volunteer(**overrides):
    fields = dict(
        id="vol-1", name="Noor", bio=None, interests=["Education", "Nature"],
        skills=[], city="Amsterdam", embedding=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestDocuments(unittest.TestCase):

    def test_vacancy_text(self):
        text = vacancy_to_text(vacancy())
        self.assertEqual(text.splitlines(), [
            "Role: Reading buddy",
            "Read with children after school.",
            "Sector: Education",
            "Skills: Patience",
            "Location: Utrecht",
        ])

    def test_remote_vacancy_text(self):
        self.assertIn("Remote possible", vacancy_to_text(vacancy(remote=True)))

    def test_volunteer_text_skips_empty_fields(self):
        text = volunteer_to_text(volunteer())
        self.assertEqual(text, "Volunteer: Noor\nInterests: Education, Nature\nLives in: Amsterdam")


class TestBackfill(unittest.TestCase):

    def setUp(self):
        self.llm = MagicMock()
        self.llm.generate_embedding.return_value = [0.5] * 3
        self.repos = MagicMock()
        self.service = EmbeddingService(self.llm)

    def test_backfill_embeds_missing_rows(self):
        vol, vac = volunteer(), vacancy()
        self.repos.embeddings.volunteers_missing_embedding.return_value = [vol]
        self.repos.embeddings.vacancies_missing_embedding.return_value = [vac]

        result = self.service.backfill(self.repos, limit=10)

        self.assertEqual(result.to_dict(), {'volunteers': 1, 'vacancies': 1, 'errors': []})
        self.assertEqual(vol.embedding, [0.5, 0.5, 0.5])
        self.assertEqual(vac.embedding, [0.5, 0.5, 0.5])
        self.repos.embeddings.volunteers_missing_embedding.assert_called_once_with(10)

    def test_one_failure_does_not_stop_batch(self):
        self.repos.embeddings.volunteers_missing_embedding.return_value = []
        self.repos.embeddings.vacancies_missing_embedding.return_value = [
            vacancy(id="bad"), vacancy(id="good")
        ]
        self.llm.generate_embedding.side_effect = [RuntimeError("rate limited"), [0.1]]

        result = self.service.backfill(self.repos)

        self.assertEqual(result.vacancies, 1)
        self.assertEqual(result.errors, ["vacancy bad: rate limited"])


if __name__ == '__main__':
    unittest.main()
