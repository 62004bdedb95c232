"""Tests for the in-memory user/company repositories used by service and route tests.

They must behave like the real adapters for search, sort and limit or the
higher-level tests would prove nothing.
"""

import unittest
from datetime import date, datetime, timezone

from adapter.fake.company_repository import FakeCompanyRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.lifecycle import RecordState
from domain.model.listing import EntityKind, ListOptions


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.ann = self.repo.create('Ann Berg', 'ann@example.com', 'hash-a')
        self.ben = self.repo.create('Ben Costa', 'ben@example.com', 'hash-b')
        self.chloe = self.repo.create('Chloe Ito', 'chloe@Example.org', 'hash-c')

    def test_create_assigns_id_and_timestamps(self):
        self.assertTrue(self.ann.id)
        self.assertEqual(self.ann.created_at, self.ann.updated_at)
        self.assertEqual(self.ann.state, RecordState.ACTIVE)

    def test_search_matches_name_or_email_case_insensitively(self):
        found = self.repo.find_many(ListOptions.create(EntityKind.USER, search='EXAMPLE.ORG'))
        self.assertEqual([u.id for u in found], [self.chloe.id])

        found = self.repo.find_many(ListOptions.create(EntityKind.USER, search='costa'))
        self.assertEqual([u.id for u in found], [self.ben.id])

    def test_sort_and_limit(self):
        for i in range(5):
            self.repo.create(f'Zed {i}', f'zed{i}@example.com', 'h')

        found = self.repo.find_many(ListOptions.create(EntityKind.USER, sort_by='name', limit=5))

        self.assertEqual(len(found), 5)
        self.assertEqual(found[0].name, 'Ann Berg')

    def test_update_ignores_unknown_fields_and_refreshes_updated_at(self):
        before = self.ann.updated_at
        updated = self.repo.update(self.ann.id, {'name': 'Ann B', 'id': 'hijack'})

        self.assertEqual(updated.name, 'Ann B')
        self.assertEqual(updated.id, self.ann.id)
        self.assertGreaterEqual(updated.updated_at, before)

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.repo.update('missing', {'name': 'x'}))

    def test_set_deleted_at_and_clear(self):
        now = datetime.now(timezone.utc)
        self.assertEqual(self.repo.set_deleted_at(self.ann.id, now).state, RecordState.TRASHED)
        self.assertEqual(self.repo.set_deleted_at(self.ann.id, None).state, RecordState.ACTIVE)

    def test_erase(self):
        self.assertTrue(self.repo.erase(self.ann.id))
        self.assertFalse(self.repo.erase(self.ann.id))
        self.assertIsNone(self.repo.get_by_id(self.ann.id))

    def test_count_matching_excludes_given_id(self):
        self.assertEqual(self.repo.count_matching('email', 'ann@example.com'), 1)
        self.assertEqual(
            self.repo.count_matching('email', 'ann@example.com', excluding_id=self.ann.id), 0
        )


class TestFakeCompanyRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeCompanyRepository()

    def test_sort_by_since(self):
        young = self.repo.create('Young', date(2020, 1, 1))
        old = self.repo.create('Old', date(1990, 6, 1))

        found = self.repo.find_many(ListOptions.create(EntityKind.COMPANY, sort_by='since'))

        self.assertEqual([c.id for c in found], [old.id, young.id])

    def test_search_ignores_since(self):
        self.repo.create('Acme', date(2001, 1, 1))
        found = self.repo.find_many(ListOptions.create(EntityKind.COMPANY, search='2001'))
        self.assertEqual(found, [])


if __name__ == '__main__':
    unittest.main()
