"""Tests for FakeEmploymentRepository."""

import unittest
from datetime import date

from adapter.fake.company_repository import FakeCompanyRepository
from adapter.fake.employment_repository import FakeEmploymentRepository
from adapter.fake.user_repository import FakeUserRepository


class TestFakeEmploymentRepository(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.companies = FakeCompanyRepository()
        self.repo = FakeEmploymentRepository(self.users, self.companies)

        self.acme = self.companies.create('Acme', date(2000, 1, 1))
        self.globex = self.companies.create('Globex', date(1995, 1, 1))
        self.ann = self.users.create('Ann', 'ann@example.com', 'h')
        self.ben = self.users.create('Ben', 'ben@example.com', 'h')
        self.chloe = self.users.create('Chloe', 'chloe@example.com', 'h')

    def test_employ_missing_side_returns_none(self):
        self.assertIsNone(self.repo.employ('missing', self.acme.id))
        self.assertIsNone(self.repo.employ(self.ann.id, 'missing'))

    def test_employ_replaces_previous_employer(self):
        self.repo.employ(self.ann.id, self.acme.id)
        self.repo.employ(self.ann.id, self.globex.id, position='Engineer')

        self.assertEqual(self.repo.company_of(self.ann.id).id, self.globex.id)
        self.assertEqual(self.repo.users_of(self.acme.id), [])
        self.assertEqual(self.repo.get(self.ann.id).position, 'Engineer')

    def test_colleagues_exclude_self(self):
        for user in (self.chloe, self.ann, self.ben):
            self.repo.employ(user.id, self.acme.id)

        colleagues = self.repo.colleagues_of(self.ann.id)

        self.assertEqual([u.name for u in colleagues], ['Ben', 'Chloe'])

    def test_unemployed_user_has_no_colleagues(self):
        self.assertEqual(self.repo.colleagues_of(self.ann.id), [])
        self.assertIsNone(self.repo.company_of(self.ann.id))

    def test_dismiss(self):
        self.repo.employ(self.ann.id, self.acme.id)
        self.assertTrue(self.repo.dismiss(self.ann.id))
        self.assertFalse(self.repo.dismiss(self.ann.id))

    def test_erasing_company_drops_edges(self):
        self.repo.employ(self.ann.id, self.acme.id)
        self.companies.erase(self.acme.id)

        self.assertIsNone(self.repo.get(self.ann.id))
        self.assertIsNone(self.repo.company_of(self.ann.id))


if __name__ == '__main__':
    unittest.main()
