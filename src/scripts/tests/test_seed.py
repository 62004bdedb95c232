"""Tests for the seed script against fake repositories."""

import random
import unittest
from unittest.mock import patch

from adapter.fake.company_repository import FakeCompanyRepository
from adapter.fake.employment_repository import FakeEmploymentRepository
from adapter.fake.user_repository import FakeUserRepository
from scripts.seed import seed


class TestSeed(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.companies = FakeCompanyRepository()
        self.employments = FakeEmploymentRepository(self.users, self.companies)

    @patch('services.user_service.BCRYPT_ROUNDS', 4)
    def test_every_seeded_user_is_employed(self):
        count = seed(self.users, self.companies, self.employments, company_count=2, rng=random.Random(7))

        self.assertEqual(len(self.companies.store), 2)
        self.assertEqual(len(self.users.store), count)
        self.assertEqual(len(self.employments.edges), count)
        for company_id in self.companies.store:
            self.assertTrue(3 <= len(self.employments.users_of(company_id)) <= 5)

    @patch('services.user_service.BCRYPT_ROUNDS', 4)
    def test_users_share_one_password_hash(self):
        seed(self.users, self.companies, self.employments, company_count=1, rng=random.Random(1))

        hashes = {u.password_hash for u in self.users.store.values()}
        self.assertEqual(len(hashes), 1)


if __name__ == '__main__':
    unittest.main()
