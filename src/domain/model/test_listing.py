"""Unit tests for ListOptions validation."""

import unittest

from domain.model.errors import ValidationError
from domain.model.listing import MAX_LIMIT, MIN_LIMIT, EntityKind, ListOptions


class TestListOptionsCreate(unittest.TestCase):

    def test_defaults_are_empty(self):
        options = ListOptions.create(EntityKind.USER)

        self.assertIsNone(options.search)
        self.assertIsNone(options.sort_by)
        self.assertIsNone(options.limit)

    def test_search_is_stripped(self):
        options = ListOptions.create(EntityKind.USER, search='  ann ')
        self.assertEqual(options.search, 'ann')

    def test_blank_search_becomes_none(self):
        options = ListOptions.create(EntityKind.COMPANY, search='   ')
        self.assertIsNone(options.search)

    def test_sort_by_allow_list_depends_on_kind(self):
        self.assertEqual(ListOptions.create(EntityKind.USER, sort_by='email').sort_by, 'email')
        self.assertEqual(ListOptions.create(EntityKind.COMPANY, sort_by='since').sort_by, 'since')

        with self.assertRaises(ValidationError):
            ListOptions.create(EntityKind.COMPANY, sort_by='email')
        with self.assertRaises(ValidationError):
            ListOptions.create(EntityKind.USER, sort_by='since')

    def test_sort_by_rejects_injection(self):
        with self.assertRaises(ValidationError) as ctx:
            ListOptions.create(EntityKind.USER, sort_by='name; DROP')
        self.assertEqual(ctx.exception.errors[0].field, 'sort_by')

    def test_limit_bounds_are_inclusive(self):
        self.assertEqual(ListOptions.create(EntityKind.USER, limit=MIN_LIMIT).limit, MIN_LIMIT)
        self.assertEqual(ListOptions.create(EntityKind.USER, limit=MAX_LIMIT).limit, MAX_LIMIT)

    def test_limit_outside_bounds_is_rejected(self):
        for limit in (MIN_LIMIT - 1, MAX_LIMIT + 1, 0, -5):
            with self.subTest(limit=limit):
                with self.assertRaises(ValidationError) as ctx:
                    ListOptions.create(EntityKind.USER, limit=limit)
                self.assertEqual(ctx.exception.errors[0].field, 'limit')

    def test_all_errors_are_collected(self):
        with self.assertRaises(ValidationError) as ctx:
            ListOptions.create(EntityKind.USER, sort_by='password', limit=1000)

        fields = sorted(e.field for e in ctx.exception.errors)
        self.assertEqual(fields, ['limit', 'sort_by'])


class TestEntityKind(unittest.TestCase):

    def test_search_fields(self):
        self.assertEqual(EntityKind.USER.search_fields, ('name', 'email'))
        self.assertEqual(EntityKind.COMPANY.search_fields, ('name',))


if __name__ == '__main__':
    unittest.main()
