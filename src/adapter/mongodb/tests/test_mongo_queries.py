"""Tests for MongoDB list query rendering."""

import re
import unittest

from adapter.mongodb.queries import build_list_query
from domain.model.listing import EntityKind, ListOptions


class TestBuildListQuery(unittest.TestCase):

    def test_empty_options(self):
        query = build_list_query(ListOptions.create(EntityKind.USER))

        self.assertEqual(query.filter, {})
        self.assertEqual(query.sort, [])
        self.assertEqual(query.limit, 0)

    def test_user_search_covers_name_and_email(self):
        query = build_list_query(ListOptions.create(EntityKind.USER, search='ann'))

        pattern = {'$regex': 'ann', '$options': 'i'}
        self.assertEqual(query.filter, {'$or': [{'name': pattern}, {'email': pattern}]})

    def test_company_search_covers_name_only(self):
        query = build_list_query(ListOptions.create(EntityKind.COMPANY, search='acme'))
        self.assertEqual([list(c) for c in query.filter['$or']], [['name']])

    def test_search_is_escaped(self):
        query = build_list_query(ListOptions.create(EntityKind.USER, search='a.b*(c'))

        regex = query.filter['$or'][0]['name']['$regex']
        self.assertEqual(regex, re.escape('a.b*(c'))
        self.assertIsNone(re.search(regex, 'aXbbbc'))
        self.assertIsNotNone(re.search(regex, 'xa.b*(cx'))

    def test_sort_and_limit(self):
        query = build_list_query(ListOptions.create(EntityKind.COMPANY, sort_by='since', limit=10))

        self.assertEqual(query.sort, [('since', 1)])
        self.assertEqual(query.limit, 10)


if __name__ == '__main__':
    unittest.main()
