"""Tests for Cypher list query assembly."""

import unittest

from adapter.neo4j.queries import build_list_query
from domain.model.listing import EntityKind, ListOptions


class TestBuildListQuery(unittest.TestCase):

    def test_plain_listing(self):
        query, params = build_list_query(ListOptions.create(EntityKind.USER))

        self.assertEqual(query, "MATCH (n:User) RETURN n")
        self.assertEqual(params, {})

    def test_search_travels_as_parameter(self):
        query, params = build_list_query(
            ListOptions.create(EntityKind.USER, search="x' OR 1=1 //")
        )

        self.assertNotIn("OR 1=1", query)
        self.assertIn("$search", query)
        self.assertEqual(params['search'], "x' OR 1=1 //")
        self.assertEqual(params['search_fields'], ['name', 'email'])

    def test_company_sort_and_limit(self):
        query, params = build_list_query(
            ListOptions.create(EntityKind.COMPANY, sort_by='since', limit=20)
        )

        self.assertTrue(query.startswith("MATCH (n:Company)"))
        self.assertIn("ORDER BY n.since", query)
        self.assertTrue(query.endswith("LIMIT $limit"))
        self.assertEqual(params, {'limit': 20})

    def test_every_sortable_field_has_a_fragment(self):
        for kind in EntityKind:
            for field in kind.sort_fields:
                with self.subTest(kind=kind, field=field):
                    query, _ = build_list_query(ListOptions.create(kind, sort_by=field))
                    self.assertIn(f"ORDER BY n.{field}", query)


if __name__ == '__main__':
    unittest.main()
