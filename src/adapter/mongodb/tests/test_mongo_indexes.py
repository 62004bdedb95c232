"""Tests for index creation with conflict resolution."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import OperationFailure

from adapter.mongodb.indexes import create_index_safe


class TestCreateIndexSafe(unittest.TestCase):

    def test_creates_index(self):
        collection = MagicMock()

        self.assertTrue(create_index_safe(collection, [('email', 1)], 'idx_users_email'))
        collection.create_index.assert_called_once_with([('email', 1)], name='idx_users_email')

    def test_replaces_old_unique_index_on_same_keys(self):
        collection = MagicMock()
        collection.create_index.side_effect = [OperationFailure("Index already exists with different options"), None]
        collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'email_1': {'key': [('email', 1)], 'unique': True},
        }

        self.assertTrue(create_index_safe(collection, [('email', 1)], 'idx_users_email'))

        collection.drop_index.assert_called_once_with('email_1')
        self.assertEqual(collection.create_index.call_count, 2)

    def test_unrelated_errors_propagate(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("not authorized")

        with self.assertRaises(OperationFailure):
            create_index_safe(collection, [('email', 1)], 'idx_users_email')


if __name__ == '__main__':
    unittest.main()
