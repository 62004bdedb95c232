"""Tests for the JSON log formatter."""

import json
import logging
import sys
import unittest
from datetime import datetime, timezone

from domain.model.lifecycle import DeleteMode
from utils.logging import SERVICE_NAME, JSONFormatter


def _record(msg='hello', extra=None, exc_info=None):
    record = logging.LogRecord('test.logger', logging.INFO, __file__, 10, msg, (), exc_info)
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_base_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['message'], 'hello')
        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'test.logger')
        self.assertEqual(data['service'], SERVICE_NAME)
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_top_level(self):
        data = json.loads(self.formatter.format(_record(extra={'userId': 'u1'})))

        self.assertEqual(data['userId'], 'u1')
        self.assertNotIn('args', data)
        self.assertNotIn('lineno', data)

    def test_non_serializable_extras_are_stringified(self):
        when = datetime(2024, 1, 2, tzinfo=timezone.utc)

        data = json.loads(self.formatter.format(
            _record(extra={'at': when, 'mode': DeleteMode.TRASH})
        ))

        self.assertEqual(data['at'], str(when))
        self.assertIn('trash', data['mode'])

    def test_exception_is_formatted(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(self.formatter.format(record))

        self.assertIn('RuntimeError: boom', data['exception'])


if __name__ == '__main__':
    unittest.main()
