"""Tests for LocalAvatarStorage against a temporary directory."""

import io
import tempfile
import unittest
from pathlib import Path

from adapter.storage.local_avatar_storage import LocalAvatarStorage, is_allowed_filename
from domain.model.avatar import AvatarUpload
from domain.model.errors import ValidationError


def _upload(filename='me.png', data=b'\x89PNG fake'):
    return AvatarUpload(filename=filename, stream=io.BytesIO(data), content_type='image/png')


class TestIsAllowedFilename(unittest.TestCase):

    def test_allowed_extensions_any_case(self):
        for name in ('a.jpg', 'a.JPEG', 'a.png', 'a.Gif'):
            with self.subTest(name=name):
                self.assertTrue(is_allowed_filename(name))

    def test_rejected(self):
        for name in ('a.exe', 'a.svg', 'png', '', None, 'a.png.exe'):
            with self.subTest(name=name):
                self.assertFalse(is_allowed_filename(name))


class TestLocalAvatarStorage(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name)
        self.root = self.base / 'storage'
        self.storage = LocalAvatarStorage(self.root, max_bytes=1024)

    def tearDown(self):
        self._tmp.cleanup()

    def test_store_writes_under_entity_directory(self):
        stored = self.storage.store('user1', _upload(data=b'abc'))

        self.assertTrue(stored.relative_path.startswith('users/user1/'))
        self.assertTrue(stored.file_name.endswith('.png'))
        self.assertEqual(stored.original_name, 'me.png')
        self.assertEqual(stored.size, 3)
        self.assertEqual((self.root / stored.relative_path).read_bytes(), b'abc')

    def test_store_generates_unique_names(self):
        a = self.storage.store('user1', _upload())
        b = self.storage.store('user1', _upload())
        self.assertNotEqual(a.file_name, b.file_name)

    def test_disallowed_type_is_rejected_before_writing(self):
        with self.assertRaises(ValidationError) as ctx:
            self.storage.store('user1', _upload(filename='virus.exe'))

        self.assertEqual(ctx.exception.errors[0].field, 'avatar')
        self.assertFalse((self.root / 'users' / 'user1').exists())

    def test_too_large_upload_leaves_no_file(self):
        with self.assertRaises(ValidationError):
            self.storage.store('user1', _upload(data=b'x' * 2048))

        self.assertEqual(list((self.root / 'users' / 'user1').iterdir()), [])

    def test_entity_id_cannot_escape_root(self):
        for bad in ('..', '../other', 'a/b', ''):
            with self.subTest(entity_id=bad):
                with self.assertRaises(ValidationError):
                    self.storage.store(bad, _upload())

    def test_store_many_checks_all_before_writing(self):
        with self.assertRaises(ValidationError):
            self.storage.store_many('user1', [_upload(), _upload(filename='x.txt')])
        self.assertFalse((self.root / 'users' / 'user1').exists())

    def test_remove_file(self):
        stored = self.storage.store('user1', _upload())
        self.storage.remove_file(stored.relative_path)

        self.assertFalse((self.root / stored.relative_path).exists())
        # already gone
        self.storage.remove_file(stored.relative_path)

    def test_remove_file_outside_root_is_ignored(self):
        outside = self.base / 'keep-me.txt'
        outside.write_bytes(b'data')

        self.storage.remove_file('../keep-me.txt')

        self.assertTrue(outside.exists())

    def test_remove_directory(self):
        self.storage.store('user1', _upload())
        self.storage.remove_directory('user1')
        self.assertFalse((self.root / 'users' / 'user1').exists())

    def test_remove_missing_directory_is_noop(self):
        self.storage.remove_directory('never-stored')


if __name__ == '__main__':
    unittest.main()
