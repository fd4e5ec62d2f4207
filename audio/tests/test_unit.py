import os
import tempfile
import time
from pathlib import Path

from django.test import SimpleTestCase

from audio.utils import (
    list_mp3_files,
    mp3_filename_for_title,
    resolve_media_path,
    sanitize_filename,
    thumbnail_filename_for,
)


class SanitizeFilenameTest(SimpleTestCase):
    def test_keeps_permitted_characters(self):
        self.assertEqual(sanitize_filename('Song - Live 2019.mp3'), 'Song - Live 2019.mp3')

    def test_strips_punctuation(self):
        self.assertEqual(
            sanitize_filename('Artist - Song (Official Video) [HD]!.mp3'),
            'Artist - Song Official Video HD.mp3',
        )

    def test_strips_path_separators(self):
        self.assertEqual(sanitize_filename('../../etc/passwd'), '....etcpasswd')
        self.assertEqual(sanitize_filename('a\\b/c'), 'abc')

    def test_strips_non_ascii(self):
        self.assertEqual(sanitize_filename('Café Über 日本.mp3'), 'Caf ber .mp3')

    def test_is_idempotent(self):
        once = sanitize_filename('Weird: title? *yes*.mp3')
        self.assertEqual(sanitize_filename(once), once)

    def test_none(self):
        self.assertEqual(sanitize_filename(None), '')


class Mp3FilenameTest(SimpleTestCase):
    def test_title_becomes_filename(self):
        self.assertEqual(mp3_filename_for_title('My Video'), 'My Video.mp3')

    def test_title_is_sanitized(self):
        self.assertEqual(mp3_filename_for_title('Rock & Roll / Part 2'), 'Rock  Roll  Part 2.mp3')

    def test_unrepresentable_title_falls_back(self):
        self.assertEqual(mp3_filename_for_title('日本語'), 'untitled.mp3')
        self.assertEqual(mp3_filename_for_title(''), 'untitled.mp3')
        self.assertEqual(mp3_filename_for_title(None), 'untitled.mp3')
        self.assertEqual(mp3_filename_for_title('..'), 'untitled.mp3')


class ThumbnailFilenameTest(SimpleTestCase):
    def test_replaces_mp3_extension(self):
        self.assertEqual(thumbnail_filename_for('My Video.mp3'), 'My Video.jpg')

    def test_only_last_extension_is_replaced(self):
        self.assertEqual(thumbnail_filename_for('v1.2.mp3'), 'v1.2.jpg')

    def test_no_extension(self):
        self.assertEqual(thumbnail_filename_for('noext'), 'noext.jpg')


class ResolveMediaPathTest(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.media_dir = Path(self._tmp.name) / 'media'
        self.media_dir.mkdir()

    def tearDown(self):
        self._tmp.cleanup()

    def test_plain_name(self):
        path = resolve_media_path(self.media_dir, 'Song.mp3')
        self.assertEqual(path, (self.media_dir / 'Song.mp3').resolve())

    def test_rejects_unsanitized(self):
        self.assertIsNone(resolve_media_path(self.media_dir, '../Song.mp3'))
        self.assertIsNone(resolve_media_path(self.media_dir, 'a/b.mp3'))
        self.assertIsNone(resolve_media_path(self.media_dir, 'Song?.mp3'))

    def test_rejects_dot_names(self):
        self.assertIsNone(resolve_media_path(self.media_dir, '..'))
        self.assertIsNone(resolve_media_path(self.media_dir, '.'))
        self.assertIsNone(resolve_media_path(self.media_dir, ''))

    def test_rejects_symlink_out_of_media_dir(self):
        outside = Path(self._tmp.name) / 'outside.mp3'
        outside.write_bytes(b'x')
        os.symlink(outside, self.media_dir / 'link.mp3')
        self.assertIsNone(resolve_media_path(self.media_dir, 'link.mp3'))


class ListMp3FilesTest(SimpleTestCase):
    def test_missing_dir(self):
        self.assertEqual(list_mp3_files('/nonexistent/ytmp3/media'), [])

    def test_newest_first_and_mp3_only(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            old = tmp / 'old.mp3'
            new = tmp / 'new.mp3'
            old.write_bytes(b'1')
            new.write_bytes(b'2')
            (tmp / 'new.jpg').write_bytes(b'3')
            past = time.time() - 100
            os.utime(old, (past, past))

            self.assertEqual([f.name for f in list_mp3_files(tmp)], ['new.mp3', 'old.mp3'])
