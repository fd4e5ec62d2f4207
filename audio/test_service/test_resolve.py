"""
Tests for service/resolve.py
"""

from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase, override_settings

from audio.service.resolve import PlaylistNotSupported, PrefetchResult, prefetch


def _mock_ydl(mock_ydl_class, info):
    mock_ydl = MagicMock()
    mock_ydl.extract_info.return_value = info
    mock_ydl_class.return_value.__enter__.return_value = mock_ydl
    return mock_ydl


class PrefetchTest(SimpleTestCase):
    """Tests for yt-dlp metadata prefetch"""

    def test_prefetch_result_defaults(self):
        result = PrefetchResult()
        self.assertIsNone(result.title)
        self.assertIsNone(result.thumbnail_url)

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_single_video(self, mock_ydl_class):
        mock_ydl = _mock_ydl(
            mock_ydl_class,
            {
                'title': 'My Video',
                'thumbnail': 'https://i.ytimg.com/vi/abc/maxresdefault.webp',
                'uploader': 'Some Channel',
                'duration': 212.0,
                'extractor': 'youtube',
                'id': 'abc',
                'webpage_url': 'https://www.youtube.com/watch?v=abc',
            },
        )

        result = prefetch('https://youtu.be/abc')

        mock_ydl.extract_info.assert_called_once_with('https://youtu.be/abc', download=False)
        self.assertEqual(result.title, 'My Video')
        self.assertEqual(result.thumbnail_url, 'https://i.ytimg.com/vi/abc/maxresdefault.webp')
        self.assertEqual(result.author, 'Some Channel')
        self.assertEqual(result.duration_seconds, 212)
        self.assertEqual(result.external_id, 'abc')

        opts = mock_ydl_class.call_args[0][0]
        self.assertTrue(opts['noplaylist'])
        self.assertNotIn('proxy', opts)

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_picks_thumbnail_from_list(self, mock_ydl_class):
        _mock_ydl(
            mock_ydl_class,
            {
                'title': 'No top-level thumbnail',
                'thumbnails': [
                    {'url': 'https://example.com/small.jpg', 'preference': -10, 'width': 120},
                    {'url': 'https://example.com/big.jpg', 'preference': 0, 'width': 1280},
                    {'id': 'broken'},
                ],
            },
        )

        result = prefetch('https://example.com/v')

        self.assertEqual(result.thumbnail_url, 'https://example.com/big.jpg')

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_missing_title(self, mock_ydl_class):
        _mock_ydl(mock_ydl_class, {'id': 'x'})

        result = prefetch('https://example.com/v')

        self.assertEqual(result.title, 'Untitled')
        self.assertIsNone(result.thumbnail_url)
        self.assertIsNone(result.duration_seconds)

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_playlist_raises(self, mock_ydl_class):
        _mock_ydl(
            mock_ydl_class,
            {'title': 'Mix', 'entries': [{'title': 'a'}, None, {'title': 'b'}]},
        )

        with self.assertRaises(PlaylistNotSupported) as ctx:
            prefetch('https://www.youtube.com/playlist?list=PL1')

        self.assertEqual(ctx.exception.count, 2)
        self.assertEqual(ctx.exception.playlist_title, 'Mix')

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_propagates_ytdlp_errors(self, mock_ydl_class):
        mock_ydl = MagicMock()
        mock_ydl.extract_info.side_effect = Exception('Unsupported URL')
        mock_ydl_class.return_value.__enter__.return_value = mock_ydl

        with self.assertRaisesMessage(Exception, 'Unsupported URL'):
            prefetch('https://example.com/not-a-video')

    @override_settings(YTMP3_YTDLP_PROXY='socks5://127.0.0.1:1080')
    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_uses_proxy(self, mock_ydl_class):
        _mock_ydl(mock_ydl_class, {'title': 't'})

        prefetch('https://example.com/v')

        opts = mock_ydl_class.call_args[0][0]
        self.assertEqual(opts['proxy'], 'socks5://127.0.0.1:1080')

    @patch('audio.service.resolve.yt_dlp.YoutubeDL')
    def test_prefetch_with_logger(self, mock_ydl_class):
        _mock_ydl(mock_ydl_class, {'title': 'Logged', 'extractor': 'generic'})
        logs = []

        prefetch('https://example.com/v', logger=logs.append)

        self.assertTrue(any('Logged' in msg for msg in logs))
