"""
Metadata extraction.

Asks yt-dlp what a URL points to without downloading anything.
"""

from dataclasses import dataclass
from typing import Optional

import yt_dlp

from audio.service.config import get_ytdlp_proxy


class PlaylistNotSupported(Exception):
    """Raised when a URL resolves to a playlist instead of a single video"""

    def __init__(self, message: str, playlist_title: Optional[str] = None, count: int = 0):
        super().__init__(message)
        self.playlist_title = playlist_title
        self.count = count


@dataclass
class PrefetchResult:
    """Result from prefetching metadata"""

    title: Optional[str] = None
    thumbnail_url: Optional[str] = None
    author: Optional[str] = None
    duration_seconds: Optional[int] = None
    webpage_url: Optional[str] = None
    extractor: Optional[str] = None
    external_id: Optional[str] = None


def prefetch(url, logger=None):
    """
    Fetch metadata for a single video using yt-dlp.

    Args:
        url: Source URL
        logger: Optional callable(str) for logging

    Returns:
        PrefetchResult with metadata

    Raises:
        PlaylistNotSupported: If URL is a playlist
        yt_dlp.utils.DownloadError: If yt-dlp cannot resolve the URL
    """

    def log(message):
        if logger:
            logger(message)

    ydl_opts = {
        'quiet': True,
        'no_warnings': True,
        'noplaylist': True,
        'extract_flat': False,
    }

    proxy = get_ytdlp_proxy()
    if proxy:
        ydl_opts['proxy'] = proxy

    log(f'Resolving: {url}')

    with yt_dlp.YoutubeDL(ydl_opts) as ydl:
        info = ydl.extract_info(url, download=False)

    if info is None:
        raise ValueError(f'yt-dlp returned no metadata for {url}')

    if 'entries' in info:
        entries = [e for e in info.get('entries') or [] if e is not None]
        playlist_title = info.get('title', 'Untitled Playlist')
        raise PlaylistNotSupported(
            f'URL points to a playlist ({playlist_title}, {len(entries)} items); '
            'submit a single video URL',
            playlist_title=playlist_title,
            count=len(entries),
        )

    result = PrefetchResult()
    result.title = info.get('title') or 'Untitled'
    result.thumbnail_url = info.get('thumbnail') or _best_thumbnail(info.get('thumbnails'))
    result.author = info.get('uploader') or info.get('channel') or ''
    duration = info.get('duration')
    result.duration_seconds = int(duration) if duration else None
    result.webpage_url = info.get('webpage_url', url)
    result.extractor = info.get('extractor', '')
    result.external_id = info.get('id', '')

    log(f'yt-dlp metadata extracted: {result.title}')
    log(f'Extractor: {result.extractor}')
    if result.thumbnail_url:
        log(f'Thumbnail: {result.thumbnail_url}')

    return result


def _best_thumbnail(thumbnails):
    """Pick the highest-preference thumbnail URL from yt-dlp's thumbnail list"""
    if not thumbnails:
        return None
    candidates = [t for t in thumbnails if t.get('url')]
    if not candidates:
        return None
    best = max(candidates, key=lambda t: (t.get('preference') or 0, t.get('width') or 0))
    return best['url']
