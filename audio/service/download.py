"""
Download service.

Fetches the best audio stream with yt-dlp and thumbnails over plain HTTP.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
import yt_dlp

from audio.service.config import get_ytdlp_extra_args, get_ytdlp_proxy, parse_ytdlp_extra_args
from audio.service.constants import AUDIO_CONTAINER_EXTENSIONS


class DownloadError(Exception):
    """Raised when yt-dlp finishes without producing a media file"""

    pass


@dataclass
class DownloadedFileInfo:
    """Information about a downloaded file"""

    path: Path
    file_size: int
    extension: str
    mime_type: Optional[str] = None


def download_best_audio(url, temp_dir, logger=None):
    """
    Download the best available audio stream using yt-dlp.

    Args:
        url: Source URL
        temp_dir: Temporary directory for download (Path object or str)
        logger: Optional callable(str) for logging

    Returns:
        DownloadedFileInfo

    Raises:
        DownloadError: If no media file was produced
    """

    def log(message):
        if logger:
            logger(message)

    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)

    ydl_opts = {
        'format': 'bestaudio/best',
        'outtmpl': str(temp_dir / 'download.%(ext)s'),
        'noplaylist': True,
        'quiet': not logger,  # Show output if logger is provided
        'no_warnings': not logger,
    }

    proxy = get_ytdlp_proxy()
    if proxy:
        ydl_opts['proxy'] = proxy

    ydl_opts = parse_ytdlp_extra_args(get_ytdlp_extra_args(), ydl_opts)

    log(f'Downloading with yt-dlp: {url}')
    log(f'Format: {ydl_opts.get("format")}')

    with yt_dlp.YoutubeDL(ydl_opts) as ydl:
        ydl.download([url])

    files = [f for f in temp_dir.iterdir() if f.is_file()]
    log(f'yt-dlp created {len(files)} files')

    content_files = [f for f in files if f.suffix.lower() in AUDIO_CONTAINER_EXTENSIONS]
    if not content_files:
        raise DownloadError(f'No media file found after yt-dlp download of {url}')

    # Use the largest file as the main content
    content_file = max(content_files, key=lambda f: f.stat().st_size)
    file_size = content_file.stat().st_size
    log(f'Main content file: {content_file.name} ({file_size} bytes)')

    return DownloadedFileInfo(
        path=content_file, file_size=file_size, extension=content_file.suffix.lower()
    )


def download_thumbnail(url, out_path, timeout=15, logger=None):
    """
    Download a thumbnail image via HTTP.

    Network failures are not fatal: they are logged and None is returned.
    Errors writing out_path propagate.

    Args:
        url: Thumbnail URL
        out_path: Output file path (Path object or str)
        timeout: Request timeout in seconds
        logger: Optional callable(str) for logging

    Returns:
        DownloadedFileInfo or None
    """

    def log(message):
        if logger:
            logger(message)

    if not url:
        return None

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    log(f'Downloading thumbnail: {url}')

    try:
        response = requests.get(url, timeout=timeout, stream=True)
        response.raise_for_status()
        with open(out_path, 'wb') as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
    except requests.RequestException as e:
        log(f'Thumbnail download failed (non-fatal): {e}')
        out_path.unlink(missing_ok=True)
        return None

    file_size = out_path.stat().st_size
    mime_type = response.headers.get('content-type', 'application/octet-stream')
    log(f'Downloaded thumbnail: {file_size} bytes ({mime_type})')

    return DownloadedFileInfo(
        path=out_path, file_size=file_size, extension=out_path.suffix, mime_type=mime_type
    )
