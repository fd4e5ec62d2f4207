"""
Main conversion service entrypoint.

Provides a single function to turn a video URL into an MP3 in a directory,
used by both the CLI and the web app.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from audio.service.config import get_thumbnail_timeout
from audio.service.download import download_best_audio, download_thumbnail
from audio.service.process import process_thumbnail, transcode_to_mp3
from audio.service.resolve import prefetch
from audio.utils import mp3_filename_for_title, thumbnail_filename_for

# Hidden work directory created inside the output directory per conversion
TEMP_DIR_PREFIX = '.tmp-'


@dataclass
class ConvertResult:
    """Result from a conversion"""

    url: str
    title: str
    filename: str
    output_path: Path
    skipped: bool
    file_size: int
    thumbnail_path: Optional[Path] = None
    duration_seconds: Optional[int] = None


def convert_url_to_mp3(url, outdir, logger=None):
    """
    Resolve a URL, download its best audio and convert it to MP3 in outdir.

    Steps:
    1. Prefetch metadata with yt-dlp
    2. Derive the MP3 filename from the title
    3. Download and transcode, unless the MP3 already exists
    4. Fetch the thumbnail, unless it already exists

    The MP3 is written to a hidden work directory inside outdir and renamed
    into place only once ffmpeg succeeds. The rename is atomic, so an
    existing MP3 is always a complete one.

    Args:
        url: Source URL
        outdir: Output directory
        logger: Optional callable(str) for logging

    Returns:
        ConvertResult with details about the operation

    Raises:
        PlaylistNotSupported: If URL is a playlist
        DownloadError: If yt-dlp produced no media file
        TranscodeError: If ffmpeg is missing or fails
        Exception: For other errors during processing
    """

    def log(message):
        if logger:
            logger(message)

    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    log(f'Processing URL: {url}')

    prefetch_result = prefetch(url, logger=logger)

    filename = mp3_filename_for_title(prefetch_result.title)
    output_path = outdir / filename
    log(f'Filename: {filename}')

    skipped = output_path.exists()
    if skipped:
        log(f'Already converted, skipping download: {output_path}')
    else:
        # Work inside outdir so the final step is a same-filesystem rename
        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX, dir=outdir) as temp_dir:
            temp_dir = Path(temp_dir)
            download_info = download_best_audio(url, temp_dir / 'download', logger=logger)
            log(f'Downloaded: {download_info.path} ({download_info.file_size} bytes)')

            temp_output = temp_dir / filename
            transcode_to_mp3(download_info.path, temp_output, logger=logger)
            os.replace(temp_output, output_path)
            log(f'Content saved: {output_path}')

    thumbnail_path = fetch_thumbnail(prefetch_result.thumbnail_url, outdir, filename, logger=logger)

    result = ConvertResult(
        url=url,
        title=prefetch_result.title,
        filename=filename,
        output_path=output_path,
        skipped=skipped,
        file_size=output_path.stat().st_size,
        thumbnail_path=thumbnail_path,
        duration_seconds=prefetch_result.duration_seconds,
    )

    log('=' * 60)
    log(f'Complete! Output: {output_path} ({result.file_size} bytes)')
    if thumbnail_path:
        log(f'Thumbnail: {thumbnail_path}')

    return result


def fetch_thumbnail(thumbnail_url, outdir, mp3_filename, logger=None):
    """
    Store the thumbnail next to the MP3 as <stem>.jpg.

    Returns:
        Path to the thumbnail, or None when there is none
    """

    def log(message):
        if logger:
            logger(message)

    thumbnail_path = Path(outdir) / thumbnail_filename_for(mp3_filename)
    if thumbnail_path.exists():
        log(f'Thumbnail already present: {thumbnail_path}')
        return thumbnail_path

    if not thumbnail_url:
        log('No thumbnail available')
        return None

    with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX, dir=outdir) as temp_dir:
        temp_dir = Path(temp_dir)
        raw = download_thumbnail(
            thumbnail_url,
            temp_dir / 'thumbnail',
            timeout=get_thumbnail_timeout(),
            logger=logger,
        )
        if raw is None:
            return None
        processed = process_thumbnail(raw.path, temp_dir / thumbnail_path.name, logger=logger)
        os.replace(processed, thumbnail_path)

    return thumbnail_path
