"""
Media processing service.

Transcodes downloaded audio to MP3 with ffmpeg and normalises thumbnails
to JPEG with Pillow.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from audio.service.config import get_audio_bitrate, get_ffmpeg_extra_args


class TranscodeError(Exception):
    """Raised when ffmpeg is missing or exits with an error"""

    pass


@dataclass
class ProcessedFileInfo:
    """Information about a processed file"""

    path: Path
    file_size: int
    extension: str


def ensure_ffmpeg_available():
    if not shutil.which('ffmpeg'):
        raise TranscodeError(
            'ffmpeg is required for MP3 conversion but was not found on PATH'
        )


def build_ffmpeg_command(input_path, output_path, bitrate=None, extra_args=None):
    """
    Build the ffmpeg command line for an audio-only MP3 encode.

    Returns:
        list: Command suitable for subprocess.run
    """
    if bitrate is None:
        bitrate = get_audio_bitrate()
    if extra_args is None:
        extra_args = get_ffmpeg_extra_args()

    return [
        'ffmpeg',
        '-i', str(input_path),
        '-y',  # Overwrite output file
        '-vn',  # Audio only
        '-b:a', bitrate,
    ] + list(extra_args) + [
        str(output_path)
    ]


def transcode_to_mp3(input_path, output_path, bitrate=None, logger=None):
    """
    Transcode a media file to MP3.

    Args:
        input_path: Path to input file
        output_path: Path for output file
        bitrate: Audio bitrate (default from settings)
        logger: Optional callable(str) for logging

    Returns:
        ProcessedFileInfo

    Raises:
        TranscodeError: If ffmpeg is missing or fails
    """

    def log(message):
        if logger:
            logger(message)

    input_path = Path(input_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    ensure_ffmpeg_available()

    cmd = build_ffmpeg_command(input_path, output_path, bitrate=bitrate)
    log(f"Running: {' '.join(cmd)}")

    result = subprocess.run(cmd, capture_output=True, text=True)

    if result.returncode != 0:
        log(f'ffmpeg stderr: {result.stderr}')
        # The last lines of stderr carry the actual error
        tail = '\n'.join((result.stderr or '').strip().splitlines()[-3:])
        message = f'ffmpeg failed with code {result.returncode}'
        if tail:
            message = f'{message}: {tail}'
        raise TranscodeError(message)

    file_size = output_path.stat().st_size
    log(f'Transcoding complete: {file_size} bytes')

    return ProcessedFileInfo(path=output_path, file_size=file_size, extension=output_path.suffix)


def process_thumbnail(thumbnail_path, output_path, logger=None):
    """
    Convert a thumbnail to JPEG so the .jpg name matches its content.

    YouTube serves WebP thumbnails; browsers cope, but the file should be
    what its extension says. Bytes Pillow cannot decode are copied as-is.

    Args:
        thumbnail_path: Path to input thumbnail
        output_path: Path for output JPEG file
        logger: Optional callable(str) for logging

    Returns:
        Path to processed thumbnail or None
    """

    def log(message):
        if logger:
            logger(message)

    if not thumbnail_path or not Path(thumbnail_path).exists():
        return None

    thumbnail_path = Path(thumbnail_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log(f'Converting thumbnail to JPEG: {thumbnail_path}')

    try:
        with Image.open(thumbnail_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            img.save(output_path, 'JPEG', quality=90)
    except (UnidentifiedImageError, OSError) as e:
        log(f'Thumbnail conversion failed: {e}')
        # Fallback: just copy the original
        shutil.copy2(thumbnail_path, output_path)

    log(f'Thumbnail saved: {output_path}')
    return output_path
