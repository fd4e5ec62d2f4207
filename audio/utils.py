import re
from pathlib import Path

# Everything outside letters, digits, '-', '.' and space is dropped
DISALLOWED_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9\-. ]+')

MP3_EXTENSION = '.mp3'
THUMBNAIL_EXTENSION = '.jpg'


def sanitize_filename(name):
    """
    Strip characters that are not safe in a media filename.

    Only ASCII letters, digits, '-', '.' and space survive. No other
    normalisation happens, so the result is stable: sanitizing an already
    sanitized name returns it unchanged.

    Examples:
        'Artist - Song (Official Video).mp3' -> 'Artist - Song Official Video.mp3'
        '../../etc/passwd' -> '....etcpasswd'
    """
    return DISALLOWED_FILENAME_CHARS.sub('', name or '')


def mp3_filename_for_title(title):
    """
    Build the MP3 filename for an extracted title.

    A title with no permitted characters at all falls back to 'untitled'.
    """
    filename = sanitize_filename(f'{title or ""}{MP3_EXTENSION}')
    stem = filename[: -len(MP3_EXTENSION)]
    if not stem.strip(' .'):
        return f'untitled{MP3_EXTENSION}'
    return filename


def thumbnail_filename_for(filename):
    """Replace the last extension of a media filename with .jpg"""
    stem = filename.rsplit('.', 1)[0] if '.' in filename else filename
    return f'{stem}{THUMBNAIL_EXTENSION}'


def resolve_media_path(media_dir, filename):
    """
    Map a requested filename onto a path inside the media directory.

    Returns None when the name is not a plain sanitized filename or would
    resolve outside media_dir.
    """
    if not filename or filename != sanitize_filename(filename):
        return None
    if filename in ('.', '..'):
        return None

    media_dir = Path(media_dir).resolve()
    candidate = (media_dir / filename).resolve()
    if candidate.parent != media_dir:
        return None
    return candidate


def list_mp3_files(media_dir):
    """Return MP3 files in media_dir, most recently modified first."""
    media_dir = Path(media_dir)
    if not media_dir.is_dir():
        return []
    files = [f for f in media_dir.iterdir() if f.is_file() and f.suffix.lower() == MP3_EXTENSION]
    return sorted(files, key=lambda f: f.stat().st_mtime, reverse=True)
