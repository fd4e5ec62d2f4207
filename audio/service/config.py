"""
Configuration adapter for conversion settings.

Centralizes access to Django settings so the CLI and the web views
build yt-dlp and ffmpeg invocations the same way.
"""

import shlex
from pathlib import Path

from django.conf import settings


def get_media_dir():
    """Get the media directory path"""
    return Path(settings.YTMP3_MEDIA_DIR)


def get_audio_bitrate():
    """Get the MP3 bitrate passed to ffmpeg (e.g. '192k')"""
    return settings.YTMP3_AUDIO_BITRATE


def get_ytdlp_proxy():
    return settings.YTMP3_YTDLP_PROXY


def get_ytdlp_extra_args():
    return settings.YTMP3_YTDLP_EXTRA_ARGS


def get_ffmpeg_extra_args():
    """
    Get extra ffmpeg arguments as a list.

    Returns:
        list: Arguments inserted before the output path
    """
    return shlex.split(settings.YTMP3_FFMPEG_EXTRA_ARGS or '')


def get_thumbnail_timeout():
    return settings.YTMP3_THUMBNAIL_TIMEOUT


def parse_ytdlp_extra_args(args_string, base_opts):
    """
    Parse yt-dlp extra arguments string and apply to base options dict.

    Only the flags that make sense for a single best-audio download are
    understood; anything else is skipped.

    Args:
        args_string: String of yt-dlp arguments (e.g., '--format "bestaudio[ext=m4a]"')
        base_opts: Base yt-dlp options dict to update

    Returns:
        dict: Updated yt-dlp options dict

    Example:
        >>> opts = {'format': 'bestaudio/best', 'quiet': True}
        >>> parse_ytdlp_extra_args('-f "bestaudio[ext=webm]" --sleep-interval 2', opts)
        {'format': 'bestaudio[ext=webm]', 'quiet': True, 'sleep_interval': 2}
    """
    if not args_string:
        return base_opts

    args_list = shlex.split(args_string)

    # flag -> (option key, converter)
    valued_flags = {
        '--format': ('format', str),
        '-f': ('format', str),
        '--proxy': ('proxy', str),
        '--cookies': ('cookiefile', str),
        '--sleep-interval': ('sleep_interval', int),
        '--max-sleep-interval': ('max_sleep_interval', int),
    }

    i = 0
    while i < len(args_list):
        arg = args_list[i]

        if arg in valued_flags:
            if i + 1 < len(args_list):
                key, convert = valued_flags[arg]
                base_opts[key] = convert(args_list[i + 1])
                i += 2
            else:
                i += 1
        else:
            # Skip unknown args
            i += 1

    return base_opts
