"""
Media format constants.

File extensions yt-dlp may hand back for an audio-only download.
"""

AUDIO_CONTAINER_EXTENSIONS = [
    '.webm',
    '.m4a',
    '.mp4',
    '.opus',
    '.ogg',
    '.mp3',
    '.aac',
    '.flac',
    '.wav',
    '.mkv',
]
