"""
Django management command for converting a URL to MP3 from the shell.

Runs the same pipeline as POST /download/, writing into the media
directory unless --outdir is given.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from audio.service.config import get_media_dir
from audio.service.convert_service import convert_url_to_mp3
from audio.service.resolve import PlaylistNotSupported


class Command(BaseCommand):
    help = 'Download the best audio of a video URL and convert it to MP3'

    def add_arguments(self, parser):
        parser.add_argument('url', type=str, help='Video page URL')
        parser.add_argument(
            '--outdir', type=str, default=None, help='Output directory (default: media directory)'
        )
        parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('--json', action='store_true', help='Output result as JSON')

    def handle(self, *args, **options):
        url = options['url']
        outdir = options['outdir'] or get_media_dir()
        verbose = options['verbose']
        output_json = options['json']

        logger = self.stdout.write if verbose and not output_json else None

        try:
            result = convert_url_to_mp3(url, outdir, logger=logger)
        except PlaylistNotSupported as e:
            raise CommandError(f'Playlist not supported: {e}')
        except Exception as e:
            raise CommandError(f'Conversion failed: {e}')

        if output_json:
            output = {
                'success': True,
                'url': result.url,
                'title': result.title,
                'filename': result.filename,
                'output_path': str(result.output_path),
                'file_size': result.file_size,
                'skipped': result.skipped,
                'thumbnail_path': str(result.thumbnail_path) if result.thumbnail_path else None,
            }
            self.stdout.write(json.dumps(output, indent=2))
            return

        self.stdout.write(self.style.SUCCESS('✓ Conversion complete'))
        self.stdout.write(f'  URL: {result.url}')
        self.stdout.write(f'  Title: {result.title}')
        self.stdout.write(f'  Output: {result.output_path}')
        self.stdout.write(f'  Size: {result.file_size:,} bytes')
        if result.duration_seconds:
            mins = result.duration_seconds // 60
            secs = result.duration_seconds % 60
            self.stdout.write(f'  Duration: {mins}:{secs:02d}')
        self.stdout.write(f'  Reused existing file: {"Yes" if result.skipped else "No"}')
        if result.thumbnail_path:
            self.stdout.write(f'  Thumbnail: {result.thumbnail_path}')
