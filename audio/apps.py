import shutil

from django.apps import AppConfig
from django.core.checks import Warning, register


class AudioConfig(AppConfig):
    name = 'audio'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        """Register the external tool checks when the app is ready"""
        register(check_external_tools)


def check_external_tools(app_configs, **kwargs):
    """Warn at startup when ffmpeg is not on PATH; every conversion would fail."""
    warnings = []
    if not shutil.which('ffmpeg'):
        warnings.append(
            Warning(
                'ffmpeg was not found on PATH.',
                hint='Install ffmpeg; it is required to convert downloads to MP3.',
                id='audio.W001',
            )
        )
    return warnings
