import logging
import mimetypes

from django.http import FileResponse, Http404, HttpResponse, HttpResponseRedirect
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_POST, require_safe

from audio.service.config import get_media_dir
from audio.service.convert_service import convert_url_to_mp3
from audio.utils import (
    MP3_EXTENSION,
    list_mp3_files,
    resolve_media_path,
    thumbnail_filename_for,
)

logger = logging.getLogger(__name__)


class HttpResponseSeeOther(HttpResponseRedirect):
    status_code = 303


def _error_response(error):
    """Log a failure and return it to the client as plain text."""
    logger.error('%s', error, exc_info=error)
    return HttpResponse(str(error), status=400, content_type='text/plain')


@require_safe
def index_view(request):
    """Form page for submitting a URL, plus the files converted so far."""
    try:
        context = {'files': [f.name for f in list_mp3_files(get_media_dir())]}
        return render(request, 'audio/index.html', context)
    except Exception as e:
        return _error_response(e)


@require_POST
def download_view(request):
    """
    Convert the submitted URL to MP3 and redirect to its playback page.

    Params:
        url (required): Video page URL

    Returns:
        303 redirect to /<filename>/, or 400 with the error as plain text
    """
    url = request.POST.get('url', '').strip()
    if not url:
        return _error_response(ValueError('Missing required parameter: url'))

    logger.info('Downloading %s', url)

    try:
        result = convert_url_to_mp3(url, get_media_dir(), logger=logger.info)
    except Exception as e:
        return _error_response(e)

    if result.skipped:
        logger.info('Reused existing %s', result.filename)

    return HttpResponseSeeOther(reverse('media_page', args=[result.filename]))


@require_safe
def media_page_view(request, filename):
    """
    Playback page for a converted file.

    Displays:
    - Thumbnail (if one was downloaded)
    - Embedded audio player
    - Download link
    """
    media_dir = get_media_dir()
    path = resolve_media_path(media_dir, filename)
    if path is None or not path.is_file():
        raise Http404(f'No such file: {filename}')

    thumbnail_name = thumbnail_filename_for(filename)
    thumbnail_path = resolve_media_path(media_dir, thumbnail_name)
    thumbnail_url = None
    if thumbnail_path is not None and thumbnail_path.is_file():
        thumbnail_url = reverse('media_file', args=[thumbnail_name])

    context = {
        'filename': filename,
        'media_url': reverse('media_file', args=[filename]),
        'thumbnail_url': thumbnail_url,
        'file_size': path.stat().st_size,
    }

    try:
        return render(request, 'audio/download.html', context)
    except Exception as e:
        return _error_response(e)


@require_safe
def media_file_view(request, filename):
    """
    Serve a file from the media directory.

    MP3s are sent as attachments named after the file; anything else
    (thumbnails) is served inline with a guessed content type.
    """
    path = resolve_media_path(get_media_dir(), filename)
    if path is None or not path.is_file():
        logger.warning('Media file not found: %s', filename)
        raise Http404(f'No such file: {filename}')

    if filename.lower().endswith(MP3_EXTENSION):
        return FileResponse(
            open(path, 'rb'),
            as_attachment=True,
            filename=filename,
            content_type='audio/mpeg',
        )

    content_type, _ = mimetypes.guess_type(filename)
    return FileResponse(open(path, 'rb'), content_type=content_type or 'application/octet-stream')
