"""
URL configuration for ytmp3.

`download/` and `media/` are listed before the catch-all playback route so
they are never mistaken for a filename.
"""

from django.urls import path

from audio.views import download_view, index_view, media_file_view, media_page_view

urlpatterns = [
    path('', index_view, name='index'),
    path('download/', download_view, name='download'),
    path('media/<str:filename>/', media_file_view, name='media_file'),
    path('<str:filename>/', media_page_view, name='media_page'),
]
