"""
Root URLconf for herohq.

``core.urls`` serves the landing page and application intake; ``accounts.urls``
serves sign-in and the gated applicant dashboard at ``admin/``. The Django
admin therefore lives at ``django-admin/``.
"""
from django.conf import settings
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path, re_path
from django.views.generic import TemplateView
from django.views.static import serve

from core.sitemaps import StaticViewSitemap


def _uses_filesystem_media() -> bool:
    backend = getattr(settings, 'STORAGES', {}).get('default', {}).get('BACKEND', '')
    return backend == 'django.core.files.storage.FileSystemStorage'


urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('ckeditor/', include('ckeditor_uploader.urls')),
    path(
        'sitemap.xml',
        sitemap,
        {'sitemaps': {'static': StaticViewSitemap}},
        name='django.contrib.sitemaps.views.sitemap',
    ),
    path('robots.txt', TemplateView.as_view(template_name='robots.txt', content_type='text/plain'), name='robots_txt'),
    path('', include('accounts.urls')),
    path('', include('core.urls')),
]

# Uploaded resumes are served from MEDIA_ROOT whenever S3 is not configured
if settings.DEBUG or _uses_filesystem_media():
    urlpatterns = [
        re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    ] + urlpatterns
