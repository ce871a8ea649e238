from urllib.parse import urlparse

from django.conf import settings
from django.http import HttpResponsePermanentRedirect


class CanonicalDomainMiddleware:
    """
    301 any request whose host differs from the host in ``settings.BASE_URL``.

    Inactive under DEBUG or without BASE_URL. Hosts listed in
    ``CANONICAL_EXEMPT_HOSTS`` (suffix match) and the Google OAuth routes are
    let through unchanged.
    """

    exempt_prefixes = ('/login/google/',)

    def __init__(self, get_response):
        self.get_response = get_response
        base = (getattr(settings, 'BASE_URL', '') or '').strip()
        parsed = urlparse(base) if base else None
        self.canonical_host = parsed.netloc if parsed else ''
        self.canonical_scheme = 'https' if parsed and parsed.scheme == 'https' else 'http'
        self.exempt_hosts = tuple(getattr(settings, 'CANONICAL_EXEMPT_HOSTS', ()))

    def is_exempt(self, request) -> bool:
        if request.path.startswith(self.exempt_prefixes):
            return True
        host = request.get_host()
        if not host or host == self.canonical_host:
            return True
        return bool(self.exempt_hosts) and host.endswith(self.exempt_hosts)

    def __call__(self, request):
        if settings.DEBUG or not self.canonical_host or self.is_exempt(request):
            return self.get_response(request)
        return HttpResponsePermanentRedirect(f"{self.canonical_scheme}://{self.canonical_host}{request.get_full_path()}")
