from urllib.parse import urlsplit

from django.conf import settings
from django.contrib.sitemaps import Sitemap
from django.db.models import Max
from django.urls import reverse

from .models import AboutSection, HeroSection, PortfolioStat


class StaticViewSitemap(Sitemap):
    """Public pages; ``lastmod`` follows the newest edit to the landing copy."""

    priority = 0.8
    changefreq = "weekly"
    protocol = 'https'

    def items(self):
        return ['core:home']

    def location(self, item):
        return reverse(item)

    def lastmod(self, item):
        stamps = [
            model.objects.filter(is_active=True).aggregate(latest=Max('updated'))['latest']
            for model in (HeroSection, AboutSection, PortfolioStat)
        ]
        stamps = [s for s in stamps if s is not None]
        return max(stamps) if stamps else None

    def get_urls(self, page=1, site=None, protocol=None):
        urls = super().get_urls(page=page, site=site, protocol=protocol)
        # Locations always carry the BASE_URL origin when one is set
        base = getattr(settings, "BASE_URL", "").rstrip("/")
        if base:
            for u in urls:
                parts = urlsplit(u["location"])
                u["location"] = f"{base}{parts.path}"
        return urls
