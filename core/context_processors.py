from types import SimpleNamespace

from django.conf import settings

from . import landing_defaults
from .models import AboutSection, HeroSection, PortfolioStat, SiteContact


def seo(request):
    """
    Provides default SEO context values that templates can override per page.
    - seo_title: <title>
    - seo_description: <meta name="description">
    - canonical_url: absolute canonical URL if BASE_URL is set
    - robots: meta robots content (e.g., index, follow)
    """
    site_name = getattr(settings, 'SITE_NAME', 'Hero HQ')
    base_url = (getattr(settings, 'BASE_URL', '') or '').rstrip('/')
    site_base = base_url or request.build_absolute_uri('/')[:-1]

    robots_allow = getattr(settings, 'ROBOTS_ALLOW', not settings.DEBUG)
    return {
        'site_name': site_name,
        'seo_title': f"Join the Team | {site_name}",
        'seo_description': "We are looking for the next superhero to join our league of extraordinary creators.",
        'canonical_url': f"{site_base}{request.path}",
        'robots': 'index, follow' if robots_allow else 'noindex, nofollow',
        'site_base': site_base,
        'sitemap_url': f"{site_base}/sitemap.xml",
    }


def _active_or_default(model, defaults: dict):
    section = model.objects.filter(is_active=True).order_by('id').first()
    return section or SimpleNamespace(**defaults)


def landing(request):
    """Expose hero, about, portfolio and contact copy; built-in copy fills any gap."""

    stats = list(PortfolioStat.objects.filter(is_active=True).order_by('order', 'id'))
    contact = _active_or_default(SiteContact, landing_defaults.CONTACT)
    return {
        'hero_section': _active_or_default(HeroSection, landing_defaults.HERO),
        'about_section': _active_or_default(AboutSection, landing_defaults.ABOUT),
        'portfolio_stats': stats or [SimpleNamespace(**item) for item in landing_defaults.PORTFOLIO_STATS],
        'site_contact': contact,
    }
