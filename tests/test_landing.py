"""Tests for the public landing page, its editable copy and SEO routes."""
import pytest
from django.core.management import call_command

from core.models import AboutSection, HeroSection, PortfolioStat, SiteContact


pytestmark = pytest.mark.django_db


def test_home_renders_with_seeded_copy(client):
    response = client.get("/")
    assert response.status_code == 200
    content = response.content.decode()
    assert "Join Our Creative Team!" in content
    assert "Founded at 19." in content
    assert "Happy Customers" in content
    assert 'id="application-form"' in content
    assert response.context["max_resume_mb"] == 5


def test_home_uses_defaults_when_nothing_is_active(client):
    HeroSection.objects.all().delete()
    PortfolioStat.objects.all().delete()
    response = client.get("/")
    assert response.context["hero_section"].heading == "Join Our Creative Team!"
    assert [s.subtitle for s in response.context["portfolio_stats"]] == [
        "Happy Customers",
        "Micromanagement",
        "Autonomy",
    ]


def test_edited_copy_is_shown(client):
    HeroSection.objects.update(is_active=False)
    HeroSection.objects.create(heading="Now Hiring Sidekicks")
    response = client.get("/")
    assert "Now Hiring Sidekicks" in response.content.decode()


def test_inactive_stats_are_hidden(client):
    PortfolioStat.objects.filter(subtitle="Autonomy").update(is_active=False)
    response = client.get("/")
    assert [s.subtitle for s in response.context["portfolio_stats"]] == ["Happy Customers", "Micromanagement"]


def test_seed_landing_fills_gaps_only(capsys):
    HeroSection.objects.all().delete()
    contact = SiteContact.objects.get()
    contact.tagline = "Custom tagline"
    contact.save()

    call_command("seed_landing")

    assert HeroSection.objects.count() == 1
    assert SiteContact.objects.get().tagline == "Custom tagline"
    assert PortfolioStat.objects.count() == 3
    assert "Created HeroSection" in capsys.readouterr().out


def test_seed_landing_overwrite_restores_defaults():
    AboutSection.objects.update(title="Changed")
    call_command("seed_landing", "--overwrite")
    assert AboutSection.objects.get().title == "Founded at 19."


def test_robots_txt(client, settings):
    settings.ROBOTS_ALLOW = True
    response = client.get("/robots.txt")
    assert response["Content-Type"].startswith("text/plain")
    body = response.content.decode()
    assert "Disallow: /admin/" in body
    assert "Sitemap: http://testserver/sitemap.xml" in body


def test_robots_txt_blocks_everything_when_disallowed(client, settings):
    settings.ROBOTS_ALLOW = False
    assert "Disallow: /\n" in client.get("/robots.txt").content.decode()


def test_sitemap_lists_home(client):
    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert b"<loc>https://testserver/</loc>" in response.content


def test_sitemap_uses_base_url(client, settings):
    settings.BASE_URL = "https://hero-hq.com"
    response = client.get("/sitemap.xml")
    assert b"<loc>https://hero-hq.com/</loc>" in response.content
    assert b"<lastmod>" in response.content


def test_canonical_host_redirect(client, settings):
    settings.BASE_URL = "https://hero-hq.com"
    settings.ALLOWED_HOSTS = ["hero-hq.com", "www.hero-hq.com", "preview.herokuapp.com"]
    settings.CANONICAL_EXEMPT_HOSTS = [".herokuapp.com"]

    response = client.get("/?ref=ad", HTTP_HOST="www.hero-hq.com")
    assert response.status_code == 301
    assert response["Location"] == "https://hero-hq.com/?ref=ad"

    assert client.get("/", HTTP_HOST="preview.herokuapp.com").status_code == 200
    assert client.get("/login/google/callback/", HTTP_HOST="www.hero-hq.com").status_code == 404
