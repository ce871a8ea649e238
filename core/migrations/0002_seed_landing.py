from django.db import migrations

from core import landing_defaults


def seed_landing(apps, schema_editor):
    HeroSection = apps.get_model("core", "HeroSection")
    AboutSection = apps.get_model("core", "AboutSection")
    PortfolioStat = apps.get_model("core", "PortfolioStat")
    SiteContact = apps.get_model("core", "SiteContact")

    if not HeroSection.objects.exists():
        HeroSection.objects.create(**landing_defaults.HERO)
    if not AboutSection.objects.exists():
        AboutSection.objects.create(**landing_defaults.ABOUT)
    if not PortfolioStat.objects.exists():
        for item in landing_defaults.PORTFOLIO_STATS:
            PortfolioStat.objects.create(**item)
    if not SiteContact.objects.exists():
        SiteContact.objects.create(**landing_defaults.CONTACT)


class Migration(migrations.Migration):
    dependencies = [
        ("core", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_landing, migrations.RunPython.noop),
    ]
