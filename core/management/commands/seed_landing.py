from django.core.management.base import BaseCommand

from core import landing_defaults
from core.models import AboutSection, HeroSection, PortfolioStat, SiteContact


class Command(BaseCommand):
    help = "Seed the landing page hero, about, portfolio stats and contact copy"

    def add_arguments(self, parser):
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Replace existing copy with the built-in defaults instead of only filling gaps.",
        )

    def handle(self, *args, **options):
        overwrite = options["overwrite"]

        for model, defaults in (
            (HeroSection, landing_defaults.HERO),
            (AboutSection, landing_defaults.ABOUT),
            (SiteContact, landing_defaults.CONTACT),
        ):
            section = model.objects.order_by("id").first()
            if section is None:
                section = model.objects.create(**defaults)
                self.stdout.write(self.style.SUCCESS(f"Created {model.__name__} (id={section.id})"))
                continue
            updated = [
                name for name, value in defaults.items()
                if overwrite or not getattr(section, name)
            ]
            for name in updated:
                setattr(section, name, defaults[name])
            if updated:
                section.save(update_fields=[*updated, "updated"])
            self.stdout.write(self.style.SUCCESS(f"Updated {model.__name__} (id={section.id}) fields={updated}"))

        created_stats = 0
        for item in landing_defaults.PORTFOLIO_STATS:
            lookup = {"title": item["title"], "subtitle": item["subtitle"]}
            if overwrite:
                _, created = PortfolioStat.objects.update_or_create(**lookup, defaults=item)
            else:
                _, created = PortfolioStat.objects.get_or_create(**lookup, defaults=item)
            created_stats += int(created)
        self.stdout.write(
            self.style.SUCCESS(
                f"Ensured {len(landing_defaults.PORTFOLIO_STATS)} portfolio stats (created {created_stats})."
            )
        )
