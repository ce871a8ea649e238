from django.db import migrations, models
import ckeditor.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Applicant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, max_length=40)),
                ("message", models.TextField(blank=True)),
                ("resume_url", models.URLField(max_length=1000)),
                (
                    "resume_key",
                    models.CharField(
                        blank=True,
                        help_text="Object name inside the resume store; blank when the URL points elsewhere.",
                        max_length=500,
                    ),
                ),
                ("resume_name", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("new", "New"),
                            ("reviewing", "Reviewing"),
                            ("contacted", "Contacted"),
                            ("hired", "Hired"),
                            ("rejected", "Rejected"),
                        ],
                        default="new",
                        max_length=32,
                    ),
                ),
                ("user_agent", models.TextField(blank=True)),
            ],
            options={
                "ordering": ("-created", "-id"),
            },
        ),
        migrations.CreateModel(
            name="HeroSection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated", models.DateTimeField(auto_now=True)),
                ("heading", models.CharField(default="Join Our Creative Team!", max_length=200)),
                ("subheading", models.TextField(blank=True)),
                ("cta_label", models.CharField(blank=True, default="Start Your Audition", max_length=80)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Hero section",
                "verbose_name_plural": "Hero sections",
            },
        ),
        migrations.CreateModel(
            name="AboutSection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated", models.DateTimeField(auto_now=True)),
                ("eyebrow", models.CharField(blank=True, default="THE CULTURE CHECK", max_length=80)),
                ("title", models.CharField(default="Founded at 19.", max_length=200)),
                (
                    "highlight",
                    models.CharField(blank=True, help_text="Second, accented line of the heading.", max_length=200),
                ),
                ("body", ckeditor.fields.RichTextField(blank=True, help_text="Main About copy.")),
                ("image_url", models.URLField(blank=True, max_length=1000)),
                ("image_caption", models.CharField(blank=True, max_length=120)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "About section",
                "verbose_name_plural": "About sections",
            },
        ),
        migrations.CreateModel(
            name="PortfolioStat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=80)),
                ("subtitle", models.CharField(max_length=120)),
                (
                    "accent",
                    models.CharField(
                        choices=[("blue", "Blue"), ("green", "Green"), ("yellow", "Yellow")],
                        default="blue",
                        max_length=16,
                    ),
                ),
                ("order", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["order", "id"],
            },
        ),
        migrations.CreateModel(
            name="SiteContact",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated", models.DateTimeField(auto_now=True)),
                ("strip_label", models.CharField(blank=True, default="HIRING HEROES IN TEXAS", max_length=120)),
                ("phone_number", models.CharField(blank=True, max_length=40)),
                ("help_url", models.URLField(blank=True)),
                ("brand_name", models.CharField(default="HERO HQ", max_length=80)),
                ("tagline", models.CharField(blank=True, max_length=200)),
                ("location", models.CharField(blank=True, max_length=120)),
                ("email_address", models.EmailField(blank=True, max_length=254)),
                ("copyright_holder", models.CharField(blank=True, max_length=120)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Site contact",
                "verbose_name_plural": "Site contact",
            },
        ),
    ]
