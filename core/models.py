from django.db import models

from ckeditor.fields import RichTextField


class Timestamped(models.Model):
	created = models.DateTimeField(auto_now_add=True, db_index=True)
	updated = models.DateTimeField(auto_now=True)

	class Meta:
		abstract = True


class ApplicantStatus(models.TextChoices):
	NEW = 'new', 'New'
	REVIEWING = 'reviewing', 'Reviewing'
	CONTACTED = 'contacted', 'Contacted'
	HIRED = 'hired', 'Hired'
	REJECTED = 'rejected', 'Rejected'


class Applicant(Timestamped):
	"""One application submitted through the landing page form.

	Rows are written once by the intake flow and removed once from the
	dashboard; ``status`` only changes through the Django admin.
	"""

	name = models.CharField(max_length=200)
	email = models.EmailField()
	phone = models.CharField(max_length=40, blank=True)
	message = models.TextField(blank=True)
	resume_url = models.URLField(max_length=1000)
	resume_key = models.CharField(
		max_length=500,
		blank=True,
		help_text="Object name inside the resume store; blank when the URL points elsewhere.",
	)
	resume_name = models.CharField(max_length=255, blank=True)
	status = models.CharField(max_length=32, choices=ApplicantStatus.choices, default=ApplicantStatus.NEW)
	user_agent = models.TextField(blank=True)

	class Meta:
		ordering = ('-created', '-id')

	def __str__(self):
		return f"{self.name} <{self.email}>"

	@property
	def initial(self) -> str:
		return (self.name.strip()[:1] or '?').upper()

	@property
	def is_new(self) -> bool:
		return self.status == ApplicantStatus.NEW


class HeroSection(Timestamped):
	heading = models.CharField(max_length=200, default="Join Our Creative Team!")
	subheading = models.TextField(blank=True)
	cta_label = models.CharField(max_length=80, blank=True, default="Start Your Audition")
	is_active = models.BooleanField(default=True)

	class Meta:
		verbose_name = "Hero section"
		verbose_name_plural = "Hero sections"

	def __str__(self):
		return self.heading


class AboutSection(Timestamped):
	eyebrow = models.CharField(max_length=80, blank=True, default="THE CULTURE CHECK")
	title = models.CharField(max_length=200, default="Founded at 19.")
	highlight = models.CharField(max_length=200, blank=True, help_text="Second, accented line of the heading.")
	body = RichTextField(blank=True, help_text="Main About copy.")
	image_url = models.URLField(max_length=1000, blank=True)
	image_caption = models.CharField(max_length=120, blank=True)
	is_active = models.BooleanField(default=True)

	class Meta:
		verbose_name = "About section"
		verbose_name_plural = "About sections"

	def __str__(self):
		return self.title


class PortfolioAccent(models.TextChoices):
	BLUE = 'blue', 'Blue'
	GREEN = 'green', 'Green'
	YELLOW = 'yellow', 'Yellow'


class PortfolioStat(Timestamped):
	"""Stat card in the "Impact & Scale" portfolio block."""

	title = models.CharField(max_length=80)
	subtitle = models.CharField(max_length=120)
	accent = models.CharField(max_length=16, choices=PortfolioAccent.choices, default=PortfolioAccent.BLUE)
	order = models.PositiveIntegerField(default=0)
	is_active = models.BooleanField(default=True)

	class Meta:
		ordering = ['order', 'id']

	def __str__(self):
		return f"{self.title} {self.subtitle}"


class SiteContact(Timestamped):
	strip_label = models.CharField(max_length=120, blank=True, default="HIRING HEROES IN TEXAS")
	phone_number = models.CharField(max_length=40, blank=True)
	help_url = models.URLField(blank=True)
	brand_name = models.CharField(max_length=80, default="HERO HQ")
	tagline = models.CharField(max_length=200, blank=True)
	location = models.CharField(max_length=120, blank=True)
	email_address = models.EmailField(blank=True)
	copyright_holder = models.CharField(max_length=120, blank=True)
	is_active = models.BooleanField(default=True)

	class Meta:
		verbose_name = "Site contact"
		verbose_name_plural = "Site contact"

	def __str__(self):
		return self.brand_name
