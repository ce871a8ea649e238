from django.contrib import admin
from django.utils.html import format_html

from .inspector import force_download_url
from .models import AboutSection, Applicant, HeroSection, PortfolioStat, SiteContact


@admin.register(Applicant)
class ApplicantAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "status", "created", "resume_link")
    list_filter = ("status",)
    search_fields = ("name", "email", "phone", "message")
    date_hierarchy = "created"
    ordering = ("-created", "-id")
    readonly_fields = ("resume_link", "resume_url", "resume_key", "resume_name", "user_agent", "created", "updated")
    fieldsets = (
        ("Applicant", {
            'fields': ("name", "email", "phone", "message")
        }),
        ("Review", {
            'fields': ("status",)
        }),
        ("Resume", {
            'fields': ("resume_link", "resume_name", "resume_url", "resume_key")
        }),
        ("Metadata", {
            'classes': ('collapse',),
            'fields': ("user_agent", "created", "updated")
        }),
    )

    def resume_link(self, obj: Applicant | None):
        if not obj or not obj.resume_url:
            return ""
        return format_html('<a href="{}" target="_blank" rel="noopener">Download</a>', force_download_url(obj.resume_url))
    resume_link.short_description = "Resume"

    def has_add_permission(self, request):
        # Applicants only come in through the public form
        return False


@admin.register(HeroSection)
class HeroSectionAdmin(admin.ModelAdmin):
    list_display = ("heading", "cta_label", "is_active", "updated")
    list_filter = ("is_active",)


@admin.register(AboutSection)
class AboutSectionAdmin(admin.ModelAdmin):
    list_display = ("title", "highlight", "is_active", "updated")
    list_filter = ("is_active",)


@admin.register(PortfolioStat)
class PortfolioStatAdmin(admin.ModelAdmin):
    list_display = ("title", "subtitle", "accent", "order", "is_active")
    list_editable = ("order", "is_active")
    ordering = ("order", "id")


@admin.register(SiteContact)
class SiteContactAdmin(admin.ModelAdmin):
    list_display = ("brand_name", "location", "email_address", "phone_number", "is_active")
