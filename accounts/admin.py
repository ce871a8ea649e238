from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "signup_provider", "last_provider", "created_at")
    list_filter = ("role", "signup_provider")
    search_fields = ("user__email", "user__username")
    list_select_related = ("user",)
    readonly_fields = ("signup_provider", "last_provider", "created_at", "updated_at")
