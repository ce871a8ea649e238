from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from accounts.models import Role, UserProfile


class Command(BaseCommand):
    help = "Grant (or with --revoke, remove) the admin role for the account with the given email"

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument("--revoke", action="store_true", help="Set the role back to 'user'.")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first() or User.objects.filter(username__iexact=email).first()
        if user is None:
            raise CommandError(f"No account found for {email}")

        role = Role.USER if options["revoke"] else Role.ADMIN
        profile, _ = UserProfile.objects.get_or_create(user=user)
        if profile.role == role:
            self.stdout.write(f"{email} already has role '{role}'")
            return
        profile.role = role
        profile.save(update_fields=["role", "updated_at"])
        self.stdout.write(self.style.SUCCESS(f"Set role '{role}' for {email}"))
