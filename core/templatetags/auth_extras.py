from django import template


register = template.Library()


@register.filter(name="has_role")
def has_role(user, role: str) -> bool:
    try:
        return bool(user.is_authenticated and user.profile.role == role)
    except Exception:
        return False
