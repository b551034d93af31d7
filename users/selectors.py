"""
Selectors — database *read* functions for accounts and sessions.
"""

from users.models import Session, User


def user_get_by_email(*, email: str) -> User | None:
    return User.objects.filter(email__iexact=email.strip()).first()


def session_get(*, key: str) -> Session | None:
    if not key:
        return None
    return Session.objects.select_related("user").filter(key=key).first()
