from rest_framework.permissions import BasePermission, SAFE_METHODS


# ---- Helper functions -------------------------------------------------


def is_registry_admin(user) -> bool:
    """
    Registry administrators review profiles, manage events and scan badges.
    Superusers, staff and users with role 'admin' qualify.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return False

    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
        return True

    return getattr(user, "role", None) == "admin"


# ---- Permission classes -----------------------------------------------


class IsRegistryAdmin(BasePermission):
    message = "Admin authentication required."

    def has_permission(self, request, view):
        return is_registry_admin(request.user)


class IsRegistryAdminOrReadOnly(BasePermission):
    """
    - SAFE methods: allowed for everyone (views filter what is visible).
    - Unsafe methods: registry admins only.
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_registry_admin(request.user)
