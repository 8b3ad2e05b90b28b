from rest_framework import permissions

# Claim porte par le jeton emis apres saisie du mot de passe partage
ADMIN_ROLE = "admin"


def is_admin_token(token) -> bool:
    """True si le jeton (request.auth) a ete emis pour l'admin du catalogue."""
    if token is None or not hasattr(token, "get"):
        return False
    return token.get("role") == ADMIN_ROLE


class IsCatalogAdmin(permissions.BasePermission):
    message = "Acces reserve a l'administrateur du catalogue."

    def has_permission(self, request, view) -> bool:
        return is_admin_token(request.auth)


class IsCatalogAdminOrReadOnly(IsCatalogAdmin):
    """Lecture ouverte a tous, ecriture reservee a l'admin."""

    def has_permission(self, request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
