from rest_framework.permissions import BasePermission


class IsAdministrador(BasePermission):
    """
    Libera somente usuários com a flag de administrador da loja.
    Sem credencial o DRF responde 401; com credencial sem a flag, 403.
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and getattr(request.user, 'is_admin', False))
