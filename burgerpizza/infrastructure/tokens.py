"""
Emissão da credencial (JWT) da API.

Existe um único caminho de emissão, usado tanto no cadastro quanto no login,
com um único formato de claims: {id, email, isAdmin, exp}. Assinatura, algoritmo
e validade vêm de SIMPLE_JWT no settings.
"""
from rest_framework_simplejwt.tokens import AccessToken


def emitir_token(usuario_model) -> str:
    """Gera o token de acesso de um usuário (instância do AUTH_USER_MODEL)."""
    token = AccessToken.for_user(usuario_model)
    token['id'] = usuario_model.id  # for_user grava o id como texto
    token['email'] = usuario_model.email
    token['isAdmin'] = bool(usuario_model.is_admin)
    return str(token)
