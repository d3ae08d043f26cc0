"""
Tradução centralizada de erros para respostas HTTP da API.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from burgerpizza.core.exceptions import (
    AssinaturaInvalidaError,
    BaseErroCore,
    CredenciaisInvalidasError,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    PagamentoFalhouError,
)

logger = logging.getLogger(__name__)

# Do mais específico para o mais genérico
STATUS_POR_ERRO = (
    (AssinaturaInvalidaError, status.HTTP_400_BAD_REQUEST),
    (PagamentoFalhouError, status.HTTP_502_BAD_GATEWAY),
    (CredenciaisInvalidasError, status.HTTP_401_UNAUTHORIZED),
    (ItemNaoEncontradoError, status.HTTP_404_NOT_FOUND),
    (DadosInvalidosError, status.HTTP_400_BAD_REQUEST),
)


def _status_do_erro(exc: BaseErroCore) -> int:
    for classe, codigo in STATUS_POR_ERRO:
        if isinstance(exc, classe):
            return codigo
    return status.HTTP_400_BAD_REQUEST


def _mensagem(dados) -> str:
    if isinstance(dados, dict) and 'detail' in dados:
        return str(dados['detail'])
    if isinstance(dados, list) and dados:
        return str(dados[0])
    return str(dados)


def custom_exception_handler(exc, context):
    """
    Exception handler que padroniza o corpo de erro em {"error": ...}.
    """
    if isinstance(exc, BaseErroCore):
        codigo = _status_do_erro(exc)
        if isinstance(exc, AssinaturaInvalidaError):
            return Response({'success': False, 'message': str(exc), 'error': str(exc)}, status=codigo)
        return Response({'error': str(exc)}, status=codigo)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(exc, ValidationError):
            response.data = {'error': 'Invalid data', 'details': response.data}
        else:
            response.data = {'error': _mensagem(response.data)}
        return response

    # Erro inesperado: registra o traceback e não expõe detalhes ao cliente
    view = context.get('view')
    logger.exception("Unhandled exception in %s: %s", view.__class__.__name__ if view else '?', exc)
    return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
