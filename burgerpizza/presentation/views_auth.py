# burgerpizza/presentation/views_auth.py
"""
Views de autenticação (cadastro e login com JWT), perfil e endereços do cliente.
"""
import logging

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from burgerpizza.core.use_cases import (
    AutenticarUsuarioUseCase,
    GerenciarEnderecosUseCase,
    PerfilUsuarioUseCase,
    RegistrarUsuarioUseCase,
)
from burgerpizza.infrastructure.instances import endereco_repo, usuario_repo
from burgerpizza.infrastructure.tokens import emitir_token

from .cart_manager import CartManager
from .serializers import (
    EnderecoEntradaSerializer,
    EnderecoSerializer,
    LoginSerializer,
    PerfilSerializer,
    RegistroSerializer,
    UsuarioSerializer,
)

logger = logging.getLogger(__name__)


def _resposta_com_token(usuario, codigo=status.HTTP_200_OK):
    """Único ponto de emissão do token: {token, user}."""
    usuario_model = get_user_model().objects.get(pk=usuario.id)
    return Response({'token': emitir_token(usuario_model), 'user': UsuarioSerializer(usuario).data}, status=codigo)


class CadastroUsuarioAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegistroSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        usuario = RegistrarUsuarioUseCase(usuario_repo).executar(
            username=dados['username'],
            email=dados['email'],
            senha=dados['password'],
            contato=dados.get('contact') or None,
        )
        return _resposta_com_token(usuario, status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    """
    Autentica por e-mail e senha. O carrinho e a lista de desejos do visitante
    (sessão e corpo da requisição) são mesclados aos do usuário.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        usuario = AutenticarUsuarioUseCase(usuario_repo).executar(dados['email'], dados['password'])

        CartManager(request).mesclar_visitante(
            usuario.id,
            itens_extra=serializer.itens_carrinho(),
            lista_extra=dados.get('guestWishlist', []),
        )
        logger.info("Login do usuário %s", usuario.id)
        return _resposta_com_token(usuario)


class PerfilAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        usuario = PerfilUsuarioUseCase(usuario_repo).obter(request.user.id)
        return Response(UsuarioSerializer(usuario).data)

    def patch(self, request):
        serializer = PerfilSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        usuario = PerfilUsuarioUseCase(usuario_repo).atualizar(
            request.user.id,
            username=dados.get('username'),
            email=dados.get('email'),
            contato=dados.get('contact'),
        )
        return Response(UsuarioSerializer(usuario).data)


class EnderecosAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        enderecos = GerenciarEnderecosUseCase(endereco_repo).listar(request.user.id)
        return Response(EnderecoSerializer(enderecos, many=True).data)

    def post(self, request):
        serializer = EnderecoEntradaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        endereco = GerenciarEnderecosUseCase(endereco_repo).adicionar(request.user.id, **serializer.campos())
        return Response(EnderecoSerializer(endereco).data, status=status.HTTP_201_CREATED)


class EnderecoDetalheAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, pk):
        serializer = EnderecoEntradaSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        endereco = GerenciarEnderecosUseCase(endereco_repo).atualizar(request.user.id, pk, **serializer.campos())
        return Response(EnderecoSerializer(endereco).data)

    def delete(self, request, pk):
        GerenciarEnderecosUseCase(endereco_repo).remover(request.user.id, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
