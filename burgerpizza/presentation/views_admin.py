# burgerpizza/presentation/views_admin.py
"""
Views do painel administrativo: números do dashboard, gestão de pedidos,
avaliações e diretório de usuários. Todas exigem IsAdministrador.
"""
from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView

from burgerpizza.core.use_cases import (
    GerenciarPedidosAdminUseCase,
    GerenciarUsuariosAdminUseCase,
    PainelAdminUseCase,
)
from burgerpizza.infrastructure.instances import avaliacao_repo, pedido_repo, produto_repo, usuario_repo

from .permissions import IsAdministrador
from .serializers import (
    AtualizarStatusSerializer,
    AvaliacaoSerializer,
    EstatisticasSerializer,
    PedidoSerializer,
    UsuarioSerializer,
    VendasDoDiaSerializer,
)


def _painel():
    return PainelAdminUseCase(produto_repo, pedido_repo, usuario_repo, avaliacao_repo)


class EstatisticasAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request):
        return Response(EstatisticasSerializer(_painel().estatisticas(), context={'request': request}).data)


class AvaliacoesAdminAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request):
        avaliacoes = _painel().listar_avaliacoes()
        return Response(AvaliacaoSerializer(avaliacoes, many=True, context={'request': request}).data)


class PedidosPorStatusAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request, status):
        pedidos = _painel().pedidos_por_status(status)
        return Response(PedidoSerializer(pedidos, many=True, context={'request': request}).data)


class PedidosAdminAPIView(APIView):
    """Todos os pedidos, mais novos primeiro."""
    permission_classes = [IsAdministrador]

    def get(self, request):
        pedidos = GerenciarPedidosAdminUseCase(pedido_repo).listar_todos(request.query_params.get('status'))
        return Response(PedidoSerializer(pedidos, many=True, context={'request': request}).data)


class AtualizarStatusPedidoAPIView(APIView):
    permission_classes = [IsAdministrador]

    def patch(self, request):
        serializer = AtualizarStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        pedido = GerenciarPedidosAdminUseCase(pedido_repo).atualizar_status(dados['orderId'], dados['status'])
        return Response(PedidoSerializer(pedido, context={'request': request}).data)


class VendasDoDiaAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request):
        # Dia calendário no fuso do settings (TIME_ZONE)
        vendas = GerenciarPedidosAdminUseCase(pedido_repo).vendas_do_dia(timezone.localtime())
        return Response(VendasDoDiaSerializer(vendas, context={'request': request}).data)


class UsuariosAdminAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request):
        return Response(UsuarioSerializer(GerenciarUsuariosAdminUseCase(usuario_repo).listar(), many=True).data)


class UsuarioAdminDetalheAPIView(APIView):
    permission_classes = [IsAdministrador]

    def get(self, request, pk):
        return Response(UsuarioSerializer(GerenciarUsuariosAdminUseCase(usuario_repo).detalhar(pk)).data)
