# burgerpizza/presentation/views.py
"""
Views da API do cardápio, carrinho, lista de desejos, pedidos do cliente,
avaliações e pagamento.

Erros do core sobem até o exception handler (presentation.exceptions), que
os traduz em respostas HTTP.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from burgerpizza.core.exceptions import AssinaturaInvalidaError
from burgerpizza.core.use_cases import (
    AvaliarProdutoUseCase,
    CriarPedidoGatewayUseCase,
    CriarPedidoUseCase,
    DetalharProdutoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosUseCase,
    ListarPedidosDoUsuarioUseCase,
    ListarPedidosElegiveisUseCase,
    ListarProdutosUseCase,
    VerificarPagamentoUseCase,
)
from burgerpizza.infrastructure.instances import (
    avaliacao_repo, pagamento_gateway, pedido_repo, produto_repo, transacao_repo,
)

from .cart_manager import CartManager
from .permissions import IsAdministrador
from .serializers import (
    AvaliacaoEntradaSerializer,
    AvaliacaoSerializer,
    CarrinhoSerializer,
    CriarPedidoGatewaySerializer,
    CriarPedidoSerializer,
    MesclarVisitanteSerializer,
    PedidoSerializer,
    ProdutoEntradaSerializer,
    ProdutoSerializer,
    QuantidadeSerializer,
    TransacaoPagamentoSerializer,
    VerificarPagamentoSerializer,
)

logger = logging.getLogger(__name__)


class HealthCheckAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok'})


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutoListaAPIView(APIView):
    """
    GET: cardápio completo (mais novos primeiro).
    POST: cadastro de produto, somente administradores (multipart com imagem).
    """
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAdministrador()]
        return [AllowAny()]

    def get(self, request):
        produtos = ListarProdutosUseCase(produto_repo).listar_todos()
        return Response(ProdutoSerializer(produtos, many=True, context={'request': request}).data)

    def post(self, request):
        serializer = ProdutoEntradaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.campos()

        produto = GerenciarProdutosUseCase(produto_repo).criar(
            nome=dados['nome'],
            descricao=dados['descricao'],
            categoria=dados['categoria'],
            preco=dados['preco'],
            arquivo_imagem=serializer.validated_data['image'],
            mais_vendido=dados.get('mais_vendido', False),
        )
        return Response(ProdutoSerializer(produto, context={'request': request}).data, status=status.HTTP_201_CREATED)


class ProdutosMaisVendidosAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        produtos = ListarProdutosUseCase(produto_repo).listar_mais_vendidos()
        return Response(ProdutoSerializer(produtos, many=True, context={'request': request}).data)


class ProdutosPorCategoriaAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, categoria):
        produtos = ListarProdutosUseCase(produto_repo).listar_por_categoria(categoria)
        return Response(ProdutoSerializer(produtos, many=True, context={'request': request}).data)


class BuscarProdutosAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        termo = request.query_params.get('q') or request.query_params.get('query', '')
        produtos = ListarProdutosUseCase(produto_repo).buscar(termo)
        return Response(ProdutoSerializer(produtos, many=True, context={'request': request}).data)


class ProdutoDetalheAPIView(APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdministrador()]

    def get(self, request, pk):
        produto = DetalharProdutoUseCase(produto_repo).executar(pk)
        return Response(ProdutoSerializer(produto, context={'request': request}).data)

    def patch(self, request, pk):
        serializer = ProdutoEntradaSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        produto = GerenciarProdutosUseCase(produto_repo).atualizar(
            pk,
            serializer.campos(),
            arquivo_imagem=serializer.validated_data.get('image'),
        )
        return Response(ProdutoSerializer(produto, context={'request': request}).data)

    def delete(self, request, pk):
        GerenciarProdutosUseCase(produto_repo).deletar(pk)
        return Response({'message': 'Product deleted'})


# ====================================================================
# CARRINHO E LISTA DE DESEJOS
# Visitantes usam a sessão; usuários autenticados, o banco.
# ====================================================================

class CarrinhoAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        carrinho = CartManager(request).carrinho_use_case().obter()
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)

    def delete(self, request):
        carrinho = CartManager(request).carrinho_use_case().limpar()
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)


class CarrinhoContagemAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'count': CartManager(request).carrinho_use_case().contar()})


class CarrinhoItemAPIView(APIView):
    """
    POST: adiciona (ou incrementa) o produto.
    PUT: define a quantidade; zero ou menos remove a linha.
    DELETE: remove a linha inteira.
    """
    permission_classes = [AllowAny]

    def post(self, request, produto_id):
        serializer = QuantidadeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        carrinho = CartManager(request).carrinho_use_case().adicionar_item(
            produto_id, serializer.validated_data['quantity']
        )
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)

    def put(self, request, produto_id):
        serializer = QuantidadeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        carrinho = CartManager(request).carrinho_use_case().atualizar_quantidade(
            produto_id, serializer.validated_data['quantity']
        )
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)

    def delete(self, request, produto_id):
        carrinho = CartManager(request).carrinho_use_case().remover_item(produto_id)
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)


class CarrinhoMesclarAPIView(APIView):
    """Incorpora o carrinho/lista que o frontend guardou enquanto o usuário era visitante."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = MesclarVisitanteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = CartManager(request)
        manager.mesclar_visitante(
            request.user.id,
            itens_extra=serializer.itens_carrinho(),
            lista_extra=serializer.validated_data.get('wishlist', []),
        )
        carrinho = manager.carrinho_use_case().obter()
        return Response(CarrinhoSerializer(carrinho, context={'request': request}).data)


def _produtos_da_lista(lista, request):
    return ProdutoSerializer([item.produto for item in lista.itens], many=True, context={'request': request}).data


class ListaDesejosAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        lista = CartManager(request).lista_use_case().obter()
        return Response(_produtos_da_lista(lista, request))


class ListaDesejosItemAPIView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, produto_id):
        lista = CartManager(request).lista_use_case().adicionar(produto_id)
        return Response(_produtos_da_lista(lista, request))

    def delete(self, request, produto_id):
        lista = CartManager(request).lista_use_case().remover(produto_id)
        return Response(_produtos_da_lista(lista, request))


class ListaDesejosVerificarAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, produto_id):
        return Response({'inWishlist': CartManager(request).lista_use_case().contem(produto_id)})


# ====================================================================
# PEDIDOS (CLIENTE)
# ====================================================================

class PedidosAPIView(APIView):
    """
    POST: finaliza o checkout do usuário autenticado.
    GET: todos os pedidos, somente administradores (filtro opcional ?status=).
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [IsAdministrador()]
        return [IsAuthenticated()]

    def get(self, request):
        pedidos = GerenciarPedidosAdminUseCase(pedido_repo).listar_todos(request.query_params.get('status'))
        return Response(PedidoSerializer(pedidos, many=True, context={'request': request}).data)

    def post(self, request):
        serializer = CriarPedidoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        criar_pedido_uc = CriarPedidoUseCase(pedido_repo, produto_repo, pagamento_gateway(), transacao_repo)
        pedido = criar_pedido_uc.executar(
            usuario_id=request.user.id,
            itens=serializer.itens(),
            metodo_pagamento=dados['paymentMethod'],
            endereco_entrega=serializer.endereco(),
            total_informado=dados.get('totalAmount'),
            gateway_pedido_id=dados.get('razorpayOrderId') or None,
            gateway_pagamento_id=dados.get('razorpayPaymentId') or None,
            assinatura=dados.get('razorpaySignature') or None,
            carrinho_repo=CartManager(request).carrinho_repo(),
        )
        return Response(PedidoSerializer(pedido, context={'request': request}).data, status=status.HTTP_201_CREATED)


class PedidosDoUsuarioAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        pedidos = ListarPedidosDoUsuarioUseCase(pedido_repo).executar(request.user.id)
        return Response(PedidoSerializer(pedidos, many=True, context={'request': request}).data)


class PedidoDetalheAPIView(APIView):
    """
    GET: o dono ou um administrador.
    PATCH: avanço de status pelo administrador ({status}).
    """

    def get_permissions(self):
        if self.request.method == 'PATCH':
            return [IsAdministrador()]
        return [IsAuthenticated()]

    def get(self, request, pk):
        pedido = ListarPedidosDoUsuarioUseCase(pedido_repo).detalhar(
            request.user.id, pk, is_admin=request.user.is_admin
        )
        return Response(PedidoSerializer(pedido, context={'request': request}).data)

    def patch(self, request, pk):
        novo_status = request.data.get('status')
        pedido = GerenciarPedidosAdminUseCase(pedido_repo).atualizar_status(pk, novo_status)
        return Response(PedidoSerializer(pedido, context={'request': request}).data)


# ====================================================================
# AVALIAÇÕES
# ====================================================================

class AvaliacaoAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AvaliacaoEntradaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        avaliacao = AvaliarProdutoUseCase(pedido_repo, avaliacao_repo).executar(
            usuario_id=request.user.id,
            pedido_id=dados['order'],
            produto_id=dados['product'],
            nota=dados['rating'],
            comentario=dados['comment'],
        )
        return Response(AvaliacaoSerializer(avaliacao, context={'request': request}).data,
                        status=status.HTTP_201_CREATED)


class PedidosElegiveisAPIView(APIView):
    """Pedidos entregues com itens ainda não avaliados pelo usuário."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        pedidos = ListarPedidosElegiveisUseCase(pedido_repo, avaliacao_repo).executar(request.user.id)
        return Response(PedidoSerializer(pedidos, many=True, context={'request': request}).data)


# ====================================================================
# PAGAMENTO (RAZORPAY)
# ====================================================================

class CriarPedidoPagamentoAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CriarPedidoGatewaySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        transacao = CriarPedidoGatewayUseCase(pagamento_gateway(), transacao_repo).executar(
            dados['amount'],
            dados.get('currency') or settings.PAYMENT_CURRENCY,
            dados.get('receipt'),
            usuario_id=request.user.id,
        )
        return Response(TransacaoPagamentoSerializer(transacao).data)


class VerificarPagamentoAPIView(APIView):
    """
    Confere a assinatura devolvida pelo checkout do Razorpay.
    A assinatura só é reproduzível com o key_secret, então a rota não exige login.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = VerificarPagamentoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        try:
            pedido = VerificarPagamentoUseCase(pagamento_gateway(), pedido_repo, transacao_repo).executar(
                dados['razorpay_order_id'],
                dados['razorpay_payment_id'],
                dados['razorpay_signature'],
            )
        except AssinaturaInvalidaError as e:
            return Response({'success': False, 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        resposta = {'success': True, 'message': 'Payment verified'}
        if pedido:
            resposta['order'] = PedidoSerializer(pedido, context={'request': request}).data
        return Response(resposta)
