"""
Serializers da API.

Os de saída representam as entidades do core com os nomes de campo em camelCase
consumidos pelos frontends; os de entrada validam o corpo das requisições.
"""
from rest_framework import serializers

from burgerpizza.catalog.validators import validar_extensao_imagem, validar_tamanho_imagem, validar_tipo_imagem
from burgerpizza.core.entities import CATEGORIAS, METODOS_PAGAMENTO, Endereco, ItemCarrinho


# ====================================================================
# SERIALIZERS DE SAÍDA
# ====================================================================

class UsuarioSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id')
    username = serializers.CharField()
    email = serializers.EmailField()
    contact = serializers.CharField(source='contato', allow_null=True)
    isAdmin = serializers.BooleanField(source='is_admin')


class UsuarioResumoSerializer(serializers.Serializer):
    """Dados do cliente exibidos junto ao pedido."""
    _id = serializers.IntegerField(source='id')
    username = serializers.CharField()
    email = serializers.EmailField()


class EnderecoSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id', allow_null=True, required=False)
    street = serializers.CharField(source='rua')
    city = serializers.CharField(source='cidade')
    state = serializers.CharField(source='estado')
    zip = serializers.CharField(source='cep')


class ProdutoSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id')
    name = serializers.CharField(source='nome')
    description = serializers.CharField(source='descricao')
    category = serializers.CharField(source='categoria')
    price = serializers.DecimalField(source='preco', max_digits=10, decimal_places=2)
    image = serializers.SerializerMethodField()
    bestSeller = serializers.BooleanField(source='mais_vendido')
    createdAt = serializers.DateTimeField(source='data_criacao', allow_null=True)

    def get_image(self, produto):
        """URL absoluta quando há requisição no contexto."""
        if not produto.imagem:
            return None
        request = self.context.get('request')
        return request.build_absolute_uri(produto.imagem) if request else produto.imagem


class ItemCarrinhoSerializer(serializers.Serializer):
    product = ProdutoSerializer(source='produto')
    quantity = serializers.IntegerField(source='quantidade')
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class CarrinhoSerializer(serializers.Serializer):
    items = ItemCarrinhoSerializer(source='itens', many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    count = serializers.IntegerField(source='quantidade_total')


class ItemPedidoSerializer(serializers.Serializer):
    """Item do pedido: o produto atual (se ainda existir) e o snapshot da compra."""
    product = ProdutoSerializer(source='produto', allow_null=True)
    productId = serializers.IntegerField(source='produto_id', allow_null=True)
    name = serializers.CharField(source='nome_produto')
    price = serializers.DecimalField(source='preco_unitario', max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField(source='quantidade')


class PedidoSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id')
    user = UsuarioResumoSerializer(source='usuario', allow_null=True)
    items = ItemPedidoSerializer(source='itens', many=True)
    totalAmount = serializers.DecimalField(source='total', max_digits=12, decimal_places=2)
    paymentMethod = serializers.CharField(source='metodo_pagamento')
    paymentStatus = serializers.CharField(source='status_pagamento')
    status = serializers.CharField()
    deliveryAddress = EnderecoSerializer(source='endereco_entrega', allow_null=True)
    razorpayOrderId = serializers.CharField(source='gateway_pedido_id', allow_null=True)
    razorpayPaymentId = serializers.CharField(source='gateway_pagamento_id', allow_null=True)
    createdAt = serializers.DateTimeField(source='data_criacao', allow_null=True)


class AvaliacaoSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id')
    user = serializers.SerializerMethodField()
    order = serializers.SerializerMethodField()
    product = serializers.SerializerMethodField()
    rating = serializers.IntegerField(source='nota')
    comment = serializers.CharField(source='comentario', allow_blank=True)
    createdAt = serializers.DateTimeField(source='data_criacao', allow_null=True)

    # Expandidos no painel; na criação só os ids são conhecidos
    def get_user(self, avaliacao):
        if avaliacao.usuario:
            return UsuarioResumoSerializer(avaliacao.usuario).data
        return avaliacao.usuario_id

    def get_order(self, avaliacao):
        if avaliacao.pedido:
            return PedidoSerializer(avaliacao.pedido, context=self.context).data
        return avaliacao.pedido_id

    def get_product(self, avaliacao):
        if avaliacao.produto:
            return ProdutoSerializer(avaliacao.produto, context=self.context).data
        return avaliacao.produto_id


class VendasDoDiaSerializer(serializers.Serializer):
    totalSales = serializers.DecimalField(source='total', max_digits=14, decimal_places=2)
    orders = PedidoSerializer(source='pedidos', many=True)


class EstatisticasSerializer(serializers.Serializer):
    totalProducts = serializers.IntegerField(source='total_produtos')
    totalOrders = serializers.IntegerField(source='total_pedidos')
    totalUsers = serializers.IntegerField(source='total_usuarios')
    totalRevenue = serializers.DecimalField(source='receita_total', max_digits=14, decimal_places=2)
    recentOrders = PedidoSerializer(source='pedidos_recentes', many=True)


class TransacaoPagamentoSerializer(serializers.Serializer):
    """Mesmo formato do objeto order do gateway, consumido pelo checkout do frontend."""
    id = serializers.CharField(source='referencia_externa')
    amount = serializers.IntegerField(source='valor')
    currency = serializers.CharField(source='moeda')
    receipt = serializers.CharField(source='recibo')
    status = serializers.CharField()


# ====================================================================
# SERIALIZERS DE ENTRADA
# ====================================================================

class RegistroSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    contact = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class ItemVisitanteSerializer(serializers.Serializer):
    """Linha do carrinho guardado no navegador do visitante."""
    product = serializers.IntegerField()
    quantity = serializers.IntegerField(default=1)


class MesclarVisitanteSerializer(serializers.Serializer):
    items = ItemVisitanteSerializer(many=True, required=False)
    wishlist = serializers.ListField(child=serializers.IntegerField(), required=False)

    def itens_carrinho(self):
        return [ItemCarrinho(produto_id=d['product'], quantidade=d['quantity'])
                for d in self.validated_data.get('items', [])]


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    guestCart = ItemVisitanteSerializer(many=True, required=False)
    guestWishlist = serializers.ListField(child=serializers.IntegerField(), required=False)

    def itens_carrinho(self):
        return [ItemCarrinho(produto_id=d['product'], quantidade=d['quantity'])
                for d in self.validated_data.get('guestCart', [])]


class PerfilSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    contact = serializers.CharField(max_length=20, required=False, allow_blank=True)


class EnderecoEntradaSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    zip = serializers.CharField(max_length=20)

    def campos(self) -> dict:
        """Campos informados, com os nomes da entidade (para edição parcial)."""
        nomes = {'street': 'rua', 'city': 'cidade', 'state': 'estado', 'zip': 'cep'}
        return {nomes[chave]: valor for chave, valor in self.validated_data.items()}


class ProdutoEntradaSerializer(serializers.Serializer):
    """
    Criação (multipart, imagem obrigatória) e edição parcial de produtos.
    """
    name = serializers.CharField(max_length=200)
    description = serializers.CharField()
    category = serializers.ChoiceField(choices=CATEGORIAS)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    image = serializers.ImageField(
        validators=[validar_extensao_imagem, validar_tamanho_imagem, validar_tipo_imagem],
    )
    bestSeller = serializers.BooleanField(required=False, default=False)

    NOMES = {
        'name': 'nome',
        'description': 'descricao',
        'category': 'categoria',
        'price': 'preco',
        'bestSeller': 'mais_vendido',
    }

    def campos(self) -> dict:
        return {self.NOMES[chave]: valor for chave, valor in self.validated_data.items() if chave in self.NOMES}


class QuantidadeSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(default=1)


class ItemPedidoEntradaSerializer(serializers.Serializer):
    product = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class CriarPedidoSerializer(serializers.Serializer):
    items = ItemPedidoEntradaSerializer(many=True)
    totalAmount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    paymentMethod = serializers.ChoiceField(choices=METODOS_PAGAMENTO, default='cod')
    deliveryAddress = EnderecoEntradaSerializer()
    razorpayOrderId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    razorpayPaymentId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    razorpaySignature = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def itens(self):
        return [(item['product'], item['quantity']) for item in self.validated_data['items']]

    def endereco(self):
        dados = self.validated_data['deliveryAddress']
        return Endereco(rua=dados['street'], cidade=dados['city'], estado=dados['state'], cep=dados['zip'])


class AtualizarStatusSerializer(serializers.Serializer):
    orderId = serializers.IntegerField()
    status = serializers.CharField()


class AvaliacaoEntradaSerializer(serializers.Serializer):
    order = serializers.IntegerField()
    product = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class CriarPedidoGatewaySerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False)
    receipt = serializers.CharField(max_length=40, required=False)


class VerificarPagamentoSerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField()
    razorpay_payment_id = serializers.CharField()
    razorpay_signature = serializers.CharField()
