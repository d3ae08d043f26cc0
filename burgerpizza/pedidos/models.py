from django.db import models
from django.conf import settings
from django.utils import timezone

from burgerpizza.catalog.models import Produto
from burgerpizza.core.entities import METODOS_PAGAMENTO
from burgerpizza.core.status import StatusPagamento, StatusPedido


class Pedido(models.Model):
    """
    Modelo para pedidos de compra. A escrita de 'status' e 'status_pagamento'
    passa pelos casos de uso, que aplicam as máquinas de estado.
    """
    STATUS_CHOICES = [
        (StatusPedido.PLACED, 'Recebido'),
        (StatusPedido.PREPARING, 'Em preparo'),
        (StatusPedido.PREPARED, 'Pronto'),
        (StatusPedido.OUT_FOR_DELIVERY, 'Saiu para entrega'),
        (StatusPedido.DELIVERED, 'Entregue'),
    ]

    STATUS_PAGAMENTO_CHOICES = [
        (StatusPagamento.PENDING, 'Pendente'),
        (StatusPagamento.COMPLETED, 'Confirmado'),
        (StatusPagamento.FAILED, 'Falhou'),
    ]

    PAGAMENTO_CHOICES = [(metodo, metodo) for metodo in METODOS_PAGAMENTO]

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='pedidos',
        verbose_name="Cliente"
    )

    # Preenchido na criação, mas pode ser informado (pedidos importados)
    data_criacao = models.DateTimeField(default=timezone.now, db_index=True, verbose_name="Data do Pedido")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=StatusPedido.INICIAL, db_index=True)

    total = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Total do Pedido")

    # Informações de Pagamento
    metodo_pagamento = models.CharField(max_length=10, choices=PAGAMENTO_CHOICES, default='cod')
    status_pagamento = models.CharField(
        max_length=10, choices=STATUS_PAGAMENTO_CHOICES, default=StatusPagamento.INICIAL
    )
    gateway_pedido_id = models.CharField(max_length=100, blank=True, null=True, unique=True,
                                         help_text="order_id do Razorpay")
    gateway_pagamento_id = models.CharField(max_length=100, blank=True, null=True,
                                            help_text="payment_id do Razorpay")

    # Snapshot do endereço no momento da compra
    endereco_entrega_json = models.JSONField(blank=True, null=True, verbose_name="Endereço de Entrega (JSON)")

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        ordering = ['-data_criacao', '-id']
        db_table = 'pedido_compra'

    def __str__(self):
        return f"Pedido {self.id} - {self.usuario} - {self.status}"


class ItemPedido(models.Model):
    """
    Modelo para os itens contidos em um pedido.
    """
    pedido = models.ForeignKey(Pedido, on_delete=models.CASCADE, related_name='itens')

    # Referência fraca: o produto pode ser removido do cardápio
    produto = models.ForeignKey(
        Produto,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='itens_pedido',
    )

    # Snapshots
    nome_produto = models.CharField(max_length=255, verbose_name="Nome do Produto")
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço Unitário na Compra")
    quantidade = models.PositiveIntegerField(verbose_name="Quantidade")

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'pedido_item'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto} (Pedido {self.pedido_id})"

    @property
    def subtotal(self):
        return self.preco_unitario * self.quantidade


class TransacaoGateway(models.Model):
    """
    Pedido aberto no Razorpay, com o valor que o gateway vai cobrar.
    O checkout só quita um pedido cujo total em unidade mínima seja igual a 'valor'.
    """
    gateway_pedido_id = models.CharField(max_length=100, unique=True, help_text="order_id do Razorpay")
    valor = models.PositiveBigIntegerField(help_text="Em unidade mínima (paise/centavos)")
    moeda = models.CharField(max_length=3)
    recibo = models.CharField(max_length=40)
    status = models.CharField(max_length=20, default='created')
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transacoes_gateway',
    )
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Transação do Gateway'
        verbose_name_plural = 'Transações do Gateway'
        db_table = 'pedido_transacao_gateway'
        ordering = ['-data_criacao', '-id']

    def __str__(self):
        return f"{self.gateway_pedido_id} ({self.valor} {self.moeda})"
