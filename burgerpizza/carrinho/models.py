# Define os modelos para o domínio de Carrinho e Lista de Desejos (usuários autenticados).

from django.db import models
from django.conf import settings

from burgerpizza.catalog.models import Produto


class ItemCarrinho(models.Model):
    """Uma linha do carrinho do usuário. Uma única linha por produto."""
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='itens_carrinho',
    )
    produto = models.ForeignKey(Produto, on_delete=models.CASCADE, related_name='+')
    quantidade = models.PositiveIntegerField(default=1)
    data_adicao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Item do Carrinho"
        verbose_name_plural = "Itens do Carrinho"
        unique_together = ('usuario', 'produto')
        ordering = ['data_adicao', 'id']
        db_table = 'carrinho_item'

    def __str__(self):
        return f"{self.quantidade}x {self.produto.nome}"


class ItemListaDesejos(models.Model):
    """Produto salvo para depois."""
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='itens_lista_desejos',
    )
    produto = models.ForeignKey(Produto, on_delete=models.CASCADE, related_name='+')
    data_adicao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Item da Lista de Desejos"
        verbose_name_plural = "Itens da Lista de Desejos"
        unique_together = ('usuario', 'produto')
        ordering = ['data_adicao', 'id']
        db_table = 'lista_desejos_item'

    def __str__(self):
        return f"{self.usuario} ♥ {self.produto.nome}"
