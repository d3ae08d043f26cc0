from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator

from burgerpizza.catalog.models import Produto
from burgerpizza.pedidos.models import Pedido


class Avaliacao(models.Model):
    """Nota e comentário de um produto de um pedido entregue. Uma por (usuário, pedido, produto)."""
    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='avaliacoes')
    pedido = models.ForeignKey(Pedido, on_delete=models.CASCADE, related_name='avaliacoes')
    produto = models.ForeignKey(Produto, on_delete=models.CASCADE, related_name='avaliacoes')
    nota = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comentario = models.TextField(blank=True, default='')
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Avaliação'
        verbose_name_plural = 'Avaliações'
        unique_together = ('usuario', 'pedido', 'produto')
        ordering = ['-data_criacao', '-id']
        db_table = 'avaliacao_produto'

    def __str__(self):
        return f"{self.usuario} - {self.produto_id} ({self.nota}/5)"
