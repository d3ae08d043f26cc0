from django.db import models

from burgerpizza.core.entities import CATEGORIAS
from burgerpizza.catalog.validators import validar_extensao_imagem, validar_tamanho_imagem


# ====================================================================
# Produto (item do cardápio)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar um item do cardápio."""

    CATEGORIA_CHOICES = [(categoria, categoria) for categoria in CATEGORIAS]

    nome = models.CharField(max_length=255, verbose_name="Nome")
    descricao = models.TextField(verbose_name="Descrição")
    categoria = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, db_index=True, verbose_name="Categoria")
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço")
    imagem = models.ImageField(
        upload_to='produtos/',
        validators=[validar_extensao_imagem, validar_tamanho_imagem],
        verbose_name="Imagem",
    )
    mais_vendido = models.BooleanField(default=False, verbose_name="Mais Vendido")
    data_criacao = models.DateTimeField(auto_now_add=True, verbose_name="Criado em")

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        db_table = 'catalogo_produto'
        ordering = ['-data_criacao', '-id']

    def __str__(self):
        return f"{self.nome} ({self.categoria})"
