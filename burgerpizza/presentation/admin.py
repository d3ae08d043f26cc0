# Configuração da interface administrativa do Django (/django-admin/) para os modelos do BurgerPizza.

from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from burgerpizza.avaliacoes.models import Avaliacao
from burgerpizza.catalog.models import Produto
from burgerpizza.core.exceptions import DadosInvalidosError
from burgerpizza.core.status import StatusPedido, validar_transicao
from burgerpizza.infrastructure.models import Endereco, Usuario
from burgerpizza.pedidos.models import ItemPedido, Pedido, TransacaoGateway


# ====================================================================
# 1. USUÁRIOS
# ====================================================================

class EnderecoInline(admin.TabularInline):
    model = Endereco
    extra = 0


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Login por e-mail; a flag is_admin libera as rotas administrativas da API."""

    list_display = ('email', 'username', 'contato', 'is_admin', 'is_active', 'date_joined')
    list_filter = ('is_admin', 'is_active')

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Informações da Loja', {'fields': ('contato', 'is_admin')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'password1', 'password2'),
        }),
    )

    search_fields = ('email', 'username')
    ordering = ('email',)
    inlines = [EnderecoInline]


# ====================================================================
# 2. CARDÁPIO
# ====================================================================

@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('nome', 'categoria', 'preco', 'mais_vendido', 'data_criacao')
    list_filter = ('categoria', 'mais_vendido')
    search_fields = ('nome', 'descricao', 'id')
    ordering = ('-data_criacao',)


# ====================================================================
# 3. PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Exibe os itens comprados dentro do detalhe do Pedido."""
    model = ItemPedido
    readonly_fields = ('produto', 'nome_produto', 'preco_unitario', 'quantidade', 'subtotal')
    extra = 0
    can_delete = False


class PedidoAdminForm(forms.ModelForm):
    """Aplica a mesma máquina de estados da API às edições feitas no admin."""

    class Meta:
        model = Pedido
        fields = '__all__'

    def clean_status(self):
        novo_status = self.cleaned_data['status']
        if self.instance.pk:
            try:
                validar_transicao(StatusPedido, self.instance.status, novo_status)
            except DadosInvalidosError as e:
                raise forms.ValidationError(str(e))
        return novo_status


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    form = PedidoAdminForm
    list_display = ('id', 'usuario', 'data_criacao', 'total', 'status', 'metodo_pagamento', 'status_pagamento')
    list_filter = ('status', 'metodo_pagamento', 'status_pagamento', 'data_criacao')
    search_fields = ('id', 'usuario__email', 'gateway_pedido_id')
    date_hierarchy = 'data_criacao'
    inlines = [ItemPedidoInline]

    readonly_fields = (
        'usuario',
        'data_criacao',
        'total',
        'metodo_pagamento',
        'status_pagamento',
        'endereco_entrega_json',
        'gateway_pedido_id',
        'gateway_pagamento_id',
    )

    def has_add_permission(self, request):
        """Pedidos nascem somente pelo checkout."""
        return False


@admin.register(TransacaoGateway)
class TransacaoGatewayAdmin(admin.ModelAdmin):
    list_display = ('gateway_pedido_id', 'usuario', 'valor', 'moeda', 'status', 'data_criacao')
    search_fields = ('gateway_pedido_id', 'recibo', 'usuario__email')
    readonly_fields = ('gateway_pedido_id', 'usuario', 'valor', 'moeda', 'recibo', 'status', 'data_criacao')

    def has_add_permission(self, request):
        return False


# ====================================================================
# 4. AVALIAÇÕES
# ====================================================================

@admin.register(Avaliacao)
class AvaliacaoAdmin(admin.ModelAdmin):
    list_display = ('id', 'usuario', 'produto', 'pedido', 'nota', 'data_criacao')
    list_filter = ('nota',)
    search_fields = ('usuario__email', 'produto__nome', 'comentario')
