from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from typing import List, Optional

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

CATEGORIAS = ('Burger', 'Pizza', 'Fries', 'Drink', 'Dessert')

METODOS_PAGAMENTO = ('online', 'cod')


@dataclass
class Usuario:
    """Entidade do Usuário (cliente ou administrador)."""
    username: str
    email: str
    id: Optional[int] = None
    contato: Optional[str] = None
    is_admin: bool = False


@dataclass
class Endereco:
    """Entidade do Endereço de Entrega."""
    rua: str
    cidade: str
    estado: str
    cep: str
    usuario_id: Optional[int] = None
    id: Optional[int] = None

    def to_dict(self) -> dict:
        """Snapshot usado no pedido."""
        return {'street': self.rua, 'city': self.cidade, 'state': self.estado, 'zip': self.cep}


@dataclass
class Produto:
    """Entidade do Produto do cardápio."""
    nome: str
    descricao: str
    categoria: str
    preco: Decimal
    imagem: Optional[str] = None
    mais_vendido: bool = False
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None


@dataclass
class ItemCarrinho:
    """Entidade que representa uma linha do carrinho."""
    produto_id: int
    quantidade: int = 1
    produto: Optional[Produto] = None

    @property
    def subtotal(self) -> Decimal:
        """Preço atual do catálogo vezes a quantidade."""
        if not self.produto:
            return Decimal('0')
        return self.produto.preco * self.quantidade


@dataclass
class Carrinho:
    """Entidade do Carrinho de Compras (visitante ou usuário)."""
    itens: List[ItemCarrinho] = field(default_factory=list)
    usuario_id: Optional[int] = None

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.itens), Decimal('0'))

    @property
    def quantidade_total(self) -> int:
        return sum(item.quantidade for item in self.itens)

    def get_item(self, produto_id: int) -> Optional[ItemCarrinho]:
        return next((item for item in self.itens if item.produto_id == produto_id), None)


@dataclass
class ItemListaDesejos:
    produto_id: int
    produto: Optional[Produto] = None
    data_adicao: Optional[datetime] = None


@dataclass
class ListaDesejos:
    """Entidade da Lista de Desejos (itens salvos para depois)."""
    itens: List[ItemListaDesejos] = field(default_factory=list)
    usuario_id: Optional[int] = None

    def contem(self, produto_id: int) -> bool:
        return any(item.produto_id == produto_id for item in self.itens)


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: Optional[int]
    nome_produto: str
    preco_unitario: Decimal
    quantidade: int
    produto: Optional[Produto] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco_unitario * self.quantidade


@dataclass
class Pedido:
    """Entidade do Pedido de Venda."""
    usuario_id: int
    itens: List[ItemPedido]
    total: Decimal
    metodo_pagamento: str = 'cod'
    status: str = 'placed'
    status_pagamento: str = 'pending'
    endereco_entrega: Optional[Endereco] = None
    gateway_pedido_id: Optional[str] = None
    gateway_pagamento_id: Optional[str] = None
    usuario: Optional[Usuario] = None
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None

    def contem_produto(self, produto_id: int) -> bool:
        return any(item.produto_id == produto_id for item in self.itens)


@dataclass
class Avaliacao:
    """Entidade da Avaliação (feedback) de um produto de um pedido entregue."""
    usuario_id: int
    pedido_id: int
    produto_id: int
    nota: int
    comentario: str = ''
    usuario: Optional[Usuario] = None
    pedido: Optional[Pedido] = None
    produto: Optional[Produto] = None
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None


@dataclass
class TransacaoPagamento:
    """Entidade que registra o pedido criado no Gateway de Pagamento."""
    referencia_externa: str  # order_id do Razorpay
    valor: int               # em unidade mínima (paise/centavos)
    moeda: str
    recibo: str
    status: str = 'created'
    usuario_id: Optional[int] = None  # quem abriu o pedido no gateway


@dataclass
class VendasDoDia:
    total: Decimal
    pedidos: List[Pedido]


@dataclass
class EstatisticasPainel:
    """Números consolidados do painel administrativo."""
    total_produtos: int
    total_pedidos: int
    total_usuarios: int
    receita_total: Decimal
    pedidos_recentes: List[Pedido] = field(default_factory=list)
