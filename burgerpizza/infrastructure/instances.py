"""
Módulo de inicialização dos repositórios sem estado.
Deve ser importado somente depois que o Django estiver configurado.

Carrinho e lista de desejos não aparecem aqui: são vinculados ao dono
(sessão ou usuário) a cada requisição, em presentation.cart_manager.
"""

from .gateways import RazorpayGateway
from .repositories import (
    AvaliacaoRepositoryDjango as AvaliacaoRepository,
    EnderecoRepositoryDjango as EnderecoRepository,
    PedidoRepositoryDjango as PedidoRepository,
    ProdutoRepositoryDjango as ProdutoRepository,
    TransacaoPagamentoRepositoryDjango as TransacaoPagamentoRepository,
    UsuarioRepositoryDjango as UsuarioRepository,
)

# Instâncias globais dos repositórios
produto_repo = ProdutoRepository()
usuario_repo = UsuarioRepository()
endereco_repo = EnderecoRepository()
pedido_repo = PedidoRepository()
avaliacao_repo = AvaliacaoRepository()
transacao_repo = TransacaoPagamentoRepository()


def pagamento_gateway():
    """Instancia o gateway com as credenciais atuais do settings."""
    return RazorpayGateway()
