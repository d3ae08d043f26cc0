# burgerpizza/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositorios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Set, Any
from abc import abstractmethod
from datetime import datetime
from decimal import Decimal

from burgerpizza.core.entities import (
    Produto, Carrinho, ListaDesejos, Pedido, Usuario, Endereco, Avaliacao, TransacaoPagamento
)


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a persistência e busca de Produtos do cardápio."""

    @abstractmethod
    def buscar_por_id(self, produto_id: int) -> Optional[Produto]: ...

    @abstractmethod
    def listar(
        self,
        categoria: Optional[str] = None,
        mais_vendido: Optional[bool] = None,
        busca: Optional[str] = None,
    ) -> List[Produto]: ...

    @abstractmethod
    def salvar(self, produto: Produto, arquivo_imagem: Optional[Any] = None) -> Produto:
        """Cria (id None) ou atualiza o produto. `arquivo_imagem` é o upload bruto."""
        ...

    @abstractmethod
    def deletar(self, produto_id: int) -> None: ...

    @abstractmethod
    def contar_total(self) -> int: ...


class IUsuarioRepository(Protocol):
    """Protocolo para a persistência de Usuários."""

    @abstractmethod
    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]: ...

    @abstractmethod
    def existe(self, email: Optional[str] = None, username: Optional[str] = None,
               excluir_id: Optional[int] = None) -> bool: ...

    @abstractmethod
    def criar(self, usuario: Usuario, senha: str) -> Usuario: ...

    @abstractmethod
    def verificar_credenciais(self, email: str, senha: str) -> Optional[Usuario]:
        """Retorna o usuário quando a senha confere com o hash armazenado."""
        ...

    @abstractmethod
    def atualizar(self, usuario: Usuario) -> Usuario: ...

    @abstractmethod
    def listar_todos(self) -> List[Usuario]: ...

    @abstractmethod
    def contar_clientes(self) -> int: ...


class IEnderecoRepository(Protocol):

    @abstractmethod
    def listar_por_usuario(self, usuario_id: int) -> List[Endereco]: ...

    @abstractmethod
    def buscar(self, usuario_id: int, endereco_id: int) -> Optional[Endereco]: ...

    @abstractmethod
    def salvar(self, endereco: Endereco) -> Endereco: ...

    @abstractmethod
    def deletar(self, endereco_id: int) -> None: ...


class ICarrinhoRepository(Protocol):
    """
    Protocolo para o armazenamento de um carrinho já vinculado ao seu dono.
    Há uma implementação para a sessão (visitante) e outra para o banco (usuário).
    """

    @abstractmethod
    def obter(self) -> Carrinho: ...

    @abstractmethod
    def salvar(self, carrinho: Carrinho) -> Carrinho: ...

    @abstractmethod
    def limpar(self) -> None: ...


class IListaDesejosRepository(Protocol):
    """Mesmo contrato do carrinho, para a lista de desejos."""

    @abstractmethod
    def obter(self) -> ListaDesejos: ...

    @abstractmethod
    def adicionar(self, produto_id: int) -> ListaDesejos: ...

    @abstractmethod
    def remover(self, produto_id: int) -> ListaDesejos: ...

    @abstractmethod
    def limpar(self) -> None: ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar(self, pedido: Pedido) -> Pedido: ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]: ...

    @abstractmethod
    def buscar_por_gateway_id(self, gateway_pedido_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar_por_usuario(self, usuario_id: int, status: Optional[str] = None) -> List[Pedido]: ...

    @abstractmethod
    def listar_todos(self, status: Optional[str] = None, limite: Optional[int] = None) -> List[Pedido]: ...

    @abstractmethod
    def listar_criados_entre(self, inicio: datetime, fim: datetime) -> List[Pedido]:
        """Pedidos com inicio <= data_criacao < fim."""
        ...

    @abstractmethod
    def atualizar_status(self, pedido_id: int, novo_status: str) -> Pedido: ...

    @abstractmethod
    def atualizar_pagamento(self, pedido_id: int, status_pagamento: str,
                            gateway_pagamento_id: Optional[str] = None) -> Pedido: ...

    @abstractmethod
    def contar_total(self) -> int: ...

    @abstractmethod
    def somar_receita(self, status_pagamento: str) -> Decimal: ...


class IAvaliacaoRepository(Protocol):

    @abstractmethod
    def existe(self, usuario_id: int, pedido_id: int, produto_id: int) -> bool: ...

    @abstractmethod
    def criar(self, avaliacao: Avaliacao) -> Avaliacao: ...

    @abstractmethod
    def produtos_avaliados(self, usuario_id: int) -> Set[int]: ...

    @abstractmethod
    def listar_todas(self) -> List[Avaliacao]: ...


class ITransacaoPagamentoRepository(Protocol):
    """Pedidos abertos no gateway, com o valor que o gateway vai cobrar."""

    @abstractmethod
    def registrar(self, transacao: TransacaoPagamento) -> TransacaoPagamento: ...

    @abstractmethod
    def buscar(self, referencia_externa: str) -> Optional[TransacaoPagamento]: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IGatewayPagamento(Protocol):
    """Protocolo para o gateway de pagamento externo."""

    @abstractmethod
    def criar_pedido(self, valor: int, moeda: str, recibo: str) -> TransacaoPagamento:
        """`valor` já convertido para a unidade mínima da moeda."""
        ...

    @abstractmethod
    def verificar_assinatura(self, gateway_pedido_id: str, gateway_pagamento_id: str,
                             assinatura: str) -> bool: ...
