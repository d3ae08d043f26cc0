# burgerpizza/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from typing import Iterable, List, Optional, Tuple
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from datetime import datetime

# Entidades e Exceções
from burgerpizza.core.entities import (
    CATEGORIAS, METODOS_PAGAMENTO,
    Avaliacao, Carrinho, Endereco, EstatisticasPainel, ItemCarrinho, ItemPedido,
    ListaDesejos, Pedido, Produto, TransacaoPagamento, Usuario, VendasDoDia,
)
from burgerpizza.core.exceptions import (
    AssinaturaInvalidaError,
    AvaliacaoDuplicadaError,
    AvaliacaoNaoPermitidaError,
    CarrinhoVazioError,
    CredenciaisInvalidasError,
    DadosInvalidosError,
    EnderecoNaoEncontradoError,
    ItemNaoEncontradoError,
    PagamentoJaUtilizadoError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
    UsuarioJaExisteError,
    UsuarioNaoEncontradoError,
)
from burgerpizza.core.ports import (
    IAvaliacaoRepository,
    ICarrinhoRepository,
    IEnderecoRepository,
    IGatewayPagamento,
    IListaDesejosRepository,
    IPedidoRepository,
    IProdutoRepository,
    ITransacaoPagamentoRepository,
    IUsuarioRepository,
)
from burgerpizza.core.status import StatusPagamento, StatusPedido, validar_status, validar_transicao

logger = logging.getLogger(__name__)

# Regras de checkout
TAXA_IMPOSTO = Decimal('0.05')
VALOR_FRETE = Decimal('50')
LIMITE_FRETE_GRATIS = Decimal('499')


def _arredondar_inteiro(valor: Decimal) -> Decimal:
    return valor.quantize(Decimal('1'), rounding=ROUND_HALF_UP)


def calcular_totais(subtotal: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
    """Retorna (imposto, frete, total) para um subtotal."""
    imposto = _arredondar_inteiro(subtotal * TAXA_IMPOSTO)
    frete = Decimal('0') if subtotal > LIMITE_FRETE_GRATIS else VALOR_FRETE
    return imposto, frete, subtotal + imposto + frete


def _para_decimal(valor, campo: str) -> Decimal:
    try:
        return Decimal(str(valor))
    except (InvalidOperation, TypeError, ValueError):
        raise DadosInvalidosError(f"'{campo}' must be a number.")


def _em_unidade_minima(valor: Decimal) -> int:
    """Valor em paise/centavos, como o gateway cobra."""
    return int(_arredondar_inteiro(valor * 100))


def _transacao_cobre_pedido(transacao: Optional[TransacaoPagamento], total: Decimal, usuario_id: int) -> bool:
    """O pedido do gateway foi aberto por este usuário e cobra exatamente o total do pedido."""
    if transacao is None:
        return False
    if transacao.usuario_id is not None and transacao.usuario_id != usuario_id:
        return False
    return transacao.valor == _em_unidade_minima(total)


# ====================================================================
# 1. CASOS DE USO DE IDENTIDADE
# ====================================================================

class RegistrarUsuarioUseCase:
    """Cadastra um novo cliente. E-mail e username são únicos."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, username: str, email: str, senha: str, contato: Optional[str] = None) -> Usuario:
        if not username or not email or not senha:
            raise DadosInvalidosError("Username, email and password are required.")

        email = email.strip().lower()
        if self.usuario_repo.existe(email=email, username=username):
            raise UsuarioJaExisteError()

        usuario = self.usuario_repo.criar(Usuario(username=username, email=email, contato=contato), senha)
        logger.info("Novo usuário registrado: %s", email)
        return usuario


class AutenticarUsuarioUseCase:
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def executar(self, email: str, senha: str) -> Usuario:
        """Falha do mesmo jeito para e-mail inexistente e senha incorreta."""
        usuario = self.usuario_repo.verificar_credenciais((email or '').strip().lower(), senha or '')
        if not usuario:
            logger.info("Tentativa de login recusada para %s", email)
            raise CredenciaisInvalidasError()
        return usuario


class PerfilUsuarioUseCase:
    """Leitura e edição do próprio perfil."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def obter(self, usuario_id: int) -> Usuario:
        usuario = self.usuario_repo.buscar_por_id(usuario_id)
        if not usuario:
            raise UsuarioNaoEncontradoError()
        return usuario

    def atualizar(self, usuario_id: int, username: Optional[str] = None,
                  email: Optional[str] = None, contato: Optional[str] = None) -> Usuario:
        usuario = self.obter(usuario_id)

        if email is not None:
            email = email.strip().lower()
            if email != usuario.email and self.usuario_repo.existe(email=email, excluir_id=usuario_id):
                raise UsuarioJaExisteError("Email already in use")
            usuario.email = email
        if username is not None:
            if username != usuario.username and self.usuario_repo.existe(username=username, excluir_id=usuario_id):
                raise UsuarioJaExisteError("Username already in use")
            usuario.username = username
        if contato is not None:
            usuario.contato = contato

        return self.usuario_repo.atualizar(usuario)


class GerenciarUsuariosAdminUseCase:
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def listar(self) -> List[Usuario]:
        return self.usuario_repo.listar_todos()

    def detalhar(self, usuario_id: int) -> Usuario:
        usuario = self.usuario_repo.buscar_por_id(usuario_id)
        if not usuario:
            raise UsuarioNaoEncontradoError()
        return usuario


class GerenciarEnderecosUseCase:
    """CRUD dos endereços salvos. Um endereço só é visível ao seu dono."""
    def __init__(self, endereco_repo: IEnderecoRepository):
        self.endereco_repo = endereco_repo

    def listar(self, usuario_id: int) -> List[Endereco]:
        return self.endereco_repo.listar_por_usuario(usuario_id)

    def adicionar(self, usuario_id: int, rua: str, cidade: str, estado: str, cep: str) -> Endereco:
        endereco = Endereco(rua=rua, cidade=cidade, estado=estado, cep=cep, usuario_id=usuario_id)
        return self.endereco_repo.salvar(endereco)

    def atualizar(self, usuario_id: int, endereco_id: int, **campos) -> Endereco:
        endereco = self._buscar(usuario_id, endereco_id)
        for nome in ('rua', 'cidade', 'estado', 'cep'):
            if campos.get(nome) is not None:
                setattr(endereco, nome, campos[nome])
        return self.endereco_repo.salvar(endereco)

    def remover(self, usuario_id: int, endereco_id: int) -> None:
        self._buscar(usuario_id, endereco_id)
        self.endereco_repo.deletar(endereco_id)

    def _buscar(self, usuario_id: int, endereco_id: int) -> Endereco:
        endereco = self.endereco_repo.buscar(usuario_id, endereco_id)
        if not endereco:
            raise EnderecoNaoEncontradoError()
        return endereco


# ====================================================================
# 2. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso responsável por listar o cardápio com filtros."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def listar_todos(self) -> List[Produto]:
        return self.produto_repo.listar()

    def listar_mais_vendidos(self) -> List[Produto]:
        return self.produto_repo.listar(mais_vendido=True)

    def listar_por_categoria(self, categoria: str) -> List[Produto]:
        # Categoria desconhecida não é erro: simplesmente não há produtos nela.
        if categoria not in CATEGORIAS:
            return []
        return self.produto_repo.listar(categoria=categoria)

    def buscar(self, termo: str) -> List[Produto]:
        termo = (termo or '').strip()
        if not termo:
            return []
        return self.produto_repo.listar(busca=termo)


class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de um produto específico."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, produto_id: int) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()
        return produto


class GerenciarProdutosUseCase:
    """Criação, edição parcial e remoção de produtos (somente administradores)."""

    CAMPOS_EDITAVEIS = ('nome', 'descricao', 'categoria', 'preco', 'mais_vendido')

    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def criar(self, nome: str, descricao: str, categoria: str, preco, arquivo_imagem,
              mais_vendido: bool = False) -> Produto:
        if arquivo_imagem is None:
            raise DadosInvalidosError("Image is required")
        produto = Produto(
            nome=nome,
            descricao=descricao,
            categoria=categoria,
            preco=_para_decimal(preco, 'price'),
            mais_vendido=bool(mais_vendido),
        )
        self._validar(produto)
        produto = self.produto_repo.salvar(produto, arquivo_imagem=arquivo_imagem)
        logger.info("Produto criado: %s (%s)", produto.nome, produto.id)
        return produto

    def atualizar(self, produto_id: int, dados: dict, arquivo_imagem=None) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()

        for campo in self.CAMPOS_EDITAVEIS:
            if campo in dados and dados[campo] is not None:
                valor = dados[campo]
                if campo == 'preco':
                    valor = _para_decimal(valor, 'price')
                setattr(produto, campo, valor)

        self._validar(produto)
        produto = self.produto_repo.salvar(produto, arquivo_imagem=arquivo_imagem)
        logger.info("Produto atualizado: %s", produto.id)
        return produto

    def deletar(self, produto_id: int) -> None:
        # Sem checagem de pedidos que referenciam o produto: os itens guardam snapshot.
        self.produto_repo.deletar(produto_id)
        logger.info("Produto removido: %s", produto_id)

    @staticmethod
    def _validar(produto: Produto) -> None:
        if not produto.nome:
            raise DadosInvalidosError("Name is required")
        if produto.categoria not in CATEGORIAS:
            raise DadosInvalidosError(f"Category must be one of: {', '.join(CATEGORIAS)}")
        if produto.preco < 0:
            raise DadosInvalidosError("Price must be zero or greater")


# ====================================================================
# 3. CASOS DE USO DO CARRINHO E LISTA DE DESEJOS
# ====================================================================

class GerenciarCarrinhoUseCase:
    """
    Caso de Uso que centraliza a lógica do carrinho (adicionar, atualizar, remover, mesclar).
    Funciona igual para o carrinho de sessão e o do banco: quem decide o backend é
    o repositório injetado.
    """
    def __init__(self, carrinho_repo: ICarrinhoRepository, produto_repo: IProdutoRepository):
        self.carrinho_repo = carrinho_repo
        self.produto_repo = produto_repo

    def obter(self) -> Carrinho:
        return self.carrinho_repo.obter()

    def contar(self) -> int:
        return self.carrinho_repo.obter().quantidade_total

    def adicionar_item(self, produto_id: int, quantidade: int = 1) -> Carrinho:
        """Adiciona a linha ou incrementa a quantidade se o produto já estiver no carrinho."""
        if quantidade <= 0:
            raise DadosInvalidosError("Quantity must be positive.")
        produto = self._produto(produto_id)

        carrinho = self.carrinho_repo.obter()
        item = carrinho.get_item(produto_id)
        if item:
            item.quantidade += quantidade
        else:
            carrinho.itens.append(ItemCarrinho(produto_id=produto_id, quantidade=quantidade, produto=produto))
        return self.carrinho_repo.salvar(carrinho)

    def atualizar_quantidade(self, produto_id: int, quantidade: int) -> Carrinho:
        """
        Define a quantidade. Zero ou negativo equivale a remover a linha;
        se o produto nem está no carrinho, nada muda.
        """
        carrinho = self.carrinho_repo.obter()
        if quantidade <= 0:
            if not carrinho.get_item(produto_id):
                return carrinho
            return self.remover_item(produto_id)

        item = carrinho.get_item(produto_id)
        if not item:
            produto = self._produto(produto_id)
            carrinho.itens.append(ItemCarrinho(produto_id=produto_id, quantidade=quantidade, produto=produto))
        else:
            item.quantidade = quantidade
        return self.carrinho_repo.salvar(carrinho)

    def remover_item(self, produto_id: int) -> Carrinho:
        """Remove a linha inteira, não apenas uma unidade."""
        carrinho = self.carrinho_repo.obter()
        if not carrinho.get_item(produto_id):
            raise ItemNaoEncontradoError("Item not found in cart")
        carrinho.itens = [item for item in carrinho.itens if item.produto_id != produto_id]
        return self.carrinho_repo.salvar(carrinho)

    def limpar(self) -> Carrinho:
        self.carrinho_repo.limpar()
        return self.carrinho_repo.obter()

    def mesclar(self, itens_visitante: Iterable[ItemCarrinho]) -> Carrinho:
        """
        Incorpora o carrinho do visitante: união por produto, somando quantidades.
        Produtos que não existem mais no catálogo são ignorados.
        """
        carrinho = self.carrinho_repo.obter()
        for visitante in itens_visitante:
            if visitante.quantidade <= 0:
                continue
            item = carrinho.get_item(visitante.produto_id)
            if item:
                item.quantidade += visitante.quantidade
                continue
            produto = self.produto_repo.buscar_por_id(visitante.produto_id)
            if not produto:
                logger.warning("Produto %s do carrinho visitante não existe mais; ignorado.", visitante.produto_id)
                continue
            carrinho.itens.append(
                ItemCarrinho(produto_id=visitante.produto_id, quantidade=visitante.quantidade, produto=produto)
            )
        return self.carrinho_repo.salvar(carrinho)

    def _produto(self, produto_id: int) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError()
        return produto


class GerenciarListaDesejosUseCase:
    def __init__(self, lista_repo: IListaDesejosRepository, produto_repo: IProdutoRepository):
        self.lista_repo = lista_repo
        self.produto_repo = produto_repo

    def obter(self) -> ListaDesejos:
        return self.lista_repo.obter()

    def adicionar(self, produto_id: int) -> ListaDesejos:
        """Idempotente: adicionar duas vezes mantém uma única entrada."""
        if not self.produto_repo.buscar_por_id(produto_id):
            raise ProdutoNaoEncontradoError()
        if self.lista_repo.obter().contem(produto_id):
            return self.lista_repo.obter()
        return self.lista_repo.adicionar(produto_id)

    def remover(self, produto_id: int) -> ListaDesejos:
        return self.lista_repo.remover(produto_id)

    def contem(self, produto_id: int) -> bool:
        return self.lista_repo.obter().contem(produto_id)

    def mesclar(self, produto_ids: Iterable[int]) -> ListaDesejos:
        atual = self.lista_repo.obter()
        for produto_id in produto_ids:
            if atual.contem(produto_id):
                continue
            if not self.produto_repo.buscar_por_id(produto_id):
                logger.warning("Produto %s da lista visitante não existe mais; ignorado.", produto_id)
                continue
            atual = self.lista_repo.adicionar(produto_id)
        return atual


# ====================================================================
# 4. CASOS DE USO DE PEDIDO
# ====================================================================

class CriarPedidoUseCase:
    """
    Caso de Uso que finaliza o checkout.

    O total é recalculado com os preços atuais do catálogo; o total enviado
    pelo cliente é apenas informativo. Um pagamento online só quita o pedido
    quando a assinatura confere e o pedido do gateway, registrado na criação,
    cobra exatamente esse total. Cada pedido do gateway quita um único pedido.
    """
    def __init__(self, pedido_repo: IPedidoRepository, produto_repo: IProdutoRepository,
                 pagamento_gateway: Optional[IGatewayPagamento] = None,
                 transacao_repo: Optional[ITransacaoPagamentoRepository] = None):
        self.pedido_repo = pedido_repo
        self.produto_repo = produto_repo
        self.pagamento_gateway = pagamento_gateway
        self.transacao_repo = transacao_repo

    def executar(
        self,
        usuario_id: int,
        itens: Iterable[Tuple[int, int]],
        metodo_pagamento: str = 'cod',
        endereco_entrega: Optional[Endereco] = None,
        total_informado=None,
        gateway_pedido_id: Optional[str] = None,
        gateway_pagamento_id: Optional[str] = None,
        assinatura: Optional[str] = None,
        carrinho_repo: Optional[ICarrinhoRepository] = None,
    ) -> Pedido:
        if metodo_pagamento not in METODOS_PAGAMENTO:
            raise DadosInvalidosError(f"paymentMethod must be one of: {', '.join(METODOS_PAGAMENTO)}")

        # Agrupa linhas repetidas do mesmo produto
        quantidades = {}
        for produto_id, quantidade in itens:
            if quantidade is None or quantidade < 1:
                raise DadosInvalidosError("Quantity must be at least 1.")
            quantidades[produto_id] = quantidades.get(produto_id, 0) + quantidade
        if not quantidades:
            raise CarrinhoVazioError()

        if gateway_pedido_id and self.pedido_repo.buscar_por_gateway_id(gateway_pedido_id):
            logger.warning("Pedido de gateway %s reapresentado no checkout do usuário %s", gateway_pedido_id, usuario_id)
            raise PagamentoJaUtilizadoError()

        itens_pedido = []
        subtotal = Decimal('0')
        for produto_id, quantidade in quantidades.items():
            produto = self.produto_repo.buscar_por_id(produto_id)
            if not produto:
                raise ProdutoNaoEncontradoError(f"Product {produto_id} not found")
            item = ItemPedido(
                produto_id=produto.id,
                nome_produto=produto.nome,
                preco_unitario=produto.preco,
                quantidade=quantidade,
                produto=produto,
            )
            itens_pedido.append(item)
            subtotal += item.subtotal

        _, _, total = calcular_totais(subtotal)
        if total_informado is not None and _para_decimal(total_informado, 'totalAmount') != total:
            logger.warning(
                "Total informado pelo cliente (%s) difere do calculado (%s) para o usuário %s; usando o calculado.",
                total_informado, total, usuario_id,
            )

        status_pagamento = StatusPagamento.INICIAL
        if gateway_pagamento_id or assinatura:
            status_pagamento = self._confirmar_pagamento(
                gateway_pedido_id, gateway_pagamento_id, assinatura, total, usuario_id
            )

        pedido = self.pedido_repo.criar(Pedido(
            usuario_id=usuario_id,
            itens=itens_pedido,
            total=total,
            metodo_pagamento=metodo_pagamento,
            status=StatusPedido.INICIAL,
            status_pagamento=status_pagamento,
            endereco_entrega=endereco_entrega,
            gateway_pedido_id=gateway_pedido_id,
            gateway_pagamento_id=gateway_pagamento_id,
        ))
        logger.info("Pedido %s criado para o usuário %s (total %s)", pedido.id, usuario_id, total)

        if carrinho_repo is not None:
            carrinho_repo.limpar()
        return pedido

    def _confirmar_pagamento(self, gateway_pedido_id, gateway_pagamento_id, assinatura,
                             total: Decimal, usuario_id: int) -> str:
        if not (gateway_pedido_id and gateway_pagamento_id and assinatura) or self.pagamento_gateway is None:
            raise DadosInvalidosError(
                "razorpayOrderId, razorpayPaymentId and razorpaySignature are required together."
            )
        if not self.pagamento_gateway.verificar_assinatura(gateway_pedido_id, gateway_pagamento_id, assinatura):
            logger.warning("Assinatura inválida no checkout do pedido de gateway %s", gateway_pedido_id)
            raise AssinaturaInvalidaError()

        transacao = self.transacao_repo.buscar(gateway_pedido_id) if self.transacao_repo else None
        if not _transacao_cobre_pedido(transacao, total, usuario_id):
            logger.warning(
                "Pedido de gateway %s não cobre o total %s do usuário %s; pagamento fica pendente.",
                gateway_pedido_id, total, usuario_id,
            )
            return StatusPagamento.PENDING
        return StatusPagamento.COMPLETED


class ListarPedidosDoUsuarioUseCase:
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: int) -> List[Pedido]:
        return self.pedido_repo.listar_por_usuario(usuario_id)

    def detalhar(self, usuario_id: int, pedido_id: int, is_admin: bool = False) -> Pedido:
        """Pedidos de terceiros aparecem como inexistentes para não-administradores."""
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido or (not is_admin and pedido.usuario_id != usuario_id):
            raise PedidoNaoEncontradoError()
        return pedido


class GerenciarPedidosAdminUseCase:
    """Operações de pedidos restritas ao painel administrativo."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self, status: Optional[str] = None) -> List[Pedido]:
        if status is not None:
            validar_status(StatusPedido, status)
        return self.pedido_repo.listar_todos(status=status)

    def atualizar_status(self, pedido_id: int, novo_status: str) -> Pedido:
        """
        Avança o pedido na máquina de estados. Só o próximo passo é aceito;
        repetir o status atual não altera nada.
        """
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError()

        try:
            mudou = validar_transicao(StatusPedido, pedido.status, novo_status)
        except DadosInvalidosError:
            logger.warning("Transição recusada no pedido %s: %s -> %s", pedido_id, pedido.status, novo_status)
            raise

        if not mudou:
            return pedido
        pedido = self.pedido_repo.atualizar_status(pedido_id, novo_status)
        logger.info("Pedido %s: status alterado para %s", pedido_id, novo_status)
        return pedido

    def vendas_do_dia(self, agora: datetime) -> VendasDoDia:
        """Soma os pedidos criados no dia local de `agora`: [00:00:00.000, 23:59:59.999)."""
        inicio = agora.replace(hour=0, minute=0, second=0, microsecond=0)
        fim = agora.replace(hour=23, minute=59, second=59, microsecond=999000)
        pedidos = self.pedido_repo.listar_criados_entre(inicio, fim)
        total = sum((pedido.total for pedido in pedidos), Decimal('0'))
        return VendasDoDia(total=total, pedidos=pedidos)


class PainelAdminUseCase:
    """Consolida os números do dashboard administrativo."""

    LIMITE_RECENTES = 5

    def __init__(self, produto_repo: IProdutoRepository, pedido_repo: IPedidoRepository,
                 usuario_repo: IUsuarioRepository, avaliacao_repo: IAvaliacaoRepository):
        self.produto_repo = produto_repo
        self.pedido_repo = pedido_repo
        self.usuario_repo = usuario_repo
        self.avaliacao_repo = avaliacao_repo

    def estatisticas(self) -> EstatisticasPainel:
        return EstatisticasPainel(
            total_produtos=self.produto_repo.contar_total(),
            total_pedidos=self.pedido_repo.contar_total(),
            total_usuarios=self.usuario_repo.contar_clientes(),
            receita_total=self.pedido_repo.somar_receita(StatusPagamento.COMPLETED),
            pedidos_recentes=self.pedido_repo.listar_todos(limite=self.LIMITE_RECENTES),
        )

    def listar_avaliacoes(self) -> List[Avaliacao]:
        return self.avaliacao_repo.listar_todas()

    def pedidos_por_status(self, status: str) -> List[Pedido]:
        validar_status(StatusPedido, status)
        return self.pedido_repo.listar_todos(status=status)


# ====================================================================
# 5. CASOS DE USO DE AVALIAÇÃO
# ====================================================================

class AvaliarProdutoUseCase:
    """Registra uma avaliação por (usuário, pedido, produto) de um pedido entregue."""
    def __init__(self, pedido_repo: IPedidoRepository, avaliacao_repo: IAvaliacaoRepository):
        self.pedido_repo = pedido_repo
        self.avaliacao_repo = avaliacao_repo

    def executar(self, usuario_id: int, pedido_id: int, produto_id: int, nota: int,
                 comentario: str = '') -> Avaliacao:
        if nota is None or not 1 <= int(nota) <= 5:
            raise DadosInvalidosError("Rating must be between 1 and 5.")

        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if (not pedido or pedido.usuario_id != usuario_id
                or pedido.status != StatusPedido.TERMINAL):
            raise AvaliacaoNaoPermitidaError()
        if not pedido.contem_produto(produto_id):
            raise AvaliacaoNaoPermitidaError("Product is not part of this order")

        if self.avaliacao_repo.existe(usuario_id, pedido_id, produto_id):
            raise AvaliacaoDuplicadaError()

        return self.avaliacao_repo.criar(Avaliacao(
            usuario_id=usuario_id,
            pedido_id=pedido_id,
            produto_id=produto_id,
            nota=int(nota),
            comentario=comentario or '',
        ))


class ListarPedidosElegiveisUseCase:
    """
    Pedidos entregues do usuário que ainda têm algum item sem avaliação.
    Um item sai da lista quando o usuário já avaliou aquele produto.
    """
    def __init__(self, pedido_repo: IPedidoRepository, avaliacao_repo: IAvaliacaoRepository):
        self.pedido_repo = pedido_repo
        self.avaliacao_repo = avaliacao_repo

    def executar(self, usuario_id: int) -> List[Pedido]:
        avaliados = self.avaliacao_repo.produtos_avaliados(usuario_id)
        elegiveis = []
        for pedido in self.pedido_repo.listar_por_usuario(usuario_id, status=StatusPedido.TERMINAL):
            pedido.itens = [
                item for item in pedido.itens
                if item.produto_id is not None and item.produto_id not in avaliados
            ]
            if pedido.itens:
                elegiveis.append(pedido)
        return elegiveis


# ====================================================================
# 6. CASOS DE USO DE PAGAMENTO
# ====================================================================

class CriarPedidoGatewayUseCase:
    """
    Abre um pedido no gateway, com o valor convertido para a unidade mínima,
    e registra o valor cobrado para conferência no checkout.
    """
    def __init__(self, pagamento_gateway: IGatewayPagamento,
                 transacao_repo: Optional[ITransacaoPagamentoRepository] = None):
        self.pagamento_gateway = pagamento_gateway
        self.transacao_repo = transacao_repo

    def executar(self, valor, moeda: str, recibo: Optional[str] = None,
                 usuario_id: Optional[int] = None) -> TransacaoPagamento:
        valor = _para_decimal(valor, 'amount')
        if valor <= 0:
            raise DadosInvalidosError("Amount must be greater than zero.")
        recibo = recibo or f"receipt_{int(datetime.now().timestamp() * 1000)}"
        transacao = self.pagamento_gateway.criar_pedido(_em_unidade_minima(valor), moeda, recibo)
        transacao.usuario_id = usuario_id
        if self.transacao_repo is not None:
            self.transacao_repo.registrar(transacao)
        return transacao


class VerificarPagamentoUseCase:
    """
    Confere a assinatura devolvida pelo checkout do gateway e, havendo um pedido
    com aquele order_id, aplica a transição de status de pagamento. A conclusão
    exige que o pedido do gateway cobre exatamente o total do pedido.
    """
    def __init__(self, pagamento_gateway: IGatewayPagamento, pedido_repo: IPedidoRepository,
                 transacao_repo: Optional[ITransacaoPagamentoRepository] = None):
        self.pagamento_gateway = pagamento_gateway
        self.pedido_repo = pedido_repo
        self.transacao_repo = transacao_repo

    def executar(self, gateway_pedido_id: str, gateway_pagamento_id: str, assinatura: str) -> Optional[Pedido]:
        valida = self.pagamento_gateway.verificar_assinatura(gateway_pedido_id, gateway_pagamento_id, assinatura)
        pedido = self.pedido_repo.buscar_por_gateway_id(gateway_pedido_id)

        if not valida:
            logger.warning("Assinatura inválida para o pedido de gateway %s", gateway_pedido_id)
            if pedido and pedido.status_pagamento == StatusPagamento.PENDING:
                self.pedido_repo.atualizar_pagamento(pedido.id, StatusPagamento.FAILED)
            raise AssinaturaInvalidaError()

        logger.info("Pagamento %s verificado para o pedido de gateway %s", gateway_pagamento_id, gateway_pedido_id)
        if not pedido or pedido.status_pagamento == StatusPagamento.COMPLETED:
            return pedido

        transacao = self.transacao_repo.buscar(gateway_pedido_id) if self.transacao_repo else None
        if not _transacao_cobre_pedido(transacao, pedido.total, pedido.usuario_id):
            logger.warning(
                "Pedido de gateway %s não cobre o total %s do pedido %s; pagamento fica como está.",
                gateway_pedido_id, pedido.total, pedido.id,
            )
            return pedido
        validar_transicao(StatusPagamento, pedido.status_pagamento, StatusPagamento.COMPLETED)
        return self.pedido_repo.atualizar_pagamento(pedido.id, StatusPagamento.COMPLETED, gateway_pagamento_id)
