"""
Camada de Infraestrutura: Implementação dos Repositórios com o Django ORM.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao banco de dados.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Set

from django.db import transaction
from django.db.models import Prefetch, Q, Sum
from django.db.utils import IntegrityError

from burgerpizza.core.entities import (
    Avaliacao, Carrinho, Endereco, ListaDesejos, Pedido, Produto, TransacaoPagamento, Usuario,
)
from burgerpizza.core.exceptions import (
    AvaliacaoDuplicadaError,
    EnderecoNaoEncontradoError,
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
    IListaDesejosRepository,
    IPedidoRepository,
    IProdutoRepository,
    ITransacaoPagamentoRepository,
    IUsuarioRepository,
)

from .mappers import (
    AvaliacaoMapper, EnderecoMapper, ItemCarrinhoMapper, ItemListaDesejosMapper,
    ItemPedidoMapper, PedidoMapper, ProdutoMapper, TransacaoPagamentoMapper, UsuarioMapper,
    get_model,
)


# ====================================================================
# 1. CATÁLOGO
# ====================================================================

class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def buscar_por_id(self, produto_id: int) -> Optional[Produto]:
        try:
            return ProdutoMapper.to_entity(self.ProdutoModel.objects.get(pk=produto_id))
        except self.ProdutoModel.DoesNotExist:
            return None

    def listar(
        self,
        categoria: Optional[str] = None,
        mais_vendido: Optional[bool] = None,
        busca: Optional[str] = None,
    ) -> List[Produto]:
        qs = self.ProdutoModel.objects.all()

        if categoria:
            qs = qs.filter(categoria=categoria)
        if mais_vendido is not None:
            qs = qs.filter(mais_vendido=mais_vendido)
        if busca:
            qs = qs.filter(Q(nome__icontains=busca) | Q(descricao__icontains=busca))

        return [ProdutoMapper.to_entity(model) for model in qs]

    @transaction.atomic
    def salvar(self, produto: Produto, arquivo_imagem=None) -> Produto:
        """Salva ou atualiza um Produto, convertendo a entidade para o modelo."""
        model = None
        if produto.id:
            try:
                model = self.ProdutoModel.objects.get(pk=produto.id)
            except self.ProdutoModel.DoesNotExist:
                raise ProdutoNaoEncontradoError(f"Product {produto.id} not found")

        model = ProdutoMapper.to_model(produto, model)
        if arquivo_imagem is not None:
            model.imagem = arquivo_imagem
        model.save()
        return ProdutoMapper.to_entity(model)

    def deletar(self, produto_id: int) -> None:
        apagados, _ = self.ProdutoModel.objects.filter(pk=produto_id).delete()
        if not apagados:
            raise ProdutoNaoEncontradoError()

    def contar_total(self) -> int:
        return self.ProdutoModel.objects.count()


# ====================================================================
# 2. IDENTIDADE
# ====================================================================

class UsuarioRepositoryDjango(IUsuarioRepository):
    """Implementação do UsuarioRepository sobre o AUTH_USER_MODEL."""

    @property
    def UsuarioModel(self):
        return get_model('infrastructure', 'Usuario')

    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]:
        try:
            return UsuarioMapper.to_entity(self.UsuarioModel.objects.get(pk=usuario_id))
        except self.UsuarioModel.DoesNotExist:
            return None

    def existe(self, email: Optional[str] = None, username: Optional[str] = None,
               excluir_id: Optional[int] = None) -> bool:
        filtro = Q()
        if email:
            filtro |= Q(email__iexact=email)
        if username:
            filtro |= Q(username__iexact=username)
        if not filtro:
            return False
        qs = self.UsuarioModel.objects.filter(filtro)
        if excluir_id is not None:
            qs = qs.exclude(pk=excluir_id)
        return qs.exists()

    def criar(self, usuario: Usuario, senha: str) -> Usuario:
        try:
            with transaction.atomic():
                model = self.UsuarioModel.objects.create_user(
                    email=usuario.email,
                    password=senha,
                    username=usuario.username,
                    contato=usuario.contato,
                    is_admin=usuario.is_admin,
                )
        except IntegrityError:
            # Cadastro concorrente com o mesmo e-mail/username
            raise UsuarioJaExisteError()
        return UsuarioMapper.to_entity(model)

    def verificar_credenciais(self, email: str, senha: str) -> Optional[Usuario]:
        try:
            model = self.UsuarioModel.objects.get(email__iexact=email)
        except self.UsuarioModel.DoesNotExist:
            # Roda o hasher mesmo assim, para não revelar por tempo de resposta que o e-mail não existe
            self.UsuarioModel().set_password(senha)
            return None
        if not model.is_active or not model.check_password(senha):
            return None
        return UsuarioMapper.to_entity(model)

    def atualizar(self, usuario: Usuario) -> Usuario:
        try:
            model = self.UsuarioModel.objects.get(pk=usuario.id)
        except self.UsuarioModel.DoesNotExist:
            raise UsuarioNaoEncontradoError()
        model.username = usuario.username
        model.email = usuario.email
        model.contato = usuario.contato
        try:
            with transaction.atomic():
                model.save(update_fields=['username', 'email', 'contato'])
        except IntegrityError:
            raise UsuarioJaExisteError()
        return UsuarioMapper.to_entity(model)

    def listar_todos(self) -> List[Usuario]:
        return [UsuarioMapper.to_entity(m) for m in self.UsuarioModel.objects.order_by('-date_joined', '-id')]

    def contar_clientes(self) -> int:
        return self.UsuarioModel.objects.filter(is_admin=False).count()


class EnderecoRepositoryDjango(IEnderecoRepository):

    @property
    def EnderecoModel(self):
        return get_model('infrastructure', 'Endereco')

    def listar_por_usuario(self, usuario_id: int) -> List[Endereco]:
        return [EnderecoMapper.to_entity(m) for m in self.EnderecoModel.objects.filter(usuario_id=usuario_id)]

    def buscar(self, usuario_id: int, endereco_id: int) -> Optional[Endereco]:
        model = self.EnderecoModel.objects.filter(pk=endereco_id, usuario_id=usuario_id).first()
        return EnderecoMapper.to_entity(model)

    def salvar(self, endereco: Endereco) -> Endereco:
        model = None
        if endereco.id:
            try:
                model = self.EnderecoModel.objects.get(pk=endereco.id)
            except self.EnderecoModel.DoesNotExist:
                raise EnderecoNaoEncontradoError()
        model = EnderecoMapper.to_model(endereco, model)
        model.save()
        return EnderecoMapper.to_entity(model)

    def deletar(self, endereco_id: int) -> None:
        self.EnderecoModel.objects.filter(pk=endereco_id).delete()


# ====================================================================
# 3. CARRINHO E LISTA DE DESEJOS (usuário autenticado)
# ====================================================================

class CarrinhoRepositoryDjango(ICarrinhoRepository):
    """Carrinho persistido no banco, vinculado a um usuário."""

    def __init__(self, usuario_id: int):
        self.usuario_id = usuario_id

    @property
    def ItemCarrinhoModel(self):
        return get_model('carrinho', 'ItemCarrinho')

    def obter(self) -> Carrinho:
        qs = self.ItemCarrinhoModel.objects.filter(usuario_id=self.usuario_id).select_related('produto')
        return Carrinho(itens=[ItemCarrinhoMapper.to_entity(m) for m in qs], usuario_id=self.usuario_id)

    @transaction.atomic
    def salvar(self, carrinho: Carrinho) -> Carrinho:
        """Sincroniza as linhas do banco com a entidade (remove, atualiza e cria)."""
        manter = [item.produto_id for item in carrinho.itens]
        self.ItemCarrinhoModel.objects.filter(usuario_id=self.usuario_id).exclude(produto_id__in=manter).delete()
        for item in carrinho.itens:
            self.ItemCarrinhoModel.objects.update_or_create(
                usuario_id=self.usuario_id,
                produto_id=item.produto_id,
                defaults={'quantidade': item.quantidade},
            )
        return self.obter()

    def limpar(self) -> None:
        self.ItemCarrinhoModel.objects.filter(usuario_id=self.usuario_id).delete()


class ListaDesejosRepositoryDjango(IListaDesejosRepository):

    def __init__(self, usuario_id: int):
        self.usuario_id = usuario_id

    @property
    def ItemListaDesejosModel(self):
        return get_model('carrinho', 'ItemListaDesejos')

    def obter(self) -> ListaDesejos:
        qs = self.ItemListaDesejosModel.objects.filter(usuario_id=self.usuario_id).select_related('produto')
        return ListaDesejos(itens=[ItemListaDesejosMapper.to_entity(m) for m in qs], usuario_id=self.usuario_id)

    def adicionar(self, produto_id: int) -> ListaDesejos:
        self.ItemListaDesejosModel.objects.get_or_create(usuario_id=self.usuario_id, produto_id=produto_id)
        return self.obter()

    def remover(self, produto_id: int) -> ListaDesejos:
        self.ItemListaDesejosModel.objects.filter(usuario_id=self.usuario_id, produto_id=produto_id).delete()
        return self.obter()

    def limpar(self) -> None:
        self.ItemListaDesejosModel.objects.filter(usuario_id=self.usuario_id).delete()


# ====================================================================
# 4. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('pedidos', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('pedidos', 'ItemPedido')

    def _queryset(self):
        return self.PedidoModel.objects.select_related('usuario').prefetch_related(
            Prefetch('itens', queryset=self.ItemPedidoModel.objects.select_related('produto'))
        )

    def criar(self, pedido: Pedido) -> Pedido:
        """
        Grava o pedido e o snapshot dos itens em uma única transação.
        Um gateway_pedido_id já usado por outro pedido é recusado pelo banco.
        """
        try:
            with transaction.atomic():
                model = PedidoMapper.to_model(pedido)
                model.save()
                self.ItemPedidoModel.objects.bulk_create(
                    [ItemPedidoMapper.to_model(item, model.id) for item in pedido.itens]
                )
        except IntegrityError:
            raise PagamentoJaUtilizadoError()
        return self.buscar_por_id(model.id)

    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]:
        try:
            return PedidoMapper.to_entity(self._queryset().get(pk=pedido_id))
        except self.PedidoModel.DoesNotExist:
            return None

    def buscar_por_gateway_id(self, gateway_pedido_id: str) -> Optional[Pedido]:
        model = self._queryset().filter(gateway_pedido_id=gateway_pedido_id).first()
        return PedidoMapper.to_entity(model)

    def listar_por_usuario(self, usuario_id: int, status: Optional[str] = None) -> List[Pedido]:
        qs = self._queryset().filter(usuario_id=usuario_id)
        if status:
            qs = qs.filter(status=status)
        return [PedidoMapper.to_entity(m) for m in qs]

    def listar_todos(self, status: Optional[str] = None, limite: Optional[int] = None) -> List[Pedido]:
        qs = self._queryset()
        if status:
            qs = qs.filter(status=status)
        if limite:
            qs = qs[:limite]
        return [PedidoMapper.to_entity(m) for m in qs]

    def listar_criados_entre(self, inicio: datetime, fim: datetime) -> List[Pedido]:
        qs = self._queryset().filter(data_criacao__gte=inicio, data_criacao__lt=fim)
        return [PedidoMapper.to_entity(m) for m in qs]

    def atualizar_status(self, pedido_id: int, novo_status: str) -> Pedido:
        if not self.PedidoModel.objects.filter(pk=pedido_id).update(status=novo_status):
            raise PedidoNaoEncontradoError()
        return self.buscar_por_id(pedido_id)

    def atualizar_pagamento(self, pedido_id: int, status_pagamento: str,
                            gateway_pagamento_id: Optional[str] = None) -> Pedido:
        campos = {'status_pagamento': status_pagamento}
        if gateway_pagamento_id:
            campos['gateway_pagamento_id'] = gateway_pagamento_id
        if not self.PedidoModel.objects.filter(pk=pedido_id).update(**campos):
            raise PedidoNaoEncontradoError()
        return self.buscar_por_id(pedido_id)

    def contar_total(self) -> int:
        return self.PedidoModel.objects.count()

    def somar_receita(self, status_pagamento: str) -> Decimal:
        total = self.PedidoModel.objects.filter(status_pagamento=status_pagamento).aggregate(total=Sum('total'))['total']
        return total or Decimal('0')


# ====================================================================
# 5. AVALIAÇÕES
# ====================================================================

class AvaliacaoRepositoryDjango(IAvaliacaoRepository):

    @property
    def AvaliacaoModel(self):
        return get_model('avaliacoes', 'Avaliacao')

    def existe(self, usuario_id: int, pedido_id: int, produto_id: int) -> bool:
        return self.AvaliacaoModel.objects.filter(
            usuario_id=usuario_id, pedido_id=pedido_id, produto_id=produto_id
        ).exists()

    def criar(self, avaliacao: Avaliacao) -> Avaliacao:
        try:
            with transaction.atomic():
                model = self.AvaliacaoModel.objects.create(
                    usuario_id=avaliacao.usuario_id,
                    pedido_id=avaliacao.pedido_id,
                    produto_id=avaliacao.produto_id,
                    nota=avaliacao.nota,
                    comentario=avaliacao.comentario,
                )
        except IntegrityError:
            raise AvaliacaoDuplicadaError()
        return AvaliacaoMapper.to_entity(model)

    def produtos_avaliados(self, usuario_id: int) -> Set[int]:
        return set(self.AvaliacaoModel.objects.filter(usuario_id=usuario_id).values_list('produto_id', flat=True))

    def listar_todas(self) -> List[Avaliacao]:
        qs = self.AvaliacaoModel.objects.select_related('usuario', 'produto', 'pedido__usuario').prefetch_related(
            'pedido__itens__produto'
        )
        return [AvaliacaoMapper.to_entity(m, completo=True) for m in qs]


# ====================================================================
# 6. TRANSAÇÕES DO GATEWAY
# ====================================================================

class TransacaoPagamentoRepositoryDjango(ITransacaoPagamentoRepository):

    @property
    def TransacaoModel(self):
        return get_model('pedidos', 'TransacaoGateway')

    def registrar(self, transacao: TransacaoPagamento) -> TransacaoPagamento:
        model = TransacaoPagamentoMapper.to_model(transacao)
        model.save()
        return TransacaoPagamentoMapper.to_entity(model)

    def buscar(self, referencia_externa: str) -> Optional[TransacaoPagamento]:
        model = self.TransacaoModel.objects.filter(gateway_pedido_id=referencia_externa).first()
        return TransacaoPagamentoMapper.to_entity(model)
