# burgerpizza/presentation/cart_manager.py
# Gerencia o carrinho e a lista de desejos do visitante na sessão do Django
# e escolhe, por requisição, qual armazenamento (sessão ou banco) está ativo.

from typing import Iterable, List, Optional

from django.http import HttpRequest

from burgerpizza.core.entities import Carrinho, ItemCarrinho, ItemListaDesejos, ListaDesejos
from burgerpizza.core.ports import ICarrinhoRepository, IListaDesejosRepository
from burgerpizza.core.use_cases import GerenciarCarrinhoUseCase, GerenciarListaDesejosUseCase
from burgerpizza.infrastructure.instances import produto_repo
from burgerpizza.infrastructure.repositories import CarrinhoRepositoryDjango, ListaDesejosRepositoryDjango


class CarrinhoSessaoRepository(ICarrinhoRepository):
    """
    Carrinho do visitante guardado na sessão.
    Apenas {produto_id: quantidade} é armazenado; nome e preço são lidos do
    catálogo a cada carga para evitar dados desatualizados.
    """

    SESSION_KEY = 'carrinho_burgerpizza'

    def __init__(self, session, produto_repository=None):
        self.session = session
        self.produto_repo = produto_repository or produto_repo

    def itens_brutos(self) -> List[ItemCarrinho]:
        """Itens da sessão sem consultar o catálogo (usado na mesclagem do login)."""
        raw_cart = self.session.get(self.SESSION_KEY) or {}
        return [ItemCarrinho(produto_id=int(produto_id), quantidade=int(quantidade))
                for produto_id, quantidade in raw_cart.items()]

    def obter(self) -> Carrinho:
        itens = []
        for item in self.itens_brutos():
            produto = self.produto_repo.buscar_por_id(item.produto_id)
            # Produto removido do cardápio some do carrinho
            if produto:
                item.produto = produto
                itens.append(item)
        return Carrinho(itens=itens)

    def salvar(self, carrinho: Carrinho) -> Carrinho:
        self.session[self.SESSION_KEY] = {str(item.produto_id): item.quantidade for item in carrinho.itens}
        self.session.modified = True
        return self.obter()

    def limpar(self) -> None:
        if self.SESSION_KEY in self.session:
            del self.session[self.SESSION_KEY]
            self.session.modified = True


class ListaDesejosSessaoRepository(IListaDesejosRepository):
    """Lista de desejos do visitante: uma lista de ids de produto na sessão."""

    SESSION_KEY = 'lista_desejos_burgerpizza'

    def __init__(self, session, produto_repository=None):
        self.session = session
        self.produto_repo = produto_repository or produto_repo

    def ids(self) -> List[int]:
        return [int(produto_id) for produto_id in self.session.get(self.SESSION_KEY) or []]

    def obter(self) -> ListaDesejos:
        itens = []
        for produto_id in self.ids():
            produto = self.produto_repo.buscar_por_id(produto_id)
            if produto:
                itens.append(ItemListaDesejos(produto_id=produto_id, produto=produto))
        return ListaDesejos(itens=itens)

    def _gravar(self, ids: List[int]) -> None:
        self.session[self.SESSION_KEY] = ids
        self.session.modified = True

    def adicionar(self, produto_id: int) -> ListaDesejos:
        ids = self.ids()
        if produto_id not in ids:
            ids.append(produto_id)
            self._gravar(ids)
        return self.obter()

    def remover(self, produto_id: int) -> ListaDesejos:
        self._gravar([atual for atual in self.ids() if atual != produto_id])
        return self.obter()

    def limpar(self) -> None:
        if self.SESSION_KEY in self.session:
            del self.session[self.SESSION_KEY]
            self.session.modified = True


class CartManager:
    """
    Decide qual carrinho/lista a requisição enxerga: o do banco para usuários
    autenticados e o da sessão para visitantes.
    """

    def __init__(self, request: HttpRequest):
        self.request = request

    @property
    def autenticado(self) -> bool:
        user = getattr(self.request, 'user', None)
        return bool(user and user.is_authenticated)

    def carrinho_repo(self) -> ICarrinhoRepository:
        if self.autenticado:
            return CarrinhoRepositoryDjango(self.request.user.id)
        return CarrinhoSessaoRepository(self.request.session)

    def lista_repo(self) -> IListaDesejosRepository:
        if self.autenticado:
            return ListaDesejosRepositoryDjango(self.request.user.id)
        return ListaDesejosSessaoRepository(self.request.session)

    def carrinho_use_case(self) -> GerenciarCarrinhoUseCase:
        return GerenciarCarrinhoUseCase(self.carrinho_repo(), produto_repo)

    def lista_use_case(self) -> GerenciarListaDesejosUseCase:
        return GerenciarListaDesejosUseCase(self.lista_repo(), produto_repo)

    def mesclar_visitante(
        self,
        usuario_id: int,
        itens_extra: Iterable[ItemCarrinho] = (),
        lista_extra: Iterable[int] = (),
    ) -> Optional[Carrinho]:
        """
        Incorpora ao carrinho persistido do usuário o que o visitante acumulou
        (sessão e corpo do login) e limpa a sessão em seguida.
        """
        carrinho_sessao = CarrinhoSessaoRepository(self.request.session)
        lista_sessao = ListaDesejosSessaoRepository(self.request.session)

        itens = carrinho_sessao.itens_brutos() + list(itens_extra)
        ids = lista_sessao.ids() + [produto_id for produto_id in lista_extra if produto_id is not None]

        carrinho = None
        if itens:
            carrinho = GerenciarCarrinhoUseCase(CarrinhoRepositoryDjango(usuario_id), produto_repo).mesclar(itens)
        if ids:
            GerenciarListaDesejosUseCase(ListaDesejosRepositoryDjango(usuario_id), produto_repo).mesclar(ids)

        carrinho_sessao.limpar()
        lista_sessao.limpar()
        return carrinho
