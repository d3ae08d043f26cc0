# burgerpizza/core/testes.py

import unittest
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

# Importamos as classes que queremos testar
from burgerpizza.core.entities import (
    Avaliacao, Carrinho, ItemCarrinho, ItemListaDesejos, ItemPedido, ListaDesejos, Pedido, Produto,
    TransacaoPagamento, Usuario,
)
from burgerpizza.core.exceptions import (
    AssinaturaInvalidaError,
    AvaliacaoDuplicadaError,
    AvaliacaoNaoPermitidaError,
    CarrinhoVazioError,
    CredenciaisInvalidasError,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    PagamentoJaUtilizadoError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
    StatusInvalidoError,
    TransicaoStatusInvalidaError,
    UsuarioJaExisteError,
)
from burgerpizza.core.status import StatusPagamento, StatusPedido, validar_transicao
from burgerpizza.core.use_cases import (
    AutenticarUsuarioUseCase,
    AvaliarProdutoUseCase,
    CriarPedidoGatewayUseCase,
    CriarPedidoUseCase,
    GerenciarCarrinhoUseCase,
    GerenciarListaDesejosUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosUseCase,
    ListarPedidosDoUsuarioUseCase,
    ListarPedidosElegiveisUseCase,
    ListarProdutosUseCase,
    PainelAdminUseCase,
    RegistrarUsuarioUseCase,
    VerificarPagamentoUseCase,
    calcular_totais,
)


def _produto(produto_id=1, preco='100.00', nome='Classic Burger', categoria='Burger'):
    return Produto(id=produto_id, nome=nome, descricao='Saboroso', categoria=categoria, preco=Decimal(preco))


def _pedido(pedido_id=10, usuario_id=1, status=StatusPedido.DELIVERED, produto_ids=(1,), total='100',
            status_pagamento=StatusPagamento.PENDING):
    itens = [ItemPedido(produto_id=pid, nome_produto=f'Produto {pid}', preco_unitario=Decimal('100'), quantidade=1)
             for pid in produto_ids]
    return Pedido(id=pedido_id, usuario_id=usuario_id, itens=itens, total=Decimal(total), status=status,
                  status_pagamento=status_pagamento)


class FakeCarrinhoRepository:
    """Repositório em memória: o carrinho salvo é o que `obter` devolve depois."""

    def __init__(self, itens=None):
        self.carrinho = Carrinho(itens=list(itens or []))
        self.limpo = False

    def obter(self):
        return Carrinho(itens=[ItemCarrinho(i.produto_id, i.quantidade, i.produto) for i in self.carrinho.itens])

    def salvar(self, carrinho):
        self.carrinho = carrinho
        return self.obter()

    def limpar(self):
        self.limpo = True
        self.carrinho = Carrinho()


# ====================================================================
# MÁQUINAS DE ESTADO
# ====================================================================

class TestMaquinaStatusPedido(unittest.TestCase):

    def test_cada_avanco_de_um_passo_e_aceito(self):
        for atual, novo in zip(StatusPedido.TODOS, StatusPedido.TODOS[1:]):
            with self.subTest(atual=atual, novo=novo):
                self.assertTrue(validar_transicao(StatusPedido, atual, novo))

    def test_pulo_e_retrocesso_sao_recusados(self):
        casos = [
            (StatusPedido.PLACED, StatusPedido.PREPARED),
            (StatusPedido.PLACED, StatusPedido.DELIVERED),
            (StatusPedido.OUT_FOR_DELIVERY, StatusPedido.PREPARING),
            (StatusPedido.DELIVERED, StatusPedido.PLACED),
        ]
        for atual, novo in casos:
            with self.subTest(atual=atual, novo=novo):
                with self.assertRaises(TransicaoStatusInvalidaError):
                    validar_transicao(StatusPedido, atual, novo)

    def test_mesmo_status_nao_gera_escrita(self):
        self.assertFalse(validar_transicao(StatusPedido, StatusPedido.PREPARING, StatusPedido.PREPARING))

    def test_status_desconhecido(self):
        with self.assertRaises(StatusInvalidoError):
            validar_transicao(StatusPedido, StatusPedido.PLACED, 'cancelled')

    def test_pagamento_falho_pode_ser_concluido_mas_concluido_e_terminal(self):
        self.assertTrue(validar_transicao(StatusPagamento, StatusPagamento.FAILED, StatusPagamento.COMPLETED))
        with self.assertRaises(TransicaoStatusInvalidaError):
            validar_transicao(StatusPagamento, StatusPagamento.COMPLETED, StatusPagamento.FAILED)


# ====================================================================
# IDENTIDADE
# ====================================================================

class TestRegistrarUsuario(unittest.TestCase):

    def setUp(self):
        self.usuario_repo_mock = Mock()
        self.use_case = RegistrarUsuarioUseCase(self.usuario_repo_mock)

    def test_registro_normaliza_email_e_cria(self):
        self.usuario_repo_mock.existe.return_value = False
        self.usuario_repo_mock.criar.side_effect = lambda usuario, senha: Usuario(
            id=1, username=usuario.username, email=usuario.email
        )

        usuario = self.use_case.executar('ana', '  Ana@Example.com ', 'segredo123')

        self.assertEqual(usuario.email, 'ana@example.com')
        self.usuario_repo_mock.existe.assert_called_once_with(email='ana@example.com', username='ana')

    def test_email_duplicado_falha_sem_criar(self):
        """
        Cenário: e-mail já cadastrado. Nada é gravado.
        """
        self.usuario_repo_mock.existe.return_value = True

        with self.assertRaises(UsuarioJaExisteError):
            self.use_case.executar('ana', 'ana@example.com', 'segredo123')

        self.usuario_repo_mock.criar.assert_not_called()

    def test_campos_obrigatorios(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar('', 'ana@example.com', 'segredo123')


class TestAutenticarUsuario(unittest.TestCase):

    def test_credenciais_invalidas(self):
        usuario_repo_mock = Mock()
        usuario_repo_mock.verificar_credenciais.return_value = None

        with self.assertRaises(CredenciaisInvalidasError):
            AutenticarUsuarioUseCase(usuario_repo_mock).executar('ana@example.com', 'errada')

    def test_login_com_sucesso(self):
        usuario_repo_mock = Mock()
        usuario_repo_mock.verificar_credenciais.return_value = Usuario(id=1, username='ana', email='ana@example.com')

        usuario = AutenticarUsuarioUseCase(usuario_repo_mock).executar('ANA@example.com', 'certa')

        self.assertEqual(usuario.id, 1)
        usuario_repo_mock.verificar_credenciais.assert_called_once_with('ana@example.com', 'certa')


# ====================================================================
# CATÁLOGO
# ====================================================================

class TestCatalogo(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()

    def test_categoria_desconhecida_retorna_lista_vazia(self):
        resultado = ListarProdutosUseCase(self.produto_repo_mock).listar_por_categoria('Sushi')

        self.assertEqual(resultado, [])
        self.produto_repo_mock.listar.assert_not_called()

    def test_mais_vendidos_filtra_pela_flag(self):
        ListarProdutosUseCase(self.produto_repo_mock).listar_mais_vendidos()
        self.produto_repo_mock.listar.assert_called_once_with(mais_vendido=True)

    def test_criar_exige_imagem(self):
        with self.assertRaises(DadosInvalidosError):
            GerenciarProdutosUseCase(self.produto_repo_mock).criar('X', 'Y', 'Burger', '10', None)

    def test_criar_recusa_categoria_fora_do_enum(self):
        with self.assertRaises(DadosInvalidosError):
            GerenciarProdutosUseCase(self.produto_repo_mock).criar('X', 'Y', 'Sushi', '10', object())
        self.produto_repo_mock.salvar.assert_not_called()

    def test_atualizacao_parcial_mantem_os_demais_campos(self):
        self.produto_repo_mock.buscar_por_id.return_value = _produto()
        self.produto_repo_mock.salvar.side_effect = lambda produto, arquivo_imagem=None: produto

        produto = GerenciarProdutosUseCase(self.produto_repo_mock).atualizar(1, {'preco': '149.50'})

        self.assertEqual(produto.preco, Decimal('149.50'))
        self.assertEqual(produto.nome, 'Classic Burger')

    def test_atualizar_produto_inexistente(self):
        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            GerenciarProdutosUseCase(self.produto_repo_mock).atualizar(99, {'nome': 'Novo'})


# ====================================================================
# CARRINHO E LISTA DE DESEJOS
# ====================================================================

class TestGerenciarCarrinho(unittest.TestCase):

    def setUp(self):
        """
        O repositório de carrinho é um fake em memória; o de produtos, um Mock
        que "encontra" os produtos 1 e 2.
        """
        self.produtos = {1: _produto(1, '100.00'), 2: _produto(2, '60.00', nome='Fries', categoria='Fries')}
        self.produto_repo_mock = Mock()
        self.produto_repo_mock.buscar_por_id.side_effect = self.produtos.get
        self.carrinho_repo = FakeCarrinhoRepository()
        self.use_case = GerenciarCarrinhoUseCase(self.carrinho_repo, self.produto_repo_mock)

    def test_adicionar_duas_vezes_incrementa_a_mesma_linha(self):
        self.use_case.adicionar_item(1)
        carrinho = self.use_case.adicionar_item(1)

        self.assertEqual(len(carrinho.itens), 1)
        self.assertEqual(carrinho.itens[0].quantidade, 2)
        self.assertEqual(carrinho.total, Decimal('200.00'))

    def test_adicionar_produto_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.adicionar_item(99)

    def test_quantidade_zero_remove_a_linha(self):
        self.use_case.adicionar_item(1, 3)
        carrinho = self.use_case.atualizar_quantidade(1, 0)
        self.assertEqual(carrinho.itens, [])

    def test_quantidade_zero_para_produto_fora_do_carrinho_nao_altera_nada(self):
        self.use_case.adicionar_item(2)

        carrinho = self.use_case.atualizar_quantidade(1, 0)

        self.assertEqual([i.produto_id for i in carrinho.itens], [2])

    def test_remover_item_ausente(self):
        with self.assertRaises(ItemNaoEncontradoError):
            self.use_case.remover_item(1)

    def test_contar_soma_as_quantidades(self):
        self.use_case.adicionar_item(1, 2)
        self.use_case.adicionar_item(2, 3)
        self.assertEqual(self.use_case.contar(), 5)

    def test_mesclar_soma_quantidades_e_ignora_produtos_removidos(self):
        """
        Cenário: o usuário já tem 1x produto 1; o visitante trouxe 2x produto 1,
        1x produto 2 e um produto que não existe mais.
        """
        self.use_case.adicionar_item(1, 1)

        carrinho = self.use_case.mesclar([
            ItemCarrinho(produto_id=1, quantidade=2),
            ItemCarrinho(produto_id=2, quantidade=1),
            ItemCarrinho(produto_id=99, quantidade=4),
        ])

        quantidades = {item.produto_id: item.quantidade for item in carrinho.itens}
        self.assertEqual(quantidades, {1: 3, 2: 1})


class TestGerenciarListaDesejos(unittest.TestCase):

    def test_adicionar_e_idempotente(self):
        produto_repo_mock = Mock()
        produto_repo_mock.buscar_por_id.return_value = _produto()
        lista_repo_mock = Mock()
        lista_repo_mock.obter.return_value = ListaDesejos(itens=[ItemListaDesejos(produto_id=1)])

        GerenciarListaDesejosUseCase(lista_repo_mock, produto_repo_mock).adicionar(1)

        lista_repo_mock.adicionar.assert_not_called()

    def test_mesclar_pula_o_que_ja_existe(self):
        produto_repo_mock = Mock()
        produto_repo_mock.buscar_por_id.side_effect = lambda pid: _produto(pid) if pid != 99 else None
        lista_repo_mock = Mock()
        lista_repo_mock.obter.return_value = ListaDesejos(itens=[ItemListaDesejos(produto_id=1)])
        lista_repo_mock.adicionar.return_value = ListaDesejos(
            itens=[ItemListaDesejos(produto_id=1), ItemListaDesejos(produto_id=2)]
        )

        GerenciarListaDesejosUseCase(lista_repo_mock, produto_repo_mock).mesclar([1, 2, 99])

        lista_repo_mock.adicionar.assert_called_once_with(2)


# ====================================================================
# PEDIDOS
# ====================================================================

class TestCalcularTotais(unittest.TestCase):

    def test_frete_cobrado_ate_o_limite(self):
        self.assertEqual(calcular_totais(Decimal('499')), (Decimal('25'), Decimal('50'), Decimal('574')))

    def test_frete_gratis_acima_do_limite(self):
        self.assertEqual(calcular_totais(Decimal('500')), (Decimal('25'), Decimal('0'), Decimal('525')))

    def test_imposto_arredonda_meio_para_cima(self):
        imposto, _, _ = calcular_totais(Decimal('130'))  # 6.5
        self.assertEqual(imposto, Decimal('7'))


class TestCriarPedido(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.criar.side_effect = lambda pedido: pedido
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = None
        self.produto_repo_mock = Mock()
        self.produto_repo_mock.buscar_por_id.side_effect = {1: _produto(1, '120.00'), 2: _produto(2, '50.00')}.get
        self.gateway_mock = Mock()
        self.transacao_repo_mock = Mock()
        self.use_case = CriarPedidoUseCase(
            self.pedido_repo_mock, self.produto_repo_mock, self.gateway_mock, self.transacao_repo_mock
        )

    def test_total_recalculado_com_precos_do_catalogo(self):
        """
        Cenário: 2x 120 + 1x 50 = 290; imposto 14.5 -> 15; frete 50; total 355.
        O total enviado pelo cliente é ignorado.
        """
        carrinho_repo = FakeCarrinhoRepository([ItemCarrinho(1, 2)])

        with self.assertLogs('burgerpizza.core.use_cases', level='WARNING'):
            pedido = self.use_case.executar(
                usuario_id=1,
                itens=[(1, 2), (2, 1)],
                total_informado='1',
                carrinho_repo=carrinho_repo,
            )

        self.assertEqual(pedido.total, Decimal('355'))
        self.assertEqual(pedido.status, StatusPedido.PLACED)
        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)
        self.assertEqual([i.nome_produto for i in pedido.itens], ['Classic Burger', 'Classic Burger'])
        self.assertTrue(carrinho_repo.limpo)

    def test_lista_vazia(self):
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar(usuario_id=1, itens=[])

    def test_quantidade_menor_que_um(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(usuario_id=1, itens=[(1, 0)])

    def test_produto_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.executar(usuario_id=1, itens=[(99, 1)])
        self.pedido_repo_mock.criar.assert_not_called()

    def test_pagamento_online_verificado_no_checkout(self):
        """1x 120: imposto 6, frete 50, total 176 -> 17600 paise no gateway."""
        self.gateway_mock.verificar_assinatura.return_value = True
        self.transacao_repo_mock.buscar.return_value = TransacaoPagamento('order_1', 17600, 'INR', 'r1', usuario_id=1)

        pedido = self.use_case.executar(
            usuario_id=1, itens=[(1, 1)], metodo_pagamento='online',
            gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
        )

        self.assertEqual(pedido.status_pagamento, StatusPagamento.COMPLETED)
        self.gateway_mock.verificar_assinatura.assert_called_once_with('order_1', 'pay_1', 'sig')
        self.transacao_repo_mock.buscar.assert_called_once_with('order_1')

    def test_valor_do_gateway_diferente_do_total_deixa_pendente(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.transacao_repo_mock.buscar.return_value = TransacaoPagamento('order_1', 100, 'INR', 'r1', usuario_id=1)

        with self.assertLogs('burgerpizza.core.use_cases', level='WARNING'):
            pedido = self.use_case.executar(
                usuario_id=1, itens=[(1, 50)], metodo_pagamento='online',
                gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
            )

        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)

    def test_pedido_do_gateway_aberto_por_outro_usuario_deixa_pendente(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.transacao_repo_mock.buscar.return_value = TransacaoPagamento('order_1', 17600, 'INR', 'r1', usuario_id=2)

        pedido = self.use_case.executar(
            usuario_id=1, itens=[(1, 1)], metodo_pagamento='online',
            gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
        )

        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)

    def test_pedido_do_gateway_nao_registrado_deixa_pendente(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.transacao_repo_mock.buscar.return_value = None

        pedido = self.use_case.executar(
            usuario_id=1, itens=[(1, 1)], metodo_pagamento='online',
            gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
        )

        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)

    def test_pedido_do_gateway_ja_usado_e_recusado(self):
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = _pedido(status=StatusPedido.PLACED)
        self.gateway_mock.verificar_assinatura.return_value = True

        with self.assertRaises(PagamentoJaUtilizadoError):
            self.use_case.executar(
                usuario_id=1, itens=[(1, 1)], metodo_pagamento='online',
                gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
            )
        self.pedido_repo_mock.criar.assert_not_called()

    def test_assinatura_invalida_no_checkout(self):
        self.gateway_mock.verificar_assinatura.return_value = False

        with self.assertRaises(AssinaturaInvalidaError):
            self.use_case.executar(
                usuario_id=1, itens=[(1, 1)], metodo_pagamento='online',
                gateway_pedido_id='order_1', gateway_pagamento_id='pay_1', assinatura='sig',
            )
        self.pedido_repo_mock.criar.assert_not_called()


class TestPedidosDoUsuario(unittest.TestCase):

    def test_pedido_de_outro_usuario_aparece_como_inexistente(self):
        pedido_repo_mock = Mock()
        pedido_repo_mock.buscar_por_id.return_value = _pedido(usuario_id=2)

        with self.assertRaises(PedidoNaoEncontradoError):
            ListarPedidosDoUsuarioUseCase(pedido_repo_mock).detalhar(1, 10)

    def test_administrador_le_qualquer_pedido(self):
        pedido_repo_mock = Mock()
        pedido_repo_mock.buscar_por_id.return_value = _pedido(usuario_id=2)

        pedido = ListarPedidosDoUsuarioUseCase(pedido_repo_mock).detalhar(1, 10, is_admin=True)
        self.assertEqual(pedido.usuario_id, 2)


class TestGerenciarPedidosAdmin(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo_mock)

    def test_avanco_valido_persiste(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status=StatusPedido.PLACED)

        self.use_case.atualizar_status(10, StatusPedido.PREPARING)

        self.pedido_repo_mock.atualizar_status.assert_called_once_with(10, StatusPedido.PREPARING)

    def test_pulo_nao_persiste(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status=StatusPedido.PLACED)

        with self.assertRaises(TransicaoStatusInvalidaError):
            self.use_case.atualizar_status(10, StatusPedido.DELIVERED)
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_mesmo_status_e_noop(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status=StatusPedido.PREPARING)

        pedido = self.use_case.atualizar_status(10, StatusPedido.PREPARING)

        self.assertEqual(pedido.status, StatusPedido.PREPARING)
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.atualizar_status(10, StatusPedido.PREPARING)

    def test_vendas_do_dia_usa_o_intervalo_do_dia_local(self):
        self.pedido_repo_mock.listar_criados_entre.return_value = [_pedido(total='100'), _pedido(total='250')]

        vendas = self.use_case.vendas_do_dia(datetime(2024, 5, 10, 15, 30))

        self.assertEqual(vendas.total, Decimal('350'))
        self.pedido_repo_mock.listar_criados_entre.assert_called_once_with(
            datetime(2024, 5, 10, 0, 0, 0, 0), datetime(2024, 5, 10, 23, 59, 59, 999000)
        )


class TestPainelAdmin(unittest.TestCase):

    def test_estatisticas(self):
        produto_repo, pedido_repo, usuario_repo, avaliacao_repo = Mock(), Mock(), Mock(), Mock()
        produto_repo.contar_total.return_value = 5
        pedido_repo.contar_total.return_value = 3
        usuario_repo.contar_clientes.return_value = 2
        pedido_repo.somar_receita.return_value = Decimal('700')
        pedido_repo.listar_todos.return_value = []

        stats = PainelAdminUseCase(produto_repo, pedido_repo, usuario_repo, avaliacao_repo).estatisticas()

        self.assertEqual((stats.total_produtos, stats.total_pedidos, stats.total_usuarios), (5, 3, 2))
        pedido_repo.somar_receita.assert_called_once_with(StatusPagamento.COMPLETED)
        pedido_repo.listar_todos.assert_called_once_with(limite=5)

    def test_status_desconhecido(self):
        with self.assertRaises(StatusInvalidoError):
            PainelAdminUseCase(Mock(), Mock(), Mock(), Mock()).pedidos_por_status('lost')


# ====================================================================
# AVALIAÇÕES
# ====================================================================

class TestAvaliarProduto(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.avaliacao_repo_mock = Mock()
        self.avaliacao_repo_mock.existe.return_value = False
        self.avaliacao_repo_mock.criar.side_effect = lambda avaliacao: avaliacao
        self.use_case = AvaliarProdutoUseCase(self.pedido_repo_mock, self.avaliacao_repo_mock)

    def test_avaliacao_de_pedido_entregue(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido()

        avaliacao = self.use_case.executar(1, 10, 1, 5, 'Ótimo')

        self.assertIsInstance(avaliacao, Avaliacao)
        self.assertEqual(avaliacao.nota, 5)

    def test_pedido_nao_entregue(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(status=StatusPedido.OUT_FOR_DELIVERY)
        with self.assertRaises(AvaliacaoNaoPermitidaError):
            self.use_case.executar(1, 10, 1, 4)

    def test_pedido_de_outro_usuario(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(usuario_id=2)
        with self.assertRaises(AvaliacaoNaoPermitidaError):
            self.use_case.executar(1, 10, 1, 4)

    def test_produto_fora_do_pedido(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(produto_ids=(2,))
        with self.assertRaises(AvaliacaoNaoPermitidaError):
            self.use_case.executar(1, 10, 1, 4)

    def test_duplicada(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido()
        self.avaliacao_repo_mock.existe.return_value = True
        with self.assertRaises(AvaliacaoDuplicadaError):
            self.use_case.executar(1, 10, 1, 4)

    def test_nota_fora_do_intervalo(self):
        for nota in (0, 6):
            with self.subTest(nota=nota):
                with self.assertRaises(DadosInvalidosError):
                    self.use_case.executar(1, 10, 1, nota)


class TestPedidosElegiveis(unittest.TestCase):

    def test_remove_itens_avaliados_e_pedidos_sem_sobra(self):
        pedido_repo_mock = Mock()
        pedido_repo_mock.listar_por_usuario.return_value = [
            _pedido(pedido_id=10, produto_ids=(1, 2)),
            _pedido(pedido_id=11, produto_ids=(1,)),
        ]
        avaliacao_repo_mock = Mock()
        avaliacao_repo_mock.produtos_avaliados.return_value = {1}

        elegiveis = ListarPedidosElegiveisUseCase(pedido_repo_mock, avaliacao_repo_mock).executar(1)

        self.assertEqual([p.id for p in elegiveis], [10])
        self.assertEqual([i.produto_id for i in elegiveis[0].itens], [2])
        pedido_repo_mock.listar_por_usuario.assert_called_once_with(1, status=StatusPedido.DELIVERED)


# ====================================================================
# PAGAMENTO
# ====================================================================

class TestCriarPedidoGateway(unittest.TestCase):

    def test_valor_convertido_para_unidade_minima(self):
        gateway_mock = Mock()
        gateway_mock.criar_pedido.return_value = TransacaoPagamento('order_1', 35550, 'INR', 'r1')

        CriarPedidoGatewayUseCase(gateway_mock).executar('355.50', 'INR', 'r1')

        gateway_mock.criar_pedido.assert_called_once_with(35550, 'INR', 'r1')

    def test_transacao_registrada_com_o_usuario(self):
        gateway_mock = Mock()
        gateway_mock.criar_pedido.return_value = TransacaoPagamento('order_1', 35500, 'INR', 'r1')
        transacao_repo_mock = Mock()

        CriarPedidoGatewayUseCase(gateway_mock, transacao_repo_mock).executar('355', 'INR', 'r1', usuario_id=7)

        registrada = transacao_repo_mock.registrar.call_args[0][0]
        self.assertEqual(registrada.referencia_externa, 'order_1')
        self.assertEqual(registrada.valor, 35500)
        self.assertEqual(registrada.usuario_id, 7)

    def test_recibo_gerado(self):
        gateway_mock = Mock()
        CriarPedidoGatewayUseCase(gateway_mock).executar(10, 'INR')

        recibo = gateway_mock.criar_pedido.call_args[0][2]
        self.assertTrue(recibo.startswith('receipt_'))

    def test_valor_nao_positivo(self):
        with self.assertRaises(DadosInvalidosError):
            CriarPedidoGatewayUseCase(Mock()).executar(0, 'INR')


class TestVerificarPagamento(unittest.TestCase):

    def setUp(self):
        self.gateway_mock = Mock()
        self.pedido_repo_mock = Mock()
        self.transacao_repo_mock = Mock()
        self.transacao_repo_mock.buscar.return_value = TransacaoPagamento('order_1', 10000, 'INR', 'r1', usuario_id=1)
        self.use_case = VerificarPagamentoUseCase(self.gateway_mock, self.pedido_repo_mock, self.transacao_repo_mock)

    def test_assinatura_valida_conclui_pagamento(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = _pedido(status=StatusPedido.PLACED)

        self.use_case.executar('order_1', 'pay_1', 'sig')

        self.pedido_repo_mock.atualizar_pagamento.assert_called_once_with(10, StatusPagamento.COMPLETED, 'pay_1')

    def test_valor_do_gateway_diferente_nao_conclui(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = _pedido(status=StatusPedido.PLACED, total='5000')

        with self.assertLogs('burgerpizza.core.use_cases', level='WARNING'):
            pedido = self.use_case.executar('order_1', 'pay_1', 'sig')

        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)
        self.pedido_repo_mock.atualizar_pagamento.assert_not_called()

    def test_assinatura_valida_sem_pedido(self):
        self.gateway_mock.verificar_assinatura.return_value = True
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = None

        self.assertIsNone(self.use_case.executar('order_1', 'pay_1', 'sig'))
        self.pedido_repo_mock.atualizar_pagamento.assert_not_called()

    def test_assinatura_invalida_marca_falha(self):
        self.gateway_mock.verificar_assinatura.return_value = False
        self.pedido_repo_mock.buscar_por_gateway_id.return_value = _pedido(status=StatusPedido.PLACED)

        with self.assertRaises(AssinaturaInvalidaError):
            self.use_case.executar('order_1', 'pay_1', 'forjada')

        self.pedido_repo_mock.atualizar_pagamento.assert_called_once_with(10, StatusPagamento.FAILED)


if __name__ == '__main__':
    unittest.main()
