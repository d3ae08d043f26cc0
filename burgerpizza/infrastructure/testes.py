from decimal import Decimal
from unittest.mock import Mock, patch

import requests
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework_simplejwt.tokens import AccessToken

# Importamos as classes que queremos testar
from burgerpizza.catalog.models import Produto as ProdutoModel
from burgerpizza.core.entities import (
    Avaliacao, Carrinho, Endereco, ItemCarrinho, ItemPedido, Pedido, Produto as ProdutoEntity,
    TransacaoPagamento, Usuario,
)
from burgerpizza.core.exceptions import (
    AvaliacaoDuplicadaError, PagamentoFalhouError, PagamentoJaUtilizadoError, ProdutoNaoEncontradoError,
    UsuarioJaExisteError,
)
from burgerpizza.core.status import StatusPagamento, StatusPedido
from burgerpizza.infrastructure.gateways import RazorpayGateway
from burgerpizza.infrastructure.repositories import (
    AvaliacaoRepositoryDjango,
    CarrinhoRepositoryDjango,
    ListaDesejosRepositoryDjango,
    PedidoRepositoryDjango,
    ProdutoRepositoryDjango,
    TransacaoPagamentoRepositoryDjango,
    UsuarioRepositoryDjango,
)
from burgerpizza.infrastructure.tokens import emitir_token
from burgerpizza.pedidos.models import Pedido as PedidoModel


class ProdutoRepositoryTestCase(TestCase):

    def setUp(self):
        """
        Configura o ambiente para cada teste, criando uma instância do repositório
        e produtos reais no banco de dados.
        """
        self.repository = ProdutoRepositoryDjango()
        self.burger = ProdutoModel.objects.create(
            nome='Classic Burger', descricao='Blend bovino', categoria='Burger',
            preco=Decimal('199.00'), mais_vendido=True,
        )
        self.pizza = ProdutoModel.objects.create(
            nome='Margherita', descricao='Tomate e manjericão', categoria='Pizza', preco=Decimal('299.00'),
        )

    def test_buscar_por_id_com_sucesso(self):
        produto = self.repository.buscar_por_id(self.burger.id)

        self.assertIsInstance(produto, ProdutoEntity)
        self.assertEqual(produto.nome, 'Classic Burger')
        self.assertIsNone(produto.imagem)

    def test_buscar_por_id_nao_encontrado(self):
        self.assertIsNone(self.repository.buscar_por_id(999))

    def test_filtros(self):
        self.assertEqual([p.id for p in self.repository.listar(categoria='Pizza')], [self.pizza.id])
        self.assertEqual([p.id for p in self.repository.listar(mais_vendido=True)], [self.burger.id])
        self.assertEqual([p.id for p in self.repository.listar(busca='MANJERIC')], [self.pizza.id])

    def test_listagem_mais_novos_primeiro(self):
        self.assertEqual([p.id for p in self.repository.listar()], [self.pizza.id, self.burger.id])

    def test_deletar_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.repository.deletar(999)


class UsuarioRepositoryTestCase(TestCase):

    def setUp(self):
        self.repository = UsuarioRepositoryDjango()
        self.usuario = self.repository.criar(Usuario(username='ana', email='ana@example.com'), 'segredo123')

    def test_senha_guardada_como_hash(self):
        model = get_user_model().objects.get(pk=self.usuario.id)
        self.assertNotEqual(model.password, 'segredo123')
        self.assertTrue(model.check_password('segredo123'))

    def test_verificar_credenciais(self):
        self.assertEqual(self.repository.verificar_credenciais('ana@example.com', 'segredo123').id, self.usuario.id)
        self.assertIsNone(self.repository.verificar_credenciais('ana@example.com', 'errada'))
        self.assertIsNone(self.repository.verificar_credenciais('ninguem@example.com', 'segredo123'))

    def test_existe_ignora_caixa(self):
        self.assertTrue(self.repository.existe(email='ANA@example.com'))
        self.assertTrue(self.repository.existe(username='ANA'))
        self.assertFalse(self.repository.existe(email='ana@example.com', excluir_id=self.usuario.id))

    def test_criar_duplicado(self):
        with self.assertRaises(UsuarioJaExisteError):
            self.repository.criar(Usuario(username='ana', email='ana@example.com'), 'outra')

    def test_contar_clientes_exclui_administradores(self):
        get_user_model().objects.create_superuser(email='admin@example.com', password='x', username='admin')
        self.assertEqual(self.repository.contar_clientes(), 1)


class CarrinhoRepositoryTestCase(TestCase):

    def setUp(self):
        self.usuario = get_user_model().objects.create_user(email='ana@example.com', password='x', username='ana')
        self.produto = ProdutoModel.objects.create(nome='Fries', descricao='-', categoria='Fries', preco=Decimal('99'))
        self.outro = ProdutoModel.objects.create(nome='Cola', descricao='-', categoria='Drink', preco=Decimal('60'))
        self.repository = CarrinhoRepositoryDjango(self.usuario.id)

    def test_salvar_sincroniza_as_linhas(self):
        self.repository.salvar(Carrinho(itens=[ItemCarrinho(self.produto.id, 2), ItemCarrinho(self.outro.id, 1)]))
        carrinho = self.repository.salvar(Carrinho(itens=[ItemCarrinho(self.produto.id, 5)]))

        self.assertEqual([(i.produto_id, i.quantidade) for i in carrinho.itens], [(self.produto.id, 5)])
        self.assertEqual(carrinho.total, Decimal('495'))

    def test_limpar(self):
        self.repository.salvar(Carrinho(itens=[ItemCarrinho(self.produto.id, 2)]))
        self.repository.limpar()
        self.assertEqual(self.repository.obter().itens, [])

    def test_lista_de_desejos_sem_duplicatas(self):
        lista_repo = ListaDesejosRepositoryDjango(self.usuario.id)
        lista_repo.adicionar(self.produto.id)
        lista = lista_repo.adicionar(self.produto.id)

        self.assertEqual(len(lista.itens), 1)
        self.assertTrue(lista.contem(self.produto.id))
        self.assertFalse(lista_repo.remover(self.produto.id).contem(self.produto.id))


class PedidoRepositoryTestCase(TestCase):

    def setUp(self):
        self.usuario = get_user_model().objects.create_user(email='ana@example.com', password='x', username='ana')
        self.produto = ProdutoModel.objects.create(
            nome='Pepperoni', descricao='-', categoria='Pizza', preco=Decimal('349.00')
        )
        self.repository = PedidoRepositoryDjango()

    def _criar(self, **kwargs):
        dados = dict(
            usuario_id=self.usuario.id,
            itens=[ItemPedido(self.produto.id, 'Pepperoni', Decimal('349.00'), 2)],
            total=Decimal('783'),
            endereco_entrega=Endereco(rua='MG Road', cidade='Bengaluru', estado='KA', cep='560001'),
        )
        dados.update(kwargs)
        return self.repository.criar(Pedido(**dados))

    def test_criar_grava_snapshot_dos_itens(self):
        pedido = self._criar()

        self.assertEqual(pedido.status, StatusPedido.PLACED)
        self.assertEqual(pedido.usuario.email, 'ana@example.com')
        self.assertEqual(pedido.endereco_entrega.cidade, 'Bengaluru')
        self.assertEqual(pedido.itens[0].nome_produto, 'Pepperoni')

    def test_snapshot_sobrevive_a_remocao_do_produto(self):
        pedido = self._criar()
        self.produto.delete()

        item = self.repository.buscar_por_id(pedido.id).itens[0]
        self.assertIsNone(item.produto_id)
        self.assertEqual(item.nome_produto, 'Pepperoni')
        self.assertEqual(item.preco_unitario, Decimal('349.00'))

    def test_pagamento_e_receita(self):
        pedido = self._criar(gateway_pedido_id='order_abc')
        self._criar()

        self.assertEqual(self.repository.buscar_por_gateway_id('order_abc').id, pedido.id)
        self.repository.atualizar_pagamento(pedido.id, StatusPagamento.COMPLETED, 'pay_1')

        self.assertEqual(self.repository.somar_receita(StatusPagamento.COMPLETED), Decimal('783'))
        self.assertEqual(self.repository.buscar_por_id(pedido.id).gateway_pagamento_id, 'pay_1')

    def test_listar_por_status(self):
        pedido = self._criar()
        self.repository.atualizar_status(pedido.id, StatusPedido.PREPARING)
        self._criar()

        self.assertEqual([p.id for p in self.repository.listar_todos(status=StatusPedido.PREPARING)], [pedido.id])
        self.assertEqual(len(self.repository.listar_todos(limite=1)), 1)

    def test_pedido_do_gateway_quita_um_unico_pedido(self):
        self._criar(gateway_pedido_id='order_abc')

        with self.assertRaises(PagamentoJaUtilizadoError):
            self._criar(gateway_pedido_id='order_abc')
        self.assertEqual(PedidoModel.objects.count(), 1)


class TransacaoPagamentoRepositoryTestCase(TestCase):

    def test_registrar_e_buscar(self):
        usuario = get_user_model().objects.create_user(email='ana.com', password='x', username='ana')
        repository = TransacaoPagamentoRepositoryDjango()

        repository.registrar(TransacaoPagamento('order_abc', 35500, 'INR', 'receipt_1', usuario_id=usuario.id))

        transacao = repository.buscar('order_abc')
        self.assertEqual(transacao.valor, 35500)
        self.assertEqual(transacao.usuario_id, usuario.id)
        self.assertIsNone(repository.buscar('order_xyz'))


class AvaliacaoRepositoryTestCase(TestCase):

    def test_duplicada_no_banco(self):
        usuario = get_user_model().objects.create_user(email='ana@example.com', password='x', username='ana')
        produto = ProdutoModel.objects.create(nome='Brownie', descricao='-', categoria='Dessert', preco=Decimal('129'))
        pedido = PedidoModel.objects.create(usuario=usuario, total=Decimal('129'), status=StatusPedido.DELIVERED)
        repository = AvaliacaoRepositoryDjango()
        avaliacao = Avaliacao(usuario_id=usuario.id, pedido_id=pedido.id, produto_id=produto.id, nota=5)

        repository.criar(avaliacao)

        self.assertEqual(repository.produtos_avaliados(usuario.id), {produto.id})
        with self.assertRaises(AvaliacaoDuplicadaError):
            repository.criar(avaliacao)


@override_settings(RAZORPAY_KEY_ID='rzp_test_key', RAZORPAY_KEY_SECRET='segredo', RAZORPAY_API_URL='https://rzp.test/v1')
class RazorpayGatewayTestCase(TestCase):

    def setUp(self):
        self.gateway = RazorpayGateway()

    @patch('burgerpizza.infrastructure.gateways.requests.post')
    def test_criar_pedido(self, post_mock):
        post_mock.return_value = Mock(status_code=200)
        post_mock.return_value.json.return_value = {
            'id': 'order_123', 'amount': 35500, 'currency': 'INR', 'receipt': 'receipt_1', 'status': 'created',
        }

        transacao = self.gateway.criar_pedido(35500, 'INR', 'receipt_1')

        self.assertEqual(transacao.referencia_externa, 'order_123')
        self.assertEqual(transacao.valor, 35500)
        post_mock.assert_called_once_with(
            'https://rzp.test/v1/orders',
            json={'amount': 35500, 'currency': 'INR', 'receipt': 'receipt_1'},
            auth=('rzp_test_key', 'segredo'),
            timeout=15,
        )

    @patch('burgerpizza.infrastructure.gateways.requests.post')
    def test_falha_de_rede_vira_pagamento_falhou(self, post_mock):
        post_mock.side_effect = requests.exceptions.ConnectionError('offline')

        with self.assertRaises(PagamentoFalhouError):
            self.gateway.criar_pedido(100, 'INR', 'receipt_1')

    def test_assinatura(self):
        assinatura = self.gateway.gerar_assinatura('order_1', 'pay_1')

        self.assertEqual(len(assinatura), 64)
        self.assertTrue(self.gateway.verificar_assinatura('order_1', 'pay_1', assinatura))
        self.assertFalse(self.gateway.verificar_assinatura('order_1', 'pay_2', assinatura))
        self.assertFalse(self.gateway.verificar_assinatura('order_1', 'pay_1', ''))


class TokenTestCase(TestCase):

    def test_claims_do_token(self):
        usuario = get_user_model().objects.create_superuser(email='admin@example.com', password='x', username='admin')

        token = AccessToken(emitir_token(usuario))

        self.assertIsInstance(token['id'], int)
        self.assertEqual(token['id'], usuario.id)
        self.assertEqual(token['email'], 'admin@example.com')
        self.assertTrue(token['isAdmin'])
        self.assertIn('exp', token)


class LoadInitialDataTestCase(TestCase):

    def test_seed_idempotente(self):
        call_command('load_initial_data', admin_email='chef@example.com', admin_password='senha-forte', verbosity=0)
        total = ProdutoModel.objects.count()
        call_command('load_initial_data', admin_email='chef@example.com', admin_password='senha-forte', verbosity=0)

        self.assertEqual(ProdutoModel.objects.count(), total)
        self.assertEqual(
            set(ProdutoModel.objects.values_list('categoria', flat=True)),
            {'Burger', 'Pizza', 'Fries', 'Drink', 'Dessert'},
        )
        admin = get_user_model().objects.get(email='chef@example.com')
        self.assertTrue(admin.is_admin)
        self.assertTrue(admin.check_password('senha-forte'))
