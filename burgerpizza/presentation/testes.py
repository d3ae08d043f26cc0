# burgerpizza/presentation/testes.py
"""
Testes dos contratos HTTP da API (DRF APITestCase).
"""
import io
import shutil
import tempfile
from datetime import timedelta
from decimal import Decimal
from unittest.mock import Mock, patch

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.utils import timezone
from PIL import Image
import requests
from rest_framework import status
from rest_framework.test import APITestCase

from burgerpizza.avaliacoes.models import Avaliacao as AvaliacaoModel
from burgerpizza.carrinho.models import ItemCarrinho as ItemCarrinhoModel
from burgerpizza.catalog.models import Produto as ProdutoModel
from burgerpizza.core.status import StatusPagamento, StatusPedido
from burgerpizza.infrastructure.gateways import RazorpayGateway
from burgerpizza.infrastructure.tokens import emitir_token
from burgerpizza.pedidos.models import (
    ItemPedido as ItemPedidoModel, Pedido as PedidoModel, TransacaoGateway as TransacaoGatewayModel,
)

MEDIA_TEMP = tempfile.mkdtemp()
ENDERECO = {'street': 'MG Road', 'city': 'Bengaluru', 'state': 'KA', 'zip': '560001'}


def _imagem_png(nome='burger.png', content_type='image/png'):
    buffer = io.BytesIO()
    Image.new('RGB', (8, 8), color=(200, 80, 20)).save(buffer, format='PNG')
    return SimpleUploadedFile(nome, buffer.getvalue(), content_type=content_type)


class BaseAPITestCase(APITestCase):
    """Usuários, produtos e helpers de autenticação comuns aos testes da API."""

    def setUp(self):
        Usuario = get_user_model()
        self.cliente = Usuario.objects.create_user(email='ana@example.com', password='segredo123', username='ana')
        self.outro_cliente = Usuario.objects.create_user(email='bia@example.com', password='segredo123', username='bia')
        self.admin = Usuario.objects.create_superuser(email='admin@example.com', password='admin123', username='admin')

        self.burger = ProdutoModel.objects.create(
            nome='Classic Burger', descricao='Blend bovino', categoria='Burger',
            preco=Decimal('120.00'), mais_vendido=True,
        )
        self.fries = ProdutoModel.objects.create(
            nome='Fries', descricao='Batatas crocantes', categoria='Fries', preco=Decimal('50.00'),
        )

    def autenticar(self, usuario):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {emitir_token(usuario)}')

    def deslogar(self):
        self.client.credentials()

    def criar_pedido(self, usuario=None, status_pedido=StatusPedido.PLACED, total='100', produtos=None, **kwargs):
        pedido = PedidoModel.objects.create(
            usuario=usuario or self.cliente, total=Decimal(total), status=status_pedido, **kwargs
        )
        for produto in produtos or [self.burger]:
            ItemPedidoModel.objects.create(
                pedido=pedido, produto=produto, nome_produto=produto.nome,
                preco_unitario=produto.preco, quantidade=1,
            )
        return pedido


# ====================================================================
# 1. AUTENTICAÇÃO
# ====================================================================

class AutenticacaoAPITestCase(BaseAPITestCase):

    def test_registro_retorna_token_e_usuario(self):
        response = self.client.post('/auth/register', {
            'username': 'carla', 'email': 'carla@example.com', 'password': 'segredo123', 'contact': '9999999999',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('token', response.data)
        self.assertEqual(response.data['user']['email'], 'carla@example.com')
        self.assertFalse(response.data['user']['isAdmin'])

    def test_registro_com_email_existente_nao_altera_a_conta(self):
        """
        Cenário: e-mail já cadastrado. 400 e a conta original continua com a mesma senha e username.
        """
        response = self.client.post('/auth/register', {
            'username': 'outra-ana', 'email': 'ana@example.com', 'password': 'nova-senha-123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'User already exists')
        self.cliente.refresh_from_db()
        self.assertEqual(self.cliente.username, 'ana')
        self.assertTrue(self.cliente.check_password('segredo123'))

    def test_login_com_senha_errada(self):
        response = self.client.post('/auth/login', {'email': 'ana@example.com', 'password': 'errada'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn('token', response.data)
        self.assertEqual(response.data['error'], 'Invalid credentials')

    def test_login_com_email_desconhecido_tem_a_mesma_resposta(self):
        response = self.client.post('/auth/login', {'email': 'x@example.com', 'password': 'errada'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid credentials')

    def test_login_com_sucesso_e_token_valido(self):
        response = self.client.post('/auth/login', {'email': 'ana@example.com', 'password': 'segredo123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        perfil = self.client.get('/users/profile')

        self.assertEqual(perfil.status_code, status.HTTP_200_OK)
        self.assertEqual(perfil.data['username'], 'ana')

    def test_token_invalido(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer nao-e-um-jwt')
        self.assertEqual(self.client.get('/users/profile').status_code, status.HTTP_401_UNAUTHORIZED)


class AcessoAdministrativoAPITestCase(BaseAPITestCase):

    def test_sem_credencial(self):
        self.assertEqual(self.client.get('/admin/stats').status_code, status.HTTP_401_UNAUTHORIZED)

    def test_cliente_recebe_403(self):
        self.autenticar(self.cliente)
        for url in ('/admin/stats', '/admin/feedbacks', '/orders/admin', '/orders/sales/today', '/users', '/orders'):
            with self.subTest(url=url):
                self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

    def test_administrador_acessa(self):
        self.criar_pedido(total='300', status_pagamento=StatusPagamento.COMPLETED)
        self.criar_pedido(total='200')
        self.autenticar(self.admin)

        response = self.client.get('/admin/stats')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalProducts'], 2)
        self.assertEqual(response.data['totalOrders'], 2)
        self.assertEqual(response.data['totalUsers'], 2)
        self.assertEqual(response.data['totalRevenue'], Decimal('300'))
        self.assertEqual(len(response.data['recentOrders']), 2)


# ====================================================================
# 2. PERFIL E ENDEREÇOS
# ====================================================================

class PerfilAPITestCase(BaseAPITestCase):

    def test_atualizar_perfil_com_username_em_uso(self):
        self.autenticar(self.cliente)
        response = self.client.patch('/users/profile', {'username': 'bia'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_enderecos_so_do_dono(self):
        self.autenticar(self.cliente)
        criado = self.client.post('/users/addresses', {
            'street': 'MG Road', 'city': 'Bengaluru', 'state': 'KA', 'zip': '560001',
        }, format='json')
        self.assertEqual(criado.status_code, status.HTTP_201_CREATED)

        self.autenticar(self.outro_cliente)
        response = self.client.patch(f"/users/addresses/{criado.data['_id']}", {'city': 'Pune'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


# ====================================================================
# 3. CARDÁPIO
# ====================================================================

@override_settings(MEDIA_ROOT=MEDIA_TEMP)
class CatalogoAPITestCase(BaseAPITestCase):

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_TEMP, ignore_errors=True)
        super().tearDownClass()

    def test_listagens_publicas(self):
        self.assertEqual(len(self.client.get('/products').data), 2)
        self.assertEqual([p['name'] for p in self.client.get('/products/best-sellers').data], ['Classic Burger'])
        self.assertEqual([p['name'] for p in self.client.get('/products/category/Fries').data], ['Fries'])
        self.assertEqual([p['name'] for p in self.client.get('/products/search', {'q': 'crocantes'}).data], ['Fries'])

    def test_categoria_desconhecida_retorna_lista_vazia(self):
        response = self.client.get('/products/category/Sushi')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_produto_inexistente(self):
        response = self.client.get('/products/9999')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Product not found')

    def test_criar_produto_com_imagem(self):
        self.autenticar(self.admin)
        response = self.client.post('/products', {
            'name': 'Brownie', 'description': 'Chocolate', 'category': 'Dessert', 'price': '129.00',
            'image': _imagem_png(), 'bestSeller': 'true',
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['bestSeller'])
        self.assertIn('/media/produtos/', response.data['image'])

    def test_criar_produto_sem_imagem(self):
        self.autenticar(self.admin)
        response = self.client.post('/products', {
            'name': 'Brownie', 'description': 'Chocolate', 'category': 'Dessert', 'price': '129.00',
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('image', response.data['details'])

    def test_criar_produto_com_tipo_nao_permitido(self):
        self.autenticar(self.admin)
        response = self.client.post('/products', {
            'name': 'Brownie', 'description': 'Chocolate', 'category': 'Dessert', 'price': '129.00',
            'image': _imagem_png('brownie.gif', 'image/gif'),
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cliente_nao_cria_produto(self):
        self.autenticar(self.cliente)
        response = self.client.post('/products', {'name': 'X'}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_atualizacao_parcial_e_remocao(self):
        self.autenticar(self.admin)

        response = self.client.patch(f'/products/{self.fries.id}', {'price': '55.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price'], Decimal('55.00'))
        self.assertEqual(response.data['name'], 'Fries')

        self.assertEqual(self.client.delete(f'/products/{self.fries.id}').status_code, status.HTTP_200_OK)
        self.assertFalse(ProdutoModel.objects.filter(pk=self.fries.id).exists())


# ====================================================================
# 4. CARRINHO E LISTA DE DESEJOS
# ====================================================================

class CarrinhoAPITestCase(BaseAPITestCase):

    def test_adicionar_duas_vezes_gera_uma_linha(self):
        self.autenticar(self.cliente)
        self.client.post(f'/users/cart/{self.burger.id}', {}, format='json')
        response = self.client.post(f'/users/cart/{self.burger.id}', {}, format='json')

        self.assertEqual(len(response.data['items']), 1)
        self.assertEqual(response.data['items'][0]['quantity'], 2)
        self.assertEqual(response.data['total'], Decimal('240.00'))
        self.assertEqual(self.client.get('/users/cart/count').data, {'count': 2})

        response = self.client.delete(f'/users/cart/{self.burger.id}')
        self.assertEqual(response.data['items'], [])
        self.assertEqual(self.client.delete(f'/users/cart/{self.burger.id}').status_code, status.HTTP_404_NOT_FOUND)

    def test_quantidade_zero_remove(self):
        self.autenticar(self.cliente)
        self.client.post(f'/users/cart/{self.burger.id}', {'quantity': 3}, format='json')

        response = self.client.put(f'/users/cart/{self.burger.id}', {'quantity': 0}, format='json')

        self.assertEqual(response.data['items'], [])

    def test_quantidade_zero_para_produto_fora_do_carrinho(self):
        self.autenticar(self.cliente)
        self.client.post(f'/users/cart/{self.fries.id}', {}, format='json')

        response = self.client.put(f'/users/cart/{self.burger.id}', {'quantity': 0}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['product']['_id'] for item in response.data['items']], [self.fries.id])

    def test_produto_desconhecido(self):
        self.autenticar(self.cliente)
        self.assertEqual(self.client.post('/users/cart/9999', {}, format='json').status_code, 404)

    def test_carrinho_do_visitante_e_mesclado_no_login(self):
        """
        Cenário: visitante põe 1x burger na sessão, o usuário já tinha 2x burger
        no banco e o login ainda traz 1x fries no corpo.
        """
        ItemCarrinhoModel.objects.create(usuario=self.cliente, produto=self.burger, quantidade=2)

        visitante = self.client.post(f'/users/cart/{self.burger.id}', {'quantity': 1}, format='json')
        self.assertEqual(visitante.data['count'], 1)
        self.client.post(f'/users/wishlist/{self.fries.id}', format='json')

        login = self.client.post('/auth/login', {
            'email': 'ana@example.com', 'password': 'segredo123',
            'guestCart': [{'product': self.fries.id, 'quantity': 1}],
        }, format='json')
        self.assertEqual(login.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")
        carrinho = self.client.get('/users/cart').data
        quantidades = {item['product']['_id']: item['quantity'] for item in carrinho['items']}

        self.assertEqual(quantidades, {self.burger.id: 3, self.fries.id: 1})
        self.assertTrue(self.client.get(f'/users/wishlist/check/{self.fries.id}').data['inWishlist'])

        # A sessão foi limpa: o visitante volta a ver um carrinho vazio
        self.deslogar()
        self.assertEqual(self.client.get('/users/cart').data['items'], [])

    def test_mesclar_explicito(self):
        self.autenticar(self.cliente)
        response = self.client.post('/users/cart/merge', {
            'items': [{'product': self.burger.id, 'quantity': 2}, {'product': 9999, 'quantity': 1}],
            'wishlist': [self.burger.id],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)

    def test_lista_de_desejos_idempotente(self):
        self.autenticar(self.cliente)
        self.client.post(f'/users/wishlist/{self.burger.id}', format='json')
        response = self.client.post(f'/users/wishlist/{self.burger.id}', format='json')

        self.assertEqual(len(response.data), 1)
        self.client.delete(f'/users/wishlist/{self.burger.id}')
        self.assertFalse(self.client.get(f'/users/wishlist/check/{self.burger.id}').data['inWishlist'])


# ====================================================================
# 5. PEDIDOS
# ====================================================================

class PedidoAPITestCase(BaseAPITestCase):

    def test_checkout_recalcula_total_e_limpa_carrinho(self):
        """
        Cenário: 2x 120 + 1x 50 = 290; imposto 15; frete 50; total 355.
        """
        self.autenticar(self.cliente)
        self.client.post(f'/users/cart/{self.burger.id}', {'quantity': 2}, format='json')

        response = self.client.post('/orders', {
            'items': [{'product': self.burger.id, 'quantity': 2}, {'product': self.fries.id, 'quantity': 1}],
            'totalAmount': 10,
            'paymentMethod': 'cod',
            'deliveryAddress': ENDERECO,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['totalAmount'], Decimal('355'))
        self.assertEqual(response.data['status'], StatusPedido.PLACED)
        self.assertEqual(response.data['paymentStatus'], StatusPagamento.PENDING)
        self.assertEqual(response.data['deliveryAddress']['city'], 'Bengaluru')
        self.assertEqual(self.client.get('/users/cart/count').data['count'], 0)

    def test_checkout_sem_itens(self):
        self.autenticar(self.cliente)
        response = self.client.post('/orders', {'items': [], 'deliveryAddress': ENDERECO}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_checkout_sem_endereco(self):
        self.autenticar(self.cliente)
        response = self.client.post('/orders', {
            'items': [{'product': self.burger.id, 'quantity': 1}], 'paymentMethod': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('deliveryAddress', response.data['details'])
        self.assertFalse(PedidoModel.objects.exists())

    def test_checkout_exige_login(self):
        response = self.client.post('/orders', {
            'items': [{'product': self.burger.id, 'quantity': 1}], 'deliveryAddress': ENDERECO,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_pedidos_do_usuario_e_detalhe(self):
        meu = self.criar_pedido()
        alheio = self.criar_pedido(usuario=self.outro_cliente)
        self.autenticar(self.cliente)

        self.assertEqual([p['_id'] for p in self.client.get('/orders/user').data], [meu.id])
        self.assertEqual(self.client.get(f'/orders/{meu.id}').status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f'/orders/{alheio.id}').status_code, status.HTTP_404_NOT_FOUND)

    def test_avanco_de_status_passo_a_passo(self):
        pedido = self.criar_pedido()
        self.autenticar(self.admin)

        for novo in StatusPedido.TODOS[1:]:
            with self.subTest(novo=novo):
                response = self.client.patch('/orders/status', {'orderId': pedido.id, 'status': novo}, format='json')
                self.assertEqual(response.status_code, status.HTTP_200_OK)
                self.assertEqual(response.data['status'], novo)

    def test_pulo_e_retrocesso_recusados(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.PREPARING)
        self.autenticar(self.admin)

        pulo = self.client.patch('/orders/status', {'orderId': pedido.id, 'status': 'delivered'}, format='json')
        retrocesso = self.client.patch(f'/orders/{pedido.id}', {'status': 'placed'}, format='json')
        desconhecido = self.client.patch(f'/orders/{pedido.id}', {'status': 'cancelled'}, format='json')

        self.assertEqual(pulo.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(retrocesso.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(desconhecido.status_code, status.HTTP_400_BAD_REQUEST)
        pedido.refresh_from_db()
        self.assertEqual(pedido.status, StatusPedido.PREPARING)

    def test_repetir_o_status_atual_e_noop(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.PREPARED)
        self.autenticar(self.admin)

        response = self.client.patch(f'/orders/{pedido.id}', {'status': 'prepared'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], StatusPedido.PREPARED)

    def test_vendas_de_hoje(self):
        self.criar_pedido(total='100')
        self.criar_pedido(total='250', usuario=self.outro_cliente)
        self.criar_pedido(total='500', data_criacao=timezone.now() - timedelta(days=1))
        self.autenticar(self.admin)

        response = self.client.get('/orders/sales/today')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalSales'], Decimal('350'))
        self.assertEqual(len(response.data['orders']), 2)

    def test_pedidos_por_status_no_painel(self):
        self.criar_pedido(status_pedido=StatusPedido.DELIVERED)
        self.criar_pedido()
        self.autenticar(self.admin)

        self.assertEqual(len(self.client.get('/admin/orders/delivered').data), 1)
        self.assertEqual(self.client.get('/admin/orders/lost').status_code, status.HTTP_400_BAD_REQUEST)


# ====================================================================
# 6. AVALIAÇÕES
# ====================================================================

class AvaliacaoAPITestCase(BaseAPITestCase):

    def test_pedido_nao_entregue(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.OUT_FOR_DELIVERY)
        self.autenticar(self.cliente)

        response = self.client.post('/feedback', {
            'order': pedido.id, 'product': self.burger.id, 'rating': 5,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_avaliar_some_da_elegibilidade_e_nao_duplica(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.DELIVERED, produtos=[self.burger, self.fries])
        self.autenticar(self.cliente)

        elegiveis = self.client.get('/feedback/eligible').data
        self.assertEqual(len(elegiveis[0]['items']), 2)

        dados = {'order': pedido.id, 'product': self.burger.id, 'rating': 4, 'comment': 'Muito bom'}
        criada = self.client.post('/feedback', dados, format='json')
        self.assertEqual(criada.status_code, status.HTTP_201_CREATED)
        self.assertEqual(criada.data['rating'], 4)

        elegiveis = self.client.get('/feedback/eligible').data
        self.assertEqual([item['productId'] for item in elegiveis[0]['items']], [self.fries.id])

        duplicada = self.client.post('/feedback', dados, format='json')
        self.assertEqual(duplicada.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(AvaliacaoModel.objects.count(), 1)

    def test_pedido_de_outro_usuario(self):
        pedido = self.criar_pedido(usuario=self.outro_cliente, status_pedido=StatusPedido.DELIVERED)
        self.autenticar(self.cliente)

        response = self.client.post('/feedback', {
            'order': pedido.id, 'product': self.burger.id, 'rating': 5,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_nota_fora_do_intervalo(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.DELIVERED)
        self.autenticar(self.cliente)

        response = self.client.post('/feedback', {
            'order': pedido.id, 'product': self.burger.id, 'rating': 6,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_lista_do_painel(self):
        pedido = self.criar_pedido(status_pedido=StatusPedido.DELIVERED)
        AvaliacaoModel.objects.create(usuario=self.cliente, pedido=pedido, produto=self.burger, nota=5)
        self.autenticar(self.admin)

        response = self.client.get('/admin/feedbacks')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['user']['email'], 'ana@example.com')
        self.assertEqual(response.data[0]['product']['name'], 'Classic Burger')


# ====================================================================
# 7. PAGAMENTO
# ====================================================================

@override_settings(RAZORPAY_KEY_ID='rzp_test_key', RAZORPAY_KEY_SECRET='segredo')
class PagamentoAPITestCase(BaseAPITestCase):

    def assinar(self, order_id, payment_id):
        return RazorpayGateway(key_id='rzp_test_key', key_secret='segredo').gerar_assinatura(order_id, payment_id)

    @patch('burgerpizza.infrastructure.gateways.requests.post')
    def test_criar_pedido_no_gateway(self, post_mock):
        post_mock.return_value = Mock(status_code=200)
        post_mock.return_value.json.return_value = {
            'id': 'order_ABC', 'amount': 35500, 'currency': 'INR', 'receipt': 'receipt_1', 'status': 'created',
        }
        self.autenticar(self.cliente)

        response = self.client.post('/payment/create-order', {'amount': 355}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], 'order_ABC')
        self.assertEqual(post_mock.call_args.kwargs['json']['amount'], 35500)
        self.assertEqual(post_mock.call_args.kwargs['json']['currency'], 'INR')
        transacao = TransacaoGatewayModel.objects.get(gateway_pedido_id='order_ABC')
        self.assertEqual(transacao.valor, 35500)
        self.assertEqual(transacao.usuario, self.cliente)

    @patch('burgerpizza.infrastructure.gateways.requests.post')
    def test_gateway_fora_do_ar(self, post_mock):
        post_mock.side_effect = requests.exceptions.Timeout('timeout')
        self.autenticar(self.cliente)

        response = self.client.post('/payment/create-order', {'amount': 355}, format='json')

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    def registrar_transacao(self, valor, order_id='order_ABC', usuario=None):
        return TransacaoGatewayModel.objects.create(
            gateway_pedido_id=order_id, valor=valor, moeda='INR', recibo='receipt_1', usuario=usuario or self.cliente,
        )

    def test_assinatura_valida_conclui_o_pagamento_do_pedido(self):
        self.registrar_transacao(10000)
        pedido = self.criar_pedido(metodo_pagamento='online', gateway_pedido_id='order_ABC')

        response = self.client.post('/payment/verify-payment', {
            'razorpay_order_id': 'order_ABC',
            'razorpay_payment_id': 'pay_XYZ',
            'razorpay_signature': self.assinar('order_ABC', 'pay_XYZ'),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        pedido.refresh_from_db()
        self.assertEqual(pedido.status_pagamento, StatusPagamento.COMPLETED)
        self.assertEqual(pedido.gateway_pagamento_id, 'pay_XYZ')

    def test_assinatura_valida_com_valor_menor_nao_conclui(self):
        self.registrar_transacao(100)
        pedido = self.criar_pedido(metodo_pagamento='online', gateway_pedido_id='order_ABC')

        response = self.client.post('/payment/verify-payment', {
            'razorpay_order_id': 'order_ABC',
            'razorpay_payment_id': 'pay_XYZ',
            'razorpay_signature': self.assinar('order_ABC', 'pay_XYZ'),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        pedido.refresh_from_db()
        self.assertEqual(pedido.status_pagamento, StatusPagamento.PENDING)
        self.assertIsNone(pedido.gateway_pagamento_id)

    def test_assinatura_invalida_marca_falha(self):
        pedido = self.criar_pedido(metodo_pagamento='online', gateway_pedido_id='order_ABC')

        response = self.client.post('/payment/verify-payment', {
            'razorpay_order_id': 'order_ABC',
            'razorpay_payment_id': 'pay_XYZ',
            'razorpay_signature': 'forjada',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'success': False, 'message': 'Invalid signature'})
        pedido.refresh_from_db()
        self.assertEqual(pedido.status_pagamento, StatusPagamento.FAILED)

    def checkout_online(self, quantidade=1, order_id='order_ABC', payment_id='pay_XYZ'):
        return self.client.post('/orders', {
            'items': [{'product': self.burger.id, 'quantity': quantidade}],
            'paymentMethod': 'online',
            'deliveryAddress': ENDERECO,
            'razorpayOrderId': order_id,
            'razorpayPaymentId': payment_id,
            'razorpaySignature': self.assinar(order_id, payment_id),
        }, format='json')

    def test_checkout_com_pagamento_ja_assinado(self):
        """1x 120: imposto 6, frete 50, total 176 -> 17600 paise."""
        self.registrar_transacao(17600)
        self.autenticar(self.cliente)

        response = self.checkout_online()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['paymentStatus'], StatusPagamento.COMPLETED)

    def test_checkout_nao_reaproveita_pagamento_de_outro_pedido(self):
        self.registrar_transacao(17600)
        self.autenticar(self.cliente)
        self.assertEqual(self.checkout_online().status_code, status.HTTP_201_CREATED)

        response = self.checkout_online(quantidade=50)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.assertEqual(PedidoModel.objects.filter(gateway_pedido_id='order_ABC').count(), 1)

    def test_checkout_com_valor_maior_que_o_pago_fica_pendente(self):
        self.registrar_transacao(100)
        self.autenticar(self.cliente)

        response = self.checkout_online(quantidade=50)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['paymentStatus'], StatusPagamento.PENDING)

    def test_checkout_com_pedido_do_gateway_de_outro_usuario_fica_pendente(self):
        self.registrar_transacao(17600, usuario=self.outro_cliente)
        self.autenticar(self.cliente)

        response = self.checkout_online()

        self.assertEqual(response.data['paymentStatus'], StatusPagamento.PENDING)


class HealthAPITestCase(APITestCase):

    def test_health(self):
        response = self.client.get('/health')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'status': 'ok'})
