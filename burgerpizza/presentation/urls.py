"""
Rotas da API REST do BurgerPizza: autenticação, cardápio, carrinho, lista de
desejos, pedidos, avaliações, painel administrativo e pagamento.
"""
from django.urls import path

from . import views, views_admin, views_auth

urlpatterns = [
    # ====================================================================
    # 1. AUTENTICAÇÃO
    # ====================================================================
    path('auth/register', views_auth.CadastroUsuarioAPIView.as_view(), name='auth_register'),
    path('auth/login', views_auth.LoginAPIView.as_view(), name='auth_login'),

    # ====================================================================
    # 2. CARDÁPIO
    # ====================================================================
    path('products', views.ProdutoListaAPIView.as_view(), name='produtos'),
    path('products/best-sellers', views.ProdutosMaisVendidosAPIView.as_view(), name='produtos_mais_vendidos'),
    path('products/search', views.BuscarProdutosAPIView.as_view(), name='produtos_busca'),
    path('products/category/<str:categoria>', views.ProdutosPorCategoriaAPIView.as_view(), name='produtos_categoria'),
    path('products/<int:pk>', views.ProdutoDetalheAPIView.as_view(), name='produto_detalhe'),

    # ====================================================================
    # 3. PEDIDOS
    # ====================================================================
    path('orders', views.PedidosAPIView.as_view(), name='pedidos'),
    path('orders/user', views.PedidosDoUsuarioAPIView.as_view(), name='pedidos_usuario'),
    path('orders/admin', views_admin.PedidosAdminAPIView.as_view(), name='pedidos_admin'),
    path('orders/status', views_admin.AtualizarStatusPedidoAPIView.as_view(), name='pedido_status'),
    path('orders/sales/today', views_admin.VendasDoDiaAPIView.as_view(), name='vendas_hoje'),
    path('orders/<int:pk>', views.PedidoDetalheAPIView.as_view(), name='pedido_detalhe'),

    # ====================================================================
    # 4. AVALIAÇÕES
    # ====================================================================
    path('feedback', views.AvaliacaoAPIView.as_view(), name='avaliacao'),
    path('feedback/eligible', views.PedidosElegiveisAPIView.as_view(), name='avaliacao_elegiveis'),

    # ====================================================================
    # 5. PAINEL ADMINISTRATIVO
    # ====================================================================
    path('admin/stats', views_admin.EstatisticasAPIView.as_view(), name='admin_stats'),
    path('admin/feedbacks', views_admin.AvaliacoesAdminAPIView.as_view(), name='admin_avaliacoes'),
    path('admin/orders/<str:status>', views_admin.PedidosPorStatusAPIView.as_view(), name='admin_pedidos_status'),

    # ====================================================================
    # 6. PAGAMENTO
    # ====================================================================
    path('payment/create-order', views.CriarPedidoPagamentoAPIView.as_view(), name='pagamento_criar'),
    path('payment/verify-payment', views.VerificarPagamentoAPIView.as_view(), name='pagamento_verificar'),

    # ====================================================================
    # 7. USUÁRIOS, CARRINHO E LISTA DE DESEJOS
    # ====================================================================
    path('users', views_admin.UsuariosAdminAPIView.as_view(), name='usuarios'),
    path('users/profile', views_auth.PerfilAPIView.as_view(), name='perfil'),
    path('users/addresses', views_auth.EnderecosAPIView.as_view(), name='enderecos'),
    path('users/addresses/<int:pk>', views_auth.EnderecoDetalheAPIView.as_view(), name='endereco_detalhe'),
    path('users/cart', views.CarrinhoAPIView.as_view(), name='carrinho'),
    path('users/cart/count', views.CarrinhoContagemAPIView.as_view(), name='carrinho_contagem'),
    path('users/cart/merge', views.CarrinhoMesclarAPIView.as_view(), name='carrinho_mesclar'),
    path('users/cart/<int:produto_id>', views.CarrinhoItemAPIView.as_view(), name='carrinho_item'),
    path('users/wishlist', views.ListaDesejosAPIView.as_view(), name='lista_desejos'),
    path('users/wishlist/check/<int:produto_id>', views.ListaDesejosVerificarAPIView.as_view(),
         name='lista_desejos_verificar'),
    path('users/wishlist/<int:produto_id>', views.ListaDesejosItemAPIView.as_view(), name='lista_desejos_item'),
    path('users/<int:pk>', views_admin.UsuarioAdminDetalheAPIView.as_view(), name='usuario_detalhe'),

    path('health', views.HealthCheckAPIView.as_view(), name='health'),
]
