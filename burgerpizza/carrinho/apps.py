from django.apps import AppConfig

class CarrinhoConfig(AppConfig):
    name = 'burgerpizza.carrinho'
    label = 'carrinho'
    verbose_name = 'Carrinho e Lista de Desejos'
    default_auto_field = 'django.db.models.BigAutoField'
