from django.apps import AppConfig

class AvaliacoesConfig(AppConfig):
    name = 'burgerpizza.avaliacoes'
    label = 'avaliacoes'
    verbose_name = 'Avaliações de Clientes'
    default_auto_field = 'django.db.models.BigAutoField'
