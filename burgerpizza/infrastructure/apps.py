from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'burgerpizza.infrastructure'
    label = 'infrastructure'  # dono do AUTH_USER_MODEL
    verbose_name = 'Identidade e Acesso'
