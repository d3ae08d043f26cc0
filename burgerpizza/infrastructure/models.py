# Define os modelos do banco de dados para a camada de infraestrutura (identidade).

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings


# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador de login.
    O username continua existindo (e único), pois é exibido nos frontends.
    """
    use_in_migrations = True

    def create_user(self, email, password=None, username=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, username=username or email.split('@')[0], **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, username=None, **extra_fields):
        """
        Cria e salva um Superusuário, que também é administrador da loja.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_admin', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, username=username, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Modelo de Usuário Personalizado. Login por 'email'; 'is_admin' é a flag
    que libera as rotas administrativas da API.
    """
    email = models.EmailField('Endereço de E-mail', unique=True)
    contato = models.CharField('Contato', max_length=20, blank=True, null=True)
    is_admin = models.BooleanField('Administrador', default=False)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'infra_usuario'

    def __str__(self):
        return self.email


class Endereco(models.Model):
    """
    Endereços de entrega salvos pelo usuário.
    """
    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='enderecos')
    rua = models.CharField(max_length=255, verbose_name="Rua")
    cidade = models.CharField(max_length=100, verbose_name="Cidade")
    estado = models.CharField(max_length=100, verbose_name="Estado")
    cep = models.CharField(max_length=12, verbose_name="CEP")

    class Meta:
        verbose_name = 'Endereço do Usuário'
        verbose_name_plural = 'Endereços do Usuário'
        db_table = 'usuario_endereco'
        ordering = ['id']

    def __str__(self):
        return f"{self.usuario} - {self.rua}, {self.cidade}"
