"""
Regras de upload de imagem do cardápio: até 5MB e somente jpeg, jpg, png ou webp.
"""
from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator

TAMANHO_MAXIMO_IMAGEM = 5 * 1024 * 1024  # 5 MB

EXTENSOES_PERMITIDAS = ['jpeg', 'jpg', 'png', 'webp']

TIPOS_PERMITIDOS = ('image/jpeg', 'image/jpg', 'image/png', 'image/webp')

validar_extensao_imagem = FileExtensionValidator(allowed_extensions=EXTENSOES_PERMITIDAS)


def validar_tamanho_imagem(arquivo):
    if arquivo.size > TAMANHO_MAXIMO_IMAGEM:
        raise ValidationError('Image must be 5MB or smaller.')


def validar_tipo_imagem(arquivo):
    """Confere o mimetype declarado no upload (arquivos já salvos não têm content_type)."""
    content_type = getattr(arquivo, 'content_type', None)
    if content_type and content_type.lower() not in TIPOS_PERMITIDOS:
        raise ValidationError('Only jpeg, jpg, png and webp images are allowed.')
