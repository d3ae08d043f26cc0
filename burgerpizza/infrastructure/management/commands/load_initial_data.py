from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from burgerpizza.catalog.models import Produto


class Command(BaseCommand):
    help = 'Carrega o cardápio inicial e a conta de administrador'

    # (nome, descrição, preço, mais vendido) por categoria
    CARDAPIO = {
        'Burger': [
            ('Classic Burger', 'Pão brioche, blend bovino, queijo e salada', Decimal('199.00'), True),
            ('Veggie Burger', 'Hambúrguer de grão-de-bico com maionese verde', Decimal('179.00'), False),
        ],
        'Pizza': [
            ('Margherita', 'Molho de tomate, muçarela e manjericão', Decimal('299.00'), True),
            ('Pepperoni', 'Muçarela e pepperoni fatiado', Decimal('349.00'), False),
        ],
        'Fries': [
            ('Batata Frita', 'Porção de batatas crocantes', Decimal('99.00'), False),
        ],
        'Drink': [
            ('Refrigerante Lata', '350ml', Decimal('60.00'), False),
        ],
        'Dessert': [
            ('Brownie', 'Brownie de chocolate com calda quente', Decimal('129.00'), False),
        ],
    }

    def add_arguments(self, parser):
        parser.add_argument('--admin-email', default=settings.ADMIN_EMAIL)
        parser.add_argument('--admin-password', default=settings.ADMIN_PASSWORD)

    def handle(self, *args, **options):
        self.stdout.write('Criando dados iniciais...')

        for categoria, produtos in self.CARDAPIO.items():
            for nome, descricao, preco, mais_vendido in produtos:
                produto, created = Produto.objects.get_or_create(
                    nome=nome,
                    categoria=categoria,
                    defaults={
                        'descricao': descricao,
                        'preco': preco,
                        'mais_vendido': mais_vendido,
                    }
                )
                if created:
                    self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.nome}"'))

        Usuario = get_user_model()
        email = options['admin_email']
        if not Usuario.objects.filter(email__iexact=email).exists():
            Usuario.objects.create_superuser(email=email, password=options['admin_password'], username='admin')
            self.stdout.write(self.style.SUCCESS(f'Criado administrador "{email}"'))
        else:
            self.stdout.write(f'Administrador "{email}" já existe')

        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
