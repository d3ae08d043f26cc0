import burgerpizza.catalog.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Produto',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=255, verbose_name='Nome')),
                ('descricao', models.TextField(verbose_name='Descrição')),
                ('categoria', models.CharField(choices=[('Burger', 'Burger'), ('Pizza', 'Pizza'), ('Fries', 'Fries'), ('Drink', 'Drink'), ('Dessert', 'Dessert')], db_index=True, max_length=20, verbose_name='Categoria')),
                ('preco', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço')),
                ('imagem', models.ImageField(upload_to='produtos/', validators=[burgerpizza.catalog.validators.validar_extensao_imagem, burgerpizza.catalog.validators.validar_tamanho_imagem], verbose_name='Imagem')),
                ('mais_vendido', models.BooleanField(default=False, verbose_name='Mais Vendido')),
                ('data_criacao', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'db_table': 'catalogo_produto',
                'ordering': ['-data_criacao', '-id'],
            },
        ),
    ]
