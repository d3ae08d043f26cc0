from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Pedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('data_criacao', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data do Pedido')),
                ('status', models.CharField(choices=[('placed', 'Recebido'), ('preparing', 'Em preparo'), ('prepared', 'Pronto'), ('out_for_delivery', 'Saiu para entrega'), ('delivered', 'Entregue')], db_index=True, default='placed', max_length=20)),
                ('total', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Total do Pedido')),
                ('metodo_pagamento', models.CharField(choices=[('online', 'online'), ('cod', 'cod')], default='cod', max_length=10)),
                ('status_pagamento', models.CharField(choices=[('pending', 'Pendente'), ('completed', 'Confirmado'), ('failed', 'Falhou')], default='pending', max_length=10)),
                ('gateway_pedido_id', models.CharField(blank=True, db_index=True, help_text='order_id do Razorpay', max_length=100, null=True)),
                ('gateway_pagamento_id', models.CharField(blank=True, help_text='payment_id do Razorpay', max_length=100, null=True)),
                ('endereco_entrega_json', models.JSONField(blank=True, null=True, verbose_name='Endereço de Entrega (JSON)')),
                ('usuario', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pedidos', to=settings.AUTH_USER_MODEL, verbose_name='Cliente')),
            ],
            options={
                'verbose_name': 'Pedido',
                'verbose_name_plural': 'Pedidos',
                'db_table': 'pedido_compra',
                'ordering': ['-data_criacao', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ItemPedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome_produto', models.CharField(max_length=255, verbose_name='Nome do Produto')),
                ('preco_unitario', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço Unitário na Compra')),
                ('quantidade', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('pedido', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='itens', to='pedidos.pedido')),
                ('produto', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='itens_pedido', to='catalog.produto')),
            ],
            options={
                'verbose_name': 'Item do Pedido',
                'verbose_name_plural': 'Itens do Pedido',
                'db_table': 'pedido_item',
                'ordering': ['id'],
            },
        ),
    ]
