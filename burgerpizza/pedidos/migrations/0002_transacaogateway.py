from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('pedidos', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.AlterField(
            model_name='pedido',
            name='gateway_pedido_id',
            field=models.CharField(blank=True, help_text='order_id do Razorpay', max_length=100, null=True, unique=True),
        ),
        migrations.CreateModel(
            name='TransacaoGateway',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('gateway_pedido_id', models.CharField(help_text='order_id do Razorpay', max_length=100, unique=True)),
                ('valor', models.PositiveBigIntegerField(help_text='Em unidade mínima (paise/centavos)')),
                ('moeda', models.CharField(max_length=3)),
                ('recibo', models.CharField(max_length=40)),
                ('status', models.CharField(default='created', max_length=20)),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
                ('usuario', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transacoes_gateway', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Transação do Gateway',
                'verbose_name_plural': 'Transações do Gateway',
                'db_table': 'pedido_transacao_gateway',
                'ordering': ['-data_criacao', '-id'],
            },
        ),
    ]
