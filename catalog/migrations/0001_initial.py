import decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Part',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('name', models.CharField(max_length=100, primary_key=True, serialize=False, verbose_name='name')),
                ('category', models.CharField(db_index=True, max_length=50, verbose_name='category')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='quantity')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0'))], verbose_name='unit price')),
            ],
            options={
                'verbose_name': 'spare part',
                'verbose_name_plural': 'spare parts',
                'ordering': ['name'],
            },
        ),
    ]
