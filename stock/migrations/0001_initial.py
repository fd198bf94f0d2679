import decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='StockIn',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)], verbose_name='quantity')),
                ('date', models.DateField(db_index=True, verbose_name='date')),
                ('spare_part', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_ins', to='catalog.part', verbose_name='spare part')),
            ],
            options={
                'verbose_name': 'stock in',
                'verbose_name_plural': 'stock in',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['spare_part', 'date'], name='stock_in_part_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='StockOut',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)], verbose_name='quantity')),
                ('date', models.DateField(db_index=True, verbose_name='date')),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0'))], verbose_name='unit price')),
                ('spare_part', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_outs', to='catalog.part', verbose_name='spare part')),
            ],
            options={
                'verbose_name': 'stock out',
                'verbose_name_plural': 'stock out',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['spare_part', 'date'], name='stock_out_part_date_idx')],
            },
        ),
    ]
