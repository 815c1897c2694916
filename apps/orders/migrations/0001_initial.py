# Generated manually for the orders app

import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('deals', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('reserved', 'Reserved'), ('collected', 'Collected'), ('missed', 'Missed'), ('expired', 'Expired')], db_index=True, default='reserved', max_length=10)),
                ('purchase_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('tracking_id', models.CharField(blank=True, max_length=50)),
                ('pickup_window_start', models.DateTimeField(blank=True, null=True)),
                ('pickup_window_end', models.DateTimeField(blank=True, null=True)),
                ('special_instructions', models.TextField(blank=True)),
                ('delivery_eta', models.DateTimeField(blank=True, null=True)),
                ('collected_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='orders', to=settings.AUTH_USER_MODEL)),
                ('deal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='orders', to='deals.deal')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'unique_together': {('buyer', 'deal')},
                'indexes': [
                    models.Index(fields=['buyer', '-created_at'], name='orders_buyer_i_4a7d20_idx'),
                    models.Index(fields=['deal', 'status'], name='orders_deal_id_7e3b52_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderTracking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('reserved', 'Reserved'), ('collected', 'Collected'), ('missed', 'Missed'), ('expired', 'Expired')], max_length=10)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tracking_history', to='orders.order')),
            ],
            options={
                'db_table': 'order_tracking',
                'ordering': ['created_at'],
            },
        ),
    ]
