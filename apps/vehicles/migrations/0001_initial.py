import uuid
from decimal import Decimal
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Vehicle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('brand', models.CharField(db_index=True, max_length=100)),
                ('model', models.CharField(max_length=100)),
                ('year', models.PositiveIntegerField(validators=[MinValueValidator(1900), MaxValueValidator(2100)])),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('mileage', models.PositiveIntegerField(help_text='Odometer reading in km')),
                ('fuel', models.CharField(choices=[('benzine', 'Benzine'), ('diesel', 'Diesel'), ('hybrid', 'Hybrid'), ('elektrisch', 'Elektrisch')], max_length=20)),
                ('transmission', models.CharField(choices=[('handgeschakeld', 'Handgeschakeld'), ('automaat', 'Automaat')], max_length=20)),
                ('color', models.CharField(max_length=50)),
                ('power', models.CharField(blank=True, max_length=50)),
                ('chassis_number', models.CharField(blank=True, max_length=50)),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('beschikbaar', 'Beschikbaar'), ('gereserveerd', 'Gereserveerd'), ('verkocht', 'Verkocht'), ('in_onderhoud', 'In onderhoud')], db_index=True, default='beschikbaar', max_length=20)),
                ('featured', models.BooleanField(default=False)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('slug', models.SlugField(max_length=200, unique=True)),
                ('meta_title', models.CharField(blank=True, max_length=200)),
                ('meta_description', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'vehicles',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'featured'], name='vehicles_status_featured_idx'),
                    models.Index(fields=['brand', 'model'], name='vehicles_brand_model_idx'),
                    models.Index(fields=['created_at'], name='vehicles_created_idx'),
                ],
            },
        ),
    ]
