import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BusinessUnit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, help_text='Auto-generated from the name if left blank.', max_length=255, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('more_about', models.JSONField(blank=True, default=list, help_text='Cards of {title, description}.')),
                ('services', models.TextField(blank=True, help_text='JSON array of service records, or one service per line.', null=True)),
                ('image', models.CharField(blank=True, max_length=500, null=True)),
                ('contact_phone', models.CharField(blank=True, max_length=20, null=True)),
                ('contact_email', models.EmailField(blank=True, max_length=255, null=True)),
                ('address', models.TextField(blank=True, null=True)),
                ('website_url', models.URLField(blank=True, max_length=500, null=True)),
                ('operating_hours', models.TextField(blank=True, help_text="Comma separated, e.g. 'Mon-Fri 08:00-17:00, Sat 08:00-12:00'.", null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('sort_order', models.PositiveIntegerField(default=0, help_text='Manual ordering for display on the site.', validators=[django.core.validators.MinValueValidator(0)])),
                ('team_members', models.JSONField(blank=True, default=list)),
                ('client_testimonials', models.JSONField(blank=True, default=list)),
                ('portfolio_items', models.JSONField(blank=True, default=list)),
                ('certifications', models.JSONField(blank=True, default=list)),
                ('company_stats', models.JSONField(blank=True, default=list)),
                ('gallery_images', models.JSONField(blank=True, default=list)),
                ('achievements', models.JSONField(blank=True, default=list)),
                ('core_values', models.JSONField(blank=True, default=list)),
                ('hero_subtitle', models.CharField(blank=True, max_length=500, null=True)),
                ('hero_cta_text', models.CharField(blank=True, max_length=100, null=True)),
                ('hero_cta_link', models.CharField(blank=True, max_length=500, null=True)),
                ('portfolio_is_show', models.BooleanField(default=False)),
                ('certifications_is_show', models.BooleanField(default=False)),
                ('company_stats_is_show', models.BooleanField(default=False)),
                ('core_values_is_show', models.BooleanField(default=False)),
                ('achievements_is_show', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Business Unit',
                'verbose_name_plural': 'Business Units',
                'ordering': ['sort_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='BusinessUnitService',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('image', models.CharField(blank=True, max_length=500, null=True)),
                ('price_range', models.CharField(blank=True, max_length=255, null=True)),
                ('duration', models.CharField(blank=True, max_length=255, null=True)),
                ('features', models.JSONField(blank=True, default=list)),
                ('technologies', models.JSONField(blank=True, default=list)),
                ('process_steps', models.JSONField(blank=True, default=list, help_text='Steps of {step, description, order}.')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business_unit', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='unit_services', to='business_units.businessunit')),
            ],
            options={
                'verbose_name': 'Business Unit Service',
                'verbose_name_plural': 'Business Unit Services',
                'ordering': ['-created_at'],
            },
        ),
    ]
