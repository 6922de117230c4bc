import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CommunityClub',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(blank=True, help_text='Auto-generated from the name if left blank.', max_length=255, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('type', models.CharField(max_length=255)),
                ('activities', models.TextField(blank=True, help_text='JSON array of activity records, or legacy line/comma separated text.', null=True)),
                ('image', models.CharField(blank=True, max_length=500, null=True)),
                ('contact_person', models.CharField(blank=True, max_length=255, null=True)),
                ('contact_phone', models.CharField(blank=True, max_length=20, null=True)),
                ('contact_email', models.EmailField(blank=True, max_length=255, null=True)),
                ('meeting_schedule', models.TextField(blank=True, null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('sort_order', models.PositiveIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('gallery_images', models.JSONField(blank=True, default=list)),
                ('testimonials', models.JSONField(blank=True, default=list)),
                ('social_media_links', models.JSONField(blank=True, default=list, help_text='Links of {platform, url}.')),
                ('upcoming_events', models.JSONField(blank=True, default=list)),
                ('achievements', models.JSONField(blank=True, default=list)),
                ('more_about', models.JSONField(blank=True, default=list)),
                ('founded_year', models.PositiveIntegerField(blank=True, null=True)),
                ('member_count', models.PositiveIntegerField(blank=True, null=True)),
                ('hero_subtitle', models.CharField(blank=True, max_length=500, null=True)),
                ('hero_cta_text', models.CharField(blank=True, max_length=100, null=True)),
                ('hero_cta_link', models.CharField(blank=True, max_length=500, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Community Club',
                'verbose_name_plural': 'Community Clubs',
                'ordering': ['sort_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='CommunityClubActivity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('short_description', models.CharField(blank=True, max_length=500, null=True)),
                ('image', models.CharField(blank=True, max_length=500, null=True)),
                ('duration', models.CharField(blank=True, max_length=255, null=True)),
                ('max_participants', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('requirements', models.TextField(blank=True, null=True)),
                ('benefits', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('active', 'Aktif'), ('inactive', 'Tidak Aktif'), ('completed', 'Selesai')], default='active', max_length=20)),
                ('featured', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('schedule', models.CharField(blank=True, max_length=255, null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                ('contact_info', models.CharField(blank=True, max_length=255, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('community_club', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='club_activities', to='community_clubs.communityclub')),
            ],
            options={
                'verbose_name': 'Community Club Activity',
                'verbose_name_plural': 'Community Club Activities',
                'ordering': ['-created_at'],
            },
        ),
    ]
