import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'cigi_global.settings')

app = Celery('cigi_global')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
