"""
SIMS — Celery Application

Worker:  celery -A config worker -l info
Beat:    celery -A config beat -l info

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('sims')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
