"""
Stockroom — Celery Application

Workers and beat read CELERY_* settings from Django settings and
discover tasks.py modules in installed apps.

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('stockroom')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
