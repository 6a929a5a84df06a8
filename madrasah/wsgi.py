"""WSGI config for the madrasah project."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'madrasah.settings')

application = get_wsgi_application()
