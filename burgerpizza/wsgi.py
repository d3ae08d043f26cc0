"""
WSGI config for the BurgerPizza project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'burgerpizza.settings')

application = get_wsgi_application()
