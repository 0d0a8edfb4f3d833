"""
ASGI config for HireWork.

Served by any ASGI server (Uvicorn, Daphne).
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_asgi_application()
