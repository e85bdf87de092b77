"""
WSGI config for the Django Blueprint project.

Exposes the WSGI callable as a module-level variable named ``application``
(served by Gunicorn in deployed environments).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "DjangoBlueprint.settings.prod")

application = get_wsgi_application()
