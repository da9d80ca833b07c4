"""
WSGI config for turbo_streams project.

This module contains the WSGI application used by Django's development server
and any production WSGI deployments. It should expose a module-level variable
named ``application``. Django's ``runserver`` command discovers this
application via the ``WSGI_APPLICATION`` setting.

Turbo Stream subscriptions need the ASGI entrypoint (``config.asgi``); the WSGI
application serves plain HTTP only.

"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.base")

application = get_wsgi_application()
