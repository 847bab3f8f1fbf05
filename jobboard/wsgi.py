"""
WSGI entry point for production servers.

    gunicorn jobboard.wsgi:app
"""

from .app import create_app

app = create_app()
