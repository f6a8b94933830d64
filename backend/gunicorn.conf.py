# backend/gunicorn.conf.py: servicio de referidos (handlers sin estado, escalan por workers)
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"
# Cada worker tiene su propio pool de SQLAlchemy; /verify no necesita locks entre workers
workers = int(os.environ.get('WEB_CONCURRENCY', '2'))
timeout = 30
loglevel = os.environ.get('GUNICORN_LOGLEVEL', 'info')
capture_output = True   # los logs de current_app.logger salen por gunicorn
accesslog = "-"
errorlog = "-"
wsgi_app = "wsgi:app"
