"""
Gunicorn configuration for the Daily Readiness API.

Env vars that override defaults:
  PORT     - TCP port to bind (default: 8000)
  WORKERS  - number of worker processes (default: 1)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The check-in blob has a single writer; more workers means last write wins
# across processes.
workers = int(os.environ.get("WORKERS", "1"))

worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "readiness.main:app"

keepalive = 5
timeout = 60

# stdout only, same as the application logger.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
