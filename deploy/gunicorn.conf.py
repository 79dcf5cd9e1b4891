"""Gunicorn configuration for MusicStore production deployment."""

import multiprocessing
import os

# Server socket
bind = f"0.0.0.0:{os.environ.get('APP_PORT', '5000')}"

# Worker processes
# Formula: (2 x CPU cores) + 1
workers = int(os.environ.get("GUNICORN_WORKERS", (2 * multiprocessing.cpu_count()) + 1))
threads = int(os.environ.get("GUNICORN_THREADS", 4))
worker_class = "gthread"

# Timeouts
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logging
accesslog = os.environ.get("GUNICORN_ACCESS_LOG", "-")
errorlog = os.environ.get("GUNICORN_ERROR_LOG", "-")
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# Process naming
proc_name = "musicstore"

# Security
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190

# Each worker runs the startup sequence (admin bootstrap, sample data)
# against the shared database; both steps tolerate concurrent first runs.
preload_app = False
