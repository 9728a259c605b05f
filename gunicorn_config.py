import os

# Server Socket
bind = os.environ.get('GUNICORN_BIND', '127.0.0.1:8000')  # NGINX proxies requests

# Worker Settings
workers = int(os.environ.get('GUNICORN_WORKERS', 4))
threads = 2  # Each worker handles 2 threads for concurrency
worker_class = "gthread"

# Scheduling writes are short transactions; long requests mean a stuck lock
timeout = 60
graceful_timeout = 30
keepalive = 5
max_requests = 1000  # Restart workers after 1000 requests
max_requests_jitter = 50

# Logging
accesslog = os.environ.get('GUNICORN_ACCESS_LOG', '-')
errorlog = os.environ.get('GUNICORN_ERROR_LOG', '-')
loglevel = "info"

# Process Name
proc_name = "gym_scheduler"
