import os

wsgi_app = "opencycle_admin.main:app"
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", 2))
worker_class = "uvicorn.workers.UvicornWorker"
# Must stay above ANALYTICS_QUERY_TIMEOUT_SECONDS so a slow dashboard still answers
timeout = int(os.getenv("GUNICORN_TIMEOUT", 60))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 30))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", 5))

accesslog = "-"
errorlog = "-"
