import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '3001')}"
workers = int(os.getenv("WEB_CONCURRENCY", str(multiprocessing.cpu_count()))) or 1
worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "pantrychef.main:app"
# Generation waits up to 30s on Gemini; leave headroom before killing a worker
timeout = int(os.getenv("TIMEOUT", "60"))
keepalive = 5
graceful_timeout = 30
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
