bind = "unix:/var/www/shed-production/backend/gunicorn.sock"
workers = 3
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 60
keepalive = 5

# Logging
accesslog = "/var/log/shed-production/access.log"
errorlog = "/var/log/shed-production/error.log"
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "shed-production"

# Server mechanics
daemon = False
pidfile = "/var/run/shed-production/gunicorn.pid"
umask = 0o007

wsgi_app = "core.wsgi:application"


# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting shed production backend")

def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Shed production backend ready. Spawning workers")

def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal."""
    worker.log.info("Worker received SIGABRT signal")
