"""
Gunicorn Configuration for DriveNow Rentals
Production WSGI server settings

Run with: gunicorn -c deployment/gunicorn_config.py "app:create_app('production')"
"""
import multiprocessing

# Server Socket
bind = '127.0.0.1:8000'
backlog = 2048

# Worker Processes
# Each worker holds its own in-memory rental ledger, so run exactly one
# worker and scale with threads.  Several workers would overwrite each
# other's snapshots.
workers = 1
worker_class = 'gthread'
threads = multiprocessing.cpu_count() * 2 + 1
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5

# Logging
accesslog = '/home/drivenow/app/logs/gunicorn_access.log'
errorlog = '/home/drivenow/app/logs/gunicorn_error.log'
loglevel = 'info'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process Naming
proc_name = 'drivenow-rentals'

# Server Mechanics
daemon = False
pidfile = '/home/drivenow/app/gunicorn.pid'
umask = 0o007
user = None
group = None
tmp_upload_dir = None

# SSL (handled by nginx, not needed here)
# keyfile = None
# certfile = None

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

def post_fork(server, worker):
    """Called after a worker has been forked"""
    server.log.info("Worker spawned (pid: %s)", worker.pid)

def pre_fork(server, worker):
    """Called before a worker is forked"""
    pass

def pre_exec(server):
    """Called before a new master process is forked"""
    server.log.info("Forked child, re-executing.")

def when_ready(server):
    """Called when the server is ready"""
    server.log.info("Server is ready. Spawning workers")

def worker_int(worker):
    """Called when a worker receives an INT or QUIT signal"""
    worker.log.info("worker received INT or QUIT signal")

def worker_abort(worker):
    """Called when a worker fails to boot or times out"""
    worker.log.info("worker received SIGABRT signal")
