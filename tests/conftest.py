import os
import tempfile

# Keep test runs from writing log files into the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='kalima-logs-'))
os.environ.setdefault('STORAGE_BACKEND', 'memory')
