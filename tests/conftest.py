import os
import tempfile

# Keep test runs from writing game logs into the working directory
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordle2-logs-'))
