"""Root conftest — shared test configuration."""

import os

# Tests never read a developer's .env overrides for these
os.environ.setdefault("DOCMATRIX_LOG_LEVEL", "WARNING")
os.environ.setdefault("DOCMATRIX_DEFAULT_SAMPLE", "sample")
