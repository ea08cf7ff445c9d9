"""Root conftest: shared test configuration."""

import os

# Keep test output readable; JSON logging is for production hosts
os.environ.setdefault("WIREBIND_LOG_FORMAT", "plain")
os.environ.setdefault("WIREBIND_LOG_LEVEL", "DEBUG")
