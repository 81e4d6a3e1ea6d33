# Folder: tests
# File:   conftest.py

import os

# keep the dev API state store in memory during tests
os.environ.setdefault("RTLSUPPORT_DB", ":memory:")
