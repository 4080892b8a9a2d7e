import os
from pathlib import Path

DATABASE_URL = os.environ.get("SEAT_ALLOCATOR_DATABASE_URL", "sqlite:///./seat_allocator.db")

EXPORT_DIR = Path(
    os.environ.get("SEAT_ALLOCATOR_EXPORT_DIR", Path(__file__).resolve().parent / "exports")
)

# default sheet for /departments/import when no path is posted
DEPARTMENTS_FILE = os.environ.get("SEAT_ALLOCATOR_DEPARTMENTS_FILE", "departments.xlsx")

LOG_LEVEL = os.environ.get("SEAT_ALLOCATOR_LOG_LEVEL", "INFO")
