"""HTTP API (FastAPI) over the task service."""
