"""HTTP API for the envelope encoder (FastAPI)."""
