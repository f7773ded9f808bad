"""API layer - FastAPI application, dependencies and routes."""
