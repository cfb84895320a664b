"""HTTP API: FastAPI application, routes and pydantic schemas."""
