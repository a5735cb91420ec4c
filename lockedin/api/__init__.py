"""HTTP API layer: FastAPI application, dependencies, and routers."""
