"""FastAPI dependencies for Pagesmith."""
