# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for FastAPI app.

from literary_daily.web.routes import api

__all__ = ["api"]
