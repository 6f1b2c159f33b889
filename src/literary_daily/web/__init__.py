# ABOUTME: Web API for serving daily content to the presentation client.
# ABOUTME: Exposes the FastAPI application factory.

from literary_daily.web.app import create_app

__all__ = ["create_app"]
