"""
Mygram API package.

Provides the FastAPI application (api.app:app) for the mygram account
service.
"""
