"""
Background removal microservice package.

Exposes the remover interface, the rembg-backed implementation, the
bytes -> data URL pipeline, and the FastAPI application.
"""
