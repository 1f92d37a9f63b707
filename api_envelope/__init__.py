"""
API Envelope

Classifies exceptions raised while handling requests and renders them as a
uniform JSON error envelope for FastAPI services.
"""

__version__ = "1.0.0"
