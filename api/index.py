"""
Vercel serverless function entry point for the classification proxy.
"""
from backend.api import app

# Vercel picks up the ASGI app exported as 'app' or 'handler'
handler = app
