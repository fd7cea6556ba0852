"""
auth — User authentication module.

Provides:
  • JWT token creation & verification (PyJWT, HS256)
  • Password hashing (bcrypt, configurable cost factor)
  • Register / Login / Me API routes
  • ``get_current_identity`` FastAPI dependency (the access gate)
"""
