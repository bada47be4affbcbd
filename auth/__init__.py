"""
auth — Member authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt)
  • Sign-up / Login / Profile API routes
  • ``get_current_member`` FastAPI dependency (the bearer-token gate)
"""
