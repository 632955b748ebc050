"""
auth — User account module.

Provides:
  • Password policy and bcrypt hashing
  • JWT access-token creation & verification
  • Registration / authentication flows over an ``AccountStore``
  • Register / Login API routes
  • ``get_current_claims`` FastAPI dependency
"""
