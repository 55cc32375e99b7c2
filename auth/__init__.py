"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, work factor 12)
  • Session token issuance & verification (HS256 JWT)
  • Sign-up / login / logout / profile API routes
  • ``get_current_claims`` FastAPI dependency
"""
