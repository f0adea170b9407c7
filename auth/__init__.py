"""
auth — User authentication module.

Provides:
  • Signed token issuing & verification (``TokenSigner``)
  • Password hashing (bcrypt, ``PasswordHasher``)
  • Register / Login API routes
  • ``get_current_user`` FastAPI dependency guarding the cart routes
"""
