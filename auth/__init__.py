"""
auth — credential handling for the User resource.

Provides:
  • Password hashing (bcrypt, per-record random salt)
  • Password verification against a stored hash
"""
