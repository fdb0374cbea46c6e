"""
auth — User authentication module.

Provides:
  • Session token signing & verification
  • Password hashing (bcrypt)
  • Register / Login service and API routes
"""
