"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset flows
- users/: Signed-in account profile
"""
