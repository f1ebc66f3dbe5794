"""
Service layer.

Services hold the request-level rules (validation, subject checks,
error translation) and delegate persistence to a storage backend, so
API handlers stay thin and the backend can be swapped without touching
them.
"""
