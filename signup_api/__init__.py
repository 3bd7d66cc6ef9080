"""
Signup API package.

A small FastAPI service with a public signup route and a header-gated
profile route, backed by a SQLAlchemy datastore.
"""
