"""
products — product catalog module.

Provides:
  • Product CRUD with paginated, filtered listing
  • ``ProductStore`` interface + SQLAlchemy implementation
  • Catalog API routes (all behind the access gate)
"""
