"""
FastAPI RESTful API for managing books and their authors.

This module provides:
- Book listing with clamped pagination
- Book creation together with its author
- Book deletion
- Signed-token authentication for mutating endpoints
"""
