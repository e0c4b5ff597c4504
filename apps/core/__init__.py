"""
Core app - Shared abstractions and utilities.

This app provides:
- The application error taxonomy and its JSON error handlers (errors)
- Image storage on S3 or the local media directory (image_storage)
- The `serve` management command
"""
