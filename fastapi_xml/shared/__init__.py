"""
Shared module package.

Contains cross-cutting concerns used by the extractor and the response:
- Rejection-to-HTTP handler registration
- Logging configuration
"""
