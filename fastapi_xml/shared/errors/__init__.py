"""
Shared error handling package.

Centralizes rejection-to-HTTP mapping so that every extractor failure
is consistently translated into a plain-text response.
"""
