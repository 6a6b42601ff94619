"""
Cross-cutting infrastructure: settings, logging, the error model and
the SQLite bootstrap.
"""
