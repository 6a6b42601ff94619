"""
Version 1 of the API.

This subpackage bundles the user record endpoints.
"""
