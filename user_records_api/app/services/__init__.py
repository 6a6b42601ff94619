"""
Service layer abstraction.

Validation and conflict detection are plain functions; the record
stores hold the data and ``UserService`` ties them together behind a
single lock.  Handlers only talk to ``UserService`` so the backing
store can be swapped without touching the API layer.
"""
