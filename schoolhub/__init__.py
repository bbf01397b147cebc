"""SchoolHub backend package.

Layered as ``domain`` (entities and errors), ``application`` (use cases),
``infrastructure`` (database, storage, security) and ``interfaces`` (HTTP API).
"""
