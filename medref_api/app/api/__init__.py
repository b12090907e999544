"""
API package containing the REST routes.

``router`` aggregates the domain routers in ``endpoints``; the main
application mounts it under ``/api``.  Handlers obtain the record
store through the ``get_storage`` dependency in ``deps``.
"""
