"""
Service layer abstraction.

The record store contract lives in ``base``; ``memory_storage`` and
``sqlite_storage`` implement it and ``storage.select_storage`` picks
one at startup.  API handlers only ever see the ``RecordStore``
interface, so backends can be swapped without touching routes.
"""
