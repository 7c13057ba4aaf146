"""
Store layer.

Each service wraps the SQL for one entity (users, events, attendees)
behind coroutine methods.  Services are pure data access: they never
decide whether the caller may perform an operation.  Lookups return
the record or ``None``; failures raise ``StoreError``.
"""
