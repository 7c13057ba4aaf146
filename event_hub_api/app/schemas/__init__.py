"""
Pydantic schema definitions for API payloads.

Each domain (users, events, attendees) defines its own Pydantic models
for response bodies.  Field names are snake_case in Python and
camelCase on the wire; every model accepts either spelling when it is
built from a database row or a JSON document.
"""
