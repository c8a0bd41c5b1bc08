"""Feature modules for neo-access.

- catalog: compiles the declarative role/permission schema into artifacts
- authorization: permission, role and escalation decisions
- validation: tenant-scoped asynchronous validation runtime and role checks
"""
