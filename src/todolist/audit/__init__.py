"""
Audit subsystem.

- audit_log.py: append-only CSV of per-request outcomes (AuditLogger, LogEntry)
- timing.py: request context, timed operation wrapper, OpResult
"""
