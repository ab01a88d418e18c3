"""Request audit logging."""

from .audit import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp

__all__ = ["AuditEvent", "JsonlAuditLogger", "sanitize_arguments", "utc_timestamp"]
