"""Observability module for audit logging."""

from skillscope.observability.audit import AuditSink, JSONLAuditSink, StdoutAuditSink

__all__ = ["AuditSink", "JSONLAuditSink", "StdoutAuditSink"]
