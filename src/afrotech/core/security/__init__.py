from .audit import AuditSink, StoreAuditSink
from .compliance import COMPLIANCE_CHECKS, ComplianceResult, ensure_compliance

__all__ = ["AuditSink", "COMPLIANCE_CHECKS", "ComplianceResult", "StoreAuditSink", "ensure_compliance"]
