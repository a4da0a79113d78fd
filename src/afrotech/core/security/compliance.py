from __future__ import annotations

import logging
import time
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger("afrotech.security")


class ComplianceChecklist(BaseModel):
    required: list[str]
    restrictions: list[str] = Field(default_factory=list)


class ComplianceResult(BaseModel):
    compliant: bool = True
    compliance_level: str
    checks_passed: list[str]
    restrictions_applied: list[str]
    audit_log_id: str


DEFAULT_COMPLIANCE_LEVEL = "standard"

COMPLIANCE_CHECKS: dict[str, ComplianceChecklist] = {
    "HIPAA": ComplianceChecklist(
        required=["data_encryption", "audit_logging", "access_controls", "phi_protection"],
        restrictions=["no_public_sharing", "minimum_necessary"],
    ),
    "GDPR": ComplianceChecklist(
        required=["consent_tracking", "data_portability", "right_to_erasure"],
        restrictions=["purpose_limitation", "data_minimization"],
    ),
    "SOC2": ComplianceChecklist(
        required=["security_monitoring", "access_logging", "change_management"],
        restrictions=["least_privilege"],
    ),
    "FERPA": ComplianceChecklist(
        required=["education_record_protection", "parent_consent"],
        restrictions=["no_unauthorized_disclosure"],
    ),
    "FINRA": ComplianceChecklist(
        required=["financial_record_retention", "communication_archival"],
        restrictions=["no_misleading_communication"],
    ),
    "PCI-DSS": ComplianceChecklist(
        required=["card_data_encryption", "network_security", "vulnerability_management"],
        restrictions=["no_card_storage"],
    ),
    DEFAULT_COMPLIANCE_LEVEL: ComplianceChecklist(required=["audit_logging"]),
}


def checklist_for(compliance_level: Optional[str]) -> tuple[str, ComplianceChecklist]:
    level = compliance_level if compliance_level in COMPLIANCE_CHECKS else DEFAULT_COMPLIANCE_LEVEL
    return level, COMPLIANCE_CHECKS[level]


def ensure_compliance(action: dict[str, Any], user_context: Any, compliance_level: Optional[str]) -> ComplianceResult:
    """Look up the static checklist for ``compliance_level``.

    This is a lookup, not an enforcement point: the result is always
    compliant and unknown levels resolve to the ``standard`` checklist.
    """
    level, checks = checklist_for(compliance_level)
    if level != compliance_level:
        logger.info("unknown compliance level %r, using %s", compliance_level, level)
    result = ComplianceResult(
        compliance_level=level,
        checks_passed=list(checks.required),
        restrictions_applied=list(checks.restrictions),
        audit_log_id=f"audit_{int(time.time() * 1000)}",
    )
    logger.info(
        "compliance_checked",
        extra={"extra_fields": {"action_type": (action or {}).get("type"), "compliance_level": level}},
    )
    return result
