"""
Report records produced by the phishing heuristics engine.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Finding severities
SAFE = "SAFE"
WARNING = "WARNING"
DANGER = "DANGER"
FINDING_TYPES = (SAFE, WARNING, DANGER)

# Risk levels, lowest first
LOW = "LOW"
MEDIUM = "MEDIUM"
HIGH = "HIGH"
CRITICAL = "CRITICAL"
RISK_LEVELS = (LOW, MEDIUM, HIGH, CRITICAL)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Finding:
    type: str
    category: str
    message: str

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "category": self.category, "message": self.message}


@dataclass(frozen=True)
class LinkAnalysis:
    url: str
    display_text: str
    suspicious: bool
    reasons: Tuple[str, ...] = ()
    domain: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "displayText": self.display_text,
            "suspicious": self.suspicious,
            "reasons": list(self.reasons),
            "domain": self.domain,
        }


@dataclass(frozen=True)
class HeaderAnalysis:
    sender: str = UNKNOWN
    return_path: str = UNKNOWN
    spf_valid: bool = False
    dkim_valid: bool = False
    # Reserved, nothing populates it yet
    suspicious_headers: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "returnPath": self.return_path,
            "spfValid": self.spf_valid,
            "dkimValid": self.dkim_valid,
            "suspiciousHeaders": list(self.suspicious_headers),
        }


@dataclass(frozen=True)
class RiskContribution:
    """Score delta from one risk factor, with the finding it raised (if any)."""
    score: int
    finding: Optional[Finding] = None


@dataclass(frozen=True)
class AnalysisReport:
    risk_score: int
    risk_level: str
    findings: Tuple[Finding, ...] = ()
    links: Tuple[LinkAnalysis, ...] = ()
    headers: HeaderAnalysis = field(default_factory=HeaderAnalysis)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level,
            "findings": [finding.as_dict() for finding in self.findings],
            "links": [link.as_dict() for link in self.links],
            "headers": self.headers.as_dict(),
        }


__all__ = [
    'SAFE', 'WARNING', 'DANGER', 'FINDING_TYPES',
    'LOW', 'MEDIUM', 'HIGH', 'CRITICAL', 'RISK_LEVELS', 'UNKNOWN',
    'Finding', 'LinkAnalysis', 'HeaderAnalysis', 'RiskContribution', 'AnalysisReport'
]
