"""Identity and application security domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("vulnerability", r"vulnerabil|scan|exploit|weakness|cve"),
    IntentRule("authentication", r"auth|login|password|token|oauth|saml"),
    IntentRule("compliance", r"compliance|gdpr|hipaa|sox|pci"),
    IntentRule("penetration", r"pentest|penetration|red team|security test"),
    IntentRule("identity", r"identity|access|rbac|permission|user management"),
]

TEMPLATES = {
    "vulnerability": IntentTemplate(
        title="Vulnerability Assessment",
        intro="Find and prioritize weaknesses before attackers do.",
        sections=[
            ("Assessment Coverage", [
                "Dependency and CVE scanning",
                "Configuration weakness detection",
                "Exposed service discovery",
            ]),
            ("Prioritization", [
                "Severity scoring (CVSS)",
                "Exploitability analysis",
                "Remediation roadmap",
            ]),
        ],
        closing="Which system should we assess first?",
        insights={
            "security_insights": {
                "risk_score": MetricRange(20, 60),
                "critical_findings": MetricRange(0, 3),
                "scan_depth": "comprehensive",
            },
            "authentication_methods": ["MFA", "Hardware security keys"],
            "compliance_notes": "Track remediation against your security policy SLAs.",
            "recommendations": Pick((
                "Patch critical CVEs within 7 days",
                "Enable continuous dependency scanning",
                "Harden default configurations",
                "Schedule quarterly reassessments",
            ), 3),
        },
        processing_time=(2.1, 3.8),
    ),
    "authentication": IntentTemplate(
        title="Authentication Design",
        intro="Strong, user-friendly authentication for your applications.",
        sections=[
            ("Methods", [
                "Multi-factor authentication",
                "OAuth 2.0 and OpenID Connect",
                "SAML single sign-on",
                "Passwordless and passkeys",
            ]),
            ("Token Hygiene", [
                "Short-lived access tokens",
                "Refresh token rotation",
                "Secure session storage",
            ]),
        ],
        closing="What authentication flow are you building?",
        insights={
            "security_insights": {
                "auth_strength": MetricRange(70, 95),
                "mfa_coverage": MetricRange(40, 90),
                "session_policy": "rotating",
            },
            "authentication_methods": ["OAuth 2.0", "OpenID Connect", "SAML", "Passkeys"],
            "compliance_notes": "Strong authentication supports most compliance frameworks.",
            "recommendations": Pick((
                "Require MFA for privileged accounts",
                "Rotate refresh tokens on use",
                "Rate-limit login attempts",
                "Hash passwords with a memory-hard function",
            ), 3),
        },
        processing_time=(1.8, 3.2),
    ),
    "compliance": IntentTemplate(
        title="Compliance Guidance",
        intro="Map your controls to the frameworks you must meet.",
        sections=[
            ("Frameworks", ["GDPR", "HIPAA", "SOX", "PCI DSS"]),
            ("Program", [
                "Control gap analysis",
                "Evidence collection",
                "Audit readiness reviews",
            ]),
        ],
        closing="Which framework are you preparing for?",
        insights={
            "security_insights": {
                "readiness": MetricRange(60, 90),
                "open_gaps": MetricRange(2, 12),
                "audit_window": "quarterly",
            },
            "authentication_methods": ["SSO with MFA"],
            "compliance_notes": "Compliance guidance is general and not legal advice.",
            "recommendations": Pick((
                "Maintain a data inventory",
                "Automate evidence collection",
                "Document incident response procedures",
                "Review vendor risk annually",
            ), 3),
        },
        processing_time=(2.3, 4.1),
    ),
    "penetration": IntentTemplate(
        title="Penetration Testing",
        intro="Authorized offensive testing to validate your defenses.",
        sections=[
            ("Engagement Types", [
                "External network testing",
                "Web application testing",
                "Red team exercises",
            ]),
            ("Deliverables", [
                "Rules of engagement",
                "Findings with reproduction steps",
                "Retest of remediated issues",
            ]),
        ],
        closing="What scope do you have authorization to test?",
        insights={
            "security_insights": {
                "attack_surface": "moderate",
                "test_coverage": MetricRange(65, 90),
                "estimated_days": MetricRange(3, 10),
            },
            "authentication_methods": ["Credentialed testing accounts"],
            "compliance_notes": "Only test systems you are authorized to test.",
            "recommendations": Pick((
                "Define scope and rules of engagement first",
                "Test in a staging environment when possible",
                "Retest after remediation",
                "Share findings with development teams",
            ), 3),
        },
        processing_time=(2.7, 4.5),
    ),
    "identity": IntentTemplate(
        title="Identity and Access Management",
        intro="Least-privilege access for people and services.",
        sections=[
            ("Access Control", [
                "Role-based access control",
                "Attribute-based policies",
                "Just-in-time elevation",
            ]),
            ("Lifecycle", [
                "Joiner, mover and leaver automation",
                "Periodic access reviews",
                "Service account governance",
            ]),
        ],
        closing="How is access managed in your organization today?",
        insights={
            "security_insights": {
                "privilege_sprawl": MetricRange(10, 40),
                "review_cadence": "quarterly",
                "policy_maturity": MetricRange(50, 85),
            },
            "authentication_methods": ["SSO", "SCIM provisioning"],
            "compliance_notes": "Access reviews are a common audit requirement.",
            "recommendations": Pick((
                "Adopt role-based access control",
                "Remove standing admin privileges",
                "Automate deprovisioning",
                "Review access quarterly",
            ), 3),
        },
        processing_time=(2.2, 3.9),
    ),
    "general": IntentTemplate(
        title="Security Assistant",
        intro="Security guidance across identity, testing and compliance.",
        sections=[
            ("What I Can Do", [
                "Vulnerability assessment",
                "Authentication design",
                "Compliance guidance",
                "Penetration testing planning",
                "Identity and access management",
            ]),
        ],
        closing="What security question can I help with?",
        insights={
            "security_insights": {"service_overview": "security_advisory"},
            "authentication_methods": ["MFA", "SSO"],
            "compliance_notes": "Security guidance is general; validate against your policies.",
            "recommendations": Pick((
                "Enable MFA everywhere",
                "Keep dependencies patched",
                "Log and monitor authentication events",
                "Practice incident response",
            ), 3),
        },
        processing_time=(1.5, 2.8),
    ),
}

DOMAIN = AgentDomain(
    name="security",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=(
        "security_insights",
        "authentication_methods",
        "compliance_notes",
        "recommendations",
    ),
)
