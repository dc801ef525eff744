"""System configuration and DevOps domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("system_configuration", r"system|config|settings|setup|install"),
    IntentRule("deployment_automation", r"deploy|automation|pipeline|release|publish"),
    IntentRule("environment_management", r"environment|env|staging|production|development"),
    IntentRule("infrastructure_optimization", r"infrastructure|optimize|performance|scale|resources"),
    IntentRule("security_configuration", r"security|secure|auth|encryption|compliance"),
    IntentRule("monitoring_setup", r"monitor|alert|dashboard|metrics|logging"),
]

_DEPLOYMENT_RECOMMENDATIONS = (
    "Use infrastructure as code",
    "Implement configuration validation",
    "Enable automated rollback",
    "Use canary releases for risk reduction",
)


def _insights(analysis: dict, insights: tuple, guidance: tuple) -> dict:
    return {
        "config_analysis": analysis,
        "deployment_recommendations": Pick(_DEPLOYMENT_RECOMMENDATIONS, 3),
        "infrastructure_insights": Pick(insights, 2),
        "automation_guidance": Pick(guidance, 2),
    }


TEMPLATES = {
    "system_configuration": IntentTemplate(
        title="System Configuration Center",
        intro="System configuration with automated validation and optimization.",
        sections=[
            ("Configuration Management", [
                "System settings: OS and application configuration",
                "Service configuration: databases, web servers, applications",
                "Network configuration: routing, firewall and connectivity",
                "Runtime configuration: environment variables and parameters",
            ]),
            ("Quality Assurance", [
                "Pre-deployment configuration validation",
                "Configuration drift detection and remediation",
                "Best practices compliance checking",
            ]),
        ],
        closing="What system configurations would you like me to optimize?",
        insights=_insights(
            {
                "complexity": "high",
                "optimization_potential": MetricRange(85, 96),
                "compliance_score": MetricRange(88, 97),
            },
            (
                "Configuration standardization improves reliability",
                "Automation reduces human error",
                "Validation prevents deployment issues",
            ),
            (
                "Template configurations for reusability",
                "Version control all configurations",
                "Automate validation processes",
            ),
        ),
        processing_time=(1.5, 3.2),
    ),
    "deployment_automation": IntentTemplate(
        title="Deployment Automation Studio",
        intro="Deployment automation with CI/CD pipeline optimization.",
        sections=[
            ("Deployment Capabilities", [
                "CI/CD pipelines: automated build, test and deploy",
                "Blue-green deployment for zero downtime",
                "Canary releases with automated monitoring",
                "Infrastructure provisioning and scaling",
            ]),
            ("Monitoring and Control", [
                "Real-time deployment monitoring",
                "Automated smoke tests and health checks",
                "Deployment audit trails",
            ]),
        ],
        closing="What deployment automation challenges can I solve?",
        insights=_insights(
            {
                "automation_level": "advanced",
                "pipeline_efficiency": MetricRange(90, 98),
                "success_rate": MetricRange(95, 99),
            },
            (
                "Automation improves deployment reliability",
                "Monitoring enables rapid issue detection",
                "Standardization reduces deployment complexity",
            ),
            (
                "Design pipelines for resilience",
                "Implement comprehensive testing",
                "Monitor deployment health continuously",
            ),
        ),
        processing_time=(1.7, 3.4),
    ),
    "environment_management": IntentTemplate(
        title="Environment Management Platform",
        intro="Environment management with automated synchronization.",
        sections=[
            ("Environment Control", [
                "Development, staging and production setup",
                "Environment isolation and resource allocation",
                "Configuration synchronization and validation",
            ]),
            ("Governance", [
                "Access controls and permissions",
                "Change management and audit trails",
                "Cost tracking",
            ]),
        ],
        closing="How can I help you manage your environments?",
        insights=_insights(
            {
                "environment_count": MetricRange(3, 8),
                "sync_efficiency": MetricRange(92, 98),
                "drift_detection": "active",
            },
            (
                "Consistent environments reduce deployment risk",
                "Automation prevents configuration drift",
                "Templates ensure standardization",
            ),
            (
                "Monitor environment changes continuously",
                "Automate environment provisioning",
                "Implement change approval workflows",
            ),
        ),
        processing_time=(1.4, 2.9),
    ),
    "infrastructure_optimization": IntentTemplate(
        title="Infrastructure Optimization",
        intro="Performance and cost optimization for your infrastructure.",
        sections=[
            ("Optimization Areas", [
                "Compute right-sizing",
                "Autoscaling policies",
                "Storage tiering",
                "Network latency reduction",
            ]),
            ("Analysis", [
                "Resource utilization reports",
                "Bottleneck identification",
                "Cost forecasting",
            ]),
        ],
        closing="Which part of your infrastructure should we optimize first?",
        insights=_insights(
            {
                "utilization": MetricRange(55, 80),
                "cost_savings_potential": MetricRange(15, 35),
                "scaling_readiness": "medium",
            },
            (
                "Right-sizing cuts idle capacity",
                "Autoscaling absorbs traffic spikes",
                "Caching reduces backend load",
            ),
            (
                "Automate capacity reviews",
                "Alert on sustained high utilization",
                "Schedule non-production shutdowns",
            ),
        ),
        processing_time=(1.8, 3.5),
    ),
    "security_configuration": IntentTemplate(
        title="Security Configuration",
        intro="Security hardening for systems and services.",
        sections=[
            ("Hardening", [
                "Authentication and authorization setup",
                "Encryption at rest and in transit",
                "Secret management",
                "Firewall and network policies",
            ]),
            ("Compliance", [
                "Policy as code",
                "Continuous compliance scanning",
                "Audit logging",
            ]),
        ],
        closing="Which systems need security hardening?",
        insights=_insights(
            {
                "security_posture": "moderate",
                "hardening_score": MetricRange(80, 95),
                "compliance_score": MetricRange(85, 97),
            },
            (
                "Least privilege limits blast radius",
                "Encryption protects data exposure",
                "Centralized secrets prevent leaks",
            ),
            (
                "Rotate credentials automatically",
                "Scan configurations on every change",
                "Enforce policies in the pipeline",
            ),
        ),
        processing_time=(1.6, 3.3),
    ),
    "monitoring_setup": IntentTemplate(
        title="Monitoring Setup",
        intro="Observability for your services and infrastructure.",
        sections=[
            ("Monitoring Stack", [
                "Metrics collection and dashboards",
                "Centralized logging",
                "Alert routing and escalation",
            ]),
            ("Best Practices", [
                "Service level objectives",
                "Actionable alerts only",
                "Runbooks for every alert",
            ]),
        ],
        closing="What would you like to monitor?",
        insights=_insights(
            {
                "coverage": MetricRange(70, 95),
                "alert_noise_reduction": MetricRange(20, 45),
                "observability_level": "intermediate",
            },
            (
                "SLOs focus alerting on user impact",
                "Structured logs speed up debugging",
                "Dashboards expose trends early",
            ),
            (
                "Alert on symptoms, not causes",
                "Keep dashboards per service",
                "Review alert fatigue monthly",
            ),
        ),
        processing_time=(1.3, 2.8),
    ),
    "general": IntentTemplate(
        title="Configuration Assistant",
        intro="Intelligent configuration management and DevOps automation.",
        sections=[
            ("What I Can Do", [
                "System configuration and setup",
                "Deployment automation and CI/CD",
                "Environment management",
                "Infrastructure optimization",
                "Security configuration",
                "Monitoring setup",
            ]),
        ],
        closing="What configuration challenge can I help with?",
        insights=_insights(
            {"service_overview": "configuration_management"},
            (
                "Configuration as code improves consistency",
                "Automation reduces manual errors",
                "Monitoring closes the feedback loop",
            ),
            (
                "Start with version-controlled configs",
                "Automate one pipeline at a time",
                "Measure before optimizing",
            ),
        ),
        processing_time=(1.0, 2.2),
    ),
}

DOMAIN = AgentDomain(
    name="configuration",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=(
        "config_analysis",
        "deployment_recommendations",
        "infrastructure_insights",
        "automation_guidance",
    ),
)
