"""Project management and productivity domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("project_management", r"project|plan|manage|organize|milestone"),
    IntentRule("workflow_automation", r"workflow|automat|process|streamline|optimize"),
    IntentRule("resource_optimization", r"resource|allocat|budget|capacity|utiliz"),
    IntentRule("deadline_tracking", r"deadline|timeline|schedule|track|monitor"),
    IntentRule("team_coordination", r"team|coordinat|collaborat|communicat|assign"),
    IntentRule("productivity_analytics", r"analytic|metric|performance|report|insight"),
]


def _template(
    title: str,
    intro: str,
    bullets: list[str],
    closing: str,
    analysis: dict,
    recommendations: tuple,
    processing_time: tuple[float, float],
) -> IntentTemplate:
    return IntentTemplate(
        title=title,
        intro=intro,
        sections=[("Capabilities", bullets)],
        closing=closing,
        insights={
            "productivity_analysis": analysis,
            "task_recommendations": Pick(recommendations, 3),
            "workflow_guidance": Pick((
                "Review priorities at the start of each week",
                "Limit work in progress",
                "Automate recurring status updates",
                "Keep one source of truth for tasks",
            ), 2),
        },
        processing_time=processing_time,
    )


TEMPLATES = {
    "project_management": _template(
        "Project Planning",
        "Plans, milestones and ownership for your project.",
        [
            "Work breakdown and milestones",
            "Dependency mapping",
            "Risk register",
            "Progress tracking",
        ],
        "What project are you planning?",
        {
            "planning_efficiency": MetricRange(75, 95),
            "milestones_suggested": MetricRange(3, 8),
            "methodology": "hybrid_agile",
        },
        (
            "Define clear milestones",
            "Assign a single owner per task",
            "Track dependencies explicitly",
            "Hold short weekly reviews",
        ),
        (1.3, 2.7),
    ),
    "workflow_automation": _template(
        "Workflow Automation",
        "Remove repetitive steps from your team's workflows.",
        [
            "Process mapping",
            "Trigger-based automations",
            "Approval flows",
        ],
        "Which workflow takes the most manual effort?",
        {
            "automation_potential": MetricRange(30, 70),
            "hours_saved_weekly": MetricRange(2, 12),
            "complexity": "medium",
        },
        (
            "Automate the most frequent task first",
            "Document each workflow before automating",
            "Add alerts for failed automations",
            "Review automations quarterly",
        ),
        (1.5, 3.1),
    ),
    "resource_optimization": _template(
        "Resource Optimization",
        "Balance capacity, budget and workload across your team.",
        [
            "Capacity planning",
            "Budget tracking",
            "Workload balancing",
        ],
        "Where are your resources most constrained?",
        {
            "utilization": MetricRange(60, 90),
            "overallocated_members": MetricRange(0, 4),
            "budget_health": "on_track",
        },
        (
            "Rebalance overallocated team members",
            "Reserve capacity for unplanned work",
            "Review budget burn monthly",
            "Cross-train for key skills",
        ),
        (1.4, 2.9),
    ),
    "deadline_tracking": _template(
        "Deadline Tracking",
        "Keep every deadline visible and on schedule.",
        [
            "Timeline visualization",
            "At-risk task detection",
            "Reminder scheduling",
        ],
        "Which deadlines are you tracking?",
        {
            "on_time_rate": MetricRange(70, 95),
            "at_risk_tasks": MetricRange(0, 5),
            "buffer_days": MetricRange(1, 5),
        },
        (
            "Add buffer to critical-path tasks",
            "Flag at-risk tasks early",
            "Break long tasks into checkpoints",
            "Share timelines with stakeholders",
        ),
        (1.2, 2.6),
    ),
    "team_coordination": _template(
        "Team Coordination",
        "Clear ownership and smooth communication across your team.",
        [
            "Role and responsibility mapping",
            "Meeting cadence design",
            "Async communication norms",
        ],
        "How is your team organized today?",
        {
            "collaboration_score": MetricRange(65, 92),
            "meeting_load_hours": MetricRange(3, 15),
            "communication_style": "hybrid",
        },
        (
            "Publish a RACI for key deliverables",
            "Prefer async updates over status meetings",
            "Keep decisions documented",
            "Rotate facilitation duties",
        ),
        (1.3, 2.8),
    ),
    "productivity_analytics": _template(
        "Productivity Analytics",
        "Metrics that show how work actually flows.",
        [
            "Cycle time and throughput",
            "Bottleneck detection",
            "Trend reports",
        ],
        "Which metrics matter most to you?",
        {
            "throughput_trend": "improving",
            "cycle_time_days": MetricRange(2, 9),
            "focus_time_ratio": MetricRange(40, 75),
        },
        (
            "Track cycle time per work type",
            "Review bottlenecks every sprint",
            "Protect focus time blocks",
            "Share metrics with the whole team",
        ),
        (1.6, 3.2),
    ),
    "general": _template(
        "Productivity Assistant",
        "Project management and productivity optimization.",
        [
            "Project planning",
            "Workflow automation",
            "Resource optimization",
            "Deadline tracking",
            "Team coordination",
            "Productivity analytics",
        ],
        "What would you like to get done?",
        {"service_overview": "productivity_management"},
        (
            "Start each week with a priority list",
            "Limit work in progress",
            "Automate recurring tasks",
            "Review progress weekly",
        ),
        (1.0, 2.2),
    ),
}

DOMAIN = AgentDomain(
    name="productivity",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=("productivity_analysis", "task_recommendations", "workflow_guidance"),
)
