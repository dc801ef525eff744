"""Health and wellbeing domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("symptoms", r"pain|hurt|ache|symptom|feel|sick|fever"),
    IntentRule("wellness", r"wellness|health plan|diet|nutrition|exercise"),
    IntentRule("medication", r"medication|medicine|pill|drug|prescription"),
    IntentRule("mental_health", r"stress|anxiety|depression|mental|mood"),
    IntentRule("fitness", r"fitness|workout|training|activity|steps"),
]

TEMPLATES = {
    "symptoms": IntentTemplate(
        title="Health Assessment",
        intro=(
            "⚠️ I provide general health information only. "
            "For medical emergencies, call emergency services immediately."
        ),
        sections=[
            ("Symptom Assessment", [
                "Symptom analysis and risk level evaluation",
                "Guidance on when to seek medical attention",
                "Home care recommendations",
                "Follow-up monitoring suggestions",
            ]),
            ("Assessment Process", [
                "Detailed symptom description",
                "Duration and severity tracking",
                "Associated symptoms identification",
            ]),
        ],
        closing="Please describe your symptoms in detail for a fuller assessment.",
        insights={
            "health_assessment": {
                "risk_level": "low_moderate",
                "recommended_action": "monitor_symptoms",
                "follow_up": "24_hours",
                "confidence": MetricRange(78, 92),
            },
            "recommendations": Pick((
                "Stay hydrated (8-10 glasses of water daily)",
                "Get adequate rest (7-9 hours of sleep)",
                "Monitor symptoms for 24-48 hours",
                "Consult a healthcare provider if symptoms worsen",
            ), 3),
            "urgency_level": "low_moderate",
            "disclaimer": (
                "This information is for educational purposes only and does "
                "not replace professional medical advice."
            ),
        },
        processing_time=(1.2, 2.5),
    ),
    "wellness": IntentTemplate(
        title="Wellness Planning",
        intro="Your personalized path to better health and wellness.",
        sections=[
            ("Wellness Areas", [
                "Nutrition and dietary planning",
                "Physical activity and exercise",
                "Sleep optimization",
                "Preventive health measures",
            ]),
            ("Planning Features", [
                "Goal setting and tracking",
                "Habit formation support",
                "Weekly check-ins and plan adjustments",
            ]),
        ],
        closing="What wellness goals would you like to focus on?",
        insights={
            "health_assessment": {
                "plan_type": "comprehensive_wellness",
                "wellness_score": MetricRange(60, 90),
            },
            "recommendations": Pick((
                "Set SMART health goals",
                "Focus on balanced nutrition",
                "Incorporate 30 minutes of daily activity",
                "Practice stress management techniques",
            ), 3),
            "urgency_level": "lifestyle_optimization",
            "disclaimer": (
                "Wellness plans should complement, not replace, professional "
                "healthcare guidance."
            ),
        },
        processing_time=(1.5, 3.1),
    ),
    "medication": IntentTemplate(
        title="Medication Management",
        intro="⚠️ Always consult healthcare providers for medication decisions.",
        sections=[
            ("Medication Support", [
                "Reminders and scheduling",
                "Drug interaction checking",
                "Side effect monitoring",
                "Adherence tracking",
            ]),
            ("Safety Features", [
                "Allergy warnings",
                "Dosage verification",
                "Healthcare provider coordination",
            ]),
        ],
        closing="How can I help with your medication management?",
        insights={
            "health_assessment": {
                "service_type": "medication_management",
                "adherence_estimate": MetricRange(70, 95),
            },
            "recommendations": Pick((
                "Set consistent medication times",
                "Use pill organizers for complex regimens",
                "Keep your medication list updated",
                "Store medications properly",
            ), 3),
            "urgency_level": "monitoring_required",
            "disclaimer": (
                "Always consult your healthcare provider or pharmacist for "
                "medication-related decisions."
            ),
        },
        processing_time=(1.0, 2.3),
    ),
    "mental_health": IntentTemplate(
        title="Mental Health Support",
        intro="Your mental health matters. I'm here to support you.",
        sections=[
            ("Support Services", [
                "Mood tracking and analysis",
                "Stress management techniques",
                "Coping strategy recommendations",
                "Mindfulness and relaxation guidance",
            ]),
            ("Crisis Resources", [
                "Crisis lines are available around the clock",
                "Reach out to someone you trust",
            ]),
        ],
        closing="Would you like to talk about what's on your mind?",
        insights={
            "health_assessment": {
                "support_type": "emotional_wellbeing",
                "stress_index": MetricRange(30, 70),
            },
            "recommendations": Pick((
                "Practice daily mindfulness (5-10 minutes)",
                "Maintain social connections",
                "Consider professional counseling",
                "Use crisis resources if needed",
            ), 3),
            "urgency_level": "supportive_care",
            "disclaimer": (
                "For mental health emergencies, contact crisis services "
                "immediately. This support is educational only."
            ),
        },
        processing_time=(1.3, 2.7),
    ),
    "fitness": IntentTemplate(
        title="Fitness Tracking",
        intro="Let's build an activity routine that fits your life.",
        sections=[
            ("Tracking Features", [
                "Daily steps and activity minutes",
                "Workout logging",
                "Progress milestones",
            ]),
            ("Training Guidance", [
                "Cardio and strength balance",
                "Recovery and rest days",
                "Gradual intensity increases",
            ]),
        ],
        closing="What fitness goals are you working towards?",
        insights={
            "health_assessment": {
                "activity_level": "moderate",
                "weekly_active_minutes": MetricRange(90, 240),
            },
            "recommendations": Pick((
                "Start with manageable exercise goals",
                "Mix cardio and strength training",
                "Track progress regularly",
                "Listen to your body and rest when needed",
            ), 3),
            "urgency_level": "lifestyle_optimization",
            "disclaimer": (
                "Consult your doctor before starting new exercise programs, "
                "especially with health conditions."
            ),
        },
        processing_time=(1.1, 2.4),
    ),
    "general": IntentTemplate(
        title="Health Assistant Ready",
        intro="Your AI health companion. Here's how I can support your wellbeing:",
        sections=[
            ("Core Health Services", [
                "Symptom assessment and guidance",
                "Wellness planning and goal setting",
                "Medication management support",
                "Mental health and stress support",
                "Fitness tracking and motivation",
            ]),
            ("Quick Commands", [
                "'I have symptoms' - health assessment",
                "'wellness plan' - personalized health goals",
                "'medication help' - medication management",
                "'feeling stressed' - mental health support",
            ]),
        ],
        closing="How can I support your health journey today?",
        insights={
            "health_assessment": {"service_overview": "comprehensive_health_support"},
            "recommendations": Pick((
                "Regular health check-ups",
                "Balanced diet and exercise",
                "Stress management",
                "Adequate sleep and hydration",
            ), 3),
            "urgency_level": "informational",
            "disclaimer": (
                "All health information provided is general and educational. "
                "Consult healthcare professionals for personal medical advice."
            ),
        },
        processing_time=(0.9, 2.0),
    ),
}

DOMAIN = AgentDomain(
    name="health",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=("health_assessment", "recommendations", "urgency_level", "disclaimer"),
)
