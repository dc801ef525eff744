"""Document intelligence domain."""

from .base import AgentDomain, IntentRule, IntentTemplate, MetricRange, Pick

RULES = [
    IntentRule("analyze", r"analy[sz]e|examine|review|inspect"),
    IntentRule("extract", r"extract|find|identify|pull out|get"),
    IntentRule("summarize", r"summari[sz]e|condense|brief|overview"),
    IntentRule("translate", r"translate|convert|language"),
    IntentRule("classify", r"classify|categorize|type|kind"),
]

_ENTITY_TYPES = ("people", "organizations", "dates", "amounts", "locations")

TEMPLATES = {
    "analyze": IntentTemplate(
        title="Document Analysis",
        intro="Structure, key themes and quality of your document.",
        sections=[
            ("Analysis", [
                "Structure and section breakdown",
                "Key themes and topics",
                "Readability assessment",
            ]),
        ],
        closing="Paste or upload the document you want analyzed.",
        insights={
            "document_analysis": {
                "readability": MetricRange(55, 85),
                "sections_detected": MetricRange(3, 12),
            },
            "extracted_entities": Pick(_ENTITY_TYPES, 3),
            "document_type": "business_report",
            "confidence_score": MetricRange(88, 96),
        },
        processing_time=(1.5, 3.2),
    ),
    "extract": IntentTemplate(
        title="Information Extraction",
        intro="Pull structured data out of unstructured text.",
        sections=[
            ("Extraction Targets", [
                "Named entities",
                "Tables and key-value pairs",
                "Dates, amounts and references",
            ]),
        ],
        closing="What information should I extract?",
        insights={
            "document_analysis": {"extraction_type": "entity_recognition"},
            "extracted_entities": Pick(_ENTITY_TYPES, 3),
            "document_type": "extraction_request",
            "confidence_score": MetricRange(90, 97),
        },
        processing_time=(1.2, 2.8),
    ),
    "summarize": IntentTemplate(
        title="Document Summarization",
        intro="Concise summaries at the length you need.",
        sections=[
            ("Summary Styles", [
                "Executive summary",
                "Bullet-point key takeaways",
                "Section-by-section digest",
            ]),
        ],
        closing="How long should the summary be?",
        insights={
            "document_analysis": {
                "summary_type": "multi_method",
                "compression_ratio": MetricRange(5, 20),
            },
            "extracted_entities": Pick(_ENTITY_TYPES, 2),
            "document_type": "summarization_request",
            "confidence_score": MetricRange(87, 94),
        },
        processing_time=(1.8, 3.5),
    ),
    "translate": IntentTemplate(
        title="Document Translation",
        intro="Translation that keeps formatting and terminology intact.",
        sections=[
            ("Translation Features", [
                "Terminology consistency",
                "Formatting preservation",
                "Tone adaptation",
            ]),
        ],
        closing="Which target language do you need?",
        insights={
            "document_analysis": {"translation_engine": "neural"},
            "extracted_entities": Pick(_ENTITY_TYPES, 2),
            "document_type": "translation_request",
            "confidence_score": MetricRange(85, 93),
        },
        processing_time=(2.1, 4.2),
    ),
    "classify": IntentTemplate(
        title="Document Classification",
        intro="Sort documents by type, topic and sensitivity.",
        sections=[
            ("Classification", [
                "Document type detection",
                "Topic labelling",
                "Sensitivity tagging",
            ]),
        ],
        closing="What categories do you use?",
        insights={
            "document_analysis": {"classification_model": "ensemble"},
            "extracted_entities": Pick(_ENTITY_TYPES, 2),
            "document_type": "classification_request",
            "confidence_score": MetricRange(86, 95),
        },
        processing_time=(1.1, 2.6),
    ),
    "general": IntentTemplate(
        title="Document Assistant",
        intro="Document intelligence for analysis, extraction and more.",
        sections=[
            ("What I Can Do", [
                "Analyze documents",
                "Extract information",
                "Summarize content",
                "Translate documents",
                "Classify documents",
            ]),
        ],
        closing="What would you like to do with your document?",
        insights={
            "document_analysis": {"service_overview": "document_intelligence"},
            "extracted_entities": [],
            "document_type": "unknown",
            "confidence_score": MetricRange(80, 90),
        },
        processing_time=(1.0, 2.0),
    ),
}

DOMAIN = AgentDomain(
    name="documents",
    rules=RULES,
    templates=TEMPLATES,
    insight_keys=(
        "document_analysis",
        "extracted_entities",
        "document_type",
        "confidence_score",
    ),
)
