"""Prompt construction for FRD generation.

Turns a stored questionnaire record into the instruction text sent to the
language model. Missing or empty values render as "Not specified"; list
answers are comma-joined.
"""

from __future__ import annotations

from typing import Any, Mapping

NOT_SPECIFIED = "Not specified"

# (label, record field) in the order they appear in the prompt
PROMPT_FIELDS: tuple[tuple[str, str], ...] = (
    ("Product Name", "product_name"),
    ("Product Description", "product_description"),
    ("Target Users", "target_users"),
    ("Problem Solved", "problem_solved"),
    ("Product Goals", "product_goals"),
    ("Key Features", "key_features"),
    ("User Journey", "user_journey"),
    ("Tech Stack", "tech_stack"),
    ("Constraints", "constraints"),
    ("Success Metrics", "success_metrics"),
    ("Product Stage", "product_stage"),
    ("Competitors", "competitors"),
    ("Platforms", "platforms"),
    ("Compliance Requirements", "compliance"),
    ("Timeline", "timeline"),
    ("Additional Information", "additional_info"),
)

FRD_STRUCTURE = """Please generate a complete, professional FRD following this exact structure:

**Functional Requirements Document**

**1. Overview**
Summarize the product's purpose, scope, and background.

**2. Stakeholders**
List key roles involved in the product and their responsibilities.

**3. Functional Requirements**
Break down each feature with use cases and expected behavior.

**4. User Flows and User Personas**
Describe the user personas and how user personas interact with the product.

**5. Non-Functional Requirements**
Include performance, scalability, security, compliance, etc.

**6. Constraints & Assumptions**
Mention any limitations, dependencies, or external factors.

**7. Acceptance Criteria**
Define conditions under which each feature is considered complete.

**8. Appendix**
Include glossary, references, or additional notes.

Make it professional, detailed, and tailored for product managers. Use bullet points, clear headings, and industry best practices. If any information is missing, intelligently infer based on common industry practices."""


def format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        joined = ", ".join(str(v) for v in value)
        return joined or NOT_SPECIFIED
    if value is None:
        return NOT_SPECIFIED
    text = str(value)
    return text if text.strip() else NOT_SPECIFIED


def build_frd_prompt(record: Mapping[str, Any]) -> str:
    lines = [f"{label}: {format_value(record.get(field))}" for label, field in PROMPT_FIELDS]
    return (
        "Generate a comprehensive Functional Requirements Document (FRD) based on the "
        "following product information:\n\n"
        + "\n".join(lines)
        + "\n\n"
        + FRD_STRUCTURE
    )


__all__ = ["NOT_SPECIFIED", "PROMPT_FIELDS", "format_value", "build_frd_prompt"]
