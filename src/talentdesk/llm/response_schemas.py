from __future__ import annotations

from typing import Any

BIAS_AUDIT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "biasScore": {
            "type": "integer",
            "description": (
                "A score from 1 (lowest risk, highly neutral) to 10 (highest risk, heavily biased) "
                "indicating the level of bias in the JD. Score should be based on the number and "
                "severity of biases found."
            ),
        },
        "riskLevel": {
            "type": "string",
            "description": (
                "The risk level, e.g., 'Low', 'Medium', or 'High', based on the score "
                "(1-3 Low, 4-7 Medium, 8-10 High)."
            ),
        },
        "suggestions": {
            "type": "array",
            "description": "A list of identified bias instances and recommended neutral replacements.",
            "items": {
                "type": "object",
                "properties": {
                    "biasedPhrase": {
                        "type": "string",
                        "description": "The original biased phrase found in the text.",
                    },
                    "neutralSuggestion": {
                        "type": "string",
                        "description": "The suggested neutral replacement phrase.",
                    },
                    "biasType": {
                        "type": "string",
                        "description": (
                            "The type of bias (e.g., 'Gendered Language', 'Age Bias', "
                            "'Competitive Tone', 'Intensity Jargon')."
                        ),
                    },
                },
                "required": ["biasedPhrase", "neutralSuggestion", "biasType"],
            },
        },
        "revisedJobDescription": {
            "type": "string",
            "description": "The complete, fully revised and neutral job description text based on all suggestions.",
        },
    },
    "required": ["biasScore", "riskLevel", "suggestions", "revisedJobDescription"],
}

CANDIDATE_MATCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "recommendations": {
            "type": "array",
            "description": "A list of recommended candidates ranked by match score.",
            "items": {
                "type": "object",
                "properties": {
                    "candidateId": {
                        "type": "number",
                        "description": "The unique ID of the candidate from the input list.",
                    },
                    "matchScore": {
                        "type": "integer",
                        "description": (
                            "A score from 1 to 100 indicating how well the candidate's profile "
                            "matches the job description."
                        ),
                    },
                    "justification": {
                        "type": "string",
                        "description": (
                            "A brief, 1-2 sentence justification for the match score, highlighting "
                            "key alignments or gaps."
                        ),
                    },
                },
                "required": ["candidateId", "matchScore", "justification"],
            },
        },
    },
    "required": ["recommendations"],
}


def normalize_schema(schema: Any) -> Any:
    """Lower-case Gemini-style type names (``OBJECT``, ``STRING``) recursively."""
    if isinstance(schema, list):
        return [normalize_schema(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    normalized: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            normalized[key] = value.lower()
        else:
            normalized[key] = normalize_schema(value)
    return normalized


def missing_required(schema: Any, value: Any, path: str = "$") -> list[str]:
    """List the paths of required properties absent from ``value``."""
    if not isinstance(schema, dict):
        return []

    schema_type = str(schema.get("type", "")).lower()
    missing: list[str] = []

    if schema_type == "object" or "properties" in schema:
        if not isinstance(value, dict):
            return [path]
        for key in schema.get("required", []):
            if key not in value or value[key] is None:
                missing.append(f"{path}.{key}")
        for key, sub_schema in (schema.get("properties") or {}).items():
            if key in value and value[key] is not None:
                missing.extend(missing_required(sub_schema, value[key], f"{path}.{key}"))
    elif schema_type == "array":
        if not isinstance(value, list):
            return [path]
        for index, item in enumerate(value):
            missing.extend(missing_required(schema.get("items"), item, f"{path}[{index}]"))

    return missing
