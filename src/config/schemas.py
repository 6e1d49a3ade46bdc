"""
JSON Schemas for the remote validator responses.

Two schemas:
1. CSS_VALIDATOR_RESPONSE_SCHEMA  — jigsaw css-validator, ``output=json``
2. HTML_VALIDATOR_RESPONSE_SCHEMA — Nu HTML checker, ``out=json``

Only the fields the classifier and reporter read are required; anything else
the services add is accepted.
"""

# =============================================================================
# 1. CSS validator
# =============================================================================
_CSS_MESSAGE: dict = {
    "type": "object",
    "required": ["message"],
    "properties": {
        "line": {"type": ["integer", "string"]},
        "message": {"type": "string"},
        "type": {"type": "string"},
        "context": {"type": "string"},
    },
}

CSS_VALIDATOR_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "required": ["cssvalidation"],
    "properties": {
        "cssvalidation": {
            "type": "object",
            "required": ["validity"],
            "properties": {
                "validity": {"type": "boolean"},
                "errors": {"type": "array", "items": _CSS_MESSAGE},
                "warnings": {"type": "array", "items": _CSS_MESSAGE},
            },
        },
    },
}

# =============================================================================
# 2. HTML validator
# =============================================================================
HTML_VALIDATOR_RESPONSE_SCHEMA: dict = {
    "type": "object",
    "required": ["messages"],
    "properties": {
        "messages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "properties": {
                    "type": {
                        "type": "string",
                        "enum": ["info", "error", "non-document-error"],
                    },
                    "subType": {"type": "string"},
                    "message": {"type": "string"},
                    "lastLine": {"type": "integer"},
                },
            },
        },
    },
}
