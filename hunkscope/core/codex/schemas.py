# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


"""
JSON schemas passed to `codex exec --output-schema`.

They describe the shape the agent must write; hunkscope still reconciles
the content afterwards since a schema cannot express id validity or
coverage.
"""

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

INTENT_GROUP_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string"},
        "category": {
            "type": "string",
            "enum": [
                "schema",
                "logic",
                "api",
                "ui",
                "test",
                "config",
                "docs",
                "refactor",
                "other",
            ],
        },
        "rationale": {"type": "string"},
        "risk": {"type": "string", "enum": ["low", "medium", "high"]},
        "hunkIds": _STRING_LIST,
        "reviewerChecklist": _STRING_LIST,
        "suggestedTests": _STRING_LIST,
    },
    "required": [
        "id",
        "title",
        "category",
        "rationale",
        "risk",
        "hunkIds",
        "reviewerChecklist",
        "suggestedTests",
    ],
    "additionalProperties": False,
}

ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "version": {"type": "integer", "enum": [1]},
        "overallSummary": {"type": "string"},
        "groups": {"type": "array", "items": INTENT_GROUP_SCHEMA},
        "unassignedHunkIds": _STRING_LIST,
        "nonSubstantiveHunkIds": _STRING_LIST,
        "questions": _STRING_LIST,
    },
    "required": [
        "version",
        "overallSummary",
        "groups",
        "unassignedHunkIds",
        "nonSubstantiveHunkIds",
        "questions",
    ],
    "additionalProperties": False,
}

REFINE_SCHEMA = {
    "type": "object",
    "properties": {
        "groups": {"type": "array", "items": INTENT_GROUP_SCHEMA},
    },
    "required": ["groups"],
    "additionalProperties": False,
}

SPLIT_SCHEMA = {
    "type": "object",
    "properties": {
        "splits": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "originalHunkId": {"type": "string"},
                    "subHunks": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "string"},
                                "title": {"type": "string"},
                                "startLineIndex": {"type": "integer"},
                                "endLineIndex": {"type": "integer"},
                            },
                            "required": [
                                "id",
                                "title",
                                "startLineIndex",
                                "endLineIndex",
                            ],
                            "additionalProperties": False,
                        },
                    },
                },
                "required": ["originalHunkId", "subHunks"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["splits"],
    "additionalProperties": False,
}
