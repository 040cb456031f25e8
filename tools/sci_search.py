"""
Academic literature search tool.

Same backend contract as the ESG search; filters are by journal or DOI and by
publication date.
"""

import logging
from typing import Any, Dict

from config.config import Settings
from models.schemas import ToolDescriptor
from tools.backend import post_search
from tools.clean_object import pick
from tools.validation import optional_number, optional_object, require_non_empty_string

logger = logging.getLogger(__name__)

SCI_SEARCH_PATH = "sci_search"
PAYLOAD_FIELDS = ("query", "topK", "extK", "filter", "dateFilter")

INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "minLength": 1,
            "description": "Requirements or questions from the user.",
        },
        "topK": {
            "type": "number",
            "default": 5,
            "description": "Number of top chunk results to return.",
        },
        "extK": {
            "type": "number",
            "default": 0,
            "description": "Number of additional chunks to include before and after each topK result.",
        },
        "filter": {
            "type": "object",
            "properties": {
                "journal": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by journal.",
                },
                "doi": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by DOI.",
                },
            },
            "description": (
                "DO NOT USE IT IF NOT EXPLICIT REQUESTED IN THE QUERY. Optional filter conditions "
                "for specific fields, as an object with optional arrays of values."
            ),
        },
        "dateFilter": {
            "type": "object",
            "properties": {
                "date": {
                    "type": "object",
                    "properties": {
                        "gte": {"type": "number"},
                        "lte": {"type": "number"},
                    },
                },
            },
            "description": (
                "DO NOT USE IT IF NOT EXPLICIT REQUESTED IN THE QUERY. Optional filter conditions "
                "for date ranges in UNIX timestamps."
            ),
        },
    },
    "required": ["query"],
}

SEARCH_SCI_TOOL = ToolDescriptor(
    name="Search_SCI_Tool",
    description="Perform search on academic database for precise and specialized information.",
    input_schema=INPUT_SCHEMA,
)


def validate_sci_arguments(arguments: Dict[str, Any]) -> None:
    require_non_empty_string(arguments, "query")
    optional_number(arguments, "topK")
    optional_number(arguments, "extK")
    optional_object(arguments, "filter")
    optional_object(arguments, "dateFilter")


def search_sci(settings: Settings, api_key: str, arguments: Dict[str, Any]) -> str:
    payload = pick(arguments, *PAYLOAD_FIELDS)
    logger.info(f"SCI search: query={payload['query'][:100]!r}")
    return post_search(settings, SCI_SEARCH_PATH, api_key, payload)
