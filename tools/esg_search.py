"""
ESG database search tool.

Searches chunks of corporate ESG reports. Optional filters narrow the search by
record id or country and by publication date (UNIX timestamps).
"""

import logging
from typing import Any, Dict

from config.config import Settings
from models.schemas import ToolDescriptor
from tools.backend import post_search
from tools.clean_object import pick
from tools.validation import (
    optional_number,
    optional_object,
    optional_string,
    require_non_empty_string,
)

logger = logging.getLogger(__name__)

ESG_SEARCH_PATH = "esg_search"
PAYLOAD_FIELDS = ("query", "topK", "extK", "metaContains", "filter", "dateFilter")

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
        "metaContains": {
            "type": "string",
            "description": (
                "An optional keyword string used for fuzzy searching within document metadata, "
                "such as report titles, company names, or other metadata fields. DO NOT USE IT BY DEFAULT."
            ),
        },
        "filter": {
            "type": "object",
            "properties": {
                "rec_id": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by record ID.",
                },
                "country": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Filter by country.",
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
                "publication_date": {
                    "type": "object",
                    "properties": {
                        "gte": {
                            "type": "number",
                            "description": "Greater than or equal to date in UNIX timestamp",
                        },
                        "lte": {
                            "type": "number",
                            "description": "Less than or equal to date in UNIX timestamp",
                        },
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

SEARCH_ESG_TOOL = ToolDescriptor(
    name="Search_ESG_Tool",
    description="Perform search on ESG database.",
    input_schema=INPUT_SCHEMA,
)


def validate_esg_arguments(arguments: Dict[str, Any]) -> None:
    require_non_empty_string(arguments, "query")
    optional_number(arguments, "topK")
    optional_number(arguments, "extK")
    optional_string(arguments, "metaContains")
    optional_object(arguments, "filter")
    optional_object(arguments, "dateFilter")


def search_esg(settings: Settings, api_key: str, arguments: Dict[str, Any]) -> str:
    payload = pick(arguments, *PAYLOAD_FIELDS)
    logger.info(f"ESG search: query={payload['query'][:100]!r}")
    return post_search(settings, ESG_SEARCH_PATH, api_key, payload)
