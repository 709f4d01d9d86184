"""Small shared utilities: wire accessors and output parsers."""

from .parsers import clean_json_markers, code_block, json_parser, markdown, xml
from .wire import dicts, dig, dig_list, dig_str, join_url, to_datetime

__all__ = [
    "clean_json_markers",
    "code_block",
    "json_parser",
    "markdown",
    "xml",
    "dicts",
    "dig",
    "dig_list",
    "dig_str",
    "join_url",
    "to_datetime",
]
