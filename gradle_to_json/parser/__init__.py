"""Build-script parser engine: text in, nested mapping out."""

from gradle_to_json.parser.block_parser import BlockParser
from gradle_to_json.parser.driver import parse_file, parse_stream, parse_text, read_script
from gradle_to_json.parser.models import RepositoryEntry
from gradle_to_json.parser.state import ScanState, Scanner
from gradle_to_json.parser.variables import VariableTable

__all__ = [
    "BlockParser",
    "RepositoryEntry",
    "ScanState",
    "Scanner",
    "VariableTable",
    "parse_file",
    "parse_stream",
    "parse_text",
    "read_script",
]
