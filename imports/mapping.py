"""
Spreadsheet column mapping for bulk asset import.

Suggests which asset field a CSV column holds by fuzzy-matching its header
against field labels and keys, parses CSV text, and turns parsed rows into
field dictionaries ready for ImportService.
"""
import csv
import io
import re
from collections import namedtuple
from typing import Dict, List, Optional, Tuple

AssetField = namedtuple('AssetField', ['key', 'label', 'required'])

ASSET_FIELDS = [
    AssetField('asset_tag', 'Asset Tag', True),
    AssetField('name', 'Name', True),
    AssetField('description', 'Description', False),
    AssetField('manufacturer', 'Manufacturer', False),
    AssetField('model', 'Model', False),
    AssetField('serial_number', 'Serial Number', False),
    AssetField('purchase_date', 'Purchase Date', False),
    AssetField('purchase_cost', 'Purchase Cost', False),
    AssetField('warranty_expiry', 'Warranty Expiry', False),
    AssetField('location', 'Location', False),
    AssetField('status', 'Status', False),
    AssetField('notes', 'Notes', False),
]

FIELD_KEYS = [field.key for field in ASSET_FIELDS]
REQUIRED_FIELDS = [field.key for field in ASSET_FIELDS if field.required]

SIMILARITY_THRESHOLD = 0.4

_SEPARATORS = re.compile(r'[_\-\s]')


def _normalize(value: str) -> str:
    return _SEPARATORS.sub('', (value or '').lower())


def calculate_similarity(first: str, second: str) -> float:
    """
    Similarity of two header-like strings in [0, 1].

    Case, underscores, hyphens and whitespace are ignored. Identical strings
    score 1.0, containment either way 0.8; otherwise the share of the shorter
    string's characters found in the longer one, over the longer length.
    """
    s1 = _normalize(first)
    s2 = _normalize(second)

    if s1 == s2:
        return 1.0 if s1 else 0.0
    if not s1 or not s2:
        return 0.0
    if s1 in s2 or s2 in s1:
        return 0.8

    shorter, longer = (s1, s2) if len(s1) < len(s2) else (s2, s1)
    matches = sum(1 for char in shorter if char in longer)
    return matches / len(longer)


def suggest_mapping(header: str) -> Dict[str, object]:
    """Best matching asset field for a column header: {'field', 'confidence'}"""
    best_field = ''
    best_confidence = 0.0

    for field in ASSET_FIELDS:
        similarity = max(
            calculate_similarity(header, field.label),
            calculate_similarity(header, field.key),
        )
        if similarity > best_confidence:
            best_field, best_confidence = field.key, similarity

    if best_confidence < SIMILARITY_THRESHOLD:
        return {'field': '', 'confidence': 0.0}
    return {'field': best_field, 'confidence': round(best_confidence, 2)}


def suggest_mappings(headers: List[str]) -> Tuple[Dict[str, str], Dict[str, Dict[str, object]]]:
    """Suggestions for every header, plus the header -> field map of the confident ones"""
    suggestions = {header: suggest_mapping(header) for header in headers}
    mappings = {
        header: suggestion['field']
        for header, suggestion in suggestions.items()
        if suggestion['field']
    }
    return mappings, suggestions


def parse_csv(text: str) -> Tuple[List[str], List[List[str]]]:
    """
    Parse CSV text into (headers, rows).

    Blank lines are dropped, cells are trimmed and double quotes group
    commas. Returns ([], []) for empty input.
    """
    if text.startswith('\ufeff'):
        text = text[1:]

    reader = csv.reader(io.StringIO(text))
    lines = [
        [cell.strip() for cell in line]
        for line in reader
        if any(cell.strip() for cell in line)
    ]
    if not lines:
        return [], []

    headers = lines[0]
    return headers, lines[1:]


def apply_mappings(headers: List[str], rows: List[List[str]],
                   mappings: Dict[str, Optional[str]]) -> List[Dict[str, str]]:
    """Rows keyed by target asset field, for mapped columns only"""
    columns = [
        (index, mappings[header])
        for index, header in enumerate(headers)
        if mappings.get(header) in FIELD_KEYS
    ]

    mapped_rows = []
    for row in rows:
        mapped = {}
        for index, field in columns:
            mapped[field] = row[index] if index < len(row) else ''
        mapped_rows.append(mapped)
    return mapped_rows
