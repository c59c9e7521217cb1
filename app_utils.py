import csv
import io
import re
import logging
from typing import List

from pydantic import ValidationError as SchemaValidationError

from errors import InputValidationError
from schemas import CTA

logger = logging.getLogger(__name__)

CTA_TEXT_COLUMN = "CTA Text"
INVALID_CTA_FILE = "Invalid CTA file."
INVALID_LIST_FILE = "Invalid list file."

def split_lines(text: str) -> List[str]:
    """Split a pasted list (one entry per line) into trimmed, non-empty entries"""
    if not text:
        return []
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]

def extract_lines_from_file(file_content: bytes) -> List[str]:
    """Extract entries from an uploaded one-per-line text file"""
    try:
        text = file_content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Error decoding list file: {e}")
        raise InputValidationError("List file must be UTF-8 encoded text", error=INVALID_LIST_FILE)

    entries = split_lines(text)
    logger.info(f"Extracted {len(entries)} entries from list file")
    return entries

def _parse_score(value: str):
    value = (value or "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return value

def extract_ctas_from_csv(file_content: bytes) -> List[CTA]:
    """Extract CTA rows from an uploaded CSV sheet with a 'CTA Text' column"""
    try:
        text = file_content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Error decoding CTA sheet: {e}")
        raise InputValidationError("CTA file must be UTF-8 encoded CSV", error=INVALID_CTA_FILE)

    reader = csv.DictReader(io.StringIO(text))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    if CTA_TEXT_COLUMN not in fieldnames:
        raise InputValidationError(f"CTA file must have a '{CTA_TEXT_COLUMN}' column", error=INVALID_CTA_FILE)
    reader.fieldnames = fieldnames

    ctas = []
    for row_number, row in enumerate(reader, start=2):
        cta_text = (row.get(CTA_TEXT_COLUMN) or "").strip()
        if not cta_text:
            continue

        record = {}
        for key, value in row.items():
            # Blank header columns and ragged rows come back with None keys
            if not key or key == CTA_TEXT_COLUMN:
                continue
            record[key] = _parse_score(value) if isinstance(value, str) else value
        record[CTA_TEXT_COLUMN] = cta_text

        try:
            ctas.append(CTA.model_validate(record))
        except SchemaValidationError as e:
            raise InputValidationError(f"Invalid CTA on row {row_number}: {e.errors()[0]['msg']}", error=INVALID_CTA_FILE)

    logger.info(f"Extracted {len(ctas)} CTAs from CSV")
    return ctas
