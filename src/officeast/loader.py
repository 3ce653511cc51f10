"""Load ParsedDocument JSON emitted by the office parser."""

from pathlib import Path

from officeast.models import ParsedDocument


def load_document(path: Path) -> ParsedDocument:
    """Validate a ParsedDocument from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the JSON is not a valid document tree.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    return ParsedDocument.model_validate_json(path.read_bytes())
