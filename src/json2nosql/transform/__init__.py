"""Document restructuring ahead of serialization."""

from json2nosql.transform.documents import (
    InvalidDocumentError,
    InvalidInputError,
    Reference,
    ShapedDocument,
    convert_date_strings,
    ensure_document_root,
)
from json2nosql.transform.flatten import flatten_document
from json2nosql.transform.references import extract_references
from json2nosql.transform.shaping import ShapePlan, shape_documents

__all__ = [
    "InvalidDocumentError",
    "InvalidInputError",
    "Reference",
    "ShapePlan",
    "ShapedDocument",
    "convert_date_strings",
    "ensure_document_root",
    "extract_references",
    "flatten_document",
    "shape_documents",
]
