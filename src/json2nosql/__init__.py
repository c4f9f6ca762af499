"""Generate NoSQL insertion code and index suggestions from JSON documents."""

__version__ = "0.1.0"

from json2nosql.generator import generate, generate_artifact
from json2nosql.indexes.advisor import IndexAdvice, advise_indexes
from json2nosql.models.options import Backend, GenerationOptions, Structure
from json2nosql.parsing import DocumentParseError, load_document, read_document

__all__ = [
    "__version__",
    "Backend",
    "DocumentParseError",
    "GenerationOptions",
    "IndexAdvice",
    "Structure",
    "advise_indexes",
    "generate",
    "generate_artifact",
    "load_document",
    "read_document",
]
