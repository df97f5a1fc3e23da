"""Schema management exports."""

from .schema_documents import SchemaError, load_schema_document, read_schema_document
from .schema_models import SchemaDocument

__all__ = [
    "SchemaDocument",
    "SchemaError",
    "load_schema_document",
    "read_schema_document",
]
