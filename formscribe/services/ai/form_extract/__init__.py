"""Form field extraction from free text.

``extract_fields`` runs one stateless cycle (the HTTP endpoint uses it).
``FormSession`` keeps a form's fields across cycles, and the record helpers
map between nested records and field sets.
"""

from .contracts import ExtractionResult, FieldDescriptor, FieldSet
from .record import fields_from_record, record_from_fields
from .service import extract_fields
from .session import FormSession

__all__ = [
    "ExtractionResult",
    "FieldDescriptor",
    "FieldSet",
    "FormSession",
    "extract_fields",
    "fields_from_record",
    "record_from_fields",
]
