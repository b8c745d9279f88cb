from .sequences import format_document_number, next_document_number, next_sequence_value

__all__ = [
    "next_sequence_value",
    "next_document_number",
    "format_document_number",
]
