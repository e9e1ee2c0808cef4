from .narrative import describe, format_entry, format_rows, shows_matrix
from .latex import LatexDocument, texmatrix
from .text import TextSink, text_matrix
from .log import LoggingSink

__all__ = [
    "describe",
    "format_entry",
    "format_rows",
    "shows_matrix",
    "LatexDocument",
    "texmatrix",
    "TextSink",
    "text_matrix",
    "LoggingSink",
]
