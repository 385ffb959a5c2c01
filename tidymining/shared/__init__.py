# Import key utilities so they are accessible at package level
from .errors import (
    TidyMiningError,
    MissingReferenceDataError,
    MalformedConfigurationError,
    PipelineStageError,
)
from .io_utils import safe_filename, book_path, parse_book_filename
from .resources import ensure_nltk_resource

# Define what gets exported when `from package import *` is used
__all__ = [
    "TidyMiningError",
    "MissingReferenceDataError",
    "MalformedConfigurationError",
    "PipelineStageError",
    "safe_filename",
    "book_path",
    "parse_book_filename",
    "ensure_nltk_resource",
]
