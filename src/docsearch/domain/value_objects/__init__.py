"""Domain value objects."""

from docsearch.domain.value_objects.file_location import FileLocation, FileMissing
from docsearch.domain.value_objects.sort_options import SortField, SortOrder
from docsearch.domain.value_objects.stored_filename import StoredFilename
from docsearch.domain.value_objects.suggest_field import SuggestField

__all__ = [
    "FileLocation",
    "FileMissing",
    "SortField",
    "SortOrder",
    "StoredFilename",
    "SuggestField",
]
