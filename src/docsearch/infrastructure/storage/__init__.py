"""File storage: upload layout, file system queries and path resolution."""

from docsearch.infrastructure.storage.local_file_system import LocalFileSystem
from docsearch.infrastructure.storage.path_resolver import PathResolver
from docsearch.infrastructure.storage.upload_storage import UploadStorage

__all__ = ["LocalFileSystem", "PathResolver", "UploadStorage"]
