"""Client response models for the knowledge base API client.

Re-exports the models the API layer already defines so client users can
import everything from one place.
"""

from api.models import ErrorResponse, FileContentResponse, FileOperationResponse
from models.filesystem import DirectoryEntry

__all__ = [
    "DirectoryEntry",
    "ErrorResponse",
    "FileContentResponse",
    "FileOperationResponse",
]
