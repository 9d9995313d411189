"""Repository - file-backed ticket storage."""

from ticketr.repository.file_repository import FileRepository

__all__ = ["FileRepository"]
