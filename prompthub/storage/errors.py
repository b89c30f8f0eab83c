from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures."""


class StorageValidationError(StorageError):
    """Missing or invalid input, or a foreign key that does not resolve."""


class CategoryInUseError(StorageError):
    def __init__(self, category_id: str, prompt_count: int) -> None:
        super().__init__(f"Category {category_id} is referenced by {prompt_count} prompt(s).")
        self.category_id = category_id
        self.prompt_count = prompt_count


class StorageUnavailableError(StorageError):
    """The backing store could not be reached."""
