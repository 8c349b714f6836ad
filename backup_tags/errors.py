"""
Errors raised by the tag store. str(err) is the message shown to callers.
"""


class TagsError(Exception):
    """Base class for tag store errors."""


class FileOpError(TagsError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"File operation error: {cause}")


class JsonError(TagsError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"JSON error: {cause}")


class TagNotFoundError(TagsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag not found: {name}")


class InvalidColorError(TagsError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid color format: {value}")


class DuplicateTagError(TagsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag already exists: {name}")
