"""
Exceptions raised by poly-lexis
"""


class LexisError(Exception):
    """Base class for all poly-lexis errors"""


class ConfigurationError(LexisError, ValueError):
    """Invalid or incomplete configuration (paths, language codes, provider)"""


class TranslationFileError(LexisError):
    """A namespace file could not be parsed as a JSON object"""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class TreeCollisionError(LexisError, ValueError):
    """A key is used both as a string leaf and as a nested object"""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)


class TranslationError(LexisError):
    """A translation provider failed to translate a text"""
