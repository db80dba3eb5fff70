"""Exception types shared across ScholarScribe"""


class ScholarScribeError(Exception):
    """Base class for all application errors"""


class GenerationError(ScholarScribeError):
    """A call to the text-generation API failed"""

    def __init__(self, message: str, section_id: int = None):
        super().__init__(message)
        self.section_id = section_id


class ContentParseError(ScholarScribeError):
    """Stored or generated content could not be parsed"""


class DocumentStoreError(ScholarScribeError):
    """The remote document store rejected or failed a request"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class FormValidationError(ScholarScribeError):
    """The writing form is missing required values or has invalid ones"""
