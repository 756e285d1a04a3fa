class ExtractionError(Exception):
    """Base class for failures raised by county scripts and the workflow"""


class UnknownEnumValueError(ExtractionError):
    """A scraped value has no mapping in the target enumeration"""

    def __init__(self, value, path):
        self.value = value
        self.path = path
        super().__init__(f"Unknown enum value {value}. at {path}")

    def to_dict(self):
        return {
            "type": "error",
            "message": f"Unknown enum value {self.value}.",
            "path": self.path,
        }


class CountyNotFoundError(ExtractionError):
    """No county directory matches the requested jurisdiction"""


class SchemaValidationError(ExtractionError):
    """One or more data files do not match their schema"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"{len(errors)} schema validation error(s)")
