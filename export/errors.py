# Failures reported to whoever triggered an export.


class ExportError(Exception):
    pass


class EmptyConversation(ExportError):
    def __init__(self, message: str = "No conversation content detected"):
        super().__init__(message)


class ConversionFailure(ExportError):
    pass
