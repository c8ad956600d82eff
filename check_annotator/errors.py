# errors.py - failures that stop an annotation run


class AnnotatorError(Exception):
    """Base class; main() turns any of these into a failed step."""


class ConfigError(AnnotatorError):
    pass


class ContextError(AnnotatorError):
    """The trigger context does not tell us which commit to look at."""


class ReportFormatError(AnnotatorError):
    pass


class ResolutionError(AnnotatorError):
    """No in-progress check run matched within the retry budget."""


class PublishError(AnnotatorError):
    pass
