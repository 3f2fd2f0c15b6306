class GradeEngineError(Exception):
    """Base class for grade engine errors."""


class GradeTableError(GradeEngineError):
    """Raised when a conversion table does not partition 0-100."""


class CourseNotGradedError(GradeEngineError):
    """Raised when a course without a final mark is finalized."""
