class MarkupError(ValueError):
    """Raised when inline markup tags are not balanced."""

    pass


class LayoutError(ValueError):
    """Raised when text cannot be laid out in the requested geometry."""

    pass
