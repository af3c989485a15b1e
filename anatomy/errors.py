"""Error taxonomy for anatomy loading and per-creature mutations."""


class AnatomyError(Exception):
    """Umbrella exception for the anatomy package."""


class NotFoundError(AnatomyError, KeyError):
    """Unknown anatomy id, creature id, injury id or part id."""

    def __str__(self):
        # KeyError.__str__ would quote the message
        return str(self.args[0]) if self.args else ""


class ValidationError(AnatomyError, ValueError):
    """Malformed anatomy template (missing field, no root, dangling parent...)."""

    def __init__(self, message: str, problems=None):
        super().__init__(message)
        self.problems = list(problems or [])


class InvalidPartError(AnatomyError, ValueError):
    """Damage or status targeted at a part not installed on the creature."""
