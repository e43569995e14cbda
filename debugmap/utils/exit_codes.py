"""Centralized exit codes for the dmap CLI."""


class ExitCodes:
    """Standard exit codes for dmap commands."""

    SUCCESS = 0

    NO_MATCH = 1

    TASK_INCOMPLETE = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success",
            cls.NO_MATCH: "Lookup produced no match",
            cls.TASK_INCOMPLETE: "Task could not be completed due to missing prerequisites",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
