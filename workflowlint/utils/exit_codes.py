"""Centralized exit codes for the WorkflowLint CLI."""


class ExitCodes:
    """Standard exit codes for WorkflowLint CLI commands."""

    SUCCESS = 0

    HIGH_SEVERITY = 1
    CRITICAL_SEVERITY = 2

    TASK_INCOMPLETE = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - no high or critical findings",
            cls.HIGH_SEVERITY: "High severity findings detected (or score below --fail-under)",
            cls.CRITICAL_SEVERITY: "Critical security findings detected",
            cls.TASK_INCOMPLETE: "Workflow could not be analyzed (missing or oversized input)",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")

    @classmethod
    def from_summary(cls, summary: dict[str, int]) -> int:
        """Pick the exit code matching the worst severity in a lint summary."""
        if summary.get("critical", 0) > 0:
            return cls.CRITICAL_SEVERITY
        if summary.get("high", 0) > 0:
            return cls.HIGH_SEVERITY
        return cls.SUCCESS
