"""Commands module for WorkflowLint CLI."""
