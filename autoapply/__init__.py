"""AutoApply: job search, resume tailoring and application tracking."""

__version__ = "0.1.0"
