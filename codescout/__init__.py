"""CodeScout: lint, security-pattern and AI review of code snippets and GitHub repositories."""

__version__ = "0.1.0"
