"""Constants and configuration values for CodeScout.

This module centralizes magic numbers and configuration values
that are used across the codebase for easier maintenance.
"""

import os

# =============================================================================
# Server
# =============================================================================

# MCP / HTTP server port
MCP_DEFAULT_PORT = int(os.environ.get("MCP_PORT", 3000))

# Structured per-file event log (JSON lines); disabled when unset
EVENT_LOG_FILE = os.environ.get("CODESCOUT_EVENT_LOG")

LOG_LEVEL = os.environ.get("CODESCOUT_LOG_LEVEL", "INFO")


# =============================================================================
# Timeouts (seconds)
# =============================================================================

# Default HTTP request timeout for the review model
DEFAULT_REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", 30))

LINT_TIMEOUT = int(os.environ.get("CODESCOUT_LINT_TIMEOUT", 60))

CLONE_TIMEOUT = int(os.environ.get("CODESCOUT_CLONE_TIMEOUT", 300))


# =============================================================================
# Repository Limits
# =============================================================================

# Concurrent per-file lint/scan tasks within one repository request
MAX_CONCURRENCY = int(os.environ.get("CODESCOUT_MAX_CONCURRENCY", 8))

# Maximum number of files collected from one repository
MAX_FILES = int(os.environ.get("CODESCOUT_MAX_FILES", 2000))

# Files larger than this are skipped during collection (1MB)
MAX_FILE_SIZE = int(os.environ.get("CODESCOUT_MAX_FILE_SIZE", 1024 * 1024))


# =============================================================================
# Lint Engine
# =============================================================================

# Whitespace-separated command prefix used to invoke ESLint
ESLINT_COMMAND = os.environ.get("CODESCOUT_ESLINT_BIN", "npx --no-install eslint").split()

# Extra module search path for the generated config (@eslint/js, eslint-plugin-react).
# The config lives in a scratch directory, so node cannot find them relative to it.
ESLINT_NODE_PATH = os.environ.get("CODESCOUT_ESLINT_NODE_PATH")


# =============================================================================
# Review Model
# =============================================================================

ADVISOR_MODEL = os.environ.get("ADVISOR_MODEL", "gpt-4o-mini")

ADVISOR_ANTHROPIC_MODEL = os.environ.get("ADVISOR_ANTHROPIC_MODEL", "claude-3-haiku-20240307")

ADVISOR_MAX_TOKENS = int(os.environ.get("ADVISOR_MAX_TOKENS", 500))

# Number of repository files (in collection order) sent for review
ADVISOR_SAMPLE_SIZE = 3

ADVISOR_SYSTEM_PROMPT = (
    "You are a code review assistant. Analyze the following code for quality, "
    "architecture, and best practices."
)
