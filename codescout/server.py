import json
import logging
import sys
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field
from starlette.requests import Request
from starlette.responses import JSONResponse

from .clients import ESLintLinter, get_advisor
from .constants import EVENT_LOG_FILE, LOG_LEVEL, MCP_DEFAULT_PORT
from .core import (
    AnalysisOrchestrator,
    CodeScoutError,
    InvalidInputError,
    configure_review_logging,
)
from .providers import GitRepositorySource
from .scanners import LintAdapter, RepositoryFileCollector

# Configure logging to stderr to avoid interfering with JSON-RPC on stdout
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("codescout")

# Initialize FastMCP server
mcp: FastMCP = FastMCP("codescout-mcp")

# Initialized lazily so importing the module never touches git, eslint or the network
orchestrator: AnalysisOrchestrator | None = None


def _ensure_orchestrator() -> AnalysisOrchestrator:
    """Build the orchestrator and its collaborators on first use."""
    global orchestrator

    if orchestrator is None:
        orchestrator = AnalysisOrchestrator(
            lint_adapter=LintAdapter(ESLintLinter()),
            collector=RepositoryFileCollector(GitRepositorySource()),
            advisor=get_advisor(),
        )
        logger.info("Initialized analysis pipeline")
    return orchestrator


def set_orchestrator(instance: AnalysisOrchestrator | None) -> None:
    """Replace the pipeline used by the endpoints (None resets to default)."""
    global orchestrator
    orchestrator = instance


async def handle_review(body: Any, pipeline: AnalysisOrchestrator) -> tuple[int, dict[str, Any]]:
    """Run one review request.

    Args:
        body: Decoded JSON body, expected to be ``{"type", "content"}``
        pipeline: Orchestrator to run

    Returns:
        Tuple of (HTTP status, response payload)
    """
    subject = "request"
    try:
        if not isinstance(body, dict):
            raise InvalidInputError("Request body must be a JSON object")

        request_type = body.get("type")
        content = body.get("content")

        if not content or not isinstance(content, str):
            raise InvalidInputError("No content provided")

        if request_type == "code":
            subject = "code"
            report = await pipeline.analyze_snippet(content)
        elif request_type == "repo":
            subject = "repository"
            report = await pipeline.analyze_repository(content)
        else:
            raise InvalidInputError("Invalid request type. Must be 'code' or 'repo'.")

        return 200, report.to_wire()

    except CodeScoutError as e:
        if e.status_code >= 500:
            logger.error(f"Review request failed: {e}")
            return e.status_code, {"error": f"Error processing {subject}: {e}"}
        logger.info(f"Rejected review request ({e.status_code}): {e}")
        return e.status_code, {"error": str(e)}
    except Exception as e:
        logger.exception("Error processing request")
        return 500, {"error": f"Internal server error: {e}"}


@mcp.custom_route("/api/review", methods=["POST"])
async def review_endpoint(request: Request) -> JSONResponse:
    """HTTP endpoint used by the browser UI."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)

    status, payload = await handle_review(body, _ensure_orchestrator())
    return JSONResponse(payload, status_code=status)


@mcp.custom_route("/health", methods=["GET"])
async def health_endpoint(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@mcp.tool
async def review_code_snippet(
    code: Annotated[
        str,
        Field(description="Python or JavaScript/JSX source code to review"),
    ],
) -> str:
    """Review a single code snippet for lint problems and risky patterns.

    The snippet's language is guessed from its contents. Python and
    JavaScript/JSX are supported. Returns JSON with lintIssues,
    securityIssues and aiReview, or an error object."""
    status, payload = await handle_review({"type": "code", "content": code}, _ensure_orchestrator())
    if status != 200:
        payload = {**payload, "status": status}
    return json.dumps(payload, indent=2)


@mcp.tool
async def review_github_repository(
    repo_url: Annotated[
        str,
        Field(description="GitHub repository URL (e.g., 'https://github.com/owner/repo')"),
    ],
) -> str:
    """Review every JavaScript, TypeScript and Python file in a GitHub repository.

    Clones the repository, lints and scans each supported file, and
    returns JSON with per-file lintIssues and securityIssues plus an
    aiReview of the first few files, or an error object."""
    status, payload = await handle_review({"type": "repo", "content": repo_url}, _ensure_orchestrator())
    if status != 200:
        payload = {**payload, "status": status}
    return json.dumps(payload, indent=2)


def main() -> None:
    """Run the review server with HTTP streaming transport."""
    print("CodeScout Review Server v0.1.0 (HTTP Streaming)", file=sys.stderr)
    print("=" * 50, file=sys.stderr)

    if EVENT_LOG_FILE:
        configure_review_logging(log_file=EVENT_LOG_FILE, log_level=LOG_LEVEL)
        print(f"Writing review events to {EVENT_LOG_FILE}", file=sys.stderr)

    port = MCP_DEFAULT_PORT

    print(f"Starting HTTP streaming server on port {port}...", file=sys.stderr)
    print(f"Review endpoint: http://localhost:{port}/api/review", file=sys.stderr)
    print(f"MCP endpoint: http://localhost:{port}/mcp", file=sys.stderr)

    try:
        import asyncio
        asyncio.run(mcp.run_http_async(transport="streamable-http", host="0.0.0.0", port=port))
    except KeyboardInterrupt:
        print("\nShutting down...", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Server error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
