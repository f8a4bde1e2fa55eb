"""ESLint command line client.

Stages the source and a generated flat config into the scratch directory
supplied by the caller and runs ``eslint --format json`` against them.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..constants import ESLINT_COMMAND, ESLINT_NODE_PATH, LINT_TIMEOUT
from ..core.exceptions import LintError
from ..lint_profile import LintProfile, globals_for
from ..models import Language
from ..providers.base import Linter
from ..scanners.language import LANGUAGE_EXTENSIONS, LINTABLE_LANGUAGES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "eslint.config.cjs"

# eslintrc "extends" name -> (npm module, attribute holding the flat config, overrides)
BASELINE_CONFIGS: dict[str, tuple[str, str, dict[str, Any]]] = {
    "eslint:recommended": ("@eslint/js", "configs.recommended", {}),
    "plugin:react/recommended": (
        "eslint-plugin-react",
        "configs.flat.recommended",
        {"files": ["**/*.jsx"], "settings": {"react": {"version": "detect"}}},
    ),
}


def profile_block(profile: LintProfile) -> dict[str, Any]:
    """The config object carrying the profile's own options and rules."""
    return {
        "files": [f"**/*{LANGUAGE_EXTENSIONS[language]}" for language in sorted(LINTABLE_LANGUAGES)],
        "languageOptions": {
            "ecmaVersion": profile.ecma_version,
            "sourceType": profile.source_type,
            "parserOptions": {"ecmaFeatures": {"jsx": profile.jsx}},
            "globals": globals_for(profile),
        },
        "rules": dict(profile.rules),
    }


def build_flat_config(profile: LintProfile) -> str:
    """Render ``profile`` as a CommonJS flat config module.

    Baselines named in ``profile.extends`` come first so the profile's own
    rules override them. Core baselines are required; a plugin baseline
    whose package is not installed is left out.

    Raises:
        ValueError: If ``profile.extends`` names an unknown baseline
    """
    imports: list[str] = []
    entries: list[str] = []

    for index, name in enumerate(profile.extends):
        try:
            module, attribute, overrides = BASELINE_CONFIGS[name]
        except KeyError:
            raise ValueError(f"Unknown lint baseline: {name}") from None

        var = f"baseline{index}"
        loader = f"require({json.dumps(module)}).{attribute}"
        entry = f"Object.assign({{}}, {var}, {json.dumps(overrides)})" if overrides else var

        if name.startswith("plugin:"):
            imports.append(
                f"let {var} = null;\n"
                f"try {{\n  {var} = {loader};\n}} catch (e) {{\n  {var} = null;\n}}"
            )
            entries.append(f"...({var} ? [{entry}] : [])")
        else:
            imports.append(f"const {var} = {loader};")
            entries.append(entry)

    entries.append(json.dumps(profile_block(profile), indent=2))

    header = "\n".join(imports) + "\n\n" if imports else ""
    return f"{header}module.exports = [\n" + ",\n".join(entries) + "\n];\n"


class ESLintLinter(Linter):
    """Linter backed by the ESLint CLI."""

    def __init__(
        self,
        command: list[str] | None = None,
        timeout: float = LINT_TIMEOUT,
        node_path: str | None = ESLINT_NODE_PATH,
    ) -> None:
        self.command = command or list(ESLINT_COMMAND)
        self.timeout = timeout
        self.node_path = node_path

    async def lint(
        self,
        content: str,
        language: Language,
        profile: LintProfile,
        workdir: Path,
    ) -> list[dict[str, Any]]:
        suffix = LANGUAGE_EXTENSIONS.get(language, ".js")
        source_path = workdir / f"source{suffix}"
        config_path = workdir / CONFIG_FILENAME

        source_path.write_text(content, encoding="utf-8")
        config_path.write_text(build_flat_config(profile), encoding="utf-8")

        cmd = [
            *self.command,
            "--config", str(config_path),
            "--format", "json",
            "--no-warn-ignored",
            str(source_path),
        ]

        env = None
        if self.node_path:
            env = {**os.environ, "NODE_PATH": self.node_path}

        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(workdir),
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise LintError(f"ESLint timed out after {self.timeout}s") from None

        # 0 = clean, 1 = problems found, anything else = engine failure
        if process.returncode not in (0, 1):
            error_msg = stderr.decode(errors="replace").strip()
            raise LintError(
                f"ESLint failed: {error_msg}",
                returncode=process.returncode,
                stderr=error_msg,
            )

        return parse_eslint_output(stdout.decode(errors="replace"))


def parse_eslint_output(output: str) -> list[dict[str, Any]]:
    """Extract messages from ESLint's JSON formatter output.

    A fatal message means the file could not be parsed at all; that is
    reported as a failure rather than as a diagnostic.

    Raises:
        LintError: If the output is not JSON or the file failed to parse
    """
    try:
        results = json.loads(output)
    except json.JSONDecodeError:
        raise LintError("Failed to parse ESLint output") from None

    if not isinstance(results, list):
        raise LintError("Unexpected ESLint output shape")

    messages: list[dict[str, Any]] = []
    for result in results:
        for message in result.get("messages", []):
            if message.get("fatal"):
                raise LintError(f"Parsing error: {message.get('message', 'unknown')}")
            messages.append(message)

    return messages
