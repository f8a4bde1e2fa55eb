"""Fixed lint rule profile.

The profile is self-contained: the lint engine is never allowed to pick
up configuration from the caller's working tree, so the same input
always produces the same diagnostics.
"""

from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class LintProfile:
    """Rules and parser options handed to the lint engine."""

    rules: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    ecma_version: int = 2021
    source_type: str = "module"
    jsx: bool = True
    environments: tuple[str, ...] = ("browser", "node", "es6")
    # Shareable configs applied before ``rules``, by their eslintrc names
    extends: tuple[str, ...] = ()


DEFAULT_LINT_PROFILE = LintProfile(
    rules=MappingProxyType({
        "no-unused-vars": "warn",
        "no-console": "warn",
        "no-undef": "error",
        "no-cond-assign": "error",
        "no-unreachable": "warn",
        "no-compare-neg-zero": "error",
        "semi": ["error", "always"],
    }),
    extends=("eslint:recommended", "plugin:react/recommended"),
)


# Globals each environment predefines, so no-undef does not flag them.
ENVIRONMENT_GLOBALS: MappingProxyType = MappingProxyType({
    "browser": (
        "window", "document", "navigator", "location", "history", "localStorage",
        "sessionStorage", "fetch", "alert", "confirm", "console", "setTimeout",
        "clearTimeout", "setInterval", "clearInterval", "requestAnimationFrame",
        "XMLHttpRequest", "FormData", "URL", "URLSearchParams", "Event",
        "CustomEvent", "HTMLElement", "Element", "Node", "WebSocket", "Blob",
    ),
    "node": (
        "require", "module", "exports", "process", "__dirname", "__filename",
        "Buffer", "global", "console", "setImmediate", "clearImmediate",
        "setTimeout", "clearTimeout", "setInterval", "clearInterval",
    ),
    "es6": (
        "Promise", "Map", "Set", "WeakMap", "WeakSet", "Symbol", "Proxy",
        "Reflect", "ArrayBuffer", "Uint8Array", "Int32Array", "Float64Array",
        "DataView", "globalThis",
    ),
})


def globals_for(profile: LintProfile) -> dict[str, str]:
    """Readonly globals for every environment enabled in ``profile``."""
    names: dict[str, str] = {}
    for env in profile.environments:
        for name in ENVIRONMENT_GLOBALS.get(env, ()):
            names[name] = "readonly"
    return names
