"""Completion backend registry with lazy loading.

Usage:
    from src.ai.providers import create_provider

    provider = create_provider("groq", api_key="gsk_...")
    text = await provider.complete("Say hi")
"""

from __future__ import annotations

import importlib

from src.ai.providers.base import AIProvider

__all__ = ["AIProvider", "available_providers", "create_provider"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "groq": ("src.ai.providers.groq", "GroqProvider"),
    "claude": ("src.ai.providers.claude", "ClaudeProvider"),
    "gemini": ("src.ai.providers.gemini", "GeminiProvider"),
}


def create_provider(name: str, api_key: str, model: str | None = None) -> AIProvider:
    """Instantiate a provider by name.

    Args:
        name: Provider identifier (groq, claude, gemini).
        api_key: Credential for the backend.
        model: Override the provider's default model. None uses default.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown AI provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(api_key, model)  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
