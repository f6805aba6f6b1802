"""CLI entry point for letsmcp: HTTP façade, MCP stdio server and AI helpers."""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from src.ai.providers import available_providers, create_provider
from src.ai.service import AIService, describe_providers
from src.core.config import Settings
from src.core.errors import AllProvidersFailedError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="letsmcp - MCP tool server and REST API with multi-provider AI fallback",
    )
    # Shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: read environment / .env)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- serve subcommand (default) ---
    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Run the HTTP REST API"
    )
    serve_parser.add_argument("--host", default=None, help="Bind host (default: HOST or localhost)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: PORT or 3000)")

    # --- mcp subcommand ---
    subparsers.add_parser(
        "mcp", parents=[common], help="Run the MCP server on stdio"
    )

    # --- generate subcommand ---
    generate_parser = subparsers.add_parser(
        "generate", parents=[common], help="Send one prompt through the provider fallback chain"
    )
    generate_parser.add_argument("prompt", help="Prompt text")
    generate_parser.add_argument(
        "--provider",
        choices=["groq", "claude", "gemini"],
        help="Preferred provider (tried first)",
    )

    # --- status subcommand ---
    subparsers.add_parser(
        "status", parents=[common], help="Show configured AI providers"
    )

    args = parser.parse_args(argv)

    # Default to serve when no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve", *(argv if argv is not None else sys.argv[1:])])

    return args


def setup_logging(verbose: bool) -> None:
    # Handlers write to stderr; in mcp mode stdout is the protocol channel.
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def load_settings(config_path: str | None) -> Settings:
    if config_path:
        return Settings.from_yaml(config_path)
    load_dotenv()
    return Settings.from_env()


def cmd_serve(args: argparse.Namespace, settings: Settings, service: AIService) -> None:
    """Handle serve subcommand."""
    import uvicorn

    from src.api.app import create_app

    host = args.host or settings.server.host
    port = args.port or settings.server.port

    app = create_app(service, settings)
    print(f"HTTP Server running at http://{host}:{port}", file=sys.stderr)
    print(f"Health check: http://{host}:{port}/health", file=sys.stderr)
    print(f"API endpoints: http://{host}:{port}/api/*", file=sys.stderr)
    uvicorn.run(app, host=host, port=port, log_level="debug" if args.verbose else "info")


def cmd_mcp(settings: Settings, service: AIService) -> None:
    """Handle mcp subcommand."""
    from src.server.mcp_server import build_mcp_server

    server = build_mcp_server(service, settings)
    print("MCP Server ready on stdio transport", file=sys.stderr)
    server.run()


def cmd_generate(args: argparse.Namespace, service: AIService) -> None:
    """Handle generate subcommand."""
    result = asyncio.run(service.generate_text(args.prompt, args.provider))
    print(result.data)
    print(f"\n(provider: {result.provider})", file=sys.stderr)


def cmd_status(service: AIService) -> None:
    """Handle status subcommand."""
    lines = list(describe_providers(service))
    if not lines:
        env_vars = [create_provider(name, "").env_var for name in available_providers()]
        print(f"No AI providers configured. Set one of: {', '.join(env_vars)}")
        return
    print(f"Default provider: {service.default_provider}")
    print("Trial order:")
    for line in lines:
        print(f"  {line}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    service = AIService(settings.ai)

    if args.command == "mcp":
        cmd_mcp(settings, service)
    elif args.command == "generate":
        try:
            cmd_generate(args, service)
        except AllProvidersFailedError as e:
            print(f"Error: All providers failed:\n{e}" if str(e) else
                  "Error: No AI providers configured", file=sys.stderr)
            sys.exit(1)
    elif args.command == "status":
        cmd_status(service)
    else:
        cmd_serve(args, settings, service)


if __name__ == "__main__":
    main()
