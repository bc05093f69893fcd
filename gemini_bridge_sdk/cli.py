"""CLI entry point for the Gemini bridge SDK."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config.settings import load_settings
from .errors import TransportError
from .models.events import EventType
from .transports.registry import create_transport


def _print_fragment(payload: dict) -> None:
    for part in payload.get("modelTurn", {}).get("parts", []):
        print(part.get("text", ""), end="", flush=True)


async def chat(prompt: str, model: Optional[str] = None, system: Optional[str] = None,
               mode: Optional[str] = None, api_key: Optional[str] = None) -> int:
    """Send one prompt and print the streamed reply."""
    settings = load_settings(api_mode=mode, model=model, system_instruction=system, api_key=api_key)

    try:
        transport = create_transport(settings)
    except TransportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    turn_done = asyncio.Event()
    errors: List[BaseException] = []

    def on_error(error: BaseException) -> None:
        errors.append(error)
        turn_done.set()

    transport.on(EventType.CONTENT, _print_fragment)
    transport.on(EventType.TURN_COMPLETE, lambda _: turn_done.set())
    transport.on(EventType.ERROR, on_error)

    try:
        await transport.connect(settings.live_config())
    except (TransportError, ConnectionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        await transport.send(prompt)
        await turn_done.wait()
    finally:
        await transport.disconnect()

    print()
    if errors:
        print(f"Error: {errors[0]}", file=sys.stderr)
        return 1
    return 0


async def check(mode: Optional[str] = None, api_key: Optional[str] = None) -> int:
    """Check that the API key is accepted."""
    settings = load_settings(api_mode=mode, api_key=api_key)

    try:
        transport = create_transport(settings)
        await transport.connect(settings.live_config())
    except (TransportError, ConnectionError) as e:
        print(f"✗ {e}")
        return 1

    await transport.disconnect()
    print(f"✓ Connected ({settings.api_mode}, {settings.model})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Gemini bridge SDK CLI")
    parser.add_argument('--api-key', help='API key (defaults to GEMINI_API_KEY)')
    parser.add_argument('--mode', help='Transport: rest or websocket (defaults to GEMINI_API_MODE)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    chat_parser = subparsers.add_parser('chat', help='Send a prompt and stream the reply')
    chat_parser.add_argument('prompt', help='Text prompt')
    chat_parser.add_argument('--model', help='Model name (e.g., "models/gemini-flash-latest")')
    chat_parser.add_argument('--system', help='System instruction')

    subparsers.add_parser('check', help='Validate the API key')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == 'chat':
        return asyncio.run(chat(args.prompt, args.model, args.system, args.mode, args.api_key))
    elif args.command == 'check':
        return asyncio.run(check(args.mode, args.api_key))

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
