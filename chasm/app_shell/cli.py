import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from chasm.adapters.fs.filestore import LocalFileSystem
from chasm.adapters.github.transport import HttpxCommitTransport
from chasm.api.deps import publish_settings
from chasm.app_shell.config import AppConfig, configure_logging, load_config
from chasm.components.publish import PublishComponent, PublishDocumentInput
from chasm.components.render import render_document
from chasm.domain.entities import LocalLocation, PostRequest

logger = logging.getLogger("cli")


def load_post(path: Path) -> PostRequest:
    """Read a post request JSON file. Exits on unreadable or invalid input."""
    try:
        with open(path) as f:
            data = json.load(f)
        return PostRequest.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Cannot load post from {path}: {e}")
        sys.exit(1)


def handle_render(config: AppConfig, args: argparse.Namespace) -> None:
    post = load_post(Path(args.post))
    data = render_document(
        post.title, post.date, post.content, summary_marker=config.summary_marker
    )
    sys.stdout.write(data.decode("utf-8"))


def handle_publish(config: AppConfig, args: argparse.Namespace) -> None:
    post = load_post(Path(args.post))
    transport = HttpxCommitTransport(
        user_agent=config.user_agent, timeout=config.request_timeout_seconds
    )
    try:
        component = PublishComponent(
            transport=transport,
            filesystem=LocalFileSystem(),
            settings=publish_settings(config),
        )
        result = component.run_publish_document(PublishDocumentInput(request=post))
    finally:
        transport.close()

    if result.error is not None:
        logger.error(f"Publish failed [{result.error.code}]: {result.error.message}")
        sys.exit(1)

    if result.result is not None and result.result.public_url:
        print(f"Published: {result.result.public_url}")
    elif isinstance(post.location, LocalLocation) and result.logical_path:
        print(f"Published: {Path(post.location.path) / result.logical_path}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Chasm publishing CLI")
    parser.add_argument("--config", help="Path to YAML config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # render
    render_parser = subparsers.add_parser("render", help="Print the rendered markdown of a post")
    render_parser.add_argument("post", help="Path to post request JSON")

    # publish
    publish_parser = subparsers.add_parser("publish", help="Publish a post to its destination")
    publish_parser.add_argument("post", help="Path to post request JSON")

    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ValueError as e:
        print(f"CRITICAL: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.log_level)

    if args.command == "render":
        handle_render(config, args)
    elif args.command == "publish":
        handle_publish(config, args)


if __name__ == "__main__":
    main()
