"""mrproxy entry point.

Loads config, builds the GitLab adapter for the configured merge request
and serves the JSON endpoints. Usage: mrproxy [--config PATH] [--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from mrproxy.adapters import GitLabAdapter, ProjectInfo
from mrproxy.api import run_server
from mrproxy.config import AppConfig, load_config
from mrproxy.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="mrproxy",
        description="mrproxy - JSON endpoints for GitLab merge request assignees and comments",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def project_info(config: AppConfig) -> ProjectInfo:
    """Merge request coordinates from config; raises ValueError when unset."""
    if config.gitlab.project_id == "" or not config.gitlab.merge_request_iid:
        raise ValueError("gitlab.project_id and gitlab.merge_request_iid must be set")
    return ProjectInfo(
        project_id=config.gitlab.project_id,
        merge_request_iid=config.gitlab.merge_request_iid,
    )


def run(config: AppConfig) -> None:
    """Build the adapter and serve until interrupted."""
    setup_logging(config.logging)
    log = logging.getLogger("mrproxy.main")

    token = config.gitlab_token_resolved
    if not token:
        log.warning("No GitLab token configured; upstream calls will be unauthenticated")
    adapter = GitLabAdapter(token=token, api_url=config.gitlab.api_url, timeout=config.gitlab.timeout)
    run_server(config.server.host, config.server.port, adapter, project_info(config))


def main(argv: list[str] | None = None) -> int:
    """Entry point for mrproxy."""
    args = parse_args(argv)
    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("mrproxy.main").warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)

    if args.check:
        try:
            project = project_info(config)
        except ValueError as e:
            print(f"Config invalid: {e}", file=sys.stderr)
            return 1
        print("Config OK:", config.gitlab.api_url, project.project_id, project.merge_request_iid)
        return 0

    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.getLogger("mrproxy.main").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
