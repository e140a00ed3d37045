"""Command line entry point for KubeDeck."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from kubedeck.constants import APP_TITLE, NAMESPACE_DEFAULT
from kubedeck.controllers.cluster.kubectl_client import KubectlClient
from kubedeck.models.state.app_settings import AppSettings, ConfigLoadError
from kubedeck.models.state.config_manager import ConfigManager

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubedeck",
        description=f"{APP_TITLE} - terminal dashboard for the pods of one namespace",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        help="Namespace to watch (default: kube context namespace, then 'default')",
    )
    parser.add_argument("--context", help="kubectl context to use")
    parser.add_argument("--config", type=Path, help="Settings file (YAML)")
    parser.add_argument("--log-file", help="Diagnostic log file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Diagnostic log level",
    )
    return parser


def configure_logging(log_file: str, level: str) -> Path:
    """Send log records to ``log_file``; the terminal belongs to the TUI."""
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    return log_path


def resolve_namespace(
    namespace: str | None, settings: AppSettings, context: str | None = None
) -> str:
    """Flag, then settings, then the kube context namespace, then ``default``."""
    if namespace:
        return namespace
    if settings.namespace:
        return settings.namespace
    resolved = KubectlClient.resolve_current_namespace(
        context=context, kubectl_binary=settings.kubectl_binary
    )
    return resolved or NAMESPACE_DEFAULT


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    load_error: ConfigLoadError | None = None
    try:
        settings = ConfigManager.load(args.config)
    except ConfigLoadError as e:
        load_error = e
        settings = AppSettings()

    configure_logging(
        args.log_file or settings.log_file,
        args.log_level or settings.log_level,
    )
    if load_error is not None:
        logger.warning("Using default settings: %s", load_error)

    context = args.context or settings.context or None
    namespace = resolve_namespace(args.namespace, settings, context)

    from kubedeck.app import KubeDeckApp

    try:
        app = KubeDeckApp(
            namespace=namespace,
            context=context,
            config_path=args.config,
            settings=settings,
        )
        app.run()
    except Exception:
        logger.exception("%s crashed", APP_TITLE)
        raise


if __name__ == "__main__":
    main()
