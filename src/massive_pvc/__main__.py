"""Entry point for massive-pvc."""

import argparse
import logging
import sys
from typing import Any

from pydantic import ValidationError

from massive_pvc import __version__
from massive_pvc.config import AuthMode, LogLevel, MassivePVCConfig


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the run."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="massive-pvc",
        description=(
            "Create a range of PVCs, mount them all in one pod, then delete "
            "the pod and the PVCs, pausing between steps"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Auth options
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="(optional) absolute path to the kubeconfig file (default: ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use",
    )
    parser.add_argument(
        "--auth-mode",
        choices=[m.value for m in AuthMode],
        default=None,
        help="Authentication mode (default: auto)",
    )

    # Range options
    parser.add_argument("--start", type=int, default=None, help="start index (default: 0)")
    parser.add_argument("--end", type=int, default=None, help="end index (default: 5)")

    # Object options
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace for the PVCs and the pod (default: default)",
    )
    parser.add_argument(
        "--size",
        default=None,
        help="Requested storage per PVC (default: 1Gi)",
    )
    parser.add_argument(
        "--image",
        default=None,
        help="Image of the pod holding the PVCs (default: ubuntu:latest)",
    )

    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Do not wait for the Return key between steps",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MassivePVCConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig
    if args.context:
        config_kwargs["kubeconfig_context"] = args.context
    if args.auth_mode:
        config_kwargs["auth_mode"] = AuthMode(args.auth_mode)
    if args.start is not None:
        config_kwargs["start"] = args.start
    if args.end is not None:
        config_kwargs["end"] = args.end
    if args.namespace:
        config_kwargs["namespace"] = args.namespace
    if args.size:
        config_kwargs["claim_size"] = args.size
    if args.image:
        config_kwargs["consumer_image"] = args.image
    if args.no_prompt:
        config_kwargs["interactive"] = False
    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return MassivePVCConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValidationError as e:
        setup_logging(LogLevel.ERROR)
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        return 1

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    try:
        warnings = config.validate_auth_config()
        for warning in warnings:
            logger.warning(warning)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    from massive_pvc.clients import get_k8s_client
    from massive_pvc.console import no_confirm, press_return_to_continue
    from massive_pvc.sequencer import Sequencer
    from massive_pvc.utils.errors import MassivePVCError, enhance_error

    k8s = get_k8s_client(config)
    sequencer = Sequencer.from_config(k8s, config)
    confirm = press_return_to_continue if config.interactive else no_confirm

    logger.debug(f"Using namespace {config.namespace}, {config.claim_count} claims")
    try:
        sequencer.run(config.start, config.end, confirm=confirm)
    except MassivePVCError as e:
        enhanced = enhance_error(str(e))
        logger.error(str(e))
        logger.debug(f"Error details: {enhanced.to_dict()}")
        logger.error(f"[{enhanced.error_code}] {enhanced.suggestion}")
        for command in enhanced.related_commands:
            logger.error(f"  try: {command}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted; created resources were left in place")
        return 130
    finally:
        k8s.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
