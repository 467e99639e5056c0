from __future__ import annotations

import logging
import sys

from deployment_inspector.cli.handlers import handle_list, handle_run_job
from deployment_inspector.cli.parser import build_parser
from deployment_inspector.errors import (
    ClusterQueryError,
    ConfigValidationError,
    DeploymentInspectorError,
    QueryErrorKind,
    TolerationParseError,
)

_EXIT_GENERIC = 1
_EXIT_CONFIG = 2
_EXIT_NOT_FOUND = 3
_EXIT_QUERY = 4


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        if args.command_name == "list":
            return handle_list(args)
        if args.command_name == "run-job":
            return handle_run_job(args)
    except (ConfigValidationError, TolerationParseError) as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_CONFIG
    except ClusterQueryError as exc:
        print(str(exc), file=sys.stderr)
        if exc.kind is QueryErrorKind.DEPLOYMENT_NOT_FOUND:
            return _EXIT_NOT_FOUND
        return _EXIT_QUERY
    except DeploymentInspectorError as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_GENERIC

    parser.error("unhandled command")
    return _EXIT_GENERIC


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
