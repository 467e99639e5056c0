from __future__ import annotations

import argparse

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deployment-inspector",
        description=(
            "Inspect Kubernetes deployments and run jobs on the nodes "
            "where their pods are running"
        ),
    )
    parser.add_argument("--config", default=None, help="Inspector TOML config")
    parser.add_argument("--kubeconfig", default=None, help="Path to a kubeconfig file")
    parser.add_argument("--log-level", default="WARNING", choices=_LOG_LEVELS)
    sub = parser.add_subparsers(dest="command_name", required=True)

    list_parser = sub.add_parser("list", help="List pods and nodes for a deployment")
    list_parser.add_argument("deployment")
    list_parser.add_argument("-n", "--namespace", default="default")

    run_parser = sub.add_parser(
        "run-job",
        help="Run a job on nodes where deployment pods are running",
    )
    run_parser.add_argument("deployment")
    run_parser.add_argument("job_name")
    run_parser.add_argument("-n", "--namespace", default="default")
    run_parser.add_argument(
        "-j",
        "--job-namespace",
        default=None,
        help="Namespace for the jobs (defaults to the deployment namespace)",
    )
    run_parser.add_argument("-i", "--image", default=None)
    run_parser.add_argument(
        "-c",
        "--command",
        default=None,
        help="Command to run in the job (comma-separated)",
    )
    run_parser.add_argument(
        "-t",
        "--tolerations",
        default="",
        help="Tolerations as JSON or 'key[=value]:Effect,...'",
    )

    return parser
