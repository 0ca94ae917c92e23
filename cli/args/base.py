from __future__ import annotations

import argparse


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register the CLI flags of the prepare step.

    This includes:
    - project identity (key/name/version/organization)
    - local analysis settings (-d key=value, --settings-file)
    - server and working-directory overrides
    - logging verbosity
    """

    parser.add_argument(
        "--project-key",
        "-k",
        dest="project_key",
        help="Project key on the analysis server (required).",
    )
    parser.add_argument("--name", "-n", dest="project_name", help="Project display name.")
    parser.add_argument("--version", "-v", dest="project_version", help="Project version.")
    parser.add_argument(
        "--organization",
        "-o",
        dest="organization",
        help="Server organization (overrides SONAR_ORG). Enables organization-scoped profile lookup.",
    )

    parser.add_argument(
        "-d",
        "--property",
        dest="properties",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Local analysis setting. Repeatable; the last value for a key wins.",
    )
    parser.add_argument(
        "--settings-file",
        help="YAML analysis settings file with a top-level 'properties' mapping (overrides PREP_SETTINGS_FILE).",
    )

    parser.add_argument(
        "--host",
        help="Analysis server URL (overrides SONAR_HOST; default: http://localhost:9000).",
    )
    parser.add_argument(
        "--working-dir",
        help="Build working directory (overrides PREP_WORK_DIR; default: current directory).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging (or set SONAR_LOG_LEVEL).",
    )
