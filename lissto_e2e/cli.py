# /*
# Copyright 2026 The Lissto Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""
cli.py - Operator CLI for the Lissto E2E suite.

Subcommands:
    preflight  Check CLI binary, cluster, contexts, and fixtures
    run        Run scenario groups (setup, blueprint, stack, image-update, cleanup)
    cleanup    Delete Stacks left in the e2e user's namespace

Examples:
    # Verify the environment
    lissto-e2e preflight

    # Run the whole suite
    lissto-e2e run

    # Run only the blueprint and stack groups, with a JUnit report
    lissto-e2e run -g blueprint -g stack --junit-xml results.xml

    # Remove leftover stacks
    lissto-e2e cleanup
"""

from __future__ import annotations

import logging
import sys

import typer

from lissto_e2e import console
from lissto_e2e.commands import cleanup_cmd, preflight_cmd, run_cmd

app = typer.Typer(
    help="Operator CLI for the Lissto E2E suite.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.command("preflight")(preflight_cmd.preflight)
app.command("run")(run_cmd.run)
app.command("cleanup")(cleanup_cmd.cleanup)


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
