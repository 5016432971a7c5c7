"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides graph-file loading and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from graphctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from graphctl.config.settings import GraphctlSettings
    from graphctl.services.graph import GraphService
    from graphctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: GraphctlSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from graphctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from graphctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def load(self, path: str | Path) -> GraphService:
        """Load a graph file into a GraphService using the configured engine.

        A file that cannot be loaded is emitted as a ``load`` failure,
        which exits with code 1.
        """
        from graphctl.domain.errors import GraphError
        from graphctl.engine.interop import read_graph
        from graphctl.services.graph import GraphService
        from graphctl.services.result import ServiceError, ServiceResult

        engine = self.settings.engine
        try:
            manager = read_graph(
                path,
                engine.graph_type,
                component_traversal=engine.component_traversal,
            )
        except GraphError as exc:
            self.emit(
                ServiceResult(
                    ok=False,
                    op="load",
                    error=ServiceError(
                        code=exc.code,
                        message=str(exc),
                        detail={"path": str(path)},
                    ),
                )
            )
            raise  # unreachable: emit() exits on failure
        return GraphService(manager)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
