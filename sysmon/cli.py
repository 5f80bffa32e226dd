"""
Command-line interface for the system monitor.

Tokens are handed to :func:`sysmon.config.resolve_config` untouched so a
malformed or unknown argument never aborts start-up.
"""

from __future__ import annotations

import typer

from sysmon.config import DEFAULT_INTERVAL_SECONDS, DEFAULT_LOG_FILE, resolve_config
from sysmon.logging import configure_logging
from sysmon.monitor import SystemMonitor

HELP = f"""Sample host CPU and memory usage and append it to a log file.

\b
Options:
  -i, --interval SECONDS  Seconds between samples (default {DEFAULT_INTERVAL_SECONDS}).
  -f, --logfile PATH      Log file (default ./{DEFAULT_LOG_FILE}).
  -v, --verbose           Echo every record to the console.
"""

app = typer.Typer(add_completion=False)


@app.command(
    help=HELP,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
)
def run(ctx: typer.Context) -> None:
    """Resolve configuration and run the monitor until interrupted."""
    configure_logging(force=True)
    config = resolve_config(ctx.args)
    exit_code = SystemMonitor(config).run()
    raise typer.Exit(code=exit_code)


def main() -> None:
    """Invoke the Typer application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
