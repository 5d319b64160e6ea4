#!/usr/bin/env python
"""
Entry point for the red/blue state COVID-19 analysis CLI.

"""
import logging
import click
from commondata import common_init

from cli import analysis


@click.group()
@click.pass_context
# Disable pylint warning as suggested by https://stackoverflow.com/a/49680253
def entry_point(ctx):  # pylint: disable=no-value-for-parameter
    """Entry point for the red/blue state COVID-19 analysis CLI.

    \b
    Environment variables:
      LOG_JSON            if set, logs are written as one JSON object per line
      SENTRY_DSN          if set, errors are reported to Sentry
      SENTRY_ENVIRONMENT  Sentry environment, "production" or "development"
    """
    common_init.configure_logging(command=ctx.invoked_subcommand)


entry_point.add_command(analysis.main)


# This code is executed when invoked as `python run.py ...`. The console script installed by
# setup.py calls `entry_point` directly.
if __name__ == "__main__":
    try:
        entry_point()  # pylint: disable=no-value-for-parameter
    except Exception:
        # According to https://github.com/getsentry/sentry-python/issues/480 Sentry is expected
        # to create an event when this is called.
        logging.exception("Exception reached __main__")
        raise
