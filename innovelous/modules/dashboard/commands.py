"""
Maintenance CLI
===============

    flask cleanup-logs --days 30
"""

import click
from . import dashboard_bp
from ...core.logging_service import LoggingService


@dashboard_bp.cli.command('cleanup-logs')
@click.option('--days', default=30, show_default=True, help='Keep entries newer than this many days')
def cleanup_logs(days):
    """Delete old entries from the local activity log"""
    deleted = LoggingService.cleanup_old_logs(days_to_keep=days)
    click.echo(f"Removed {deleted} log entries older than {days} days")
