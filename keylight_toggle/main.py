#!/usr/bin/env python3
"""
keylight-toggle entry point
Finds Elgato lights on the local network and toggles their power
"""

import os
import sys
import logging
from functools import partial
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .config import load_dotenv_file, load_settings
from .device_client import DeviceStateClient
from .discovery import discover_devices
from .exceptions import KeylightError
from .orchestrator import ToggleResult, run

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(log_level: Optional[str] = None):
    """Setup logging for the process (LOG_LEVEL from the environment by default)"""
    log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def print_summary(results: List[ToggleResult]):
    """Print a table of toggled devices"""
    if not results:
        console.print("[yellow]No Elgato lights found[/yellow]")
        return

    table = Table(title="Elgato lights", box=box.ROUNDED)
    table.add_column("Address", style="cyan")
    table.add_column("Power")
    table.add_column("Brightness", justify="right")
    table.add_column("Temperature", justify="right")
    table.add_column("Written")

    for result in results:
        light = result.state.lights[0]
        table.add_row(
            result.address,
            "[green]on[/green]" if light.power else "[dim]off[/dim]",
            str(light.brightness),
            str(light.color_temperature),
            "yes" if result.written else "[red]no[/red]"
        )

    console.print(table)


def main() -> int:
    load_dotenv_file()
    setup_logging()

    try:
        settings = load_settings()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        with DeviceStateClient(port=settings.port, timeout=settings.http_timeout) as client:
            results = run(settings.service_type, partial(discover_devices, settings=settings), client)
    except KeylightError as e:
        logger.error(str(e))
        return 1

    print_summary(results)
    return 0


if __name__ == '__main__':
    sys.exit(main())
