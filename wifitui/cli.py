#!/usr/bin/env python3

import logging
import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.live import Live

from wifitui.app import App
from wifitui.config import CONFIG_FILE, Configuration, load_yaml
from wifitui.engine import keys
from wifitui.engine.bus import EventBus
from wifitui.engine.multiplexer import Multiplexer
from wifitui.engine.worker import Worker
from wifitui.exceptions import ConfigError, NetworkError
from wifitui.nmcli import adapter
from wifitui.ui.render import render
from wifitui.util import log, system

context_settings = dict(help_option_names=["-h", "--help"])
logger = logging.getLogger("wifitui")

# Threads are daemons; don't hang on exit behind a slow nmcli call
SHUTDOWN_TIMEOUT = 0.5


def interactive() -> bool:
    return sys.stdin.isatty()


def run(device: str, configuration: Configuration):
    """
    Drive the App until the user quits. This thread owns the App: it
    applies at most one event per frame and redraws at a fixed cadence
    whether or not anything arrived.
    """
    bus = EventBus()
    worker = Worker(bus)
    app = App(device=device, submit=worker.submit, refresh_ticks=configuration.refresh_ticks)

    fd = sys.stdin.fileno()
    console = Console()
    multiplexer = Multiplexer(
        bus=bus,
        keys=keys.TerminalKeySource(fd),
        tick_interval=configuration.tick_interval,
    )

    logger.info(f"starting on {device}")
    with keys.input_mode(fd):
        with Live(console=console, screen=True, auto_refresh=False) as live:
            worker.start()
            multiplexer.start()
            try:
                while app.running:
                    live.update(render(app, console.size.height), refresh=True)

                    event = bus.try_next()
                    if event is not None:
                        app.handle_event(event)

                    time.sleep(configuration.redraw_interval)
            finally:
                multiplexer.stop(timeout=SHUTDOWN_TIMEOUT)
                worker.stop(timeout=SHUTDOWN_TIMEOUT)
    logger.info("exiting")


@click.command(
    help="Find, join and manage WiFi networks with NetworkManager",
    context_settings=context_settings,
)
@click.option(
    "-i",
    "--interface",
    default=None,
    help="The wifi interface to manage (autodetected when omitted)",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    default=CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Specify an alternate configuration file",
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(interface: str | None, config_file: Path, debug: bool):
    try:
        configuration = load_yaml(input=config_file)
    except ConfigError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    configuration.debug = debug or configuration.debug
    log.configure(
        debug=configuration.debug,
        name="wifitui",
        logfile=system.get_cache_directory() / "wifi-tui.log",
    )
    logger.info(f"entering with config_file={config_file}")

    if not interactive():
        click.echo("wifi-tui needs an interactive terminal", err=True)
        sys.exit(1)

    device = interface or configuration.device
    if not device:
        try:
            device = adapter.detect_device()
        except NetworkError as e:
            logger.error(f"device detection failed: {e.message}")
            click.echo(e.message, err=True)
            sys.exit(1)

    run(device=device, configuration=configuration)


if __name__ == "__main__":
    main()
