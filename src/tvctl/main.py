import argparse
import threading
import signal
import sys
import logging
import os

from tvctl.commands.dispatcher import Dispatcher
from tvctl.commands.key_table import load_config
from tvctl.commands.worker import CommandWorker
from tvctl.core.config import daemon_config
from tvctl.core.errors import TvctlError
from tvctl.core.logging import setup_logging
from tvctl.core.readiness import notify_ready
from tvctl.hardware.key_injector import ActionInvoker, KeyInjector
from tvctl.hardware.serial_port import SerialPort

logger = logging.getLogger(__name__)


def install_signal_handlers(shutdown: threading.Event) -> None:
    """Route SIGINT/SIGTERM to the shutdown event."""
    def signal_handler(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
        shutdown.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def run(debug: bool = False, invoker: ActionInvoker | None = None) -> int:
    """
    Start the daemon and block until a termination signal or a fatal error.

    Args:
        debug: Print received codes instead of sending shortcuts
        invoker: Shortcut sender, xdotool when omitted

    Returns:
        Process exit status
    """
    logger.info("=== Starting tvctl ===")
    logger.info(f"Process ID: {os.getpid()=}")
    logger.info(f"Configuration: {debug=}, config_path={str(daemon_config.config_path)!r}")

    status = 0
    port: SerialPort | None = None
    shutdown = threading.Event()
    install_signal_handlers(shutdown)

    try:
        device_path, table = load_config(daemon_config.config_path)
        port = SerialPort(device_path)
        port.open()

        notify_ready()

        dispatcher = Dispatcher(table, invoker or KeyInjector())
        worker = CommandWorker(port, dispatcher, shutdown=shutdown)
        worker_thread = threading.Thread(
            target=worker.run,
            args=(debug,),
            name="tvctl-worker",
            daemon=True
        )
        worker_thread.start()
        logger.info(f"Worker started in {'debug' if debug else 'live'} mode")

        shutdown.wait()
        worker.stop()
        if worker.error is not None:
            raise worker.error
        logger.info("Shutdown signal received, terminating application...")

    except TvctlError as e:
        logger.error(f"FATAL: {e}")
        status = 1

    except Exception as e:
        logger.error(f"FATAL: unexpected {type(e).__name__}: {e}")
        status = 1

    finally:
        if port is not None:
            try:
                port.close()
            except TvctlError as e:
                logger.error(f"FATAL: {e}")
                status = 1

    return status


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI command"""
    parser = argparse.ArgumentParser(
        prog="tvctl",
        description="Receive IR remote codes over a serial port and emulate keyboard shortcuts."
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode.")
    args = parser.parse_args(argv)

    setup_logging()
    sys.exit(run(args.debug))


if __name__ == "__main__":
    main()
