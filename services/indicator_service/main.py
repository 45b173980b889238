"""
Indicator Service - Command-line entry point

Usage:
    python -m services.indicator_service.main TCS INFY
    python -m services.indicator_service.main RELIANCE --interval 60

Each run (or each poll with --interval) goes through the refresher, so
snapshots younger than the indicator TTL are served from the cache and
older ones are recomputed from fresh bars. Snapshots print as JSON lines.
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from core.exceptions import InsufficientData
from factory.client_factory import create_indicator_refresher

logger = logging.getLogger(__name__)

_fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging() -> None:
    """Console at LOG_LEVEL plus a rotating error log in LOG_DIR"""
    settings = get_settings()
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(settings.LOG_LEVEL.upper())
    console.setFormatter(logging.Formatter(_fmt))

    error_file = RotatingFileHandler(
        log_dir / "indicator_service_errors.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    error_file.setLevel(logging.ERROR)
    error_file.setFormatter(logging.Formatter(_fmt))

    logging.basicConfig(level=settings.LOG_LEVEL.upper(), handlers=[console, error_file])


class IndicatorService:
    """
    Serve indicator snapshots for a fixed list of symbols

    Flow per cycle:
    1. Ask the refresher for each symbol's snapshot (cached or recomputed)
    2. Print it as one JSON line on stdout
    3. Log and skip symbols without data
    """

    def __init__(self, symbols: list[str], interval: float | None = None):
        self.symbols = symbols
        self.interval = interval
        self.running = False
        self.refresher = create_indicator_refresher()

    async def run_once(self) -> int:
        """
        Print one snapshot per symbol

        Returns:
            Number of symbols that produced a snapshot
        """
        served = 0
        for symbol in self.symbols:
            try:
                snapshot = await self.refresher.get_indicators(symbol)
            except InsufficientData as e:
                logger.warning(f"✗ {e}")
                continue
            except ValueError as e:
                logger.error(f"✗ Invalid request for {symbol!r}: {e}")
                continue

            print(json.dumps(snapshot.to_dict()), flush=True)
            served += 1

        return served

    async def start(self) -> int:
        """Connect, run one cycle or poll until stopped, then clean up"""
        self.running = True
        served = 0

        try:
            await self.refresher.cache.connect()
            logger.info(
                f"✓ Indicator Service started "
                f"(environment={get_settings().ENVIRONMENT}, symbols={', '.join(self.symbols)})"
            )

            while self.running:
                served = await self.run_once()
                if not self.interval:
                    break

                logger.info(f"Sleeping {self.interval:.1f}s until next refresh...")
                await asyncio.sleep(self.interval)

        except Exception as e:
            logger.error(f"✗ Fatal error: {e}", exc_info=True)
            raise
        finally:
            await self.stop()

        return served

    async def stop(self) -> None:
        """Graceful shutdown"""
        self.running = False
        await self.refresher.close()
        logger.info("✓ Indicator Service stopped")


def signal_handler(service: IndicatorService):
    """Handle SIGINT/SIGTERM"""

    def handler(signum, frame):
        logger.info(f"Received signal {signum}")
        service.running = False

    return handler


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print technical indicator snapshots")
    parser.add_argument("symbols", nargs="+", help="Symbols, e.g. TCS INFY RELIANCE")
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Poll every N seconds instead of running once",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    service = IndicatorService(args.symbols, interval=args.interval)

    signal.signal(signal.SIGINT, signal_handler(service))
    signal.signal(signal.SIGTERM, signal_handler(service))

    served = await service.start()
    return 0 if served else 1


def run() -> None:
    """Console script entry point"""
    configure_logging()

    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Goodbye!")


if __name__ == "__main__":
    run()
