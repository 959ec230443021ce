"""Main entry point for the reservation acceptor"""
import argparse
import sys
from typing import List, Optional

from .config import Config
from .services.confirmation_parser import ConfirmationParser
from .services.directory_watcher import DirectoryWatcher
from .services.page_fetcher import PageFetcher
from .services.pushover_client import PushoverClient
from .services.reservation_pipeline import ReservationPipeline
from .utils.logger import setup_logger

logger = setup_logger(__name__)


class WodAcceptBot:
    """Main orchestrator"""

    def __init__(self, config: Config):
        """Initialize bot components"""
        self.config = config

        self.notifier = PushoverClient(
            credentials=config.credentials,
            api_url=config.pushover_api_url
        )
        self.pipeline = ReservationPipeline(
            notifier=self.notifier,
            fetcher=PageFetcher(timeout=config.fetch_timeout),
            parser=ConfirmationParser()
        )
        self.watcher = DirectoryWatcher(
            watch_dir=config.watch_dir,
            handle_event=self.pipeline.handle_event,
            poll_interval=config.poll_interval
        )

    def start(self):
        """Watch for invitations until interrupted"""
        logger.info("Starting reservation acceptor...")
        self.watcher.run_forever()
        logger.info("Reservation acceptor stopped")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Accept class reservation invitations delivered by email"
    )
    parser.add_argument("watch_dir", help="Directory where new mail files are delivered")
    parser.add_argument("pushover_token", help="Pushover application token")
    parser.add_argument("pushover_user", help="Pushover user key")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point"""
    args = parse_args(argv)

    try:
        config = Config(args.watch_dir, args.pushover_token, args.pushover_user)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    try:
        bot = WodAcceptBot(config)
        bot.start()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
