"""Pipeline that accepts one invitation per new mail file"""
from pathlib import Path
from typing import Union

from ..errors import NotAnInvitation, ReservationError
from ..models import FileEvent, ReservationResult
from ..services.confirmation_parser import ConfirmationParser
from ..services.mail_reader import ensure_invitation, find_url, read_message
from ..services.page_fetcher import PageFetcher
from ..services.pushover_client import PushoverClient
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class ReservationPipeline:
    """Runs read → classify → extract → fetch → parse for each file event
    
    Every event ends in exactly one notification: the success summary, the
    skip notice for non-invitations, or the error text.
    """
    
    def __init__(
        self,
        notifier: PushoverClient,
        fetcher: PageFetcher,
        parser: ConfirmationParser
    ):
        """
        Initialize reservation pipeline
        
        Args:
            notifier: Client used to report each outcome
            fetcher: Fetcher for the acceptance URL
            parser: Confirmation page parser
        """
        self.notifier = notifier
        self.fetcher = fetcher
        self.parser = parser
    
    def handle_event(self, event: FileEvent):
        """Process a file event to completion"""
        self.process_file(event.path)
    
    def process_file(self, path: Union[str, Path]) -> str:
        """
        Process a mail file and notify the outcome
        
        Args:
            path: Path to the mail file
        
        Returns:
            The text that was pushed
        """
        logger.info(str(path))
        
        try:
            result = self.accept_invitation(path)
            text = result.summary()
            logger.info(text)
        except NotAnInvitation as e:
            text = e.notification_text()
            logger.info(text)
        except ReservationError as e:
            text = e.notification_text()
            logger.error(text)
        except Exception as e:
            logger.error(f"Unexpected error processing {path}: {e}", exc_info=True)
            text = str(e) or e.__class__.__name__
        
        self.notifier.send_notification(text)
        return text
    
    def accept_invitation(self, path: Union[str, Path]) -> ReservationResult:
        """
        Accept the invitation contained in a mail file
        
        Raises:
            ReservationError: At the first failing step
        """
        message = read_message(path)
        ensure_invitation(message)
        url = find_url(message)
        
        logger.info(f"Accepting invitation via {url}")
        try:
            page = self.fetcher.fetch_page(url)
            return self.parser.parse(page, url=url)
        except ReservationError:
            raise
        except Exception as e:
            # Keep the URL so the operator can still accept by hand
            raise ReservationError(str(e) or e.__class__.__name__, url=url) from e
