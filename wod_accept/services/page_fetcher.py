"""Fetcher for the one-click acceptance page"""
from typing import Optional
import requests

from ..errors import FetchError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class PageFetcher:
    """Fetcher for reservation confirmation pages"""
    
    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Initialize page fetcher
        
        Args:
            timeout: Seconds to wait for the provider, None to wait indefinitely
            session: Optional requests session to reuse
        """
        self.timeout = timeout
        self.session = session or requests.Session()
    
    def fetch_page(self, url: str) -> bytes:
        """
        Request the acceptance URL
        
        The provider treats the GET itself as acceptance and answers 200 for
        both fresh and already accepted invitations, so the status code is
        not checked.
        
        Args:
            url: Acceptance URL
        
        Returns:
            Raw response body
        
        Raises:
            FetchError: On any transport error
        """
        try:
            logger.debug(f"Fetching confirmation page from {url}")
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            content = response.content
        except requests.RequestException as e:
            raise FetchError(str(e), url=url) from e
        
        logger.info(f"Fetched confirmation page ({response.status_code}, {len(content)} bytes)")
        return content
