"""Pushover client for sending push notifications"""
from typing import Optional
import requests

from ..errors import NotifierError
from ..models import PushoverCredentials
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

PUSHOVER_API_URL = "https://api.pushover.net/1/messages.json"
MAX_MESSAGE_LENGTH = 1024


class PushoverClient:
    """Pushover client for notifications"""
    
    def __init__(
        self,
        credentials: PushoverCredentials,
        api_url: str = PUSHOVER_API_URL,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Pushover client
        
        Args:
            credentials: Application token and user key
            api_url: Messages endpoint of the Pushover API
            timeout: Seconds to wait for the API
            session: Optional requests session to reuse
        """
        self.credentials = credentials
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
    
    def send_notification(self, text: str) -> bool:
        """
        Send a notification
        
        Failures are logged and never raised to the caller.
        
        Args:
            text: Message text
        
        Returns:
            True if the notification was accepted by Pushover
        """
        logger.info("Sending notification")
        try:
            response = self._push(self._truncate(text))
        except requests.RequestException as e:
            logger.error(f"Error sending notification: {e}")
            return False
        except NotifierError as e:
            logger.error(f"Pushover rejected notification: {e}")
            return False
        
        logger.info(f"Notification sent. Response: {response}")
        return True
    
    def _push(self, message: str) -> dict:
        """POST a message and return the decoded response"""
        response = self.session.post(
            self.api_url,
            data={
                "token": self.credentials.token,
                "user": self.credentials.user,
                "message": message,
            },
            timeout=self.timeout
        )
        
        try:
            body = response.json()
        except ValueError:
            body = {}
        
        if response.status_code >= 400 or body.get("status") != 1:
            errors = body.get("errors") or [f"HTTP {response.status_code}"]
            raise NotifierError("; ".join(str(e) for e in errors))
        
        return body
    
    def _truncate(self, text: str) -> str:
        """Trim messages to the provider's length limit"""
        if len(text) <= MAX_MESSAGE_LENGTH:
            return text
        
        logger.warning(
            f"Notification is {len(text)} characters, truncating to {MAX_MESSAGE_LENGTH}"
        )
        return text[:MAX_MESSAGE_LENGTH - 1] + "…"
