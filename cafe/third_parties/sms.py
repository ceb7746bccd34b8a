import requests

from cafe.lib.logger import logger
from cafe.lib.string import format_inr


class SmsClient:
    """Bulk SMS over the provider's HTTP API."""

    def __init__(self, api_url, api_key, sender_id="", timeout=10):
        self.api_url = api_url
        self.api_key = api_key
        self.sender_id = sender_id
        self.timeout = timeout

    def send(self, mobile, message):
        if not self.api_key:
            logger.warning("SMS_API_KEY is not configured, SMS skipped")
            return False
        if not mobile:
            logger.warning("Skip SMS: no mobile number")
            return False

        response = requests.post(
            self.api_url,
            headers={"authorization": self.api_key},
            json={
                "route": "q",
                "sender_id": self.sender_id,
                "message": message,
                "numbers": str(mobile),
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        logger.info(f"SMS sent to {mobile}")
        return True


def bill_message(amount, short_id, invoice_link):
    return (
        f"Klubnika: Order #{short_id} confirmed. Amount {format_inr(amount).replace('₹', 'Rs.')}. "
        f"Invoice: {invoice_link}"
    )


def update_message(short_id, status, tracking_link):
    return f"Klubnika: Your order #{short_id} is now {status}. Track: {tracking_link}"


def delivered_message(short_id, ratings_link):
    return (
        f"Klubnika: Order #{short_id} delivered. Enjoy your meal! "
        f"Rate us: {ratings_link}"
    )
