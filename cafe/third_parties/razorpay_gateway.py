import razorpay
import requests
from razorpay.errors import BadRequestError, ServerError
from razorpay.errors import GatewayError as RazorpayGatewayError

from cafe.errors.exceptions import GatewayError
from cafe.lib.logger import logger, log_critical_infrastructure


class RazorpayGateway:
    """Thin wrapper over the Razorpay SDK with an explicit request timeout."""

    def __init__(self, key_id, key_secret, timeout=10, client=None):
        self.key_id = key_id
        self.key_secret = key_secret
        self.timeout = timeout
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    def _call(self, action, fn, *args):
        try:
            return fn(*args, timeout=self.timeout)
        except requests.RequestException as e:
            log_critical_infrastructure(f"Razorpay {action} failed: {e}", "GATEWAY")
            raise GatewayError(f"Payment gateway unavailable: {e}")
        except (BadRequestError, RazorpayGatewayError, ServerError) as e:
            logger.error(f"Razorpay {action} rejected: {e}")
            raise GatewayError(str(e))

    def create_order(self, amount_paise, currency, receipt, notes=None):
        payload = {
            "amount": amount_paise,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
            "payment_capture": 1,
        }
        return self._call("order.create", self.client.order.create, payload)

    def fetch_payment(self, payment_id):
        return self._call("payment.fetch", self.client.payment.fetch, payment_id)

    def refund(self, payment_id, amount_paise, speed="normal", notes=None):
        payload = {"amount": amount_paise, "speed": speed, "notes": notes or {}}
        return self._call("payment.refund", self.client.payment.refund, payment_id, payload)
