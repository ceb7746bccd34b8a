# ================== LOGURU LOGGER CONFIG =====================
import sys
import os
from loguru import logger

os.makedirs("logs", exist_ok=True)

log_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>order:{extra[order_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

logger.remove()
logger.configure(extra={"order_id": "-"})
logger.add(sys.stderr, colorize=True, format=log_format, level="INFO")
logger.add(
    "logs/cafe_service.json",
    rotation="100 MB",
    retention="10 days",
    compression="zip",
    serialize=True,
    level="DEBUG",
    enqueue=True,
    catch=True,
)


# ================== CRITICAL LOGGING =====================
def log_critical_infrastructure(message, component="SYSTEM"):
    """Log an outage of an external collaborator (gateway, SMTP, SMS)."""
    logger.critical(f"[CRITICAL-{component}] {message}")


def order_logger(order_id):
    return logger.bind(order_id=order_id)

