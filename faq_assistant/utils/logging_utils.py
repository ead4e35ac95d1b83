import logging
import os
import re

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("FAQ_Assistant")

# Patterns to mask
PATTERNS = {
    "EMAIL": (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b', '[EMAIL]'),
    "PHONE": (r'\b\d{2,3}[-.\s]?\d{3,4}[-.\s]?\d{4}\b', '[PHONE]'),
    "PASSWORD": (r'(?i)(password|contrase(?:ñ|n)a)["\']?\s*[:=]\s*["\']?\S+', r'\1: [REDACTED]'),
}


def anonymize_text(text: str) -> str:
    """Mask PII in text"""
    if not isinstance(text, str):
        return str(text)

    for name, (pattern, replacement) in PATTERNS.items():
        text = re.sub(pattern, replacement, text)
    return text


def log_audit(action: str, user: str, details: str = ""):
    """Log an audit event with anonymization"""
    user_masked = anonymize_text(user)
    details_masked = anonymize_text(details)
    logger.info(f"AUDIT | Action: {action} | User: {user_masked} | Details: {details_masked}")


def get_logger(name: str = None):
    if name:
        return logger.getChild(name)
    return logger
