import logging

logger = logging.getLogger(__name__)


def send_otp_email(email: str, code: str) -> None:
    """Simulated delivery: no mail provider is wired in, so the code is never sent or logged."""
    # TODO: deliver through Postmark, reading POSTMARK_API_TOKEN from the environment
    logger.info("Simulated OTP email to %s (%d-digit code)", email, len(code))
