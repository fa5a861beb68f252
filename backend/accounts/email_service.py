# accounts/email_service.py
"""
Email service for admin account notifications.

Handles:
- Password reset request notices
- Password reset by a super admin

All emails are sent from DEFAULT_FROM_EMAIL. Delivery failures are logged
and reported to the caller as False; they never fail the command.
"""

import logging
from django.core.mail import send_mail
from django.conf import settings

logger = logging.getLogger(__name__)


def send_password_reset_request_email(admin) -> bool:
    """
    Tell an admin that a password reset was requested for their account.

    Args:
        admin: Admin record

    Returns:
        True if email was sent successfully, False otherwise
    """
    message = (
        f"Hello {admin.name},\n\n"
        "We received a request to reset the password of your job board admin account.\n"
        "Please contact your platform administrator to complete the reset.\n\n"
        f"{settings.FRONTEND_URL}\n"
    )

    try:
        send_mail(
            subject="Password reset requested",
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[admin.email],
            fail_silently=False,
        )
        logger.info(f"Password reset request email sent to {admin.email}")
        return True
    except Exception as e:
        logger.error(f"Failed to send password reset request email to {admin.email}: {e}")
        return False


def send_password_was_reset_email(admin) -> bool:
    """
    Notify an admin that a super admin reset their password.

    The new password is never included in the email.
    """
    login_url = f"{settings.FRONTEND_URL}/login"
    message = (
        f"Hello {admin.name},\n\n"
        "Your password was reset by a platform administrator. "
        "Ask them for your temporary password and sign in at:\n"
        f"{login_url}\n"
    )

    try:
        send_mail(
            subject="Your password has been reset",
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[admin.email],
            fail_silently=False,
        )
        logger.info(f"Password reset notice sent to {admin.email}")
        return True
    except Exception as e:
        logger.error(f"Failed to send password reset notice to {admin.email}: {e}")
        return False
