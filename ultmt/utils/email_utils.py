from typing import Iterable

from django.conf import settings
from django.core.mail import send_mail


def send_passcode_email(email: str, passcode: str) -> None:
    send_mail(
        subject="Ultmt password recovery",
        message=(
            f"Your one time passcode is {passcode}. "
            "It expires in one hour. If you did not request it you can ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
        fail_silently=False,
    )


def send_verification_email(recipients: Iterable[str], source_type: str, source_id: str, requested_by: str) -> None:
    send_mail(
        subject=f"Ultmt {source_type} verification request",
        message=f"{requested_by} asked to verify {source_type} {source_id}.",
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=list(recipients),
        fail_silently=False,
    )
