"""
Transactional email composition.

Each public method renders one message and hands it to the configured
IEmailSender. Delivery errors propagate as DeliveryError; callers decide
whether the failure is fatal (OTP mails) or best-effort (invoices).
"""

from datetime import datetime
from html import escape
from typing import Optional

from .interfaces import IEmailSender

BRAND_COLOR = "#1DA1F2"


def _layout(title: str, body: str, app_name: str) -> str:
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; color: #333;">
      <h2 style="color: {BRAND_COLOR};">{title}</h2>
      {body}
      <hr style="border: none; border-top: 1px solid #e0e0e0; margin: 30px 0;">
      <p style="color: #999; font-size: 12px; text-align: center;">{escape(app_name)} Team</p>
    </div>
    """


def _code_box(code: str) -> str:
    return (
        '<div style="background-color: #f0f0f0; padding: 20px; text-align: center; '
        'font-size: 32px; font-weight: bold; letter-spacing: 6px; margin: 20px 0; '
        f'border-radius: 8px;">{code}</div>'
    )


def _long_date(value: Optional[datetime]) -> str:
    if value is None:
        return "Never Expires"
    return value.strftime("%d %B %Y")


class Mailer:
    """Renders and sends the application's emails."""

    def __init__(self, sender: IEmailSender, app_name: str, frontend_url: str):
        self._sender = sender
        self._app_name = app_name
        self._frontend_url = frontend_url.rstrip("/")

    async def send_browser_otp(
        self,
        email: str,
        name: str,
        otp: str,
        browser: str,
        ip: str,
        ttl_minutes: int,
    ) -> None:
        body = (
            f"<p>Hello <strong>{escape(name)}</strong>,</p>"
            f"<p>A login attempt was detected from <strong>{escape(browser)}</strong>.</p>"
            f"<p><strong>IP Address:</strong> {escape(ip)}</p>"
            "<p>Please use the following code to complete your login:</p>"
            f"{_code_box(otp)}"
            f"<p>This code expires in <strong>{ttl_minutes} minutes</strong>.</p>"
            "<p>If you didn't attempt to log in, please secure your account immediately.</p>"
        )
        await self._sender.send(
            email,
            "Login Verification - Chrome Browser",
            _layout("Login Verification Required", body, self._app_name),
        )

    async def send_language_otp(
        self,
        email: str,
        name: str,
        otp: str,
        language_name: str,
        ttl_minutes: int,
    ) -> None:
        body = (
            f"<p>Hello <strong>{escape(name)}</strong>,</p>"
            f"<p>You requested to change your language to <strong>{escape(language_name)}</strong>.</p>"
            "<p>Please use the following code to verify:</p>"
            f"{_code_box(otp)}"
            f"<p>This code expires in <strong>{ttl_minutes} minutes</strong>.</p>"
            "<p>If you didn't request this change, please ignore this email.</p>"
        )
        await self._sender.send(
            email,
            "Language Change Verification - OTP",
            _layout("Language Change Verification", body, self._app_name),
        )

    async def send_audio_otp(
        self,
        email: str,
        name: str,
        otp: str,
        upload_window: str,
        ttl_minutes: int,
    ) -> None:
        body = (
            f"<p>Hello {escape(name)},</p>"
            "<p>You requested to upload an audio tweet. Please use the code below to verify your request:</p>"
            f"{_code_box(otp)}"
            "<ul>"
            f"<li>This code is valid for <strong>{ttl_minutes} minutes</strong></li>"
            f"<li>Audio uploads are only allowed between <strong>{escape(upload_window)}</strong></li>"
            "</ul>"
            "<p>If you didn't request this code, please ignore this email.</p>"
        )
        await self._sender.send(
            email,
            "Audio Tweet Upload - OTP Verification",
            _layout("Audio Tweet Verification", body, self._app_name),
        )

    async def send_password_reset(
        self,
        email: str,
        name: str,
        temporary_password: str,
        reset_token: str,
        ttl_hours: int,
    ) -> None:
        reset_link = f"{self._frontend_url}/reset-password/{reset_token}"
        body = (
            f"<p>Hello <strong>{escape(name)}</strong>,</p>"
            "<p>We received a request to reset your password. Here is your new temporary password:</p>"
            f"{_code_box(temporary_password)}"
            f'<p style="text-align: center;"><a href="{reset_link}">Reset Password Now</a></p>'
            "<ul>"
            f"<li>This password is temporary and valid for <strong>{ttl_hours} hours</strong></li>"
            "<li>You can only request a password reset <strong>once per day</strong></li>"
            "<li>Please change this password after logging in</li>"
            "</ul>"
            "<p>If you didn't request this password reset, please ignore this email.</p>"
        )
        await self._sender.send(
            email,
            f"Password Reset Request - {self._app_name}",
            _layout("Password Reset Request", body, self._app_name),
        )

    async def send_subscription_invoice(
        self,
        email: str,
        name: str,
        plan_name: str,
        amount: int,
        tweets_limit: int,
        end_date: Optional[datetime],
        order_id: str,
        payment_id: Optional[str],
        paid_at: datetime,
    ) -> None:
        tweets = "Unlimited" if tweets_limit == -1 else str(tweets_limit)
        rows = [
            ("Order ID", order_id),
            ("Payment ID", payment_id or "N/A"),
            ("Plan", plan_name),
            ("Payment Date", _long_date(paid_at)),
            ("Valid Until", _long_date(end_date)),
            ("Amount Paid", f"₹{amount:,}"),
        ]
        table = "".join(
            f"<tr><td>{label}</td><td style=\"text-align: right;\">{escape(value)}</td></tr>"
            for label, value in rows
        )
        body = (
            f"<p>Dear <strong>{escape(name)}</strong>,</p>"
            "<p>Thank you for subscribing! Your payment has been processed successfully.</p>"
            f'<table style="width: 100%; border-collapse: collapse;">{table}</table>'
            f"<p><strong>{tweets} tweets</strong> per month, valid for <strong>30 days</strong>.</p>"
            "<p>You'll revert to the Free Plan after expiration. Renew anytime to keep premium features.</p>"
            f'<p style="text-align: center;"><a href="{self._frontend_url}">Start Tweeting Now</a></p>'
        )
        await self._sender.send(
            email,
            f"Payment Successful - {plan_name} Subscription",
            _layout("Payment Successful!", body, self._app_name),
        )
