"""
Small SMTP helpers shared by routes and workers.
"""
from __future__ import annotations

import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

DEFAULT_FROM = "Job Tracker <noreply@job-tracker.local>"


def _effective_from(email_from: str | None, email_user: str | None, smtp_server: str) -> str:
    if "gmail" in (smtp_server or "").lower() and email_user:
        return email_user
    return email_from or email_user or DEFAULT_FROM


def _deliver(to_email: str, msg) -> None:
    email_user = os.getenv("EMAIL_USER")
    email_password = os.getenv("EMAIL_PASSWORD")
    email_from = os.getenv("EMAIL_FROM")
    smtp_server = os.getenv("SMTP_SERVER", "smtp.gmail.com")
    smtp_port = int(os.getenv("SMTP_PORT", "587"))

    if not (email_user and email_password):
        raise RuntimeError("Email credentials not configured. Set EMAIL_USER and EMAIL_PASSWORD.")

    msg["From"] = _effective_from(email_from, email_user, smtp_server)
    msg["To"] = to_email

    with smtplib.SMTP(smtp_server, smtp_port, timeout=30) as server:
        server.starttls()
        server.login(email_user, email_password)
        server.sendmail(msg["From"], [to_email], msg.as_string())


def send_html_email(to_email: str, subject: str, html_body: str, text_body: str | None = None) -> None:
    """Send a multipart/alternative message; raises on any SMTP or configuration failure."""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    if text_body:
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    _deliver(to_email, msg)
