"""
Match notification emails.
"""
from __future__ import annotations

import html
import logging
from typing import Callable, Optional, Tuple

from app.email_utils import send_html_email
from worker.extractor import Candidate

log = logging.getLogger("notifier")

# (to_email, subject, html_body, text_body) -> None; raises on failure.
MailSender = Callable[..., None]


def build_notification_email(job: Candidate, matched_keyword: str, company_name: str) -> Tuple[str, str, str]:
    """Return (subject, html_body, text_body) for a single matched job."""
    title = html.escape(job.title)
    company = html.escape(company_name)
    keyword = html.escape(matched_keyword)

    location_html = ""
    if job.location:
        location_html = f"<p><strong>Location:</strong> {html.escape(job.location)}</p>"
    link_html = ""
    if job.url:
        link_html = (
            f'<p><a href="{html.escape(job.url, quote=True)}" style="color: #2563eb; text-decoration: none;">'
            "View Job Posting &rarr;</a></p>"
        )

    html_body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #2563eb;">New Job Match Found!</h2>
      <div style="background: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin-top: 0; color: #1e40af;">{title}</h3>
        <p><strong>Company:</strong> {company}</p>
        <p><strong>Matched Keyword:</strong> "{keyword}"</p>
        {location_html}
        {link_html}
      </div>
      <p style="color: #6b7280; font-size: 14px;">
        This notification was sent because the job title matches one of your tracked keywords.
      </p>
    </div>
    """

    lines = [
        "New job match found!",
        "",
        f"Title: {job.title}",
        f"Company: {company_name}",
        f'Matched keyword: "{matched_keyword}"',
    ]
    if job.location:
        lines.append(f"Location: {job.location}")
    if job.url:
        lines.append(f"URL: {job.url}")

    subject = f"New Job Match: {job.title} at {company_name}"
    return subject, html_body, "\n".join(lines)


class NotificationDispatcher:
    """Sends one email per keyword match and reports whether it went out."""

    def __init__(self, send: Optional[MailSender] = None):
        self._send = send or send_html_email

    def notify(self, email: str, job: Candidate, matched_keyword: str, company_name: str) -> bool:
        """Never raises: any delivery failure is logged and reported as False."""
        subject, html_body, text_body = build_notification_email(job, matched_keyword, company_name)
        try:
            self._send(email, subject, html_body, text_body)
        except Exception as e:
            log.error(
                "Failed to send email",
                extra={"to": email, "job_title": job.title, "error": str(e)},
            )
            return False
        log.info("Email sent", extra={"to": email, "job_title": job.title})
        return True


__all__ = ["MailSender", "NotificationDispatcher", "build_notification_email"]
