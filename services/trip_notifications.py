"""
Mail templates and dispatch for the trip lifecycle.

Messages are composed from ORM rows on the request thread; only the SMTP
round-trips run concurrently.
"""
import asyncio
import logging
from html import escape
from typing import List, Sequence

from config import Settings
from services.mail_service import MailMessage, MailSender
from utils.dates import format_long_date

logger = logging.getLogger("planner.notifications")

SIGNATURE = "<p>Best regards,<br>The Plann.er Team</p>"


# ---------- Links ----------
def confirmation_link(settings: Settings, participant_id) -> str:
    """One-click confirmation, handled by this API."""
    return f"{settings.api_base_url}/participants/{participant_id}/confirm"


def manual_confirmation_link(settings: Settings, participant_id) -> str:
    return f"{settings.web_base_url}/participants/{participant_id}/manual-confirm"


def details_link(settings: Settings, trip_id, participant_id) -> str:
    return f"{settings.web_base_url}/trips/{trip_id}?participantId={participant_id}"


def confirmed_page_link(settings: Settings, participant_id, trip_id) -> str:
    return f"{settings.web_base_url}/participants/{participant_id}/confirmed?tripId={trip_id}"


def _trip_period(trip) -> str:
    return f"{format_long_date(trip.starts_at)} to {format_long_date(trip.ends_at)}"


# ---------- Messages ----------
def trip_created_message(settings: Settings, trip, owner) -> MailMessage:
    destination = escape(trip.destination)
    html = f"""
        <div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">
          <p>Hello {escape(owner.name or '')}. Your trip to <strong>{destination}</strong>
          from <strong>{_trip_period(trip)}</strong> has been created.</p>
          <p><a href="{details_link(settings, trip.id, owner.id)}">See trip details</a></p>
          {SIGNATURE}
        </div>
    """.strip()
    return MailMessage(
        to=owner.email,
        subject=f"Your trip to {trip.destination} on {format_long_date(trip.starts_at)} was created!",
        html=html,
    )


def trip_invitation_message(settings: Settings, trip, participant) -> MailMessage:
    """Invitation carrying the one-click, manual and details links."""
    destination = escape(trip.destination)
    html = f"""
        <div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">
          <p>Hello, you have been invited to a trip to <strong>{destination}</strong>
          ({_trip_period(trip)}).</p>
          <p><a href="{confirmation_link(settings, participant.id)}">Confirm your attendance with one click</a></p>
          <p>or, if you prefer</p>
          <p><a href="{manual_confirmation_link(settings, participant.id)}">Confirm by filling in your details (recommended)</a></p>
          <p>See the trip details at:</p>
          <p><a href="{details_link(settings, trip.id, participant.id)}">See trip details</a></p>
          {SIGNATURE}
        </div>
    """.strip()
    return MailMessage(
        to=participant.email,
        subject=f"Invitation: trip to {trip.destination} on {format_long_date(trip.starts_at)}",
        html=html,
    )


def invite_confirmation_message(settings: Settings, trip, participant) -> MailMessage:
    destination = escape(trip.destination)
    html = f"""
        <div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">
          <p>You have been invited to join a trip to <strong>{destination}</strong>
          from <strong>{_trip_period(trip)}</strong>.</p>
          <p>To confirm your attendance, click the link below:</p>
          <p><a href="{confirmation_link(settings, participant.id)}">Confirm attendance</a></p>
          <p>If you don't know what this is about, or can't make it on these dates, just ignore this email.</p>
        </div>
    """.strip()
    return MailMessage(
        to=participant.email,
        subject=f"Confirm your attendance on the trip to {trip.destination} on {format_long_date(trip.starts_at)}",
        html=html,
    )


def trip_created_messages(settings: Settings, trip) -> List[MailMessage]:
    """Owner notice first, then one invitation per non-owner participant."""
    owner = trip.owner
    messages = [trip_created_message(settings, trip, owner)]
    messages.extend(
        trip_invitation_message(settings, trip, participant)
        for participant in trip.participants
        if not participant.is_owner
    )
    return messages


# ---------- Dispatch ----------
async def dispatch(mail: MailSender, messages: Sequence[MailMessage]) -> List[str]:
    """Send every message concurrently and wait for all of them to settle.

    A failed send is logged and does not affect the others. Returns the
    recipients whose send failed.
    """
    results = await asyncio.gather(
        *[asyncio.to_thread(mail.send, message) for message in messages],
        return_exceptions=True,
    )

    failed = []
    for message, result in zip(messages, results):
        if isinstance(result, Exception):
            logger.error("Failed to send mail to %s (%s): %s", message.to, message.subject, result)
            failed.append(message.to)
    return failed
