"""
Quote email composition and SMTP delivery.

When SMTP credentials are not configured the send is mocked and reported as
a success, so the demo flow works without a mail server.
"""

import smtplib
import ssl
from email.message import EmailMessage
from html import escape
from typing import Optional, Union

from pydantic import BaseModel

from echovibe.schemas import ItineraryOption, MoodProfile, QuoteItinerary, QuoteMoodProfile
from echovibe.utils.config import Settings, settings
from echovibe.utils.exceptions import MailDeliveryError
from echovibe.utils.logger import get_logger
from echovibe.utils.retry import retry_with_exponential_backoff

logger = get_logger(__name__)

IMPLICIT_TLS_PORT = 465
MOCK_MESSAGE = "Mock email sent (SMTP not configured)"
SUBJECT_TEMPLATE = "Il tuo preventivo EchoVibe: {destination}"

DEFAULT_FLIGHT = "Incluso nel pacchetto standard"
DEFAULT_ACCOMMODATION = "Soggiorno in struttura selezionata"
DEFAULT_FOOD = "Trattamento in base alla destinazione"
DEFAULT_COST = "su richiesta"

# Stored plan options and client-echoed quote payloads render the same way
QuotedItinerary = Union[ItineraryOption, QuoteItinerary]
QuotedMood = Union[MoodProfile, QuoteMoodProfile]

RETRYABLE_SMTP_ERRORS = (
    smtplib.SMTPServerDisconnected,
    smtplib.SMTPConnectError,
    ConnectionError,
    TimeoutError,
)

QUOTE_HTML_TEMPLATE = """
<div style="font-family: sans-serif; max-width: 600px; margin: auto; border: 1px solid #eee; padding: 20px; border-radius: 10px;">
  <h1 style="color: #000; text-transform: uppercase;">EchoVibe Studio</h1>
  <p>Ciao,</p>
  <p>{mood_sentence}</p>

  <hr style="border: 0; border-top: 1px solid #eee; margin: 20px 0;">

  <h2 style="color: #333;">{heading}</h2>
  <p>{description}</p>

  <h3>Dettagli del Viaggio:</h3>
  <ul>
    <li><strong>Volo:</strong> {flight}</li>
    <li><strong>Alloggio:</strong> {accommodation}</li>
    <li><strong>Vitto:</strong> {food}</li>
  </ul>

  <h3>Highlights:</h3>
  <ul>
    {highlights}
  </ul>

  <p style="font-size: 20px; font-weight: bold; color: #000;">Investimento Totale Stimato: {cost}</p>

  <hr style="border: 0; border-top: 1px solid #eee; margin: 20px 0;">

  <p style="font-size: 12px; color: #999;">Questo è un preventivo generato automaticamente da EchoVibe AI. I prezzi e la disponibilità possono variare.</p>
</div>
"""


class QuoteResult(BaseModel):
    """Outcome of a quote send"""
    success: bool = True
    mocked: bool = False
    message: Optional[str] = None


def smtp_configured(config: Settings) -> bool:
    """Real delivery needs host, user and password."""
    return bool(config.smtp_host and config.smtp_user and config.smtp_pass)


def _mood_name(mood_profile: Optional[QuotedMood]) -> Optional[str]:
    return getattr(mood_profile, "primary_mood", None) if mood_profile is not None else None


def _mood_sentence(mood_profile: Optional[QuotedMood]) -> str:
    mood = _mood_name(mood_profile)
    if not mood:
        return "Ecco il preventivo dettagliato basato sul tuo profilo emotivo."
    return (
        "Ecco il preventivo dettagliato basato sul tuo profilo emotivo: "
        f"<strong>{escape(mood)}</strong>."
    )


def _heading(itinerary: QuotedItinerary) -> str:
    """'title - destination', or just the destination when the title is missing."""
    if itinerary.title:
        return f"{itinerary.title} - {itinerary.destination}"
    return itinerary.destination


def render_quote_html(itinerary: QuotedItinerary, mood_profile: Optional[QuotedMood] = None) -> str:
    """Render the HTML quote body; every interpolated value is escaped."""
    highlights = "".join(f"<li>{escape(h)}</li>" for h in itinerary.highlights)
    return QUOTE_HTML_TEMPLATE.format(
        mood_sentence=_mood_sentence(mood_profile),
        heading=escape(_heading(itinerary)),
        description=escape(itinerary.description or ""),
        flight=escape(itinerary.flight_details or DEFAULT_FLIGHT),
        accommodation=escape(itinerary.accommodation_details or DEFAULT_ACCOMMODATION),
        food=escape(itinerary.food_details or DEFAULT_FOOD),
        highlights=highlights,
        cost=escape(itinerary.estimated_cost or DEFAULT_COST),
    )


def render_quote_text(itinerary: QuotedItinerary, mood_profile: Optional[QuotedMood] = None) -> str:
    """Plain-text alternative of the quote for clients that do not render HTML."""
    lines = ["EchoVibe Studio", "", "Ciao,"]
    mood = _mood_name(mood_profile)
    if mood:
        lines.append(f"Ecco il preventivo dettagliato basato sul tuo profilo emotivo: {mood}.")
    else:
        lines.append("Ecco il preventivo dettagliato basato sul tuo profilo emotivo.")
    lines += ["", _heading(itinerary)]
    if itinerary.description:
        lines.append(itinerary.description)
    lines += [
        "",
        "Dettagli del Viaggio:",
        f"- Volo: {itinerary.flight_details or DEFAULT_FLIGHT}",
        f"- Alloggio: {itinerary.accommodation_details or DEFAULT_ACCOMMODATION}",
        f"- Vitto: {itinerary.food_details or DEFAULT_FOOD}",
        "",
        "Highlights:",
    ]
    lines += [f"- {h}" for h in itinerary.highlights]
    lines += ["", f"Investimento Totale Stimato: {itinerary.estimated_cost or DEFAULT_COST}"]
    return "\n".join(lines) + "\n"


def build_quote_message(
    to_email: str,
    itinerary: QuotedItinerary,
    mood_profile: Optional[QuotedMood] = None,
    config: Optional[Settings] = None,
) -> EmailMessage:
    """Compose the multipart quote email."""
    config = config or settings
    message = EmailMessage()
    message["From"] = config.smtp_from
    message["To"] = to_email
    message["Subject"] = SUBJECT_TEMPLATE.format(destination=itinerary.destination)
    message.set_content(render_quote_text(itinerary, mood_profile))
    message.add_alternative(render_quote_html(itinerary, mood_profile), subtype="html")
    return message


def _deliver(message: EmailMessage, config: Settings) -> None:
    """Open an SMTP session, authenticate and send one message."""
    timeout = config.request_timeout
    if config.smtp_port == IMPLICIT_TLS_PORT:
        server = smtplib.SMTP_SSL(
            config.smtp_host, config.smtp_port, timeout=timeout,
            context=ssl.create_default_context()
        )
    else:
        server = smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=timeout)

    with server:
        if config.smtp_port != IMPLICIT_TLS_PORT:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
        server.login(config.smtp_user, config.smtp_pass)
        server.send_message(message)


def send_quote(
    to_email: str,
    itinerary: QuotedItinerary,
    mood_profile: Optional[QuotedMood] = None,
    config: Optional[Settings] = None,
) -> QuoteResult:
    """
    Email a formatted quote for the selected itinerary.

    Args:
        to_email: Recipient address
        itinerary: Selected itinerary option
        mood_profile: Mood profile the itinerary was generated for
        config: Settings override (defaults to the global settings)

    Returns:
        QuoteResult; mocked=True when SMTP is not configured

    Raises:
        MailDeliveryError: If the SMTP exchange fails
    """
    config = config or settings

    if not smtp_configured(config):
        logger.info("smtp_not_configured", action="mock_send", to=to_email)
        return QuoteResult(success=True, mocked=True, message=MOCK_MESSAGE)

    deliver = retry_with_exponential_backoff(
        max_attempts=config.smtp_max_attempts,
        retryable_exceptions=RETRYABLE_SMTP_ERRORS,
    )(_deliver)

    try:
        message = build_quote_message(to_email, itinerary, mood_profile, config)
        deliver(message, config)
    except Exception as e:
        logger.error(
            "quote_email_failed",
            to=to_email,
            destination=itinerary.destination,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise MailDeliveryError(
            f"Failed to send quote email: {e}",
            context={"to": to_email, "smtp_host": config.smtp_host}
        ) from e

    logger.info("quote_email_sent", to=to_email, destination=itinerary.destination)
    return QuoteResult(success=True)
