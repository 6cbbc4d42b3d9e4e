"""
API route for emailing a quote for an itinerary the client already holds
"""
import logging
from typing import Optional
from fastapi import APIRouter
from echovibe.routes.plans import error_response, quote_response_body
from echovibe.schemas import SendQuoteRequest
from echovibe.tools.mailer import send_quote
from echovibe.utils.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quotes"])


@router.post("/send-quote")
def send_quote_email(request: Optional[SendQuoteRequest] = None):
    """
    Send the selected itinerary as an HTML quote email.

    Without SMTP configuration the send is mocked and still reported as a
    success.
    """
    if request is None or not request.email or request.itinerary is None:
        return error_response(400, "Missing email or itinerary data")

    try:
        result = send_quote(request.email, request.itinerary, request.mood_profile)
    except MailDeliveryError as e:
        logger.error(f"Email error: {e.message}")
        return error_response(500, "Failed to send email")

    if result.mocked:
        logger.info(f"SMTP not configured. Mocking email send to: {request.email}")
    return quote_response_body(result)


@router.api_route(
    "/send-quote", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
def send_quote_wrong_method():
    return error_response(405, "Method not allowed")
