"""
Shop notifications for new customer enquiries.

Email goes out through Amazon SES to every address in RECIPIENT_EMAIL and SMS
through Amazon SNS to every number in ADMIN_PHONE_NUMBER. Either channel is
skipped with a log line when it is not configured.
"""
from html import escape
from typing import Any, Dict, List
import logging

from botocore.exceptions import BotoCoreError, ClientError

from storefront.config import settings
from storefront.db.dynamo import get_notification_client
from storefront.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "New Query From Kalakala Corner"
SENDER_NAME = "Kalakala-Corner"

_ROW = (
    '<tr{shade}><td style="padding: 8px; font-weight: bold; color: #333;">{label}:</td>'
    '<td style="padding: 8px; color: #555;">{value}</td></tr>'
)


def render_enquiry_html(enquiry: Dict[str, Any]) -> str:
    rows = []
    for index, (label, field) in enumerate(
        [("Name", "name"), ("Email", "email"), ("Phone", "phone"), ("Query", "query"), ("Product", "product")]
    ):
        shade = ' style="background-color: #f9f9f9;"' if index % 2 else ""
        value = enquiry.get(field)
        rows.append(_ROW.format(shade=shade, label=label, value=escape(str(value if value is not None else ""))))

    return (
        '<div style="font-family: Arial, sans-serif; background-color: #f7f7f7; padding: 20px;">'
        '<div style="max-width: 600px; margin: auto; background-color: #ffffff; border-radius: 8px; padding: 20px;">'
        '<h2 style="color: #333333; text-align: center;">New Enquiry for '
        '<span style="color:#007BFF;">KalaKalaCorner</span></h2>'
        '<p style="font-size: 16px; color: #555;">You have received a new enquiry. Details are as follows:</p>'
        '<table style="width: 100%; border-collapse: collapse; margin-top: 15px;">'
        + "".join(rows)
        + "</table>"
        '<p style="margin-top: 25px; font-size: 14px; color: #777; text-align: center;">'
        "Sent automatically by <strong>KalaKalaCorner</strong> Website</p>"
        "</div></div>"
    )


def render_enquiry_sms(enquiry: Dict[str, Any]) -> str:
    lines = [
        "KalaKalaCorner enquiry: ",
        "",
        f"Name: {enquiry.get('name')}",
        f"Email: {enquiry.get('email')}",
        f"Phone: {enquiry.get('phone')}",
    ]
    if enquiry.get("product"):
        lines.append(f"Product: {enquiry['product']}")
    lines.append(f"Query: {enquiry.get('query')}")
    return "\n".join(lines)


class NotificationService:
    """Sends enquiry alerts to the shop owners"""

    def __init__(self, ses_client=None, sns_client=None):
        self._ses_client = ses_client
        self._sns_client = sns_client

    @property
    def ses_client(self):
        if self._ses_client is None:
            self._ses_client = get_notification_client("ses")
        return self._ses_client

    @property
    def sns_client(self):
        if self._sns_client is None:
            self._sns_client = get_notification_client("sns")
        return self._sns_client

    def send_email(self, enquiry: Dict[str, Any]) -> bool:
        """Email the enquiry to the shop; False when email is not configured"""
        recipients = settings.recipient_emails
        if not settings.sender_email or not recipients:
            logger.info("Enquiry email skipped: SENDER_EMAIL or RECIPIENT_EMAIL not configured")
            return False

        try:
            response = self.ses_client.send_email(
                Source=f"{SENDER_NAME} <{settings.sender_email}>",
                Destination={"ToAddresses": recipients},
                Message={
                    "Subject": {"Data": EMAIL_SUBJECT},
                    "Body": {"Html": {"Data": render_enquiry_html(enquiry)}},
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to send enquiry email: {e}", exc_info=True)
            raise ExternalServiceError("SES", "Failed to send email")

        logger.info(f"Enquiry email sent to {len(recipients)} recipient(s). MessageId: {response['MessageId']}")
        return True

    def send_sms(self, enquiry: Dict[str, Any]) -> List[str]:
        """Text the enquiry to every admin number and return the numbers reached

        A failure for one number is logged and does not stop the others.
        """
        numbers = settings.admin_phone_numbers
        if not numbers:
            logger.info("Enquiry SMS skipped: ADMIN_PHONE_NUMBER not configured")
            return []

        message = render_enquiry_sms(enquiry)
        sent = []
        for number in numbers:
            try:
                response = self.sns_client.publish(
                    PhoneNumber=number,
                    Message=message,
                    MessageAttributes={
                        "AWS.SNS.SMS.SMSType": {"DataType": "String", "StringValue": "Transactional"}
                    },
                )
                logger.info(f"Sent SMS to {number}: {response['MessageId']}")
                sent.append(number)
            except (ClientError, BotoCoreError) as e:
                logger.error(f"Error sending SMS to {number}: {e}")
        return sent
