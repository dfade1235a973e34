"""
Notifications Module - Contact form email relay
Forwards contact-form submissions to the site owner through the SendGrid
v3 mail API. Provider details never leave the server; callers only see
the mapped HTTP status.
"""

import requests
from flask import current_app
from markupsafe import escape


SENDGRID_TIMEOUT = 10


class ContactConfigError(Exception):
    """Raised when the email provider is not configured"""
    status_code = 500


class ContactDeliveryError(Exception):
    """Raised when the email provider rejects or fails a send"""

    def __init__(self, message, status_code=500):
        super().__init__(message)
        self.status_code = status_code


def get_contact_email_config():
    """Load contact email settings from the app config"""
    return {
        'api_key': current_app.config.get('SENDGRID_API_KEY') or '',
        'api_url': current_app.config.get('SENDGRID_API_URL') or '',
        'from_email': current_app.config.get('CONTACT_FROM_EMAIL') or '',
        'to_email': current_app.config.get('CONTACT_TO_EMAIL') or ''
    }


def missing_contact_settings(config=None):
    """Names of required settings that are unset"""
    config = config or get_contact_email_config()
    missing = []
    if not config.get('api_key'):
        missing.append('SENDGRID_API_KEY')
    if not config.get('from_email'):
        missing.append('CONTACT_FROM_EMAIL')
    return missing


# Recipient precedence, first non-empty source wins
RECIPIENT_SOURCES = (
    ('request', lambda submission, config, portfolio: submission.emailTo),
    ('CONTACT_TO_EMAIL', lambda submission, config, portfolio: config.get('to_email')),
    ('portfolio', lambda submission, config, portfolio: (portfolio or {}).get('contact', {}).get('email')),
    ('CONTACT_FROM_EMAIL', lambda submission, config, portfolio: config.get('from_email')),
)


def resolve_recipient(submission, config, portfolio=None):
    """
    Pick the recipient address for a contact submission

    Args:
        submission (ContactRequest): Validated form submission
        config (dict): Contact email settings
        portfolio (dict, optional): Portfolio document for the owner's address

    Returns:
        tuple: (recipient, source name) or (None, None) if nothing is set
    """
    for source, lookup in RECIPIENT_SOURCES:
        recipient = lookup(submission, config, portfolio)
        if recipient:
            return recipient, source
    return None, None


def map_provider_status(status_code):
    """Map a provider HTTP status onto the status returned to the visitor"""
    if status_code in (401, 403):
        return 500
    if 400 <= status_code < 500:
        return 400
    return 500


def build_contact_message(submission, recipient, from_email):
    """Compose the SendGrid payload for a contact submission"""
    subject = submission.subject or f"New portfolio message from {submission.full_name}"

    text_body = (
        f"Name: {submission.full_name}\n"
        f"Email: {submission.email}\n"
        f"Subject: {submission.subject or '(none)'}\n\n"
        f"{submission.message}"
    )
    html_body = (
        f"<h3>New message from your portfolio</h3>"
        f"<p><strong>Name:</strong> {escape(submission.full_name)}</p>"
        f"<p><strong>Email:</strong> {escape(submission.email)}</p>"
        f"<p><strong>Subject:</strong> {escape(submission.subject or '(none)')}</p>"
        f"<p>{escape(submission.message)}</p>"
    ).replace('\n', '<br>')

    return {
        'personalizations': [{'to': [{'email': recipient}]}],
        'from': {'email': from_email},
        'reply_to': {'email': submission.email, 'name': submission.full_name},
        'subject': subject,
        'content': [
            {'type': 'text/plain', 'value': text_body},
            {'type': 'text/html', 'value': html_body}
        ]
    }


def send_contact_email(submission, portfolio=None):
    """
    Send a contact form submission to the portfolio owner

    Args:
        submission (ContactRequest): Validated form submission
        portfolio (dict, optional): Portfolio document, used for recipient fallback

    Returns:
        str: The recipient the message was sent to

    Raises:
        ContactConfigError: If the provider key or sender address is missing
        ContactDeliveryError: If the provider rejects the message or can't be reached
    """
    config = get_contact_email_config()
    missing = missing_contact_settings(config)
    if missing:
        current_app.logger.error(f"✗ Contact email not configured, missing: {', '.join(missing)}")
        raise ContactConfigError('Email service is not configured')

    recipient, source = resolve_recipient(submission, config, portfolio)
    payload = build_contact_message(submission, recipient, config['from_email'])

    try:
        response = requests.post(
            config['api_url'],
            json=payload,
            headers={'Authorization': f"Bearer {config['api_key']}"},
            timeout=SENDGRID_TIMEOUT
        )
    except requests.RequestException as e:
        current_app.logger.error(f"✗ SendGrid request failed: {str(e)}")
        raise ContactDeliveryError('Failed to send message') from e

    if response.status_code >= 400:
        current_app.logger.error(
            f"✗ SendGrid rejected contact email ({response.status_code}): {response.text[:500]}")
        status_code = map_provider_status(response.status_code)
        message = 'Invalid message request' if status_code == 400 else 'Failed to send message'
        raise ContactDeliveryError(message, status_code=status_code)

    current_app.logger.info(f"✓ Contact email sent to {recipient} (recipient from {source})")
    return recipient


__all__ = [
    'ContactConfigError',
    'ContactDeliveryError',
    'RECIPIENT_SOURCES',
    'get_contact_email_config',
    'missing_contact_settings',
    'resolve_recipient',
    'map_provider_status',
    'build_contact_message',
    'send_contact_email'
]
