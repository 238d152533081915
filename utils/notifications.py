"""
Notifications Module - HTML email rendering and SMTP delivery
"""

import smtplib
import time
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from flask import current_app, render_template
from .errors import TransportError, UnknownTemplateError


# Template name -> Jinja template under templates/
EMAIL_TEMPLATES = {
    'thank-you': 'emails/thank_you.html',
    'contact-notification': 'emails/contact_notification.html',
    'project-discussion-notification': 'emails/project_discussion_notification.html',
}


def load_smtp_config():
    """Outbound mail settings from the app config"""
    cfg = current_app.config
    return {
        'host': cfg.get('SMTP_HOST') or '',
        'port': int(cfg.get('SMTP_PORT') or 587),
        'secure': bool(cfg.get('SMTP_SECURE')),
        'user': cfg.get('SMTP_USER') or '',
        'password': cfg.get('SMTP_PASSWORD') or '',
        'sender': cfg.get('SMTP_FROM') or cfg.get('SMTP_USER') or '',
        'sender_name': cfg.get('SMTP_FROM_NAME') or '',
        'timeout': cfg.get('MAIL_TIMEOUT', 15),
    }


def render_email(template_name, context):
    """
    Render a named email template

    Raises:
        UnknownTemplateError: If template_name is not registered
    """
    template = EMAIL_TEMPLATES.get(template_name)
    if template is None:
        raise UnknownTemplateError(template_name)
    return render_template(template, **context)


def build_message(smtp_config, recipient, subject, html):
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = formataddr((smtp_config['sender_name'], smtp_config['sender']))
    msg['To'] = recipient
    # Headers that keep notification mail out of spam folders
    msg['X-Mailer'] = f"{smtp_config['sender_name'] or 'Portfolio'} Portfolio"
    msg['X-Priority'] = '3'
    msg['X-MSMail-Priority'] = 'Normal'
    msg['Importance'] = 'Normal'
    msg['X-Entity-Ref-ID'] = f"contact-{int(time.time() * 1000)}"
    msg.attach(MIMEText(html, 'html'))
    return msg


def send_email(recipient, subject, template_name, context):
    """
    Render template_name with context and send it over SMTP

    Args:
        recipient (str): Email recipient
        subject (str): Email subject
        template_name (str): One of EMAIL_TEMPLATES
        context (dict): Template variables

    Raises:
        UnknownTemplateError: If template_name is not registered
        TransportError: If SMTP is not configured or the send fails
    """
    html = render_email(template_name, context)

    smtp_config = load_smtp_config()
    if not smtp_config['host']:
        current_app.logger.warning("SMTP_HOST not configured, cannot send email")
        raise TransportError('SMTP configuration not found', recipient=recipient)

    msg = build_message(smtp_config, recipient, subject, html)

    try:
        if smtp_config['secure']:
            server = smtplib.SMTP_SSL(smtp_config['host'], smtp_config['port'],
                                      timeout=smtp_config['timeout'])
        else:
            server = smtplib.SMTP(smtp_config['host'], smtp_config['port'],
                                  timeout=smtp_config['timeout'])
        with server:
            if not smtp_config['secure']:
                server.starttls()
            if smtp_config['user'] and smtp_config['password']:
                server.login(smtp_config['user'], smtp_config['password'])
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error(f"Error sending email to {recipient}: {str(e)}")
        raise TransportError(f"Failed to send email: {str(e)}", recipient=recipient) from e

    current_app.logger.info(f"Email '{template_name}' sent to {recipient}")


__all__ = [
    'EMAIL_TEMPLATES',
    'load_smtp_config',
    'render_email',
    'send_email'
]
