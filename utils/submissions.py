"""
Submissions Module - Validate, persist and acknowledge form submissions

Both pipelines run the same three stages in order:
    1. validation (no side effects on failure)
    2. one database insert (no emails on failure)
    3. two emails: confirmation to the submitter, then an alert to the owner
       (the stored record is kept if either send fails)
"""

from datetime import datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db, connection_cache
from models import ProjectDiscussion, ContactMessage
from .errors import ValidationError, PersistenceError, TransportError, UnknownTemplateError, DispatchError
from .notifications import send_email
from .wizard import is_valid_email


MISSING_FIELDS_MESSAGE = 'Missing required fields'
CONTACT_MISSING_FIELDS_MESSAGE = 'All fields are required'
INVALID_EMAIL_MESSAGE = 'Please provide a valid email address'

# Text columns are unbounded in the database; cap what a visitor may send
MAX_TEXT_LENGTH = 5000

PROJECT_DISCUSSION_SUCCESS = 'Project discussion request sent successfully! Check your email for confirmation.'
CONTACT_SUCCESS = 'Message sent successfully! Check your email for confirmation.'

# Shown to visitors instead of infrastructure detail
PROJECT_DISCUSSION_FAILURE = 'Failed to process project discussion form. Please try again.'
CONTACT_FAILURE = 'Failed to process contact form. Please try again.'

PROJECT_DISCUSSION_REQUIRED = ('name', 'email', 'project_type', 'message')
CONTACT_REQUIRED = ('name', 'email', 'subject', 'message')

# JSON (camelCase) keys accepted from the public API
FIELD_ALIASES = {
    'projectType': 'project_type',
    'targetAudience': 'target_audience',
    'serviceName': 'service_name',
    'hasDesign': 'has_design',
    'hasContent': 'has_content',
    'hasDomain': 'has_domain',
    'additionalRequirements': 'additional_requirements',
    'preferredContact': 'preferred_contact',
}

PROJECT_DISCUSSION_FIELDS = (
    'name', 'email', 'company', 'phone', 'project_type', 'budget', 'timeline',
    'target_audience', 'service_name', 'has_design', 'has_content', 'has_domain',
    'maintenance', 'message', 'additional_requirements', 'preferred_contact', 'urgency',
)
LIST_FIELDS = ('technologies', 'features')


def _clean(value):
    if value is None:
        return ''
    return str(value).strip()


def _clean_list(value):
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(item).strip() for item in value if str(item).strip()]


def normalize_payload(payload):
    """Map API keys to model attribute names and trim values"""
    data = {}
    for key, value in (payload or {}).items():
        key = FIELD_ALIASES.get(key, key)
        data[key] = _clean_list(value) if key in LIST_FIELDS else _clean(value)
    return data


def _field_label(field):
    return field.replace('_', ' ').capitalize()


def check_lengths(data, model):
    """
    Reject values longer than the model column that stores them

    Raises:
        ValidationError: Naming the first field that is too long
    """
    columns = model.__table__.columns
    for field, value in data.items():
        if field not in columns or columns[field].primary_key or not isinstance(value, str):
            continue
        limit = getattr(columns[field].type, 'length', None) or MAX_TEXT_LENGTH
        if len(value) > limit:
            raise ValidationError(
                f"{_field_label(field)} must be at most {limit} characters")


def validate(data, required, missing_message=MISSING_FIELDS_MESSAGE, model=None):
    """
    Check required fields, email syntax and, when model is given, field lengths

    Raises:
        ValidationError: With missing_message, the invalid-email message,
            or a too-long message
    """
    if not all(data.get(field) for field in required):
        raise ValidationError(missing_message)
    if not is_valid_email(data['email']):
        raise ValidationError(INVALID_EMAIL_MESSAGE)
    if model is not None:
        check_lengths(data, model)


def persist(record):
    """
    Insert a single record through the shared connection

    Raises:
        PersistenceError: If the connection or the write fails
    """
    connection_cache.get_connection()
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving {record.__tablename__} record: {str(e)}")
        raise PersistenceError('Failed to save submission') from e
    current_app.logger.info(f"{record.__class__.__name__} saved to DB, id: {record.id}")
    return record


def dispatch(emails, record_id=None):
    """
    Send (recipient, subject, template_name, context) tuples in order

    Raises:
        DispatchError: On the first failed send; later sends are not attempted
    """
    for recipient, subject, template_name, context in emails:
        try:
            send_email(recipient, subject, template_name, context)
        except (TransportError, UnknownTemplateError) as e:
            current_app.logger.error(
                f"Notification '{template_name}' for record {record_id} failed: {str(e)}")
            raise DispatchError(str(e), record_id=record_id) from e


def _submitted_at():
    return datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S UTC')


def project_discussion_context(data):
    """Owner notification context with defaults for optional fields"""
    return {
        'name': data['name'],
        'email': data['email'],
        'company': data.get('company') or 'Not provided',
        'project_type': data['project_type'],
        'budget': data.get('budget') or 'Not specified',
        'timeline': data.get('timeline') or 'Not specified',
        'message': data['message'],
        'service_name': data.get('service_name') or 'General Inquiry',
        'phone': data.get('phone') or 'Not provided',
        'technologies': data.get('technologies') or [],
        'features': data.get('features') or [],
        'target_audience': data.get('target_audience') or 'Not specified',
        'has_design': data.get('has_design') or 'Not specified',
        'has_content': data.get('has_content') or 'Not specified',
        'has_domain': data.get('has_domain') or 'Not specified',
        'maintenance': data.get('maintenance') or 'Not specified',
        'additional_requirements': data.get('additional_requirements') or 'None',
        'preferred_contact': data.get('preferred_contact') or 'Email',
        'urgency': data.get('urgency') or 'Normal',
        'submitted_at': _submitted_at(),
    }


def submit_project_discussion(payload):
    """
    Run the project discussion pipeline

    Args:
        payload (dict): Form fields, camelCase or snake_case keys

    Returns:
        dict: {'id': record id, 'message': acknowledgement text}

    Raises:
        ValidationError, PersistenceError, DispatchError
    """
    data = normalize_payload(payload)
    validate(data, PROJECT_DISCUSSION_REQUIRED, model=ProjectDiscussion)

    record = ProjectDiscussion(**{
        field: data.get(field) or None for field in PROJECT_DISCUSSION_FIELDS
    })
    record.technologies = data.get('technologies', [])
    record.features = data.get('features', [])
    persist(record)

    owner = current_app.config.get('SITE_OWNER', '')
    dispatch([
        (data['email'],
         f"Thank you for your project discussion request! - {owner}",
         'thank-you',
         {'name': data['name'], 'email': data['email'],
          'project_type': data['project_type'], 'message': data['message']}),
        (current_app.config['OWNER_EMAIL'],
         f"💼 New Project Discussion Request: {data['project_type']}",
         'project-discussion-notification',
         project_discussion_context(data)),
    ], record_id=record.id)

    return {'id': record.id, 'message': PROJECT_DISCUSSION_SUCCESS}


def submit_contact(payload):
    """
    Run the contact form pipeline

    Returns:
        dict: {'id': record id, 'message': acknowledgement text}

    Raises:
        ValidationError, PersistenceError, DispatchError
    """
    data = normalize_payload(payload)
    validate(data, CONTACT_REQUIRED, CONTACT_MISSING_FIELDS_MESSAGE, model=ContactMessage)

    record = ContactMessage(
        name=data['name'],
        email=data['email'],
        subject=data['subject'],
        message=data['message']
    )
    persist(record)

    owner = current_app.config.get('SITE_OWNER', '')
    context = {
        'name': data['name'],
        'email': data['email'],
        'subject': data['subject'],
        'message': data['message'],
        'submitted_at': _submitted_at(),
    }
    dispatch([
        (data['email'], f"Thank you for reaching out! - {owner}", 'thank-you', context),
        (current_app.config['OWNER_EMAIL'],
         f"🚀 New Contact Form Submission from {data['name']}",
         'contact-notification',
         context),
    ], record_id=record.id)

    return {'id': record.id, 'message': CONTACT_SUCCESS}


__all__ = [
    'submit_project_discussion',
    'submit_contact',
    'normalize_payload',
    'validate',
    'INVALID_EMAIL_MESSAGE',
    'MISSING_FIELDS_MESSAGE'
]
