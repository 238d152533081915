"""
Discuss Routes - Server-side multi-step project discussion form
The wizard state lives in the session between steps.
"""

from flask import render_template, session, redirect, url_for, request, flash, current_app
from utils.errors import PersistenceError, DispatchError
from utils.submissions import submit_project_discussion, PROJECT_DISCUSSION_FAILURE
from utils.wizard import (
    ProjectDiscussionWizard,
    project_type_questions,
    STEPS,
    FULL,
    TEXT_FIELDS,
    LIST_FIELDS,
    PROJECT_TYPES,
    TIMELINES,
    AUDIENCES,
    BUDGETS,
    CONTACT_METHODS,
    YES_NO_OPTIONS
)
from . import discuss_bp

SESSION_KEY = 'discussion_wizard'


def _load_wizard():
    state = session.get(SESSION_KEY)
    if state:
        return ProjectDiscussionWizard.from_dict(state)
    return ProjectDiscussionWizard(FULL)


def _save_wizard(wizard):
    session[SESSION_KEY] = wizard.to_dict()


def _sync_list(wizard, field, selected):
    """Toggle items so the wizard's list matches the submitted checkboxes"""
    for value in list(wizard.data[field]):
        if value not in selected:
            wizard.toggle_item(field, value)
    for value in selected:
        if value not in wizard.data[field]:
            wizard.toggle_item(field, value)


def _send(payload):
    """Submission sender that hides infrastructure errors from the visitor"""
    try:
        return submit_project_discussion(payload)
    except (PersistenceError, DispatchError) as e:
        current_app.logger.error(f"Error processing project discussion form: {str(e)}")
        raise RuntimeError(PROJECT_DISCUSSION_FAILURE) from e


@discuss_bp.route('/', methods=['GET'])
def index():
    """Render the current wizard step"""
    variant = request.args.get('variant')
    service = request.args.get('service')
    wizard = _load_wizard()

    # Changing surface or service starts a fresh form
    if (variant and variant in STEPS and variant != wizard.variant) or \
            (service and service != wizard.service_name):
        wizard = ProjectDiscussionWizard(variant if variant in STEPS else wizard.variant,
                                         service_name=service or wizard.service_name)
        _save_wizard(wizard)

    return render_template(
        'pages/discuss_project.html',
        wizard=wizard,
        questions=project_type_questions(wizard.data['project_type']),
        options={
            'project_types': PROJECT_TYPES,
            'timelines': TIMELINES,
            'audiences': AUDIENCES,
            'budgets': BUDGETS,
            'contact_methods': CONTACT_METHODS,
            'yes_no': YES_NO_OPTIONS
        })


@discuss_bp.route('/', methods=['POST'])
def advance():
    """Apply submitted answers, then run the requested transition"""
    wizard = _load_wizard()

    cut_error = None
    for field in TEXT_FIELDS:
        if field in request.form:
            if not wizard.update_field(field, request.form.get(field, '')):
                cut_error = cut_error or wizard.error
    for field in LIST_FIELDS:
        if f'{field}_present' in request.form:
            _sync_list(wizard, field, request.form.getlist(field))

    action = request.form.get('action', 'next')

    if cut_error:
        # Let the visitor review the shortened text before moving on
        wizard.error = cut_error
        current_app.logger.info(f"Wizard answer cut to its limit, skipping action: {action}")
    elif action == 'update':
        # Answers were applied above; stay on the current step
        pass
    elif action == 'toggle':
        field = request.form.get('field')
        value = request.form.get('value')
        if field in LIST_FIELDS and value:
            wizard.toggle_item(field, value)
    elif action == 'back':
        wizard.back()
    elif action == 'next':
        if not wizard.next() and not wizard.is_last_step:
            flash('Please complete this step before continuing.', 'warning')
    elif action == 'submit':
        if not wizard.is_step_valid():
            flash('Please complete this step before submitting.', 'warning')
        else:
            # Failures land in wizard.error and are shown next to the submit button
            result = wizard.submit(_send)
            if result:
                flash(result['message'], 'success')
    elif action == 'reset':
        wizard.reset()
    else:
        current_app.logger.debug(f"Ignoring unknown wizard action: {action}")

    _save_wizard(wizard)
    return redirect(url_for('discuss.index'))
