"""
Wizard Module - Multi-step project discussion form controller

The wizard holds the visitor's answers across steps and only lets them move
forward when the current step is complete. It is a plain object that
serializes to a dict, so the discuss blueprint can keep it in the session.
"""

import re
from .errors import PortfolioError

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

SHORT = 'short'
FULL = 'full'

STEPS = {
    SHORT: [
        {'id': 'personal', 'title': 'Personal Info'},
        {'id': 'project', 'title': 'Project Type'},
        {'id': 'details', 'title': 'Details'},
    ],
    FULL: [
        {'id': 'personal', 'title': 'Personal Info'},
        {'id': 'project', 'title': 'Project Type'},
        {'id': 'details', 'title': 'Project Details'},
        {'id': 'specifics', 'title': 'Specifics'},
        {'id': 'final', 'title': 'Final Details'},
    ],
}

PROJECT_TYPES = ['Web Application', 'Mobile App', 'E-commerce', 'Portfolio/Landing Page',
                 'Custom Solution', 'Other']
TIMELINES = ['ASAP', '1-3 months', '3-6 months', '6+ months', 'Just exploring']
AUDIENCES = ['General Public', 'Businesses', 'Developers', 'Students', 'Professionals',
             'Specific Industry', 'Other']
BUDGETS = ['Under $5,000', '$5,000 - $10,000', '$10,000 - $25,000', '$25,000 - $50,000',
           '$50,000+', "Let's discuss"]
CONTACT_METHODS = ['Email', 'Phone', 'WhatsApp', 'Video Call', 'In-person']
YES_NO_OPTIONS = ['Yes', 'No', 'Partially']

PROJECT_TYPE_QUESTIONS = {
    'Web Application': {
        'technologies': ['React', 'Next.js', 'Vue.js', 'Angular', 'Node.js', 'Express.js',
                         'MongoDB', 'PostgreSQL', 'AWS', 'Vercel'],
        'features': ['User Authentication', 'Database Integration', 'API Development',
                     'Payment Processing', 'Real-time Features', 'Admin Dashboard',
                     'Mobile Responsive', 'SEO Optimization']
    },
    'Mobile App': {
        'technologies': ['React Native', 'Flutter', 'Swift', 'Kotlin', 'Expo', 'Firebase',
                         'AWS Amplify', 'App Store', 'Google Play'],
        'features': ['Push Notifications', 'Offline Support', 'Camera Integration',
                     'GPS/Location', 'Social Login', 'In-App Purchases', 'Biometric Auth',
                     'Cross-platform']
    },
    'E-commerce': {
        'technologies': ['Shopify', 'WooCommerce', 'Magento', 'React', 'Next.js', 'Stripe',
                         'PayPal', 'MongoDB', 'AWS'],
        'features': ['Product Catalog', 'Shopping Cart', 'Payment Gateway',
                     'Inventory Management', 'Order Tracking', 'Customer Reviews',
                     'Multi-language', 'Analytics']
    },
    'Portfolio/Landing Page': {
        'technologies': ['React', 'Next.js', 'Gatsby', 'WordPress', 'Framer Motion',
                         'Tailwind CSS', 'Vercel', 'Netlify'],
        'features': ['Responsive Design', 'Contact Forms', 'Blog Integration',
                     'SEO Optimization', 'Analytics', 'Social Media Integration', 'CMS',
                     'Fast Loading']
    },
}

DEFAULT_QUESTIONS = {
    'technologies': ['React', 'Next.js', 'Node.js', 'MongoDB', 'AWS', 'TypeScript',
                     'Tailwind CSS', 'Vercel'],
    'features': ['Custom Development', 'API Integration', 'Database Design', 'UI/UX Design',
                 'Testing', 'Deployment', 'Maintenance', 'Documentation']
}

LIST_FIELDS = ('technologies', 'features')

TEXT_FIELDS = (
    'name', 'email', 'phone', 'company',
    'project_type', 'timeline',
    'target_audience', 'budget', 'has_design', 'has_content', 'has_domain', 'maintenance',
    'message', 'additional_requirements', 'preferred_contact', 'urgency',
)

# The wizard lives in a signed session cookie, which browsers drop above 4 KB
FREE_TEXT_LIMITS = {
    'message': 1500,
    'additional_requirements': 500,
}
FIELD_LIMIT = 100


def is_valid_email(value):
    return bool(EMAIL_PATTERN.match(value or ''))


def project_type_questions(project_type):
    """Technology and feature suggestions for a project type"""
    return PROJECT_TYPE_QUESTIONS.get(project_type, DEFAULT_QUESTIONS)


def field_limit(key):
    return FREE_TEXT_LIMITS.get(key, FIELD_LIMIT)


def _filled(value):
    return bool(value and value.strip())


def empty_form():
    form = {field: '' for field in TEXT_FIELDS}
    form.update({field: [] for field in LIST_FIELDS})
    return form


class ProjectDiscussionWizard:
    """Step-gated accumulator for a project discussion request"""

    def __init__(self, variant=FULL, service_name=None):
        if variant not in STEPS:
            raise ValueError(f"Unknown wizard variant: {variant}")
        self.variant = variant
        self.service_name = service_name
        self.reset()

    def reset(self):
        """Return to the initial state: first step, empty fields, no error"""
        self.step = 0
        self.data = empty_form()
        self.is_submitting = False
        self.is_submitted = False
        self.error = None

    @property
    def steps(self):
        return STEPS[self.variant]

    @property
    def last_step(self):
        return len(self.steps) - 1

    @property
    def is_last_step(self):
        return self.step == self.last_step

    @property
    def progress(self):
        return int((self.step + 1) / len(self.steps) * 100)

    def update_field(self, key, value):
        """
        Store a text answer, cutting it at the field's limit

        Returns:
            bool: False if the value was cut (the error says so), else True
        """
        if key not in TEXT_FIELDS:
            raise KeyError(key)
        value = value if value is not None else ''
        limit = field_limit(key)
        if len(value) > limit:
            self.data[key] = value[:limit]
            self.error = (f"{key.replace('_', ' ').capitalize()} is limited to "
                          f"{limit} characters. The extra text was removed.")
            return False
        self.data[key] = value
        self.error = None
        return True

    def toggle_item(self, field, value):
        """Add or remove value in a multi-select field"""
        if field not in LIST_FIELDS:
            raise KeyError(field)
        items = self.data[field]
        if value in items:
            items.remove(value)
        else:
            items.append(value)
        self.error = None

    def is_step_valid(self, step=None):
        step = self.step if step is None else step
        d = self.data

        if step == 0:
            valid = _filled(d['name']) and is_valid_email(d['email'].strip())
            if self.variant == FULL:
                valid = valid and _filled(d['phone'])
            return valid
        if step == 1:
            return bool(d['project_type'] and d['timeline'])

        if self.variant == SHORT:
            if step == 2:
                return _filled(d['message'])
            return True

        if step == 2:
            return bool(d['target_audience'] and d['budget'])
        if step == 3:
            return bool(d['technologies']) and bool(d['features'])
        if step == 4:
            return _filled(d['message']) and bool(d['preferred_contact'])
        return True

    def next(self):
        """Advance one step. Returns True if the step changed."""
        if self.is_last_step or not self.is_step_valid():
            return False
        self.step += 1
        return True

    def back(self):
        if self.step == 0:
            return False
        self.step -= 1
        return True

    def payload(self):
        payload = {k: (v.strip() if isinstance(v, str) else list(v)) for k, v in self.data.items()}
        if self.service_name:
            payload['service_name'] = self.service_name
        return payload

    def submit(self, sender):
        """
        Send the accumulated answers

        Args:
            sender (callable): Receives the payload dict; raises on failure

        Returns:
            The sender's result, or None if the wizard was not ready or the
            send failed (the message is kept in self.error)
        """
        if not self.is_last_step or not self.is_step_valid() or self.is_submitting:
            return None

        self.is_submitting = True
        self.error = None
        try:
            result = sender(self.payload())
        except (PortfolioError, RuntimeError) as e:
            self.error = str(e) or 'Failed to submit project discussion'
            return None
        finally:
            self.is_submitting = False

        self.is_submitted = True
        return result

    def to_dict(self):
        return {
            'variant': self.variant,
            'service_name': self.service_name,
            'step': self.step,
            'data': {k: (list(v) if isinstance(v, list) else v) for k, v in self.data.items()},
            'is_submitted': self.is_submitted,
            'error': self.error,
        }

    @classmethod
    def from_dict(cls, state):
        wizard = cls(state.get('variant', FULL), state.get('service_name'))
        wizard.data.update({k: v for k, v in state.get('data', {}).items() if k in wizard.data})
        wizard.step = min(max(int(state.get('step', 0)), 0), wizard.last_step)
        wizard.is_submitted = bool(state.get('is_submitted'))
        wizard.error = state.get('error')
        return wizard


__all__ = [
    'ProjectDiscussionWizard',
    'project_type_questions',
    'is_valid_email',
    'SHORT',
    'FULL'
]
