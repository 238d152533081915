"""Tests for the server-side project discussion wizard pages."""

from models import ProjectDiscussion

URL = '/discuss-project/'


def post(client, action, **fields):
    return client.post(URL, data=dict(fields, action=action), follow_redirects=True)


def complete_short(client):
    client.get(URL + '?variant=short&service=Smart%20Contracts')
    post(client, 'next', name='Ada', email='ada@example.com')
    post(client, 'next', project_type='Web Application', timeline='ASAP')
    return post(client, 'submit', message='A voting dApp')


def test_wizard_starts_on_first_step(client):
    html = client.get(URL).get_data(as_text=True)
    assert 'Personal Info' in html
    assert 'name="phone"' in html


def test_incomplete_step_does_not_advance(client):
    client.get(URL + '?variant=short')
    html = post(client, 'next', name='Ada', email='bad').get_data(as_text=True)
    assert 'Please complete this step before continuing.' in html
    assert 'name="email"' in html


def test_answers_survive_back_navigation(client):
    client.get(URL + '?variant=short')
    post(client, 'next', name='Ada', email='ada@example.com')
    html = post(client, 'back').get_data(as_text=True)
    assert 'value="Ada"' in html


def test_short_variant_submission(client, sent_emails):
    html = complete_short(client).get_data(as_text=True)

    assert 'Project discussion request sent successfully' in html
    assert 'Thank you, Ada!' in html
    assert [m['To'] for m in sent_emails] == ['ada@example.com', 'owner@test.local']

    with client.application.app_context():
        record = ProjectDiscussion.query.one()
        assert record.service_name == 'Smart Contracts'
        assert record.timeline == 'ASAP'


def test_full_variant_submission_with_checkboxes(client, sent_emails):
    client.get(URL + '?variant=full')
    post(client, 'next', name='Ada', email='ada@example.com', phone='555-0100')
    post(client, 'next', project_type='Mobile App', timeline='1-3 months')
    post(client, 'next', target_audience='Businesses', budget='$50,000+')
    client.post(URL, data={
        'action': 'next',
        'technologies_present': '1',
        'technologies': ['Flutter', 'Firebase'],
        'features_present': '1',
        'features': ['Offline Support'],
    })
    post(client, 'submit', message='Fitness tracker', preferred_contact='Phone')

    with client.application.app_context():
        record = ProjectDiscussion.query.one()
        assert record.technologies == ['Flutter', 'Firebase']
        assert record.features == ['Offline Support']
        assert record.phone == '555-0100'
        assert record.preferred_contact == 'Phone'
    assert len(sent_emails) == 2


def test_unchecking_all_boxes_clears_the_list(client):
    client.get(URL + '?variant=full')
    post(client, 'next', name='Ada', email='ada@example.com', phone='1')
    post(client, 'next', project_type='Other', timeline='ASAP')
    post(client, 'next', target_audience='Students', budget="Let's discuss")
    client.post(URL, data={'action': 'update', 'technologies_present': '1',
                           'technologies': ['React'], 'features_present': '1'})
    html = post(client, 'next', technologies_present='1', features_present='1').get_data(as_text=True)

    assert 'Please complete this step before continuing.' in html
    assert 'value="React" checked' not in html


def test_failed_submission_shows_error_and_keeps_answers(client, sent_emails, smtp):
    smtp.fail_for.add('owner@test.local')
    html = complete_short(client).get_data(as_text=True)

    assert 'Failed to process project discussion form. Please try again.' in html
    assert 'A voting dApp' in html
    assert 'Thank you, Ada!' not in html


def test_reset_after_submission(client, sent_emails):
    complete_short(client)
    html = post(client, 'reset').get_data(as_text=True)
    assert 'Personal Info' in html
    assert 'value="Ada"' not in html


def test_switching_variant_starts_over(client):
    client.get(URL + '?variant=short')
    post(client, 'next', name='Ada', email='ada@example.com')
    html = client.get(URL + '?variant=full').get_data(as_text=True)
    assert 'Final Details' in html
    assert 'value="Ada"' not in html


def test_toggle_action_adds_and_removes_one_item(client):
    client.get(URL + '?variant=full')
    post(client, 'next', name='Ada', email='ada@example.com', phone='1')
    post(client, 'next', project_type='Web Application', timeline='ASAP')
    post(client, 'next', target_audience='Developers', budget='$50,000+')

    html = client.post(URL, data={'action': 'toggle', 'field': 'technologies', 'value': 'React'},
                       follow_redirects=True).get_data(as_text=True)
    assert 'value="React" checked' in html

    html = client.post(URL, data={'action': 'toggle', 'field': 'technologies', 'value': 'React'},
                       follow_redirects=True).get_data(as_text=True)
    assert 'value="React" checked' not in html


def test_long_message_is_cut_and_session_cookie_stays_small(client, sent_emails):
    client.get(URL + '?variant=short')
    post(client, 'next', name='Ada', email='ada@example.com')
    post(client, 'next', project_type='Web Application', timeline='ASAP')

    response = client.post(URL, data={'action': 'submit', 'message': 'x' * 4000})
    cookies = [c for c in response.headers.getlist('Set-Cookie') if c.startswith('session=')]
    assert cookies
    assert len(cookies[0]) < 4093

    html = client.get(URL).get_data(as_text=True)
    assert 'Message is limited to 1500 characters. The extra text was removed.' in html
    assert 'x' * 1500 in html
    assert 'x' * 1501 not in html

    # The cut answer is shown for review instead of being submitted
    assert sent_emails == []
    with client.application.app_context():
        assert ProjectDiscussion.query.count() == 0


def test_submitting_after_a_cut_message_goes_through(client, sent_emails):
    client.get(URL + '?variant=short')
    post(client, 'next', name='Ada', email='ada@example.com')
    post(client, 'next', project_type='Web Application', timeline='ASAP')
    post(client, 'update', message='y' * 2000)

    html = post(client, 'submit').get_data(as_text=True)

    assert 'Thank you, Ada!' in html
    with client.application.app_context():
        assert len(ProjectDiscussion.query.one().message) == 1500
