"""
Chat Module - Portfolio assistant relayed to the Gemini API

Every turn is independent: the model sees a system prompt rebuilt from the
current portfolio content plus the visitor's single message.
"""

import re
import requests
from datetime import datetime
from flask import current_app
from .data import load_data, enabled
from .errors import BadRequestError


FALLBACK_REPLY = "Sorry, I couldn't get a response from Gemini."

CHAT_SUGGESTIONS = [
    'What technologies do you work with?',
    'Tell me about your recent projects',
    'How can I contact you for work?',
    'What is your experience with AI/ML?',
    'Can you tell me about your blockchain projects?',
    'What services do you offer?',
    'Tell me about your education background',
    'What are your strongest programming skills?'
]

# Lines the model sometimes emits as stream markers
_MARKER_LINE = re.compile(r'^(start|stop)', re.IGNORECASE)


def filter_reply(text):
    """Drop blank lines and start/stop marker lines before display"""
    lines = (text or '').split('\n')
    return '\n'.join(
        line for line in lines
        if line.strip() and not _MARKER_LINE.match(line))


def _year(value):
    try:
        return datetime.fromisoformat(value).year
    except (TypeError, ValueError):
        return None


def _link(label, url):
    return f" - {label}: {url}" if url and url != '#' else ''


def build_system_prompt(data):
    """System prompt describing the portfolio owner, built from content data"""
    about = data.get('about', {})
    name = about.get('name', '')
    social = about.get('socialLinks', {})

    skills = sorted(enabled(data.get('skills', [])),
                    key=lambda s: s.get('percentage', 0), reverse=True)

    experience = []
    for entry in enabled(data.get('timeline', [])):
        if entry.get('forEducation'):
            continue
        end = _year(entry.get('endDate')) or 'Present'
        experience.append(
            f"{entry.get('jobTitle')} at {entry.get('company_name')} "
            f"({_year(entry.get('startDate'))} - {end})")

    projects = [
        f"{p.get('title')}: {p.get('description')}"
        f"{_link('Live', p.get('liveurl'))}{_link('GitHub', p.get('githuburl'))}"
        for p in enabled(data.get('projects', []))
    ]
    services = [
        f"{s.get('name')} ({s.get('charge')}): {s.get('desc')}"
        for s in enabled(data.get('services', []))
    ]
    links = [f"{label}: {url}" for label, url in social.items() if url]

    sections = [
        f"You are {name}'s Portfolio Assistant. You help visitors learn about "
        f"{name}'s work, experience, and services.",
        f"ABOUT {name.upper()}: {about.get('description', '')}",
        f"CURRENT ROLE: {about.get('title', '')} - {about.get('subTitle', '')}",
        f"SKILLS: {', '.join(s.get('name') for s in skills)}",
        "WORK EXPERIENCE:\n- " + '\n- '.join(experience),
        "PROJECTS:\n- " + '\n- '.join(projects),
        "SERVICES OFFERED:\n- " + '\n- '.join(services),
        "SOCIAL LINKS:\n- " + '\n- '.join(links),
        "RESPONSE RULES:\n"
        "- Keep responses under 100 words\n"
        "- Always format links as markdown: [text](url)\n"
        f"- For contact information use [Email](mailto:{about.get('contactEmail', '')})\n"
        f"- You are {name}'s assistant, refer to {name} in the third person\n"
        "- Be professional, friendly and concise",
    ]
    return '\n\n'.join(sections)


def extract_reply(body):
    """First candidate text from a generateContent response, or None"""
    try:
        return body['candidates'][0]['content']['parts'][0]['text'] or None
    except (KeyError, IndexError, TypeError):
        return None


def relay_chat(message):
    """
    Ask Gemini to answer message as the portfolio assistant

    Args:
        message (str): The visitor's text

    Returns:
        str: The model's reply, or FALLBACK_REPLY on any upstream failure

    Raises:
        BadRequestError: If message is empty
    """
    if not isinstance(message, str) or not message.strip():
        raise BadRequestError('No message provided')

    cfg = current_app.config
    api_key = cfg.get('GEMINI_API_KEY')
    if not api_key:
        current_app.logger.warning("GEMINI_API_KEY not configured, returning fallback reply")
        return FALLBACK_REPLY

    url = cfg['GEMINI_API_URL'].format(model=cfg['GEMINI_MODEL'])
    body = {
        'system_instruction': {'parts': [{'text': build_system_prompt(load_data())}]},
        'contents': [{'parts': [{'text': message}]}]
    }

    try:
        response = requests.post(url, params={'key': api_key}, json=body,
                                 timeout=cfg.get('CHAT_TIMEOUT', 20))
        response.raise_for_status()
        reply = extract_reply(response.json())
    except requests.RequestException as e:
        current_app.logger.error(f"Chatbot API error: {str(e)}")
        return FALLBACK_REPLY
    except ValueError as e:
        current_app.logger.error(f"Chatbot API returned invalid JSON: {str(e)}")
        return FALLBACK_REPLY

    if reply is None:
        current_app.logger.error("Chatbot API response had no candidate text")
        return FALLBACK_REPLY
    return reply


__all__ = [
    'FALLBACK_REPLY',
    'CHAT_SUGGESTIONS',
    'filter_reply',
    'build_system_prompt',
    'relay_chat'
]
