"""
Data Management Module - Loads portfolio and blog content
Content is authored out-of-band as JSON files under CONTENT_DIR and is read-only here
"""

import json
import math
import os
from datetime import datetime
from flask import current_app


PORTFOLIO_FILE = 'portfolio.json'
BLOGS_FILE = 'blogs.json'


def _content_path(filename):
    return os.path.join(current_app.config['CONTENT_DIR'], filename)


def _read_json(filename):
    with open(_content_path(filename), 'r', encoding='utf-8') as file:
        return json.load(file)


def get_default_portfolio_data():
    """Return empty portfolio template"""
    return {
        'about': {
            'name': current_app.config.get('SITE_OWNER', ''),
            'title': '',
            'subTitle': '',
            'description': '',
            'contactEmail': current_app.config.get('OWNER_EMAIL', ''),
            'socialLinks': {}
        },
        'skills': [],
        'timeline': [],
        'projects': [],
        'services': [],
        'gallery': []
    }


def load_data():
    """
    Load the portfolio document

    Returns:
        dict: Portfolio data (about, skills, timeline, projects, services, gallery),
        or the default template if the content file is missing or unreadable
    """
    try:
        data = _read_json(PORTFOLIO_FILE)
    except (FileNotFoundError, json.JSONDecodeError, IOError) as e:
        current_app.logger.error(f"Error loading portfolio data: {str(e)}")
        return get_default_portfolio_data()

    defaults = get_default_portfolio_data()
    for key, value in defaults.items():
        data.setdefault(key, value)
    return data


def enabled(items):
    """Filter content records by their enabled flag (missing flag counts as enabled)"""
    return [item for item in items if item.get('enabled', True)]


def get_enabled_projects(data=None):
    if data is None:
        data = load_data()
    return enabled(data.get('projects', []))


def get_project(project_id, data=None):
    """Find an enabled project by id"""
    return next(
        (p for p in get_enabled_projects(data) if str(p.get('id')) == str(project_id)),
        None)


def get_work_experience(data=None):
    """Enabled timeline entries split into (work, education)"""
    if data is None:
        data = load_data()
    entries = enabled(data.get('timeline', []))
    work = [e for e in entries if not e.get('forEducation')]
    education = [e for e in entries if e.get('forEducation')]
    return work, education


def load_blogs():
    try:
        return _read_json(BLOGS_FILE).get('blogs', [])
    except (FileNotFoundError, json.JSONDecodeError, IOError) as e:
        current_app.logger.error(f"Error loading blogs: {str(e)}")
        return []


def get_blog(blog_id):
    return next((b for b in load_blogs() if b.get('id') == blog_id), None)


def _published_at(blog):
    value = blog.get('publishedAt') or ''
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).timestamp()
    except ValueError:
        return 0.0


def query_blogs(page=1, limit=10, category=None, search=None, featured=None):
    """
    Filter, sort and paginate blog posts

    Args:
        page (int): 1-based page number
        limit (int): Page size
        category (str, optional): Category name, 'all' disables the filter
        search (str, optional): Case-insensitive text matched against
            title, excerpt, content and tags
        featured (bool, optional): Only featured posts when True

    Returns:
        dict: blogs, total, page, totalPages, hasNextPage, hasPrevPage
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    blogs = load_blogs()

    if category and category != 'all':
        blogs = [b for b in blogs if b.get('category', '').lower() == category.lower()]

    if featured:
        blogs = [b for b in blogs if b.get('featured')]

    if search:
        needle = search.lower()
        blogs = [
            b for b in blogs
            if needle in b.get('title', '').lower()
            or needle in b.get('excerpt', '').lower()
            or needle in b.get('content', '').lower()
            or any(needle in tag.lower() for tag in b.get('tags', []))
        ]

    # Newest first
    blogs = sorted(blogs, key=_published_at, reverse=True)

    total = len(blogs)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit

    return {
        'blogs': blogs[start:start + limit],
        'total': total,
        'page': page,
        'totalPages': total_pages,
        'hasNextPage': page < total_pages,
        'hasPrevPage': page > 1
    }


def get_blog_categories():
    return sorted({b.get('category') for b in load_blogs() if b.get('category')})
