"""
API Routes - JSON endpoints for forms, chatbot and content
"""

from flask import request, jsonify, current_app
from utils.chat import relay_chat, CHAT_SUGGESTIONS, FALLBACK_REPLY
from utils.data import load_data, query_blogs, get_blog, get_enabled_projects, get_project
from utils.decorators import rate_limited
from utils.errors import ValidationError, BadRequestError, PersistenceError, DispatchError
from utils.similarity import related_projects, similarity_label
from utils.submissions import (
    submit_project_discussion,
    submit_contact,
    PROJECT_DISCUSSION_FAILURE,
    CONTACT_FAILURE
)
from . import api_bp


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _int_arg(name, default):
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


@api_bp.route('/project-discussion', methods=['POST'])
@rate_limited('project_discussion')
def project_discussion():
    """Project discussion submission"""
    try:
        result = submit_project_discussion(_json_body())
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except (PersistenceError, DispatchError) as e:
        current_app.logger.error(f"Error processing project discussion form: {str(e)}")
        return jsonify({'error': PROJECT_DISCUSSION_FAILURE}), 500

    return jsonify({
        'message': result['message'],
        'success': True,
        'id': result['id']
    })


@api_bp.route('/contact', methods=['POST'])
@rate_limited('contact')
def contact():
    """Contact form submission"""
    try:
        result = submit_contact(_json_body())
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except (PersistenceError, DispatchError) as e:
        current_app.logger.error(f"Error processing contact form: {str(e)}")
        return jsonify({'error': CONTACT_FAILURE}), 500

    return jsonify({
        'message': result['message'],
        'success': True,
        'id': result['id']
    })


@api_bp.route('/chatbot', methods=['POST'])
@rate_limited('chatbot')
def chatbot():
    """Relay one visitor message to the portfolio assistant"""
    try:
        reply = relay_chat(_json_body().get('message'))
    except BadRequestError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Chatbot API error: {str(e)}")
        return jsonify({'error': 'Failed to connect to Gemini.', 'reply': FALLBACK_REPLY}), 500

    return jsonify({'reply': reply})


@api_bp.route('/chatbot/suggestions')
def chatbot_suggestions():
    return jsonify({'suggestions': CHAT_SUGGESTIONS})


@api_bp.route('/portfolio-data')
def portfolio_data():
    return jsonify(load_data())


@api_bp.route('/blogs')
def blogs():
    """Blog listing with category, featured, search and pagination filters"""
    result = query_blogs(
        page=max(_int_arg('page', 1), 1),
        limit=max(_int_arg('limit', 10), 1),
        category=request.args.get('category') or None,
        search=request.args.get('search') or None,
        featured=request.args.get('featured') == 'true'
    )
    return jsonify(result)


@api_bp.route('/blogs/<blog_id>')
def blog_detail(blog_id):
    blog = get_blog(blog_id)
    if not blog:
        return jsonify({'error': 'Blog post not found'}), 404
    return jsonify(blog)


@api_bp.route('/projects/<project_id>/related')
def project_related(project_id):
    """Related projects with their similarity score and label"""
    data = load_data()
    project = get_project(project_id, data)
    if not project:
        return jsonify({'error': 'Project not found'}), 404

    limit = max(_int_arg('limit', 2), 0)
    related = related_projects(project, get_enabled_projects(data), limit=limit)
    for item in related:
        item['similarity'] = similarity_label(item.get('score', 0))

    return jsonify({'project': project['id'], 'related': related})
