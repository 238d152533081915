"""
Pages Routes - Public pages
"""

from datetime import datetime
from flask import render_template, redirect, url_for, request, flash, current_app, abort
from utils.chat import relay_chat, CHAT_SUGGESTIONS
from utils.data import (
    load_data,
    enabled,
    get_enabled_projects,
    get_project,
    get_work_experience,
    query_blogs,
    get_blog,
    get_blog_categories
)
from utils.decorators import rate_limited
from utils.errors import ValidationError, BadRequestError, PersistenceError, DispatchError
from utils.similarity import category_of, related_projects, similarity_label
from utils.submissions import submit_contact, CONTACT_FAILURE
from . import pages_bp


@pages_bp.route('/')
def index():
    """Landing page - hero, featured projects, skills and services"""
    data = load_data()
    projects = get_enabled_projects(data)
    return render_template('pages/home.html',
                           data=data,
                           projects=projects[:3],
                           skills=enabled(data.get('skills', [])),
                           services=enabled(data.get('services', [])),
                           suggestions=CHAT_SUGGESTIONS)


@pages_bp.route('/about')
def about():
    data = load_data()
    work, education = get_work_experience(data)
    return render_template('pages/about.html', data=data, work=work, education=education)


@pages_bp.route('/projects')
def projects():
    """Project catalog with category filter"""
    data = load_data()
    catalog = [dict(p, category=category_of(p.get('techStack'))) for p in get_enabled_projects(data)]
    categories = sorted({p['category'] for p in catalog})

    selected = request.args.get('category')
    if selected and selected != 'all':
        catalog = [p for p in catalog if p['category'] == selected]

    return render_template('pages/projects.html',
                           projects=catalog,
                           categories=categories,
                           selected=selected or 'all')


@pages_bp.route('/projects/<project_id>')
def project_detail(project_id):
    """Project detail page with related projects"""
    data = load_data()
    project = get_project(project_id, data)
    if not project:
        abort(404)

    related = related_projects(project, get_enabled_projects(data), limit=2)
    for item in related:
        item['similarity'] = similarity_label(item.get('score', 0))

    return render_template('pages/project_detail.html',
                           project=project,
                           category=category_of(project.get('techStack')),
                           related=related)


@pages_bp.route('/blogs')
def blogs():
    try:
        page = max(int(request.args.get('page', 1)), 1)
    except (TypeError, ValueError):
        page = 1
    result = query_blogs(page=page,
                         limit=9,
                         category=request.args.get('category') or None,
                         search=request.args.get('search') or None)
    return render_template('pages/blogs.html',
                           result=result,
                           categories=get_blog_categories(),
                           category=request.args.get('category', 'all'),
                           search=request.args.get('search', ''))


@pages_bp.route('/blogs/<blog_id>')
def blog_detail(blog_id):
    blog = get_blog(blog_id)
    if not blog:
        abort(404)
    return render_template('pages/blog_detail.html', blog=blog)


@pages_bp.route('/gallery')
def gallery():
    data = load_data()
    return render_template('pages/gallery.html', items=enabled(data.get('gallery', [])))


@pages_bp.route('/resume')
def resume():
    data = load_data()
    work, education = get_work_experience(data)
    return render_template('pages/resume.html',
                           data=data,
                           work=work,
                           education=education,
                           skills=enabled(data.get('skills', [])),
                           projects=get_enabled_projects(data))


@pages_bp.route('/contact', methods=['GET'])
def contact():
    return render_template('pages/contact.html', data=load_data(), form={})


@pages_bp.route('/contact', methods=['POST'])
@rate_limited('contact_page')
def contact_submit():
    """Contact form fallback for visitors without JavaScript"""
    # Honeypot spam protection
    if request.form.get('website'):
        return redirect(url_for('pages.contact'))

    try:
        result = submit_contact(request.form.to_dict())
    except ValidationError as e:
        flash(str(e), 'danger')
        return render_template('pages/contact.html', data=load_data(), form=request.form), 400
    except (PersistenceError, DispatchError) as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        flash(CONTACT_FAILURE, 'danger')
        return render_template('pages/contact.html', data=load_data(), form=request.form), 500

    flash(result['message'], 'success')
    return redirect(url_for('pages.contact'))


@pages_bp.route('/assistant', methods=['GET', 'POST'])
@rate_limited('assistant')
def assistant():
    """Chat with the portfolio assistant without JavaScript; nothing is stored"""
    question = ''
    reply = None
    if request.method == 'POST':
        question = request.form.get('message', '')
        try:
            reply = relay_chat(question)
        except BadRequestError as e:
            flash(str(e), 'warning')
    return render_template('pages/assistant.html',
                           question=question,
                           reply=reply,
                           suggestions=CHAT_SUGGESTIONS)


@pages_bp.route('/sitemap.xml')
def sitemap():
    """Generate sitemap for static pages, projects and blog posts"""
    base_url = current_app.config.get('SITE_URL') or request.url_root.rstrip('/')
    today = datetime.now().strftime('%Y-%m-%d')

    sitemap_entries = []
    for path, priority in [('/', '1.0'), ('/about', '0.8'), ('/projects', '0.9'),
                           ('/blogs', '0.8'), ('/gallery', '0.6'), ('/contact', '0.7'),
                           ('/resume', '0.7'), ('/discuss-project/', '0.7')]:
        sitemap_entries.append({
            'loc': f'{base_url}{path}',
            'changefreq': 'weekly',
            'priority': priority,
            'lastmod': today
        })

    for project in get_enabled_projects():
        sitemap_entries.append({
            'loc': f"{base_url}/projects/{project['id']}",
            'changefreq': 'monthly',
            'priority': '0.8',
            'lastmod': today
        })

    for blog in query_blogs(limit=1000)['blogs']:
        sitemap_entries.append({
            'loc': f"{base_url}/blogs/{blog['id']}",
            'changefreq': 'monthly',
            'priority': '0.6',
            'lastmod': (blog.get('publishedAt') or today)[:10]
        })

    sitemap_xml = ['<?xml version="1.0" encoding="UTF-8"?>']
    sitemap_xml.append('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">')

    for entry in sitemap_entries:
        sitemap_xml.append('<url>')
        sitemap_xml.append(f'<loc>{entry["loc"]}</loc>')
        sitemap_xml.append(f'<lastmod>{entry["lastmod"]}</lastmod>')
        sitemap_xml.append(f'<changefreq>{entry["changefreq"]}</changefreq>')
        sitemap_xml.append(f'<priority>{entry["priority"]}</priority>')
        sitemap_xml.append('</url>')

    sitemap_xml.append('</urlset>')

    response = current_app.make_response('\n'.join(sitemap_xml))
    response.headers['Content-Type'] = 'application/xml; charset=utf-8'
    return response


@pages_bp.route('/robots.txt')
def robots():
    """Generate robots.txt"""
    base_url = current_app.config.get('SITE_URL') or request.url_root.rstrip('/')
    robots_txt = f"""User-agent: *
Allow: /
Disallow: /api/
Disallow: /assistant

Sitemap: {base_url}/sitemap.xml"""

    response = current_app.make_response(robots_txt)
    response.headers['Content-Type'] = 'text/plain; charset=utf-8'
    return response
