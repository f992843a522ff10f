"""Main routes - Index, language switching."""
from flask import Blueprint, render_template, request, redirect, make_response, g

from campus_events.routes.auth import public
from campus_events.services.events import all_tags, search_events

main_bp = Blueprint('main', __name__)


def _requested_tags():
    tags = []
    for value in request.args.getlist('tags'):
        tags.extend(tag.strip() for tag in value.split(',') if tag.strip())
    return tags


@main_bp.route('/')
@public
def index():
    text = request.args.get('text', '').strip()
    tags = _requested_tags()
    events = search_events(text=text or None, tags=tags or None)
    return render_template('index.html', username=g.username, events=events,
                           tags=all_tags(), selected_tags=tags, text=text)


@main_bp.route('/set_language/<lang>')
def set_language(lang):
    if lang not in ['es', 'en']:
        lang = 'en'
    resp = make_response(redirect(request.referrer or '/'))
    resp.set_cookie('babel_translation', lang)
    return resp
