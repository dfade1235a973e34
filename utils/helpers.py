"""
Helpers Module - Utility functions for common operations
"""

import os
import re
from flask import current_app
from markupsafe import Markup, escape


def paragraphs(text):
    """Render plain text as escaped HTML paragraphs.

    - Normalizes newlines and collapses runs of blank lines
    - Double newlines start a new <p>, single newlines become <br>
    """
    if not text:
        return Markup('')

    txt = text.replace('\r\n', '\n').replace('\r', '\n').strip()
    blocks = [b.strip() for b in re.split(r'\n\s*\n', txt) if b.strip()]
    html = ''.join(
        f"<p>{str(escape(block)).replace(chr(10), '<br>' + chr(10))}</p>"
        for block in blocks
    )
    return Markup(html)


def format_validation_errors(error):
    """Flatten a pydantic ValidationError into [{field, message}] for API responses"""
    return [
        {
            'field': '.'.join(str(part) for part in err.get('loc', ())),
            'message': err.get('msg', 'Invalid value')
        }
        for err in error.errors()
    ]


def skill_dots(level, total=5):
    """List of booleans for rendering a 1-5 skill level as filled dots"""
    level = max(0, min(int(level or 0), total))
    return [i < level for i in range(total)]


def get_optimized_assets_dir():
    """Where the build step writes optimized project images"""
    return os.path.join(current_app.config['BUILD_DIR'], 'public', 'project_assets')


def get_source_assets_dir():
    """Source project images, scanned for originals"""
    return current_app.config['PROJECT_ASSETS_DIR']


def get_project_assets_dir():
    """Directory project images are served from: the optimized tree once built, else the sources"""
    optimized = get_optimized_assets_dir()
    if os.path.isdir(optimized):
        return optimized
    return current_app.config['PROJECT_ASSETS_DIR']


__all__ = [
    'get_optimized_assets_dir',
    'get_project_assets_dir',
    'get_source_assets_dir',
    'paragraphs',
    'format_validation_errors',
    'skill_dots'
]
