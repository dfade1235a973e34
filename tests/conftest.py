import copy
import json
import os

import pytest
from PIL import Image

from app import create_app
from utils.security import reset_rate_limits


SAMPLE_PORTFOLIO = {
    'name': 'Jane Doe',
    'hero': {
        'greeting': "Hi, I'm",
        'title': 'Software Engineer',
        'description': 'I build things for the web.'
    },
    'about': {'description': 'First paragraph.\n\nSecond <b>paragraph</b>.'},
    'stats': [{'value': '5+', 'label': 'Years'}],
    'skills': {
        'frontend': [{'name': 'React', 'level': 5}],
        'backend': [{'name': 'Flask', 'level': 4}],
        'tools': [{'name': 'Docker', 'level': 3}]
    },
    'projects': [
        {
            'id': 'demo',
            'title': 'Demo Project',
            'description': 'A demo.',
            'technologies': ['Python'],
            'category': 'web',
            'image_folder': 'demo',
            'images': ['stored.png'],
            'githubUrl': 'https://github.com/jane/demo'
        },
        {
            'id': 'cli',
            'title': 'CLI Tool',
            'description': 'A command line tool.',
            'technologies': ['Python'],
            'category': 'system',
            'image_folder': ''
        }
    ],
    'contact': {
        'email': 'owner@janedoe.dev',
        'phone': '+1 555 0100',
        'location': 'Remote'
    },
    'social': {'githubUrl': 'https://github.com/jane'}
}


def write_image(path, size=(300, 200), fmt=None, color=(200, 80, 40)):
    """Write a solid-color image to path"""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if fmt == 'PNG':
        Image.new('RGBA', size, color + (255,)).save(path, fmt)
    else:
        Image.new('RGB', size, color).save(path, fmt)
    return path


@pytest.fixture
def sample_portfolio():
    return copy.deepcopy(SAMPLE_PORTFOLIO)


@pytest.fixture
def data_file(tmp_path, sample_portfolio):
    path = tmp_path / 'portfolio-data.json'
    path.write_text(json.dumps(sample_portfolio), encoding='utf-8')
    return path


@pytest.fixture
def assets_dir(tmp_path):
    root = tmp_path / 'project_assets'
    demo = root / 'demo'
    write_image(str(demo / 'hero.png'), fmt='PNG')
    write_image(str(demo / 'hero.webp'), fmt='WEBP')
    write_image(str(demo / 'hero_small.jpg'), size=(150, 100), fmt='JPEG')
    write_image(str(demo / 'screen.jpg'), size=(640, 480), fmt='JPEG')
    write_image(str(demo / 'lonely.webp'), fmt='WEBP')
    (demo / 'diagram.svg').write_text('<svg xmlns="http://www.w3.org/2000/svg"/>', encoding='utf-8')
    (demo / 'notes.txt').write_text('not an image', encoding='utf-8')
    (root / 'empty').mkdir()
    return root


@pytest.fixture
def app(tmp_path, data_file, assets_dir):
    personal = tmp_path / 'personal_assets'
    personal.mkdir()
    (personal / 'resume.pdf').write_bytes(b'%PDF-1.4 resume')

    app = create_app(
        'testing',
        PORTFOLIO_DATA_FILE=str(data_file),
        PROJECT_ASSETS_DIR=str(assets_dir),
        PERSONAL_ASSETS_DIR=str(personal),
        BUILD_DIR=str(tmp_path / 'dist')
    )
    reset_rate_limits()
    yield app
    reset_rate_limits()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mail_config(app):
    app.config.update(
        SENDGRID_API_KEY='SG.test-key',
        CONTACT_FROM_EMAIL='noreply@janedoe.dev',
        CONTACT_TO_EMAIL=None
    )
    return app.config


@pytest.fixture
def image_factory():
    return write_image


@pytest.fixture
def built(app, tmp_path, assets_dir, data_file):
    """Run the production build into the app's BUILD_DIR"""
    from utils.build import build_site

    write_image(str(assets_dir / 'demo' / 'anim.gif'), size=(640, 480), fmt='GIF')
    with app.app_context():
        build_site(str(assets_dir), app.config['BUILD_DIR'], str(data_file))
    return os.path.join(app.config['BUILD_DIR'], 'public', 'project_assets')
