import json
import os

from utils.build import build_site


def test_build_site(app_ctx, tmp_path, assets_dir, data_file):
    build_dir = tmp_path / 'dist'

    summary = build_site(str(assets_dir), str(build_dir), str(data_file))

    assert (build_dir / 'public' / 'static' / 'js' / 'app.js').exists()
    assert json.loads((build_dir / 'portfolio-data.json').read_text(encoding='utf-8'))['name'] == 'Jane Doe'

    demo = build_dir / 'public' / 'project_assets' / 'demo'
    files = set(os.listdir(demo))
    assert {'hero.png', 'hero.webp', 'hero_thumbnail.jpg', 'screen_small.webp', 'diagram.svg'} <= files
    assert summary['images']['projects'] == 1
    assert summary['images']['files'] == len(files)


def test_build_site_is_repeatable(app_ctx, tmp_path, assets_dir, data_file):
    build_dir = tmp_path / 'dist'
    build_site(str(assets_dir), str(build_dir), str(data_file))
    summary = build_site(str(assets_dir), str(build_dir), str(data_file))
    assert summary['static'] == os.path.join(str(build_dir), 'public', 'static')


def test_build_without_data_file(app_ctx, tmp_path, assets_dir):
    summary = build_site(str(assets_dir), str(tmp_path / 'dist'), str(tmp_path / 'missing.json'))
    assert summary['data'] is None
