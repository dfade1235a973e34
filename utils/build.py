"""
Build Module - Production bundle assembly
Copies the client bundle and data file into the build directory and
pre-generates optimized project images for the asset server.
"""

import os
import shutil
import time
from flask import current_app
from .optimization import optimize_all_project_images


def copy_client_bundle(static_dir, build_dir):
    """Copy templates' static files to BUILD_DIR/public/static"""
    target = os.path.join(build_dir, 'public', 'static')
    if os.path.isdir(target):
        shutil.rmtree(target)
    shutil.copytree(static_dir, target)
    current_app.logger.info(f"✓ Copied client bundle to {target}")
    return target


def copy_portfolio_data(data_file, build_dir):
    """Copy the portfolio document next to the build, if it exists"""
    if not os.path.exists(data_file):
        current_app.logger.warning(f"Portfolio data file {data_file} not found, skipping copy")
        return None
    target = os.path.join(build_dir, os.path.basename(data_file))
    if os.path.abspath(target) != os.path.abspath(data_file):
        shutil.copyfile(data_file, target)
        current_app.logger.info(f"✓ Copied {os.path.basename(data_file)}")
    return target


def build_site(source_dir=None, build_dir=None, data_file=None):
    """
    Assemble the production build

    Args:
        source_dir (str, optional): Project assets source, defaults to PROJECT_ASSETS_DIR
        build_dir (str, optional): Output directory, defaults to BUILD_DIR
        data_file (str, optional): Portfolio data file, defaults to PORTFOLIO_DATA_FILE

    Returns:
        dict: Build summary including the image optimization report
    """
    source_dir = source_dir or current_app.config['PROJECT_ASSETS_DIR']
    build_dir = build_dir or current_app.config['BUILD_DIR']
    data_file = data_file or current_app.config['PORTFOLIO_DATA_FILE']

    start_time = time.time()
    os.makedirs(build_dir, exist_ok=True)

    static_target = copy_client_bundle(current_app.static_folder, build_dir)
    data_target = copy_portfolio_data(data_file, build_dir)

    # Optimize images after the client bundle so dist/public exists
    images = optimize_all_project_images(
        source_dir=source_dir,
        output_dir=os.path.join(build_dir, 'public', 'project_assets')
    )

    return {
        'static': static_target,
        'data': data_target,
        'images': images,
        'duration': round(time.time() - start_time, 2)
    }


__all__ = [
    'copy_client_bundle',
    'copy_portfolio_data',
    'build_site'
]
