"""
Images Module - Project image discovery and enrichment
The asset folder on disk is the source of truth for which images a
project has; the list stored in the portfolio document is advisory only.
"""

import os
import re
from concurrent.futures import ThreadPoolExecutor
from flask import current_app

# Supported image extensions
SUPPORTED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp', '.svg'}

# Variant naming convention: name_<size>.<ext> and name.webp
SIZE_SUFFIX_PATTERN = re.compile(r'_(?:small|medium|large|thumbnail|xlarge)\.', re.IGNORECASE)
RASTER_SIBLING_EXTENSIONS = ('.png', '.jpg', '.jpeg')

MAX_SCAN_WORKERS = 8


def resolve_folder(image_folder, base_path):
    """Join a folder identifier onto the asset root, refusing anything that escapes it"""
    root = os.path.abspath(base_path)
    folder_path = os.path.abspath(os.path.join(root, image_folder))
    if os.path.commonpath([root, folder_path]) != root or folder_path == root:
        return None
    return folder_path


def is_supported_image(filename):
    """Check if a filename has a supported image extension"""
    return os.path.splitext(filename)[1].lower() in SUPPORTED_IMAGE_EXTENSIONS


def discover_project_images(image_folder, base_path='project_assets'):
    """
    Automatically discover images in a project folder

    Args:
        image_folder (str): The folder name containing the images
        base_path (str): Base path where project assets are stored

    Returns:
        list: Sorted image filenames, empty if the folder can't be read
    """
    folder_path = resolve_folder(image_folder, base_path)
    if folder_path is None:
        current_app.logger.warning(f"Rejected image folder outside asset root: {image_folder}")
        return []

    try:
        if not os.path.isdir(folder_path):
            current_app.logger.warning(f"Path {folder_path} is not a directory")
            return []
        files = os.listdir(folder_path)
    except OSError as e:
        current_app.logger.warning(f"Failed to read images from folder {image_folder}: {str(e)}")
        return []

    return sorted(f for f in files if is_supported_image(f))


def is_size_variant(filename):
    return SIZE_SUFFIX_PATTERN.search(filename) is not None


def filter_original_images(images):
    """
    Filter images down to original versions, dropping generated variants

    A sized variant (photo_small.jpg, photo_xlarge.webp, ...) is never an
    original. A .webp is treated as a derivative whenever a .png/.jpg/.jpeg
    with the same base name is present, and as the original otherwise.

    Args:
        images (list): Image filenames, possibly including variants

    Returns:
        list: Sorted original filenames
    """
    available = set(images)
    originals = []

    for image in available:
        if is_size_variant(image):
            continue

        if image.endswith('.webp'):
            base = image[:-len('.webp')]
            if any(base + ext in available for ext in RASTER_SIBLING_EXTENSIONS):
                continue

        originals.append(image)

    return sorted(originals)


def enrich_project(project, base_path='project_assets'):
    """Attach discovered images to a single project record"""
    image_folder = project.get('image_folder')
    if not image_folder:
        return project

    discovered = discover_project_images(image_folder, base_path)
    return {
        **project,
        'images': filter_original_images(discovered),
        # Keep all discovered images for reference
        'allImages': discovered,
        # Keep the stored list as a fallback
        'originalImages': list(project.get('images') or [])
    }


def enrich_projects_with_images(projects, base_path='project_assets'):
    """
    Discover images for all projects in the portfolio data

    Folders are scanned concurrently; the returned list keeps the input
    order and the input records are left untouched.

    Args:
        projects (list): Project records from the portfolio document
        base_path (str): Base path where project assets are stored

    Returns:
        list: New project records with 'images', 'allImages' and 'originalImages'
    """
    if not projects:
        return []

    app = current_app._get_current_object()

    def _enrich(project):
        with app.app_context():
            return enrich_project(project, base_path)

    with ThreadPoolExecutor(max_workers=min(MAX_SCAN_WORKERS, len(projects))) as executor:
        return list(executor.map(_enrich, projects))


def get_optimized_image_paths(image_path):
    """
    Get optimized image paths for different screen sizes

    Args:
        image_path (str): Original image path

    Returns:
        dict: Paths of the generated variants keyed by size name
    """
    base, ext = os.path.splitext(image_path)
    return {
        'original': image_path,
        'large': f"{base}_large{ext}",
        'medium': f"{base}_medium{ext}",
        'small': f"{base}_small{ext}",
        'thumbnail': f"{base}_thumbnail{ext}",
        'webp': f"{base}.webp"
    }


__all__ = [
    'SUPPORTED_IMAGE_EXTENSIONS',
    'resolve_folder',
    'is_supported_image',
    'discover_project_images',
    'is_size_variant',
    'filter_original_images',
    'enrich_project',
    'enrich_projects_with_images',
    'get_optimized_image_paths'
]
