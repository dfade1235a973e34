"""
Image Optimization Module - Responsive variants for project images
Generates WebP and JPEG variants at fixed sizes for every project image
and writes them into a mirrored output tree that the asset server prefers.
"""

import os
import shutil
import time
from concurrent.futures import ThreadPoolExecutor
from flask import current_app
from PIL import Image, ImageOps
from .images import SUPPORTED_IMAGE_EXTENSIONS


# Image optimization configuration
IMAGE_SIZES = {
    'thumbnail': (150, 150),
    'small': (480, 320),
    'medium': (768, 512),
    'large': (1024, 683),
    'xlarge': (1920, 1280)
}

OPTIMIZABLE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif'}
WEBP_QUALITY = 85
JPEG_QUALITY = 90
MAX_ORIGINAL_SIZE = 2 * 1024 * 1024  # 2MB
BATCH_SIZE = 3


def _rgb(image):
    """Flatten transparency onto white for formats without alpha"""
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        background = Image.new('RGB', rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel('A'))
        return background
    return image.convert('RGB')


def _webp_ready(image):
    if image.mode in ('RGB', 'RGBA'):
        return image
    if image.mode in ('LA', 'P', 'PA'):
        return image.convert('RGBA')
    return image.convert('RGB')


def _save_original(image, input_path, output_path, ext):
    """Copy the original, re-encoding it first when it is over the size threshold"""
    if os.path.getsize(input_path) < MAX_ORIGINAL_SIZE or ext == '.gif':
        shutil.copyfile(input_path, output_path)
    elif ext in ('.jpg', '.jpeg'):
        _rgb(image).save(output_path, 'JPEG', quality=JPEG_QUALITY, optimize=True)
    else:
        image.save(output_path, 'PNG', optimize=True)


def optimize_image(input_path, output_dir, filename):
    """
    Optimize a single image and generate multiple sizes

    Args:
        input_path (str): Path to the original image
        output_dir (str): Directory to save optimized images
        filename (str): Original filename

    Returns:
        list: Filenames written to output_dir
    """
    name, ext = os.path.splitext(filename)
    ext = ext.lower()

    os.makedirs(output_dir, exist_ok=True)

    if ext in OPTIMIZABLE_EXTENSIONS:
        written = []
        try:
            with Image.open(input_path) as source:
                source.load()
                image = ImageOps.exif_transpose(source)
                width = image.width

                webp_name = f"{name}.webp"
                _webp_ready(image).save(os.path.join(output_dir, webp_name), 'WEBP', quality=WEBP_QUALITY)
                written.append(webp_name)

                for size_name, (target_w, target_h) in IMAGE_SIZES.items():
                    # Skip if original is smaller than target size
                    if width < target_w:
                        continue

                    resized = image.copy()
                    # thumbnail() fits inside the box and never enlarges
                    resized.thumbnail((target_w, target_h), Image.LANCZOS)

                    jpg_name = f"{name}_{size_name}.jpg"
                    _rgb(resized).save(os.path.join(output_dir, jpg_name), 'JPEG', quality=JPEG_QUALITY)
                    written.append(jpg_name)

                    variant_webp = f"{name}_{size_name}.webp"
                    _webp_ready(resized).save(os.path.join(output_dir, variant_webp), 'WEBP',
                                              quality=WEBP_QUALITY)
                    written.append(variant_webp)

                _save_original(image, input_path, os.path.join(output_dir, filename), ext)
                written.append(filename)

            current_app.logger.info(f"✓ Optimized {filename}")
            return written
        except Exception as e:
            current_app.logger.error(f"✗ Failed to optimize {filename}: {str(e)}")

    # SVG and WebP pass through untouched, as does any original that failed above
    try:
        shutil.copyfile(input_path, os.path.join(output_dir, filename))
    except OSError as e:
        current_app.logger.error(f"✗ Failed to copy {filename}: {str(e)}")
        return []
    return [filename]


def optimize_project_images(project_folder, source_dir='project_assets', output_dir='dist/public/project_assets'):
    """
    Optimize all images in a project folder

    Args:
        project_folder (str): Name of the project folder
        source_dir (str): Source directory containing project assets
        output_dir (str): Output directory for optimized images

    Returns:
        int: Number of source images processed
    """
    source_path = os.path.join(source_dir, project_folder)
    output_path = os.path.join(output_dir, project_folder)

    if not os.path.isdir(source_path):
        current_app.logger.warning(f"Source folder {source_path} does not exist")
        return 0

    try:
        image_files = sorted(
            f for f in os.listdir(source_path)
            if os.path.splitext(f)[1].lower() in SUPPORTED_IMAGE_EXTENSIONS
        )
    except OSError as e:
        current_app.logger.error(f"Failed to optimize project {project_folder}: {str(e)}")
        return 0

    current_app.logger.info(f"Optimizing {len(image_files)} images in {project_folder}...")

    for filename in image_files:
        optimize_image(os.path.join(source_path, filename), output_path, filename)

    return len(image_files)


def count_output_files(output_dir):
    """Count files per project folder in the optimized output tree"""
    if not os.path.isdir(output_dir):
        return 0, 0

    folders = 0
    total_files = 0
    for entry in os.scandir(output_dir):
        if entry.is_dir():
            folders += 1
            total_files += sum(1 for f in os.scandir(entry.path) if f.is_file())
    return folders, total_files


def optimize_all_project_images(source_dir='project_assets', output_dir='dist/public/project_assets',
                                batch_size=BATCH_SIZE):
    """
    Optimize all project images for production build

    Folders are processed batch_size at a time: every folder in a batch
    runs in parallel and the next batch starts only once the current one
    has finished, which bounds open files and decoded images in memory.

    Args:
        source_dir (str): Source directory containing all project assets
        output_dir (str): Output directory for optimized images
        batch_size (int): Number of folders processed concurrently

    Returns:
        dict: Report with project count, generated file count and duration
    """
    report = {'projects': 0, 'files': 0, 'duration': 0.0}

    if not os.path.isdir(source_dir):
        current_app.logger.warning(f"Source directory {source_dir} does not exist")
        return report

    project_folders = sorted(
        entry.name for entry in os.scandir(source_dir) if entry.is_dir()
    )

    current_app.logger.info(f"Starting image optimization for {len(project_folders)} projects...")
    start_time = time.time()

    app = current_app._get_current_object()

    def _optimize(folder):
        with app.app_context():
            return optimize_project_images(folder, source_dir, output_dir)

    for i in range(0, len(project_folders), batch_size):
        batch = project_folders[i:i + batch_size]
        with ThreadPoolExecutor(max_workers=len(batch)) as executor:
            list(executor.map(_optimize, batch))

    report['duration'] = round(time.time() - start_time, 2)
    report['projects'], report['files'] = count_output_files(output_dir)

    current_app.logger.info(f"✓ Image optimization completed in {report['duration']}s")
    current_app.logger.info(
        f"Generated {report['files']} optimized image files across {report['projects']} projects")
    return report


def generate_optimized_srcset(image_folder, image_name, use_webp=True, output_dir='dist/public/project_assets',
                              existing_only=False):
    """
    Generate responsive image srcset for optimized images

    Args:
        image_folder (str): Project image folder
        image_name (str): Image filename
        use_webp (bool): Whether to prefer WebP format
        output_dir (str): Optimized output tree checked for built files
        existing_only (bool): Only list sized variants the build actually wrote

    Returns:
        str: srcset attribute value, empty when existing_only finds no variants
    """
    name = os.path.splitext(image_name)[0]
    ext = 'webp' if use_webp else 'jpg'
    base_path = f"/project_assets/{image_folder}"
    folder_dir = os.path.join(output_dir, image_folder)

    srcsets = [
        f"{base_path}/{variant} {width}w"
        for variant, width in (
            (f"{name}_small.{ext}", 480),
            (f"{name}_medium.{ext}", 768),
            (f"{name}_large.{ext}", 1024),
        )
        if not existing_only or os.path.isfile(os.path.join(folder_dir, variant))
    ]
    if not srcsets:
        return ''

    # Add original if available
    if os.path.exists(os.path.join(folder_dir, image_name)):
        srcsets.append(f"{base_path}/{image_name} 1920w")

    return ', '.join(srcsets)


__all__ = [
    'IMAGE_SIZES',
    'OPTIMIZABLE_EXTENSIONS',
    'BATCH_SIZE',
    'optimize_image',
    'optimize_project_images',
    'optimize_all_project_images',
    'count_output_files',
    'generate_optimized_srcset'
]
