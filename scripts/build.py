"""
Build Script: production bundle
Copies the client bundle and portfolio data into dist/ and generates
optimized variants of every project image.

Usage:
    python scripts/build.py [--source project_assets] [--output dist]
"""

import argparse
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from utils.build import build_site


def main():
    """Main build function"""
    parser = argparse.ArgumentParser(description="Build the portfolio for production")
    parser.add_argument("--source", default=None, help="Project assets directory")
    parser.add_argument("--output", default=None, help="Build output directory")
    parser.add_argument("--data", default=None, help="Portfolio data file")
    args = parser.parse_args()

    print("=" * 60)
    print("Production Build")
    print("=" * 60)

    # The production config expects the build to exist already
    app = create_app('development')
    with app.app_context():
        try:
            summary = build_site(source_dir=args.source, build_dir=args.output, data_file=args.data)
        except OSError as e:
            print(f"\nBuild failed: {e}")
            sys.exit(1)

    images = summary['images']
    print("\n" + "=" * 60)
    print(f"Build completed successfully in {summary['duration']}s!")
    print("=" * 60)
    print("\nBuild artifacts:")
    print(f"   - {summary['static']} - Client application")
    print(f"   - {images['files']} optimized image files across {images['projects']} projects")
    if summary['data']:
        print(f"   - {summary['data']} - Portfolio data")
    print("\nRun with: FLASK_ENV=production gunicorn \"app:create_app('production')\"")


if __name__ == '__main__':
    main()
