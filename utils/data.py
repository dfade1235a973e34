"""
Data Management Module - Handles loading and saving portfolio data
The whole site is one JSON document, held in a single in-memory slot
and written back to the same file on every update.
"""

import json
import os
from flask import current_app
from models import Portfolio


class PortfolioNotFoundError(Exception):
    """Raised when the portfolio document cannot be loaded"""


class PortfolioSaveError(Exception):
    """Raised when the portfolio document cannot be written back to disk"""


class PortfolioStore:
    """
    Owned state cell for the portfolio document

    get() loads the data file lazily and then serves the cached copy.
    Edits made to the file behind the store's back are not seen until
    invalidate() is called. Concurrent replace() calls are last-writer-wins.
    """

    def __init__(self, app=None):
        self.data_file = None
        self._document = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Bind the store to the app's configured data file"""
        self.data_file = os.path.abspath(app.config['PORTFOLIO_DATA_FILE'])
        self._document = None
        app.extensions['portfolio_store'] = self

    @property
    def is_loaded(self):
        return self._document is not None

    def get(self):
        """
        Return the portfolio document, loading it on first access

        Returns:
            dict: The cached portfolio document

        Raises:
            PortfolioNotFoundError: If the data file is missing or corrupt
        """
        if self._document is None:
            self._document = self._load()
        return self._document

    def replace(self, document):
        """
        Validate and replace the whole portfolio document

        Args:
            document (dict): Full portfolio payload

        Returns:
            dict: The accepted document as stored

        Raises:
            pydantic.ValidationError: If the payload does not match the schema
            PortfolioSaveError: If the file write fails (the cache is already replaced)
        """
        accepted = Portfolio.model_validate(document).to_document()
        self._document = accepted
        self._save(accepted)
        return accepted

    def invalidate(self):
        """Drop the cached document so the next get() rereads the file"""
        self._document = None

    def _load(self):
        try:
            with open(self.data_file, 'r', encoding='utf-8') as file:
                document = json.load(file)
            if not isinstance(document, dict):
                raise ValueError(f"expected a JSON object, got {type(document).__name__}")
            current_app.logger.info(f"✓ Loaded portfolio data from {self.data_file}")
            return document
        except (OSError, ValueError) as e:
            current_app.logger.error(f"✗ Error loading portfolio data: {str(e)}")
            raise PortfolioNotFoundError('Portfolio data not found') from e

    def _save(self, document):
        try:
            with open(self.data_file, 'w', encoding='utf-8') as file:
                json.dump(document, file, ensure_ascii=False, indent=2)
            current_app.logger.info(f"Saved portfolio data to {self.data_file}")
        except (OSError, TypeError) as e:
            current_app.logger.error(f"✗ Error saving portfolio data: {str(e)}")
            raise PortfolioSaveError('Failed to save portfolio data') from e


__all__ = [
    'PortfolioStore',
    'PortfolioNotFoundError',
    'PortfolioSaveError'
]
