"""
Base service class.
Services hold the business rules and call repositories for data access.
"""
import logging


class BaseService:
    """Gives every service a module-named logger and context-aware log helpers"""

    entity_label: str = None

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__)

    def log_info(self, message: str, **context):
        self.logger.info(f"{message} | Context: {context}")

    def log_error(self, message: str, error: Exception = None, **context):
        if error:
            self.logger.error(f"{message} | Context: {context}", exc_info=error)
        else:
            self.logger.error(f"{message} | Context: {context}")
