"""Logger utility module for UrbanSim with configurable console and file handlers."""
import logging
import os
from datetime import datetime

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """Singleton logger class for the planning core.

    Every component logs through a child of the ``UrbanSim`` logger, e.g.
    ``UrbanSim.LayoutSynthesizer``. Handlers are attached once, on first use.
    """
    _instance = None
    _initialized = False
    _logging_enabled = True
    _log_to_console = True
    _log_to_file = False
    _log_dir = 'logs'

    @classmethod
    def configure(cls, logging_enabled=True, log_to_console=True, log_to_file=False, log_dir='logs'):
        """Configure global logging settings.

        Must be called before the first ``get_logger`` call to take effect.

        Args:
            logging_enabled: Whether logging is enabled globally.
            log_to_console: Whether to output logs to console.
            log_to_file: Whether to output logs to a timestamped file.
            log_dir: Directory for log files.
        """
        cls._logging_enabled = logging_enabled
        cls._log_to_console = log_to_console
        cls._log_to_file = log_to_file
        cls._log_dir = log_dir

    @classmethod
    def configure_from(cls, config):
        """Configure logging from the ``logging`` section of a Config."""
        cls.configure(
            logging_enabled=config.get('logging.enabled', True),
            log_to_console=config.get('logging.to_console', True),
            log_to_file=config.get('logging.to_file', False),
        )

    def __new__(cls):
        """Create or return the singleton instance of Logger.

        Returns:
            The singleton Logger instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Attach handlers to the root ``UrbanSim`` logger if not already done."""
        if Logger._initialized:
            return

        self.logger = logging.getLogger('UrbanSim')
        if Logger._logging_enabled:
            self.logger.setLevel(logging.DEBUG)

            if Logger._log_to_file:
                os.makedirs(Logger._log_dir, exist_ok=True)
                current_time = datetime.now().strftime('%Y%m%d_%H%M%S')
                log_filename = os.path.join(Logger._log_dir, f'urbansim_{current_time}.log')

                file_handler = logging.FileHandler(log_filename)
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter(_FORMAT))
                self.logger.addHandler(file_handler)

            if Logger._log_to_console:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(logging.INFO)
                console_handler.setFormatter(logging.Formatter(_FORMAT))
                self.logger.addHandler(console_handler)
        else:
            self.logger.addHandler(logging.NullHandler())
            self.logger.propagate = False

        Logger._initialized = True

    @staticmethod
    def get_logger(name=None):
        """Get a logger instance, optionally as a child logger with the specified name.

        Args:
            name: Optional name for child logger.

        Returns:
            A configured logger instance.
        """
        logger_instance = Logger()
        if name:
            return logging.getLogger(f'UrbanSim.{name}')
        return logger_instance.logger
