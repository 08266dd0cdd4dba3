import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from colorama import Fore, Style
from colorama import init as colorama_init

from gamegrind_core.request_log import sanitize_endpoint

from .config import LOG_LEVEL, MOBY_API_KEY


class SensitiveDataFilter(logging.Filter):
    """Filter to mask the MobyGames API key in logs."""

    def filter(self, record):
        def mask(text):
            if isinstance(text, str):
                if MOBY_API_KEY and MOBY_API_KEY in text:
                    text = text.replace(MOBY_API_KEY, "***MOBY_API_KEY***")
                text = sanitize_endpoint(text)
            return text

        record.msg = mask(record.msg)

        if record.args:
            if isinstance(record.args, tuple):
                record.args = tuple(mask(arg) for arg in record.args)
            elif isinstance(record.args, dict):
                record.args = {k: mask(v) for k, v in record.args.items()}

        return True


class ConsoleNoiseFilter(logging.Filter):
    """Keeps per-request debug chatter from the HTTP and database layers off the console."""

    def filter(self, record):
        if record.name.startswith(("aiosqlite", "sqlalchemy")) and record.levelno < logging.WARNING:
            return False
        return True


def setup_logging(log_dir: str = "logs"):
    force_color = os.getenv("FORCE_COLOR", "").lower() in ("1", "true")
    colorama_init(autoreset=True, strip=False if force_color else None)

    # Remove existing handlers to ensure our configuration takes precedence.
    # Masking is attached per handler since root logger filters skip propagated records.
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(
        logging.Formatter(
            f"{Fore.CYAN}%(asctime)s{Style.RESET_ALL} | "
            f"{Fore.GREEN}%(levelname)s{Style.RESET_ALL}: "
            f"{Fore.YELLOW}%(name)s{Style.RESET_ALL} - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.addFilter(SensitiveDataFilter())
    console_handler.addFilter(ConsoleNoiseFilter())
    root.addHandler(console_handler)

    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "gamegrind.log"), maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(SensitiveDataFilter())
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s: %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    root.addHandler(file_handler)


def get_logger(name: str):
    return logging.getLogger(name)
