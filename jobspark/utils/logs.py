import logging
import os
import sys

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ('discord', 'psycopg.pool')


def resolve_level(default: int = logging.INFO) -> int:
    '''Read LOG_LEVEL from the environment, falling back to `default`.'''
    name = (os.getenv('LOG_LEVEL') or '').upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None):
    '''Configure root logger for the entire codebase.'''
    level = resolve_level() if level is None else level
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
