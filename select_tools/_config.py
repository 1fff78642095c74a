import logging

import yaml

__all__ = [
    'settings',
    'load_settings',
    'configure'
    ]

log = logging.getLogger(__name__)

# package wide settings, see configure()
settings = {
    'log_level': 'WARNING',
    'check_invariants': False,
}


def configure(**kwargs):
    """Updates settings and applies log level to package logger.

    Args:
        log_level (str): Level name for 'select_tools' logger.
        check_invariants (bool): Assert host invariants after every
            public host operation.

    Returns:
        dict: current settings
    """
    for key in kwargs:
        if key not in settings:
            raise KeyError('unknown setting: %s' % key)
    settings.update(kwargs)
    logging.getLogger('select_tools').setLevel(settings['log_level'].upper())
    log.debug('settings: %s', settings)
    return settings


def load_settings(source):
    """Loads settings from YAML mapping.

    Args:
        source: Path to YAML file or open stream.

    Returns:
        dict: current settings
    """
    if hasattr(source, 'read'):
        data = yaml.safe_load(source)
    else:
        with open(source) as f:
            data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError('settings must be a mapping, got %s'
                         % type(data).__name__)
    return configure(**data)
