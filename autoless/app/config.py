import os
import re
import stat
import logging
import traceback
from collections import namedtuple

CONFIG_FILE_NAME = '.lessconfig'

_line_regex = re.compile(r'(\w+)=([^=]*)', re.ASCII)
_bool_regex = re.compile(r'^(true|false)$')
_int_regex = re.compile(r'^[0-9]+$')
_float_regex = re.compile(r'^([0-9]+\.[0-9]*|\.[0-9]+)$')

log = logging.getLogger(__name__)


class InvalidConfig(Exception):
    """
    Raised when a parsed config can not be turned in to a ProjectConfig.
    """
    def __init__(self, fields):
        """
        :param fields: Names of the invalid properties.
        :type fields: list[str]
        """
        super().__init__('Invalid properties: {0}'.format(', '.join(fields)))
        self.fields = fields


class ProjectConfig(namedtuple('ProjectConfig', ['minify', 'auto_compile', 'source_file', 'target_file'])):
    """
    Validated configuration for a single project.
    """
    __slots__ = ()

    @classmethod
    def from_mapping(cls, config):
        """
        Build a ProjectConfig from a parsed config mapping.

        :param config: Parsed config, as returned by parse_config_text.
        :type config: dict[str, object]
        :return: Validated project config.
        :rtype: ProjectConfig
        :raises InvalidConfig: If any of the properties are missing or of the wrong type.
        """
        invalid = validate_config(config)
        if len(invalid) > 0:
            raise InvalidConfig(invalid)
        return cls(config['minify'], config['auto_compile'], config['source_file'], config['target_file'])


def coerce_value(value):
    """
    Convert a raw config value to a bool, int or float where it looks like one.

    :type value: str
    :rtype: bool | int | float | str
    """
    if _bool_regex.match(value):
        return value == 'true'
    elif _int_regex.match(value):
        return int(value)
    elif _float_regex.match(value):
        return float(value)
    return value


def parse_config_text(text):
    """
    Parse KEY=value lines in to a dictionary of lower-cased keys and coerced values. Lines that don't contain an
    assignment are ignored, and later keys overwrite earlier ones.

    :param text: Config file contents.
    :type text: str
    :return: Parsed config.
    :rtype: dict[str, object]
    """
    config = {}
    for line in text.splitlines():
        match = _line_regex.search(line)
        if match is None:
            continue
        config[match.group(1).lower()] = coerce_value(match.group(2))
    return config


def validate_config(config):
    """
    Check a config for the properties required to compile.

    :param config: Parsed config mapping, or a ProjectConfig.
    :type config: dict[str, object] | ProjectConfig
    :return: Names of all invalid properties, an empty list if the config is valid.
    :rtype: list[str]
    """
    if isinstance(config, ProjectConfig):
        config = config._asdict()

    invalid = []
    if not isinstance(config.get('minify'), bool):
        invalid.append('MINIFY')
    if not isinstance(config.get('auto_compile'), bool):
        invalid.append('AUTO_COMPILE')
    if not isinstance(config.get('source_file'), str):
        invalid.append('SOURCE_FILE')
    if not isinstance(config.get('target_file'), str):
        invalid.append('TARGET_FILE')
    return invalid


def format_list(items):
    """
    Format items as an indented bullet list, one item per line.

    :type items: list[str]
    :rtype: str
    """
    return ''.join('   - {0}\n'.format(item) for item in items)


def _format_value(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class ConfigStore:
    """
    Reads and writes project .lessconfig files, reporting problems through a notifier.
    """
    def __init__(self, notifier, opener):
        """
        :param notifier: Notification sink for user facing messages.
        :type notifier: autoless.notifications.Notifier
        :param opener: Callable used to open a file for viewing.
        :type opener: callable[str]
        """
        self.notifier = notifier
        self.opener = opener

    @staticmethod
    def config_path(project_root):
        """
        :type project_root: str
        :rtype: str
        """
        return os.path.join(project_root, CONFIG_FILE_NAME)

    def exists(self, project_root):
        """
        Check if a config file exists for a project. File system errors are treated as the file not existing.

        :type project_root: str
        :rtype: bool
        """
        path = self.config_path(project_root)
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            log.debug('Failed to determine if config file \'%s\' exists: %s', path, e)
            return False
        return stat.S_ISREG(st.st_mode)

    def load(self, project_root):
        """
        Read and parse the config file for a project.

        :type project_root: str
        :return: Parsed config, or None if the file doesn't exist, is empty, or could not be read.
        :rtype: dict[str, object] | None
        """
        if not self.exists(project_root):
            return None
        try:
            with open(self.config_path(project_root), encoding='utf-8') as fh:
                data = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            self.notifier.add_error('Autoless: Failed to load \'{0}\'!'.format(CONFIG_FILE_NAME),
                                    detail=str(e),
                                    stack=traceback.format_exc(),
                                    dismissable=True)
            return None
        if not data:
            return None
        return parse_config_text(data)

    def create(self, project_root, defaults):
        """
        Write a new config file for a project. An existing config file is never overwritten, it is opened instead.

        :type project_root: str
        :param defaults: Values for the new file, keyed by 'minify', 'auto_compile', 'source_file' and 'target_file'.
        :type defaults: dict[str, object]
        :return: True if a new config file was written.
        :rtype: bool
        """
        if self.exists(project_root):
            self.notifier.add_warning('Autoless: A \'{0}\' already exists for this project!'.format(CONFIG_FILE_NAME))
            self.open(project_root)
            return False

        lines = ['MINIFY={0}'.format(_format_value(defaults.get('minify'))),
                 'AUTO_COMPILE={0}'.format(_format_value(defaults.get('auto_compile'))),
                 'SOURCE_FILE={0}'.format(_format_value(defaults.get('source_file'))),
                 'TARGET_FILE={0}'.format(_format_value(defaults.get('target_file')))]
        try:
            with open(self.config_path(project_root), 'a', encoding='utf-8') as fh:
                fh.write('\n'.join(lines))
        except OSError as e:
            self.notifier.add_error('Autoless: Failed to create \'{0}\' file!'.format(CONFIG_FILE_NAME),
                                    detail=str(e),
                                    stack=traceback.format_exc(),
                                    dismissable=True)
            return False

        self.notifier.add_success('Autoless: Created new \'{0}\' file'.format(CONFIG_FILE_NAME))
        return True

    def open(self, project_root):
        """
        Open an existing config file for viewing.

        :type project_root: str
        :return: True if the config file exists and was opened.
        :rtype: bool
        """
        if not self.exists(project_root):
            self.notifier.add_warning('Autoless: A \'{0}\' does not exist for this project!'.format(CONFIG_FILE_NAME))
            return False
        self.opener(self.config_path(project_root))
        return True
