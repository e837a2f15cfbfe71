import os
import copy
import json

SETTINGS_DEFAULTS = {
    'minify': False,
    'auto-compile': True,
    'source-file': 'less/style.less',
    'target-file': 'css/style.css',
    'less-bin': 'lessc'
}

DEFAULT_SETTINGS_FILE = '~/.autoless.json'


class Settings:
    """
    Persisted user settings, loaded from a JSON file on top of SETTINGS_DEFAULTS.
    """
    def __init__(self, path=None, values=None):
        """
        :param path: JSON settings file to load. Missing files are ignored.
        :type path: str | None
        :param values: Additional settings, applied after the settings file.
        :type values: dict[str, object] | None
        """
        from autoless.app import AppError

        self.path = os.path.abspath(os.path.expanduser(path)) if path is not None else None
        self.values = copy.deepcopy(SETTINGS_DEFAULTS)

        if self.path is not None and os.path.isfile(self.path):
            try:
                with open(self.path, encoding='utf-8') as fh:
                    loaded = json.load(fh)
            except ValueError as e:
                raise AppError('Could not load settings \'{0}\': \'{1}\''.format(self.path, e))
            if not isinstance(loaded, dict):
                raise AppError('Could not load settings \'{0}\': expected an object'.format(self.path))
            self.values.update(loaded)

        if values is not None:
            self.values.update(values)

    def get(self, name, default=None):
        return self.values.get(name, default)

    def set(self, name, value):
        self.values[name] = value

    def config_defaults(self):
        """
        Values used to populate a new project config file.

        :rtype: dict[str, object]
        """
        return {
            'minify': self.get('minify'),
            'auto_compile': self.get('auto-compile'),
            'source_file': self.get('source-file'),
            'target_file': self.get('target-file')
        }

    def save(self):
        """
        Write the current settings back to the settings file.
        """
        from autoless.app import AppError

        if self.path is None:
            raise AppError('Settings have no file to save to')
        with open(self.path, 'w', encoding='utf-8') as fh:
            json.dump(self.values, fh, indent=2, sort_keys=True)
